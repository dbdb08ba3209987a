"""Qt implementations of the scheduler and host capabilities the engine uses."""

from PySide6.QtCore import QBuffer, QByteArray, QEvent, QIODevice, QObject, Qt, QTimer
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication, QLineEdit, QPlainTextEdit, QTextEdit
from rt.common.logger import log
from rt.core.audio import SAMPLE_RATE, render_tone
from rt.core.capabilities import AudioUnavailable, FullscreenControl, FullscreenUnavailable, TitleSetter, ToneOutput
from rt.core.commands import SPACE
from rt.core.scheduler import ScheduledCall, Scheduler

# Platform plugins that have no real windowing system behind them
_HEADLESS_PLATFORMS = {"offscreen", "minimal"}


#region === Scheduler ===

class _QtCall(ScheduledCall):

    def __init__(self, timer):
        self._timer = timer

    def cancel(self):
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None

    @property
    def active(self):
        return self._timer is not None and self._timer.isActive()

    def _fire_once(self, callback):
        self.cancel()
        callback()


class QtScheduler(Scheduler):
    """Hands out QTimers parented to ``parent`` so they die with the window."""

    def __init__(self, parent):
        self._parent = parent

    def _timer(self, interval_ms, single_shot):
        timer = QTimer(self._parent)
        timer.setTimerType(Qt.PreciseTimer)
        timer.setSingleShot(single_shot)
        timer.setInterval(max(0, int(interval_ms)))
        return timer

    def every(self, interval_ms, callback):
        timer = self._timer(interval_ms, single_shot=False)
        timer.timeout.connect(callback)
        timer.start()
        return _QtCall(timer)

    def once(self, delay_ms, callback):
        timer = self._timer(delay_ms, single_shot=True)
        call = _QtCall(timer)
        timer.timeout.connect(lambda: call._fire_once(callback))
        timer.start()
        return call

#endregion === Scheduler ===

#region === Audio ===

class QtToneOutput(ToneOutput):
    """Plays rendered PCM through a QAudioSink per tone.

    The output device and format are looked up once, on the first tone, and
    reused after that.  Sinks are kept alive until they drain.
    """

    def __init__(self, parent=None, sample_rate=SAMPLE_RATE):
        self._parent = parent
        self._sample_rate = sample_rate
        self._context = None
        self._playing = []

    def _ensure_context(self):
        if self._context is not None:
            return self._context
        try:
            from PySide6.QtMultimedia import QAudio, QAudioFormat, QAudioSink, QMediaDevices
        except ImportError as e:
            raise AudioUnavailable("QtMultimedia could not be loaded") from e

        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            raise AudioUnavailable("No default audio output device")
        fmt = QAudioFormat()
        fmt.setSampleRate(self._sample_rate)
        fmt.setChannelCount(1)
        fmt.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        if not device.isFormatSupported(fmt):
            raise AudioUnavailable(f"Output device '{device.description()}' doesn't take 16-bit mono at {self._sample_rate} Hz")

        self._context = (QAudio, QAudioSink, device, fmt)
        log.debug(f"Audio output ready on '{device.description()}'")
        return self._context

    def synthesize_tone(self, frequency_hz, duration_ms, waveform):
        QAudio, QAudioSink, device, fmt = self._ensure_context()
        pcm = render_tone(frequency_hz, duration_ms, waveform, sample_rate=self._sample_rate)
        if not pcm:
            return

        buffer = QBuffer(self._parent)
        buffer.setData(QByteArray(pcm))
        buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        sink = QAudioSink(device, fmt, self._parent)
        entry = (sink, buffer)
        self._playing.append(entry)
        sink.stateChanged.connect(lambda state, e=entry: self._on_state_changed(e, state, QAudio))
        sink.start(buffer)

        if sink.error() != QAudio.Error.NoError:
            self._release(entry)
            raise AudioUnavailable(f"Audio sink failed to start: {sink.error()}")

    def _on_state_changed(self, entry, state, QAudio):
        if state in (QAudio.State.IdleState, QAudio.State.StoppedState):
            self._release(entry)

    def _release(self, entry):
        if entry not in self._playing:
            return
        self._playing.remove(entry)
        sink, buffer = entry
        sink.stop()
        buffer.close()
        sink.deleteLater()
        buffer.deleteLater()

#endregion === Audio ===

#region === Window capabilities ===

class WindowFullscreen(FullscreenControl):
    """Fullscreen for a top level widget, restoring maximized windows to maximized."""

    def __init__(self, window):
        self._window = window
        self._was_maximized = False

    def request_fullscreen(self):
        if QGuiApplication.platformName() in _HEADLESS_PLATFORMS:
            raise FullscreenUnavailable(f"Platform '{QGuiApplication.platformName()}' has no fullscreen")
        self._was_maximized = self._window.isMaximized()
        self._window.showFullScreen()

    def exit_fullscreen(self):
        if self._was_maximized:
            self._window.showMaximized()
        else:
            self._window.showNormal()


class WindowTitle(TitleSetter):

    def __init__(self, window):
        self._window = window

    def title(self):
        return self._window.windowTitle()

    def set_title(self, title):
        self._window.setWindowTitle(title)

#endregion === Window capabilities ===

#region === Keyboard ===

class KeyEventSource(QObject):
    """Application wide key presses, turned into plain key names for listeners.

    The event filter is installed while at least one listener is registered.
    Keys typed into text fields are left alone.  A key any listener handles is
    consumed so Qt doesn't also act on it.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._listeners = []
        self._installed = False

    def add_key_listener(self, listener):
        if listener not in self._listeners:
            self._listeners.append(listener)
        if not self._installed:
            QApplication.instance().installEventFilter(self)
            self._installed = True

    def remove_key_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)
        if not self._listeners and self._installed:
            app = QApplication.instance()
            if app is not None:
                app.removeEventFilter(self)
            self._installed = False

    @staticmethod
    def key_name(event):
        if event.key() == Qt.Key_Space:
            return SPACE
        return event.text()

    def eventFilter(self, obj, event):
        if (event.type() == QEvent.KeyPress and obj.isWidgetType() and not event.isAutoRepeat()
                and not event.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier)):
            focus = QApplication.focusWidget()
            if not isinstance(focus, (QLineEdit, QTextEdit, QPlainTextEdit)):
                key = self.key_name(event)
                if key and any([listener(key) for listener in list(self._listeners)]):
                    return True
        return super().eventFilter(obj, event)

#endregion === Keyboard ===
