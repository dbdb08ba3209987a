import sys
from PySide6.QtCore import Qt, QEvent
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)
from rt.common.logger import log
from rt.core import config
from rt.core.audio import AlertSequencer
from rt.core.clock import SECONDS_PER_MINUTE, format_time
from rt.core.commands import CommandDispatcher
from rt.core.coordinator import PresentationSync
from rt.core.timer_state import RoundTimer, TimerEvent
from rt.ui.qt_support import KeyEventSource, QtScheduler, QtToneOutput, WindowFullscreen, WindowTitle
from rt.ui.theme import DEFAULT_SIZE, DEFAULT_THEME, SIZES, THEMES, build_stylesheet
from rt.ui.widgets import build_clock_card, build_controls, build_details_panel, build_header


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the round timer. It owns one timer session for its whole lifetime, and only ever renders what the
# engine publishes; every button and key goes back through the RoundTimer / PresentationSync methods.
class MainWindow(QMainWindow):

    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings or config.load_settings()
        s = self.settings
        self.setWindowTitle(s["app_name"])
        if s["always_on_top"]:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        self.theme = THEMES[DEFAULT_THEME]
        self.ui_size = SIZES[DEFAULT_SIZE]

        # -- Engine --
        self._scheduler = QtScheduler(self)
        self.timer = RoundTimer(
            self._scheduler,
            duration_seconds=s["default_minutes"] * SECONDS_PER_MINUTE,
            ceiling_seconds=s["max_minutes"] * SECONDS_PER_MINUTE,
            sound_enabled=s["sound_enabled"],
            label=s["label"],
        )
        self.sequencer = AlertSequencer(QtToneOutput(self), self._scheduler)
        self.sync = PresentationSync(
            self.timer, self._scheduler, WindowTitle(self), self.sequencer,
            fullscreen=WindowFullscreen(self),
            app_name=s["app_name"],
            flash_ms=s["flash_ms"],
        )
        self.keys = KeyEventSource(self)
        self.commands = CommandDispatcher(self.timer, self.sync.toggle_fullscreen)
        self._closed = False

        # -- Build UI --
        self._build_ui()
        self.setStyleSheet(build_stylesheet(DEFAULT_THEME))

        self.timer.subscribe(self._on_snapshot)
        self.sync.subscribe(self._on_presentation_changed)
        self.commands.attach(self.keys)
        self._render(self.timer.snapshot)
        self._on_presentation_changed()
        log.info(f"Opened round timer window with a {self.timer.snapshot.display} round")

    def _build_ui(self):
        s = self.settings
        size = self.ui_size
        central = QWidget()
        central.setFocusPolicy(Qt.StrongFocus)
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)
        main_lay.setContentsMargins(size["frame_pad"], size["frame_pad"], size["frame_pad"], size["frame_pad"])
        main_lay.setSpacing(size["padding"] * 2)

        header, _ = build_header(self.theme, size, s["eyebrow"], s["event_title"])
        main_lay.addWidget(header)

        body = QHBoxLayout()
        body.setSpacing(size["padding"] * 2)

        snapshot = self.timer.snapshot
        left = QVBoxLayout()
        card, self._card = build_clock_card(self.theme, size, snapshot)
        left.addWidget(card, 1)
        controls, self._controls = build_controls(
            size, s["presets"], s["adjust_seconds"], snapshot.label,
            on_toggle=self.timer.toggle_run,
            on_reset=self.timer.reset,
            on_adjust=self.timer.adjust_by,
            on_preset=self.timer.set_preset,
            on_fullscreen=self.sync.toggle_fullscreen,
            on_sound=self.timer.toggle_sound,
            on_label=self.timer.set_label,
        )
        left.addWidget(controls)
        body.addLayout(left, 1)

        details, self._details = build_details_panel(size, s["event_title"], snapshot.total_seconds)
        body.addWidget(details)
        main_lay.addLayout(body, 1)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _on_snapshot(self, snapshot, event):
        self._render(snapshot)
        if event == TimerEvent.PRESET:
            self._details["duration"].setText(format_time(snapshot.total_seconds))

    @staticmethod
    def _status_text(snapshot):
        if snapshot.ended:
            return "Time's up!"
        if snapshot.running:
            return "Running"
        if snapshot.remaining_seconds == snapshot.total_seconds:
            return "Ready"
        return "Paused"

    def _render(self, snapshot):
        self._card["time"].setText(snapshot.display)
        self._card["ring"].set_progress(snapshot.progress)
        self._card["status"].setText(self._status_text(snapshot))
        self._card["round"].setText(snapshot.label)
        color = self.theme["ended_text"] if snapshot.ended else self.theme["text"]
        self._card["time"].setStyleSheet(f"color: {color};")

        start = self._controls["start"]
        start.setText("Pause" if snapshot.running else "Start")
        self._set_dynamic_property(start, "running", snapshot.running)
        self._controls["sound"].setText("Sound On" if snapshot.sound_enabled else "Sound Off")
        label_input = self._controls["label_input"]
        if label_input.text() != snapshot.label:
            label_input.setText(snapshot.label)

    def _on_presentation_changed(self):
        self._set_dynamic_property(self._card["card"], "flash", self.sync.flashing)
        self._controls["fullscreen"].setText("Exit Fullscreen" if self.sync.is_fullscreen else "Fullscreen")

    # Dynamic properties only restyle after an unpolish/polish round trip.
    @staticmethod
    def _set_dynamic_property(widget, name, value):
        value = "true" if value else "false"
        if widget.property(name) == value:
            return
        widget.setProperty(name, value)
        widget.style().unpolish(widget)
        widget.style().polish(widget)

    # ------------------------------------------------------------------ #
    #  Window events                                                       #
    # ------------------------------------------------------------------ #

    def changeEvent(self, event):
        if event.type() == QEvent.WindowStateChange and hasattr(self, "sync"):
            self.sync.sync_fullscreen(self.isFullScreen())
        super().changeEvent(event)

    def showEvent(self, event):
        super().showEvent(event)
        # Start with the keyboard on the window itself, not on the label field
        self.centralWidget().setFocus()

    def mousePressEvent(self, event):
        # Clicking anywhere off the label field hands the keyboard back to the shortcuts
        self.centralWidget().setFocus()
        super().mousePressEvent(event)

    def teardown(self):
        if self._closed:
            return
        self._closed = True
        self.commands.detach()
        self.sync.close()
        self.timer.close()
        log.info("Closed round timer session")

    def closeEvent(self, event):
        self.teardown()
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    app.setApplicationName("Round Timer")
    window = MainWindow()
    if window.settings["start_fullscreen"]:
        window.show()
        window.sync.enter_fullscreen()
    else:
        window.resize(1100, 760)
        window.show()
    sys.exit(app.exec())
