"""Side effects that follow the timer: window title, end chime, flash and fullscreen."""

from rt.common.logger import get_module_logger
from rt.core.capabilities import CapabilityUnavailable
from rt.core.timer_state import TimerEvent

log = get_module_logger(__name__)

TITLE_SEPARATOR = " • "
DEFAULT_FLASH_MS = 600


def format_title(snapshot, app_name):
    return f"{snapshot.display}{TITLE_SEPARATOR}{app_name}"


class PresentationSync:
    """Subscribes to a RoundTimer and performs every side effect its state implies.

    The title the window had when this was built is captured once and put back
    on reset and on close.  The chime and the flash fire on the false to true
    edge of the timer's alert guard, so sitting at zero never repeats them.
    Fullscreen failures leave ``is_fullscreen`` as it was.
    """

    def __init__(self, timer, scheduler, title_setter, sequencer, fullscreen=None, app_name="Round Timer",
                 flash_ms=DEFAULT_FLASH_MS):
        self._timer = timer
        self._scheduler = scheduler
        self._titles = title_setter
        self._sequencer = sequencer
        self._fullscreen = fullscreen
        self.app_name = app_name
        self.flash_ms = flash_ms

        self.original_title = title_setter.title()
        self.is_fullscreen = False
        self.flashing = False
        self._flash_generation = 0
        self._flash_handle = None
        self._listeners = []
        self._last_alert_fired = timer.snapshot.alert_fired

        self._unsubscribe = timer.subscribe(self._on_snapshot)
        self._titles.set_title(format_title(timer.snapshot, app_name))

    # Listeners get called with no arguments whenever `flashing` or `is_fullscreen` changes.
    def subscribe(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener()

    #region === Snapshot handling ===

    def _on_snapshot(self, snapshot, event):
        if event == TimerEvent.RESET:
            self._titles.set_title(self.original_title)
        else:
            self._titles.set_title(format_title(snapshot, self.app_name))

        if event in (TimerEvent.RESET, TimerEvent.PRESET):
            self._clear_flash()

        if snapshot.alert_fired and not self._last_alert_fired:
            self._on_zero_crossing(snapshot)
        self._last_alert_fired = snapshot.alert_fired

    def _on_zero_crossing(self, snapshot):
        log.info(f"Round '{snapshot.label}' ended")
        if snapshot.sound_enabled:
            self._sequencer.play_end_sequence()
        self._start_flash()

    #endregion === Snapshot handling ===

    #region === Flash ===

    # Each flash gets a generation number so a stale one-shot from an earlier flash can't cut a newer one short.
    def _start_flash(self):
        self._flash_generation += 1
        generation = self._flash_generation
        self.flashing = True
        self._flash_handle = self._scheduler.once(self.flash_ms, lambda: self._end_flash(generation))
        self._notify()

    def _end_flash(self, generation):
        if generation != self._flash_generation or not self.flashing:
            return
        self.flashing = False
        self._flash_handle = None
        self._notify()

    def _clear_flash(self):
        self._flash_generation += 1
        if self._flash_handle is not None:
            self._flash_handle.cancel()
            self._flash_handle = None
        if self.flashing:
            self.flashing = False
            self._notify()

    #endregion === Flash ===

    #region === Fullscreen ===

    def enter_fullscreen(self):
        self._set_fullscreen(True)

    def exit_fullscreen(self):
        self._set_fullscreen(False)

    def toggle_fullscreen(self):
        self._set_fullscreen(not self.is_fullscreen)

    def _set_fullscreen(self, wanted):
        if self._fullscreen is None:
            log.debug("Fullscreen requested but no fullscreen capability is available")
            return
        try:
            if wanted:
                self._fullscreen.request_fullscreen()
            else:
                self._fullscreen.exit_fullscreen()
        except CapabilityUnavailable:
            log.warning(f"Fullscreen {'enter' if wanted else 'exit'} request was refused", exc_info=True)
            return
        self.sync_fullscreen(wanted)

    # The host can leave fullscreen on its own (window manager, Escape), so it reports back through here.
    def sync_fullscreen(self, is_fullscreen):
        if bool(is_fullscreen) == self.is_fullscreen:
            return
        self.is_fullscreen = bool(is_fullscreen)
        log.debug(f"Fullscreen is now {'on' if self.is_fullscreen else 'off'}")
        self._notify()

    #endregion === Fullscreen ===

    def close(self):
        self._unsubscribe()
        self._clear_flash()
        self._listeners.clear()
        self._titles.set_title(self.original_title)
