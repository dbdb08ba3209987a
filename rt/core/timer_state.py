from dataclasses import dataclass, replace
from enum import Enum
from rt.common.logger import get_module_logger
from rt.core.clock import SECONDS_PER_MINUTE, TICK_INTERVAL_MS, clamp_seconds, format_time, progress_fraction

log = get_module_logger(__name__)

DEFAULT_CEILING_SECONDS = 99 * SECONDS_PER_MINUTE


class TimerEvent(str, Enum):
    START = "start"
    PAUSE = "pause"
    TICK = "tick"
    RESET = "reset"
    PRESET = "preset"
    ADJUST = "adjust"
    SOUND = "sound"
    LABEL = "label"


# Immutable read of the round at one point in time. This is the only thing observers ever get to see.
@dataclass(frozen=True)
class TimerSnapshot:
    remaining_seconds: int
    total_seconds: int
    running: bool = False
    sound_enabled: bool = True
    label: str = ""
    alert_fired: bool = False

    @property
    def ended(self):
        return self.remaining_seconds == 0

    @property
    def progress(self):
        return progress_fraction(self.remaining_seconds, self.total_seconds)

    @property
    def display(self):
        return format_time(self.remaining_seconds)


# Owns the countdown for a single round. All mutation goes through the methods below, and every change is
# published as a fresh TimerSnapshot to the subscribed listeners as (snapshot, event). The tick handle from the
# scheduler lives here and only here, so there's never more than one of them going at once.
class RoundTimer:

    def __init__(self, scheduler, duration_seconds, ceiling_seconds=DEFAULT_CEILING_SECONDS,
                 sound_enabled=True, label=""):
        self._scheduler = scheduler
        self.ceiling_seconds = max(1, int(ceiling_seconds))
        total = max(1, clamp_seconds(duration_seconds, self.ceiling_seconds))
        self._snapshot = TimerSnapshot(
            remaining_seconds=total,
            total_seconds=total,
            sound_enabled=bool(sound_enabled),
            label=label,
        )
        self._tick_handle = None
        self._listeners = []
        log.debug(f"Initialized round timer with {total}s (ceiling {self.ceiling_seconds}s)")

    #region === Observation ===

    @property
    def snapshot(self):
        return self._snapshot

    @property
    def running(self):
        return self._snapshot.running

    # Registers a listener, returning a callable that removes it again.
    def subscribe(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _publish(self, snapshot, event, force=False):
        if snapshot == self._snapshot and not force:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot, event)

    #endregion === Observation ===

    #region === Scheduler handle ===

    def _cancel_tick(self):
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _arm_tick(self):
        self._cancel_tick()
        self._tick_handle = self._scheduler.every(TICK_INTERVAL_MS, self.tick)

    # Builds the snapshot for a new remaining value, keeping `running` and the alert guard consistent with it.
    # Hitting zero from above stops the clock and sets the guard, going back above zero clears the guard.
    def _with_remaining(self, remaining, running):
        current = self._snapshot
        alert_fired = current.alert_fired
        if remaining == 0:
            running = False
            if current.remaining_seconds > 0:
                alert_fired = True
        else:
            alert_fired = False
        if not running:
            self._cancel_tick()
        return replace(current, remaining_seconds=remaining, running=running, alert_fired=alert_fired)

    #endregion === Scheduler handle ===

    #region === Operations ===

    def start(self):
        if self._snapshot.running:
            return
        # A round with nothing left on it doesn't run.
        if self._snapshot.remaining_seconds == 0:
            log.debug("Ignored start with no time remaining")
            return
        self._arm_tick()
        self._publish(replace(self._snapshot, running=True), TimerEvent.START)
        log.debug(f"Started round at {self._snapshot.display}")

    def pause(self):
        if not self._snapshot.running:
            return
        self._cancel_tick()
        self._publish(replace(self._snapshot, running=False), TimerEvent.PAUSE)
        log.debug(f"Paused round at {self._snapshot.display}")

    def toggle_run(self):
        if self._snapshot.running:
            self.pause()
        else:
            self.start()

    # Called by the scheduler once a second while running. The decrement, the clamp at zero, the forced stop and the
    # alert guard all land in one snapshot.
    def tick(self):
        if not self._snapshot.running:
            self._cancel_tick()
            return
        remaining = max(0, self._snapshot.remaining_seconds - 1)
        snapshot = self._with_remaining(remaining, running=True)
        self._publish(snapshot, TimerEvent.TICK)
        if snapshot.ended:
            log.info("Round reached 00:00")

    def reset(self):
        self._cancel_tick()
        current = self._snapshot
        self._publish(replace(current, remaining_seconds=current.total_seconds, running=False, alert_fired=False),
                      TimerEvent.RESET, force=True)
        log.debug(f"Reset round to {self._snapshot.display}")

    # Establishes a new round length and rewinds to it.
    def set_duration(self, seconds, event=TimerEvent.PRESET):
        self._cancel_tick()
        total = max(1, clamp_seconds(seconds, self.ceiling_seconds))
        self._publish(replace(self._snapshot, total_seconds=total, remaining_seconds=total, running=False,
                              alert_fired=False), event)
        log.debug(f"Set round duration to {format_time(total)}")

    def set_preset(self, minutes):
        self.set_duration(max(1, int(minutes)) * SECONDS_PER_MINUTE)

    # Nudges the remaining time, clamped to [0, ceiling]. Leaves the clock running if it was, unless this lands on zero.
    def adjust_by(self, delta_seconds):
        current = self._snapshot
        remaining = clamp_seconds(current.remaining_seconds + int(delta_seconds), self.ceiling_seconds)
        self._publish(self._with_remaining(remaining, running=current.running), TimerEvent.ADJUST)
        log.debug(f"Adjusted round by {int(delta_seconds):+d}s to {self._snapshot.display}")

    def set_sound_enabled(self, enabled):
        self._publish(replace(self._snapshot, sound_enabled=bool(enabled)), TimerEvent.SOUND)

    def toggle_sound(self):
        self.set_sound_enabled(not self._snapshot.sound_enabled)

    def set_label(self, label):
        self._publish(replace(self._snapshot, label=label), TimerEvent.LABEL)

    # Tears the session down, nothing may tick after this.
    # Ends the session: the round stops where it is and nobody hears about anything after this.
    def close(self):
        self._cancel_tick()
        self._listeners.clear()
        self._snapshot = replace(self._snapshot, running=False)

    #endregion === Operations ===
