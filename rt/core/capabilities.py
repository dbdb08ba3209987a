"""Host capabilities the engine drives but never implements itself.

Each capability is a small interface with one implementation per host
environment (see ``rt.ui.qt_support`` for the Qt ones).  Failures are
reported with ``CapabilityUnavailable`` and are always caught at the call
site; they never reach the timer state machine.
"""

from enum import Enum


class CapabilityUnavailable(Exception):
    """A host capability is missing, blocked or refused the request."""


class AudioUnavailable(CapabilityUnavailable):
    pass


class FullscreenUnavailable(CapabilityUnavailable):
    pass


class Waveform(str, Enum):
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"


class ToneOutput:

    def synthesize_tone(self, frequency_hz: float, duration_ms: int, waveform: Waveform) -> None:
        raise NotImplementedError


class FullscreenControl:

    def request_fullscreen(self) -> None:
        raise NotImplementedError

    def exit_fullscreen(self) -> None:
        raise NotImplementedError


class TitleSetter:

    def title(self) -> str:
        raise NotImplementedError

    def set_title(self, title: str) -> None:
        raise NotImplementedError
