"""End-of-round chime.

Tones are rendered to 16-bit mono PCM with numpy and handed to a
``ToneOutput``.  The sequencer itself holds no timer state: whether sound is
enabled is decided by whoever calls it.
"""

import numpy as np
from rt.common.logger import get_module_logger
from rt.core.capabilities import AudioUnavailable, Waveform

log = get_module_logger(__name__)

SAMPLE_RATE = 44100
DEFAULT_VOLUME = 0.2
ATTACK_MS = 20
_FLOOR = 0.001

# (offset_ms, frequency_hz, duration_ms), ascending pitch
END_SEQUENCE = (
    (0, 660.0, 240),
    (260, 880.0, 240),
    (560, 1046.0, 520),
)
END_WAVEFORM = Waveform.SQUARE


def _oscillator(waveform, frequency_hz, t):
    phase = t * frequency_hz
    if waveform == Waveform.SQUARE:
        return np.where(np.sin(2 * np.pi * phase) >= 0, 1.0, -1.0)
    if waveform == Waveform.TRIANGLE:
        return 2 * np.abs(2 * (phase - np.floor(phase + 0.5))) - 1
    return np.sin(2 * np.pi * phase)


def _envelope(n_samples, attack_samples):
    """Quick exponential attack up to full level, then exponential decay back down over the rest of the tone."""
    attack_samples = max(1, min(attack_samples, n_samples - 1))
    attack = np.geomspace(_FLOOR, 1.0, attack_samples, endpoint=False)
    decay = np.geomspace(1.0, _FLOOR, n_samples - attack_samples)
    return np.concatenate((attack, decay))


def render_tone(frequency_hz, duration_ms, waveform=Waveform.SINE, sample_rate=SAMPLE_RATE,
                volume=DEFAULT_VOLUME, attack_ms=ATTACK_MS):
    """Render one enveloped tone as little endian int16 PCM bytes."""
    n_samples = int(sample_rate * duration_ms / 1000)
    if n_samples < 2:
        return b""
    t = np.arange(n_samples) / sample_rate
    wave = _oscillator(Waveform(waveform), frequency_hz, t)
    wave = wave * _envelope(n_samples, int(sample_rate * attack_ms / 1000)) * volume
    return (np.clip(wave, -1.0, 1.0) * 32767).astype("<i2").tobytes()


# Plays single tones and the fixed end-of-round motif. Once the output reports itself unavailable, every later call
# is a silent no-op.
class AlertSequencer:

    def __init__(self, output, scheduler, sequence=END_SEQUENCE, waveform=END_WAVEFORM):
        self._output = output
        self._scheduler = scheduler
        self.sequence = tuple(sequence)
        self.waveform = waveform
        self.available = output is not None

    def play(self, duration_ms, frequency_hz, waveform=Waveform.SINE):
        if not self.available:
            return
        try:
            self._output.synthesize_tone(frequency_hz, duration_ms, waveform)
        except AudioUnavailable:
            self.available = False
            log.warning("Audio output unavailable, alert sounds disabled for this session", exc_info=True)

    def play_end_sequence(self):
        if not self.available:
            return
        log.info("Playing end-of-round chime")
        for offset_ms, frequency_hz, duration_ms in self.sequence:
            if offset_ms <= 0:
                self.play(duration_ms, frequency_hz, self.waveform)
            else:
                self._scheduler.once(offset_ms, lambda d=duration_ms, f=frequency_hz: self.play(d, f, self.waveform))
