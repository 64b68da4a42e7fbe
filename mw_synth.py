"""Tone synthesizer module.

Contains the ToneConfig dataclass and ToneSynth, which renders playback
events from the sequencer into mono numpy audio buffers.
"""
from dataclasses import dataclass
from typing import Iterable
import numpy as np
from mw_sequencer import PlaybackEvent, coalesce
from mw_utils import DEFAULT_GAIN, DEFAULT_SAMPLE_RATE, DEFAULT_TONE_HZ, env_ramp

# Audio envelope constants
RAMP_DURATION_SECONDS = 0.005
MAX_GAIN = 0.6


def gain_from_volume(volume: float) -> float:
    """Map a 0-100 volume control onto an output gain in [0, MAX_GAIN]."""
    return MAX_GAIN * min(100.0, max(0.0, volume)) / 100.0


@dataclass
class ToneConfig:
    """Configuration for the synthesizer."""
    sample_rate: int = DEFAULT_SAMPLE_RATE
    tone_hz: float = DEFAULT_TONE_HZ
    gain: float = DEFAULT_GAIN


class ToneSynth:
    """Render sine-tone audio for playback events according to a ToneConfig.

    Public methods:
      - event_audio(event): return mono buffer for a single event
      - render(events): return mono buffer for a full event sequence
    """
    def __init__(self, cfg: ToneConfig):
        self.cfg = cfg

    def _samples(self, duration_ms: float) -> int:
        return max(1, int(round(duration_ms * self.cfg.sample_rate / 1000.0)))

    def _tone(self, duration_ms: float) -> 'np.ndarray':
        """Synthesize a tone for ``duration_ms`` with click-free edges.

        Returns:
            A numpy float32 array in [-1, 1] scaled by gain.
        """
        sr = self.cfg.sample_rate
        n = self._samples(duration_ms)
        t = np.arange(n, dtype=np.float32) / sr
        sig = np.sin(2 * np.pi * self.cfg.tone_hz * t).astype(np.float32)

        ramp_samps = min(n // 2, max(1, int(RAMP_DURATION_SECONDS * sr)))
        if ramp_samps > 0:
            ramp = env_ramp(ramp_samps)
            sig[:ramp_samps] *= ramp
            sig[-ramp_samps:] *= ramp[::-1]
        return sig * np.float32(self.cfg.gain)

    def _silence(self, duration_ms: float) -> 'np.ndarray':
        """Return a silence buffer of ``duration_ms``."""
        return np.zeros(self._samples(duration_ms), dtype=np.float32)

    def event_audio(self, event: PlaybackEvent) -> 'np.ndarray':
        """Build audio for a single event."""
        if event.on:
            return self._tone(event.duration_ms)
        return self._silence(event.duration_ms)

    def render(self, events: Iterable[PlaybackEvent]) -> 'np.ndarray':
        """Render a whole event sequence into one buffer.

        Adjacent silences are merged first so a gap is a single block.
        """
        chunks = [self.event_audio(ev) for ev in coalesce(events)]
        if not chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(chunks)
