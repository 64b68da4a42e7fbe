import numpy as np
import pytest

from mw_sequencer import PlaybackEvent, Sequencer
from mw_synth import MAX_GAIN, ToneConfig, ToneSynth, gain_from_volume
from mw_utils import DEFAULT_GAIN, DEFAULT_VOLUME, env_ramp


@pytest.fixture
def synth():
    return ToneSynth(ToneConfig(sample_rate=8000, tone_hz=800.0, gain=0.3))


def test_default_volume_gives_default_gain():
    assert gain_from_volume(DEFAULT_VOLUME) == pytest.approx(DEFAULT_GAIN)


def test_gain_from_volume_bounds():
    assert gain_from_volume(0) == 0.0
    assert gain_from_volume(100) == pytest.approx(MAX_GAIN)
    assert gain_from_volume(150) == pytest.approx(MAX_GAIN)
    assert gain_from_volume(-5) == 0.0


def test_env_ramp():
    ramp = env_ramp(10)
    assert ramp.dtype == np.float32
    assert len(ramp) == 10
    assert 0.0 < ramp[0] < ramp[-1] < 1.0
    assert np.all(np.diff(ramp) > 0)


def test_tone_event(synth):
    audio = synth.event_audio(PlaybackEvent(True, 60.0))
    assert audio.dtype == np.float32
    assert len(audio) == 480
    assert np.max(np.abs(audio)) <= 0.3 + 1e-6
    assert np.max(np.abs(audio)) > 0.2
    # ramped edges
    assert abs(audio[0]) < 0.01


def test_silence_event(synth):
    audio = synth.event_audio(PlaybackEvent(False, 120.0))
    assert len(audio) == 960
    assert not np.any(audio)


def test_render_length_matches_sequence(synth):
    events = Sequencer(20).sequence("... --- ...")
    audio = synth.render(events)
    total_ms = sum(ev.duration_ms for ev in events)
    assert len(audio) == pytest.approx(total_ms * 8000 / 1000, abs=len(events))


def test_render_empty(synth):
    audio = synth.render([])
    assert len(audio) == 0
