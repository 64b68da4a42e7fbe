import json
import os

import pytest

import mw_config
from mw_config import Settings, get_config_path, load_config, save_config
from mw_utils import DEFAULT_TONE_HZ, DEFAULT_VOLUME, DEFAULT_WPM, MAX_WPM, MIN_WPM


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr(mw_config.sys, 'platform', 'linux')
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path))
    return tmp_path


def test_config_path(config_home):
    path = get_config_path()
    assert path == os.path.join(str(config_home), 'morsewave', 'config.json')
    assert os.path.isdir(os.path.dirname(path))


def test_missing_config_is_empty():
    assert load_config() == {}


def test_save_and_load():
    assert save_config({'wpm': 25, 'volume': 70})
    assert load_config() == {'wpm': 25, 'volume': 70}


def test_corrupt_config_is_empty():
    with open(get_config_path(), 'w') as f:
        f.write('{not json')
    assert load_config() == {}


def test_non_object_config_is_empty():
    with open(get_config_path(), 'w') as f:
        json.dump([1, 2, 3], f)
    assert load_config() == {}


def test_settings_defaults():
    s = Settings.from_config({})
    assert (s.wpm, s.volume, s.tone_hz) == (DEFAULT_WPM, DEFAULT_VOLUME, DEFAULT_TONE_HZ)


def test_settings_bounds_values():
    s = Settings.from_config({'wpm': 90, 'volume': 400, 'tone_hz': 5})
    assert s.wpm == MAX_WPM
    assert s.volume == 100
    assert s.tone_hz == mw_config.MIN_TONE_HZ
    assert Settings.from_config({'wpm': 1}).wpm == MIN_WPM


def test_settings_ignore_malformed_values():
    s = Settings.from_config({'wpm': 'fast', 'volume': None, 'tone_hz': [1]})
    assert s == Settings()


def test_settings_round_trip_through_file():
    save_config(Settings(wpm=30, volume=20, tone_hz=650.0).to_config())
    s = Settings.from_config(load_config())
    assert s == Settings(wpm=30, volume=20, tone_hz=650.0)


def test_settings_build_runtime_objects():
    s = Settings(wpm=12, volume=100, tone_hz=700.0)
    seq = s.make_sequencer()
    assert seq.wpm == 12
    assert seq.unit_ms == 100.0
    tone = s.make_tone_config()
    assert tone.tone_hz == 700.0
    assert tone.gain == pytest.approx(0.6)


def test_settings_load_and_save_explicit_path(tmp_path):
    path = str(tmp_path / 'elsewhere.json')
    assert Settings.load(path) == Settings()
    assert Settings(wpm=8, volume=40, tone_hz=600.0).save(path)
    assert Settings.load(path) == Settings(wpm=8, volume=40, tone_hz=600.0)


def test_unwritable_path_is_reported(tmp_path):
    assert save_config({'wpm': 20}, str(tmp_path / 'missing' / 'config.json')) is False
