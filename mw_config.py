"""Configuration persistence for MorseWave.

Saves and restores the operator settings (speed, volume, tone) between
launches.
"""
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from mw_sequencer import Sequencer
from mw_synth import ToneConfig, gain_from_volume
from mw_utils import DEFAULT_TONE_HZ, DEFAULT_VOLUME, DEFAULT_WPM, clamp_wpm

logger = logging.getLogger(__name__)

# Accepted tone range in Hz
MIN_TONE_HZ = 100.0
MAX_TONE_HZ = 2000.0

CONFIG_FILENAME = 'config.json'


def config_dir() -> str:
    """Per-user MorseWave settings directory, created on first use."""
    home = os.path.expanduser('~')
    if sys.platform == 'win32':
        root = os.path.join(os.environ.get('LOCALAPPDATA', home), 'MorseWave')
    elif sys.platform == 'darwin':
        root = os.path.join(home, 'Library', 'Application Support', 'MorseWave')
    else:
        xdg = os.environ.get('XDG_CONFIG_HOME') or os.path.join(home, '.config')
        root = os.path.join(xdg, 'morsewave')
    os.makedirs(root, exist_ok=True)
    return root


def get_config_path() -> str:
    return os.path.join(config_dir(), CONFIG_FILENAME)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the settings file.

    A missing, unreadable or non-object file reads as an empty dict, so the
    caller falls back to defaults.
    """
    path = path or get_config_path()
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    if isinstance(data, dict):
        return data
    logger.warning("ignoring config %s: expected a JSON object, got %s", path, type(data).__name__)
    return {}


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """Write ``config`` as JSON; returns False (and logs) if the write fails."""
    path = path or get_config_path()
    try:
        with open(path, 'w') as f:
            json.dump(config, f, indent=2, sort_keys=True)
    except OSError as e:
        logger.warning("could not save config %s: %s", path, e)
        return False
    return True


@dataclass
class Settings:
    """Operator settings as stored in the config file."""
    wpm: int = DEFAULT_WPM
    volume: int = DEFAULT_VOLUME      # 0-100
    tone_hz: float = DEFAULT_TONE_HZ

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'Settings':
        """Build settings from a loaded config, bounding every value.

        Missing or malformed entries fall back to the defaults.
        """
        s = cls()
        try:
            s.wpm = clamp_wpm(float(config.get('wpm', s.wpm)))
        except (TypeError, ValueError, OverflowError):
            pass  # keep default
        try:
            s.volume = int(min(100, max(0, int(config.get('volume', s.volume)))))
        except (TypeError, ValueError, OverflowError):
            pass  # keep default
        try:
            s.tone_hz = min(MAX_TONE_HZ, max(MIN_TONE_HZ, float(config.get('tone_hz', s.tone_hz))))
        except (TypeError, ValueError):
            pass  # keep default
        return s

    def to_config(self) -> Dict[str, Any]:
        return {'wpm': self.wpm, 'volume': self.volume, 'tone_hz': self.tone_hz}

    def make_sequencer(self) -> Sequencer:
        return Sequencer(self.wpm)

    def make_tone_config(self) -> ToneConfig:
        return ToneConfig(tone_hz=self.tone_hz, gain=gain_from_volume(self.volume))

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'Settings':
        return cls.from_config(load_config(path))

    def save(self, path: Optional[str] = None) -> bool:
        return save_config(self.to_config(), path)
