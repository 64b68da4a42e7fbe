"""Utility functions and constants for MorseWave.

This module holds the Morse symbol table (one list of pairs from which both
lookup directions are built), the serialization alphabet, timing and speed
constants, and small helpers shared by the codec, sequencer and synth.
"""
from types import MappingProxyType
from typing import Mapping, Tuple
import numpy as np

# International Morse Code (ITU-R M.1677-1), A-Z and 0-9
SYMBOL_PAIRS: Tuple[Tuple[str, str], ...] = (
    ('A', '.-'),    ('B', '-...'),  ('C', '-.-.'), ('D', '-..'),  ('E', '.'),
    ('F', '..-.'),  ('G', '--.'),   ('H', '....'), ('I', '..'),   ('J', '.---'),
    ('K', '-.-'),   ('L', '.-..'),  ('M', '--'),   ('N', '-.'),   ('O', '---'),
    ('P', '.--.'),  ('Q', '--.-'),  ('R', '.-.'),  ('S', '...'),  ('T', '-'),
    ('U', '..-'),   ('V', '...-'),  ('W', '.--'),  ('X', '-..-'), ('Y', '-.--'),
    ('Z', '--..'),
    ('0', '-----'), ('1', '.----'), ('2', '..---'), ('3', '...--'), ('4', '....-'),
    ('5', '.....'), ('6', '-....'), ('7', '--...'), ('8', '---..'), ('9', '----.'),
)

MORSE_MAP: Mapping[str, str] = MappingProxyType(dict(SYMBOL_PAIRS))
REVERSE_MAP: Mapping[str, str] = MappingProxyType({m: c for c, m in SYMBOL_PAIRS})

# Serialization alphabet
DOT = '.'
DASH = '-'
CHAR_SPACE = ' '
WORD_SPACE = '/'
MORSE_ALPHABET = frozenset((DOT, DASH, CHAR_SPACE, WORD_SPACE))

# Timing in units
DOT_UNITS = 1
DASH_UNITS = 3
INTRA_GAP_UNITS = 1
CHAR_GAP_UNITS = 3
WORD_GAP_UNITS = 7

# Speed limits (words per minute)
MIN_WPM = 5
MAX_WPM = 40
DEFAULT_WPM = 20

# Default audio constants
DEFAULT_SAMPLE_RATE = 48000
DEFAULT_TONE_HZ = 800.0
DEFAULT_GAIN = 0.3
DEFAULT_VOLUME = 50


def unit_ms(wpm: float) -> float:
    """Convert words-per-minute (WPM) to the duration of one unit in milliseconds.

    Uses the PARIS standard: 50 units per word, so one unit is 1200 / wpm ms.

    Args:
        wpm: Words per minute (must be > 0).

    Returns:
        Duration in milliseconds for a single dot element.
    """
    return 1200.0 / wpm


def clamp_wpm(wpm: float) -> int:
    """Clamp a speed to the supported [MIN_WPM, MAX_WPM] range."""
    return int(min(MAX_WPM, max(MIN_WPM, round(wpm))))


def env_ramp(samples: int) -> 'np.ndarray':
    """Generate a cosine-shaped envelope ramp of length ``samples``.

    The ramp is applied as a short fade-in/fade-out on tones to avoid clicks.

    Args:
        samples: Number of ramp samples (int).

    Returns:
        A numpy float32 array containing the ramp from ~0 to 1.
    """
    t = np.arange(samples, dtype=np.float32)
    ramp = 0.5 * (1 - np.cos(np.pi * (t + 1) / (samples + 1)))
    return ramp.astype(np.float32)
