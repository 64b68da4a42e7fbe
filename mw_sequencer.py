"""Playback timing for MorseWave.

The Sequencer holds the operator speed and turns a Morse string into an
ordered list of (on, duration_ms) events. It holds no timers: whoever plays
the events owns the waiting between them.
"""
import logging
from typing import Iterable, Iterator, List, NamedTuple

from mw_utils import (CHAR_GAP_UNITS, CHAR_SPACE, DASH, DASH_UNITS,
                      DEFAULT_WPM, DOT, DOT_UNITS, INTRA_GAP_UNITS,
                      WORD_GAP_UNITS, WORD_SPACE, clamp_wpm, unit_ms)

logger = logging.getLogger(__name__)


class PlaybackEvent(NamedTuple):
    """One tone-on or tone-off period."""
    on: bool
    duration_ms: float


class Sequencer:
    """Convert Morse strings into timed tone events at the current speed.

    One instance per playback session; ``set_speed`` only affects walks
    started after the call.
    """
    def __init__(self, wpm: int = DEFAULT_WPM):
        self._wpm = DEFAULT_WPM
        self.set_speed(wpm)

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def unit_ms(self) -> float:
        """Duration of one unit at the current speed, in milliseconds."""
        return unit_ms(self._wpm)

    def set_speed(self, wpm: int) -> int:
        """Set the speed, clamped to [MIN_WPM, MAX_WPM].

        Returns:
            The speed actually stored.
        """
        clamped = clamp_wpm(wpm)
        if clamped != wpm:
            logger.debug("speed %s wpm clamped to %d", wpm, clamped)
        self._wpm = clamped
        return clamped

    def iter_events(self, morse: str) -> Iterator[PlaybackEvent]:
        """Lazily yield the events for ``morse``.

        The unit duration is fixed when this method is called, not when the
        iterator is first advanced.
        """
        return _walk(morse, self.unit_ms)

    def sequence(self, morse: str) -> List[PlaybackEvent]:
        """Return the full event list for ``morse``.

        DOT is on 1 unit then off 1; DASH is on 3 then off 1. CHAR_SPACE adds
        2 units of silence and WORD_SPACE adds 6, so together with the
        trailing gap of the previous symbol the letter and word gaps come
        to 3 and 7 units. A run of separators counts once: several blanks
        are one letter gap, and blanks next to a '/' are part of its word
        gap, so " / " and "/" time the same. Characters outside the
        alphabet are ignored.
        """
        return list(self.iter_events(morse))

    def total_duration_ms(self, morse: str) -> float:
        """Total playback time of ``morse`` at the current speed."""
        return sum(ev.duration_ms for ev in self.iter_events(morse))


def _separator_events(run: str, unit: float) -> Iterator[PlaybackEvent]:
    # Blanks around a '/' belong to the word gap; a run of blanks is one letter gap.
    slashes = run.count(WORD_SPACE)
    if slashes:
        for _ in range(slashes):
            yield PlaybackEvent(False, (WORD_GAP_UNITS - INTRA_GAP_UNITS) * unit)
    elif run:
        yield PlaybackEvent(False, (CHAR_GAP_UNITS - INTRA_GAP_UNITS) * unit)


def _walk(morse: str, unit: float) -> Iterator[PlaybackEvent]:
    gap = INTRA_GAP_UNITS * unit
    run = ''
    for ch in morse:
        if ch in (CHAR_SPACE, WORD_SPACE):
            run += ch
            continue
        if ch not in (DOT, DASH):
            continue
        yield from _separator_events(run, unit)
        run = ''
        yield PlaybackEvent(True, (DOT_UNITS if ch == DOT else DASH_UNITS) * unit)
        yield PlaybackEvent(False, gap)
    yield from _separator_events(run, unit)


def coalesce(events: Iterable[PlaybackEvent]) -> List[PlaybackEvent]:
    """Merge adjacent events that share the same on/off state."""
    merged: List[PlaybackEvent] = []
    for ev in events:
        if merged and merged[-1].on == ev.on:
            merged[-1] = PlaybackEvent(ev.on, merged[-1].duration_ms + ev.duration_ms)
        else:
            merged.append(ev)
    return merged
