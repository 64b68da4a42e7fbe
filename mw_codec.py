"""Morse codec module.

Converts text to Morse notation and back, and validates Morse syntax. All
functions are pure and share only the read-only tables from mw_utils, so
they are safe to call from any thread.

Encoding is best-effort: unsupported characters are dropped. Decoding is
strict: an unknown letter raises InvalidMorseSyntax instead of producing a
string with gaps in it.
"""
import logging
from typing import List, Tuple

from mw_utils import (CHAR_SPACE, MORSE_ALPHABET, MORSE_MAP, REVERSE_MAP,
                      SYMBOL_PAIRS, WORD_SPACE)

logger = logging.getLogger(__name__)

INVALID_MORSE_MESSAGE = "INVALID MORSE CODE"
WORD_SEPARATOR = f"{CHAR_SPACE}{WORD_SPACE}{CHAR_SPACE}"


class InvalidMorseSyntax(ValueError):
    """Raised when a Morse string contains an unknown letter or symbol.

    Attributes:
        token: The first offending letter token or character.
    """
    def __init__(self, token: str):
        super().__init__(f"{INVALID_MORSE_MESSAGE}: {token!r}")
        self.token = token


def encode(text: str) -> str:
    """Encode text into Morse notation.

    Characters are upper-cased before lookup. Letters in a word are joined
    by a single space and words by " / ". Unsupported characters are skipped
    without leaving an empty letter or word behind.

    Args:
        text: Arbitrary input text.

    Returns:
        The Morse string, empty if nothing in ``text`` is encodable.
    """
    words: List[List[str]] = [[]]
    skipped = 0
    for ch in text.upper():
        if ch == ' ':
            words.append([])
            continue
        code = MORSE_MAP.get(ch)
        if code is None:
            skipped += 1
            continue
        words[-1].append(code)
    if skipped:
        logger.debug("encode skipped %d unsupported character(s)", skipped)
    return WORD_SEPARATOR.join(CHAR_SPACE.join(w) for w in words if w)


def _parse(morse: str) -> List[str]:
    """Split ``morse`` into decoded words, failing at the first problem.

    Blanks are only separators, so a run of them counts once. A word
    segment with no letters (blank input, or a leading, trailing or
    doubled '/') is an error.
    """
    for ch in morse:
        if ch not in MORSE_ALPHABET:
            raise InvalidMorseSyntax(ch)

    words = []
    for segment in morse.split(WORD_SPACE):
        letters = []
        for token in segment.split(CHAR_SPACE):
            if not token:
                continue
            ch = REVERSE_MAP.get(token)
            if ch is None:
                raise InvalidMorseSyntax(token)
            letters.append(ch)
        if not letters:
            raise InvalidMorseSyntax(segment)
        words.append(''.join(letters))
    return words


def decode(morse: str) -> str:
    """Decode Morse notation into uppercase text.

    Runs of blanks between letters count as one separator. Decoding stops
    at the first problem; there is no partial result.

    Raises:
        InvalidMorseSyntax: ``morse`` is blank, contains a character outside
            the alphabet, has an empty word between '/' separators, or
            has a letter that is not in the table.
    """
    return ' '.join(_parse(morse))


def validate(morse: str) -> bool:
    """Return True if ``decode`` would accept ``morse``."""
    try:
        _parse(morse)
    except InvalidMorseSyntax:
        return False
    return True


def reference_table() -> List[Tuple[str, str]]:
    """List every supported character with its Morse code, in table order."""
    return list(SYMBOL_PAIRS)
