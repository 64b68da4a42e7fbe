"""Manual keying buffer for MorseWave.

Collects dot/dash/space key presses and keeps a live decoding of what has
been keyed so far.
"""
from mw_codec import InvalidMorseSyntax, decode, validate
from mw_utils import MORSE_ALPHABET


class ManualKeyer:
    """Accumulate keyed Morse symbols and decode them as they arrive.

    ``text`` holds the decoding of the last buffer state that validated, so
    it does not flicker while a letter is half-keyed.
    """
    def __init__(self):
        self.morse = ''
        self.text = ''

    def add(self, symbol: str) -> str:
        """Append one symbol and return the current decoded text.

        Raises:
            InvalidMorseSyntax: ``symbol`` is not '.', '-', ' ' or '/'.
        """
        if len(symbol) != 1 or symbol not in MORSE_ALPHABET:
            raise InvalidMorseSyntax(symbol)
        self.morse += symbol
        if validate(self.morse):
            self.text = decode(self.morse)
        return self.text

    def clear(self):
        """Reset the buffer and the decoded text."""
        self.morse = ''
        self.text = ''
