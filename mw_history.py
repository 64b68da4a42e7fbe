"""Message history for MorseWave.

Keeps the most recent encodings, newest first, for the history panel.
"""
from collections import deque
from dataclasses import dataclass
import time
from typing import Deque, List, Optional

# Entries kept before the oldest is dropped
HISTORY_LIMIT = 50


@dataclass(frozen=True)
class MorseMessage:
    """One encoded message.

    Attributes:
        text: The text as the operator typed it.
        morse: Its Morse encoding.
        timestamp: Unix time in milliseconds.
    """
    text: str
    morse: str
    timestamp: float


class MessageHistory:
    """Bounded, newest-first list of MorseMessage entries."""

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self._items: Deque[MorseMessage] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._items.maxlen

    def add(self, text: str, morse: str, timestamp: Optional[float] = None) -> Optional[MorseMessage]:
        """Record an encoding; blank text is not recorded.

        Returns:
            The stored message, or None if ``text`` was blank.
        """
        if not text.strip():
            return None
        if timestamp is None:
            timestamp = time.time() * 1000.0
        msg = MorseMessage(text, morse, timestamp)
        self._items.appendleft(msg)
        return msg

    def items(self) -> List[MorseMessage]:
        return list(self._items)

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)
