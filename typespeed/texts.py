"""Reference-text sources for typing sessions.

A provider only has to hand back a non-empty string from ``next_text()``.
Repeats are allowed: nothing guarantees two consecutive sessions get
different texts.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Protocol

from .typing_core import EmptyReferenceText

logger = logging.getLogger(__name__)


SAMPLE_TEXTS: tuple[str, ...] = (
    "The quick brown fox jumps over the lazy dog. This pangram contains every letter of the alphabet at least once.",
    "Programming is the art of telling a computer what to do. It requires logic, creativity, and patience to master.",
    "In the realm of software development, clean code is not just about functionality but also readability and maintainability.",
    "Technology advances at an exponential rate, transforming how we live, work, and communicate with each other daily.",
    "The best way to predict the future is to create it. Innovation stems from curiosity and the courage to experiment.",
)


class TextProvider(Protocol):
    def next_text(self) -> str:
        """Return the reference text for the next session."""
        ...


def _checked_corpus(texts: Sequence[str]) -> tuple[str, ...]:
    corpus = tuple(str(t) for t in texts)
    if not corpus:
        raise EmptyReferenceText("text corpus is empty")
    if any(t == "" for t in corpus):
        raise EmptyReferenceText("text corpus contains an empty reference text")
    return corpus


class CorpusTextProvider:
    """Uniform random pick from a fixed corpus.

    Seeded so a given seed always yields the same stream of texts.
    """

    def __init__(self, texts: Sequence[str] = SAMPLE_TEXTS, *, seed: int | None = None) -> None:
        self._texts = _checked_corpus(texts)
        self._rng = random.Random(seed)

    def next_text(self) -> str:
        text = self._rng.choice(self._texts)
        logger.debug("picked reference text (%d chars)", len(text))
        return text


class SequenceTextProvider:
    """Deterministic provider cycling through its texts in order."""

    def __init__(self, texts: Sequence[str]) -> None:
        # Validation of individual texts is left to TypingTest.start so that
        # tests can feed an empty reference through a provider.
        self._texts = tuple(str(t) for t in texts)
        if not self._texts:
            raise EmptyReferenceText("text sequence is empty")
        self._index = 0

    def next_text(self) -> str:
        text = self._texts[self._index % len(self._texts)]
        self._index += 1
        return text
