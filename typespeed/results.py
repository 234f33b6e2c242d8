from __future__ import annotations

import math
from dataclasses import dataclass

from .metrics import count_correct, count_words
from .typing_core import Phase
from .typing_test import TypingTest


@dataclass(frozen=True, slots=True)
class TypingResult:
    """Final summary of a finished typing session."""

    reference_text: str
    typed_text: str
    elapsed_s: float
    wpm: int
    accuracy_pct: int
    correct_chars: int
    incorrect_chars: int
    words: int


def typing_result_from_test(test: TypingTest) -> TypingResult:
    """Build a TypingResult from a finished TypingTest."""

    if test.phase is not Phase.FINISHED:
        raise ValueError("typing test is not finished")

    snap = test.snapshot()
    correct = count_correct(snap.reference_text, snap.input)
    return TypingResult(
        reference_text=snap.reference_text,
        typed_text=snap.input,
        elapsed_s=float(snap.elapsed_s),
        wpm=int(snap.wpm),
        accuracy_pct=int(snap.accuracy_pct),
        correct_chars=correct,
        incorrect_chars=len(snap.input) - correct,
        words=count_words(snap.input),
    )


def format_time(seconds: float) -> str:
    """Render seconds as m:ss, both parts floored."""

    total = max(0.0, float(seconds))
    mins = int(math.floor(total / 60.0))
    secs = int(math.floor(total % 60.0))
    return f"{mins}:{secs:02d}"
