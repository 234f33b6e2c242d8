"""Stateless metric computations for a typing session.

Every function recomputes from the raw session values and the instant it is
given; nothing is accumulated between calls.  Percentages and rates are
rounded half-up.
"""

from __future__ import annotations

import math

from .typing_core import SessionState


def round_half_up(x: float) -> int:
    # 2.5 -> 3, 66.666 -> 67; values here are never negative.
    return int(math.floor(x + 0.5))


def count_words(text: str) -> int:
    """Number of maximal non-whitespace runs in ``text``."""

    return len(text.split())


def count_correct(reference: str, typed: str) -> int:
    return sum(1 for a, b in zip(typed, reference) if a == b)


def elapsed_seconds(state: SessionState, now: float) -> float:
    if not state.started or state.started_at_s is None:
        return 0.0
    return max(0.0, float(now) - state.started_at_s)


def wpm_from(words: int, elapsed_s: float) -> int:
    minutes = elapsed_s / 60.0
    if minutes <= 0.0:
        return 0
    return round_half_up(words / minutes)


def words_per_minute(state: SessionState, now: float) -> int:
    """Live WPM over the current elapsed time (not smoothed)."""

    return wpm_from(count_words(state.input), elapsed_seconds(state, now))


def accuracy_percent(reference: str, typed: str) -> int:
    """Share of typed characters matching the reference at the same index.

    Untyped trailing reference characters do not count against accuracy.
    """

    if not typed:
        return 100
    return round_half_up(100.0 * count_correct(reference, typed) / len(typed))

