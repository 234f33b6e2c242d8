"""Deterministic core state for a single typing-speed session.

This module holds the session data (reference text, typed input, timing
anchor and the last computed metrics) together with the per-character
classifier.  It has no dependency on pygame or on real time: instants are
passed in as plain monotonic seconds, so everything here can be driven
headlessly from tests.

Metric formulas live in :mod:`typespeed.metrics`; orchestration (truncation,
freezing the final time, reset) lives in :mod:`typespeed.typing_test`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TypingTestError(Exception):
    """Base class for errors raised by the typing core."""


class EmptyReferenceText(TypingTestError, ValueError):
    """A text source produced an empty reference string."""


class IndexOutOfRange(TypingTestError, IndexError):
    """A character index outside ``[0, len(reference_text))`` was classified."""


class InputTooLong(TypingTestError, ValueError):
    """Input longer than the reference text was applied to a session."""


class SessionFinished(TypingTestError, RuntimeError):
    """Input was applied to a session that has already finished."""


class Phase(StrEnum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class CharState(StrEnum):
    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURRENT = "current"


def _phase_of(started: bool, finished: bool) -> Phase:
    if finished:
        return Phase.FINISHED
    if started:
        return Phase.RUNNING
    return Phase.NOT_STARTED


@dataclass(frozen=True, slots=True)
class TypingSnapshot:
    """View model for the renderer (pure data)."""

    reference_text: str
    input: str
    started: bool
    finished: bool
    elapsed_s: float
    wpm: int
    accuracy_pct: int

    @property
    def phase(self) -> Phase:
        return _phase_of(self.started, self.finished)


class SessionState:
    """Reference text, typed input and timing anchor for one session.

    ``elapsed_s``, ``wpm`` and ``accuracy_pct`` are the last values stored by
    the controller; they are never derived here.
    """

    def __init__(self, text: str) -> None:
        self.reset(text)

    def reset(self, text: str) -> None:
        self.reference_text = str(text)
        self.input = ""
        self.started = False
        self.finished = False
        self.started_at_s: float | None = None
        self.elapsed_s = 0.0
        self.wpm = 0
        self.accuracy_pct = 100

    @property
    def phase(self) -> Phase:
        return _phase_of(self.started, self.finished)

    def apply_input(self, candidate: str, now: float) -> None:
        """Replace the typed input with ``candidate``.

        The candidate is the whole contents of the input field, so a shorter
        candidate is a deletion.  The first non-empty candidate starts the
        session at ``now``.
        """

        if self.finished:
            raise SessionFinished("session already finished")
        if len(candidate) > len(self.reference_text):
            raise InputTooLong(
                f"input length {len(candidate)} exceeds reference length {len(self.reference_text)}"
            )

        if not self.started and candidate:
            self.started = True
            self.started_at_s = float(now)

        self.input = candidate
        if len(candidate) == len(self.reference_text):
            self.finished = True

    def snapshot(self) -> TypingSnapshot:
        return TypingSnapshot(
            reference_text=self.reference_text,
            input=self.input,
            started=self.started,
            finished=self.finished,
            elapsed_s=self.elapsed_s,
            wpm=self.wpm,
            accuracy_pct=self.accuracy_pct,
        )


def classify(state: SessionState | TypingSnapshot, index: int) -> CharState:
    """Classify reference character ``index`` against the typed input."""

    reference = state.reference_text
    typed = state.input
    if not (0 <= index < len(reference)):
        raise IndexOutOfRange(f"index {index} outside [0, {len(reference)})")

    n = len(typed)
    if index == n:
        return CharState.CURRENT
    if index > n:
        return CharState.PENDING
    return CharState.CORRECT if typed[index] == reference[index] else CharState.INCORRECT


def char_states(state: SessionState | TypingSnapshot) -> list[CharState]:
    return [classify(state, i) for i in range(len(state.reference_text))]
