from __future__ import annotations

from dataclasses import dataclass

import pytest

from typespeed.texts import SequenceTextProvider
from typespeed.typing_core import CharState, EmptyReferenceText, Phase
from typespeed.typing_test import TypingTest, TypingTestConfig, build_typing_test


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


def _test_for(*texts: str, clock: FakeClock | None = None) -> TypingTest:
    test = TypingTest(provider=SequenceTextProvider(texts), clock=clock or FakeClock())
    test.start()
    return test


def test_start_returns_fresh_snapshot() -> None:
    test = TypingTest(provider=SequenceTextProvider(["hello"]), clock=FakeClock())
    snap = test.start()
    assert snap.reference_text == "hello"
    assert snap.input == ""
    assert snap.started is False
    assert snap.finished is False
    assert snap.elapsed_s == 0.0
    assert snap.wpm == 0
    assert snap.accuracy_pct == 100
    assert test.phase is Phase.NOT_STARTED


def test_operations_before_start_are_programming_errors() -> None:
    test = TypingTest(provider=SequenceTextProvider(["x"]), clock=FakeClock())
    with pytest.raises(RuntimeError):
        test.submit_input("x")
    with pytest.raises(RuntimeError):
        test.snapshot()


def test_start_rejects_empty_reference_text() -> None:
    test = TypingTest(provider=SequenceTextProvider([""]), clock=FakeClock())
    with pytest.raises(EmptyReferenceText):
        test.start()


def test_start_can_use_a_different_provider() -> None:
    test = _test_for("first")
    snap = test.start(SequenceTextProvider(["other"]))
    assert snap.reference_text == "other"


def test_invalid_tick_interval_rejected() -> None:
    with pytest.raises(ValueError):
        TypingTest(
            provider=SequenceTextProvider(["x"]),
            clock=FakeClock(),
            config=TypingTestConfig(tick_interval_s=0.0),
        )


def test_truncates_over_length_input_and_finishes() -> None:
    test = _test_for("abcde")
    snap = test.submit_input("abcdefghijk-longer-than-reference", now=1.0)
    assert snap.input == "abcde"
    assert len(snap.input) == 5
    assert snap.finished is True
    assert snap.accuracy_pct == 100


def test_finished_session_ignores_further_input() -> None:
    test = _test_for("ab")
    test.submit_input("a", now=0.0)
    done = test.submit_input("ab", now=3.0)
    assert done.finished is True

    again = test.submit_input("", now=9.0)
    assert again == done
    assert test.submit_input("zz", now=10.0) == done


def test_tick_is_noop_before_start_and_after_finish() -> None:
    test = _test_for("ab")
    assert test.tick(now=50.0) == test.snapshot()
    assert test.snapshot().elapsed_s == 0.0

    test.submit_input("a", now=0.0)
    final = test.submit_input("ab", now=4.0)
    assert test.tick(now=100.0) == final
    assert test.snapshot().elapsed_s == pytest.approx(4.0)


def test_tick_is_idempotent_for_same_instant() -> None:
    test = _test_for("one two three four")
    test.submit_input("one t", now=0.0)
    a = test.tick(now=7.0)
    b = test.tick(now=7.0)
    assert a == b


def test_tick_reads_injected_clock_when_now_omitted() -> None:
    clock = FakeClock()
    test = _test_for("one two three", clock=clock)
    test.submit_input("one")
    clock.advance(30.0)
    snap = test.tick()
    assert snap.elapsed_s == pytest.approx(30.0)
    assert snap.wpm == 2


def test_elapsed_is_monotonic_while_running() -> None:
    test = _test_for("a b c d e f g")
    test.submit_input("a", now=0.0)
    seen = [test.tick(now=t / 10.0).elapsed_s for t in range(1, 30)]
    assert seen == sorted(seen)


def test_char_state_delegates_to_classifier() -> None:
    test = _test_for("cat")
    test.submit_input("cb", now=0.0)
    assert test.char_state(0) is CharState.CORRECT
    assert test.char_state(1) is CharState.INCORRECT
    assert test.char_states() == [CharState.CORRECT, CharState.INCORRECT, CharState.CURRENT]


def test_build_typing_test_uses_sample_corpus_and_starts() -> None:
    test = build_typing_test(clock=FakeClock(), seed=3)
    assert test.phase is Phase.NOT_STARTED
    assert len(test.reference_text) > 0
    assert test.config.tick_interval_s == pytest.approx(0.1)
