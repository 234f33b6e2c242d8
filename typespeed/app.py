"""Pygame UI shell for the typing-speed test.

Draws the stats bar, the reference text coloured per character, and the
results panel.  All timing/scoring/state lives in typespeed/* (core modules);
this module only feeds keyboard input and timer ticks into a TypingTest.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

import pygame

from .clock import RealClock
from .results import format_time, typing_result_from_test
from .texts import TextProvider
from .typing_core import CharState, Phase
from .typing_test import TypingTest, TypingTestConfig, build_typing_test

logger = logging.getLogger(__name__)

WINDOW_SIZE = (960, 600)
TARGET_FPS = 60
TICK_EVENT = pygame.USEREVENT + 1

BG = (14, 16, 22)
CARD = (26, 29, 38)
FG = (235, 235, 245)
MUTED = (130, 134, 150)
ACCENT = (250, 204, 21)
SUCCESS = (74, 222, 128)

CHAR_COLOURS: dict[CharState, tuple[int, int, int]] = {
    CharState.CORRECT: (220, 222, 230),
    CharState.INCORRECT: (248, 113, 113),
    CharState.CURRENT: ACCENT,
    CharState.PENDING: (90, 94, 110),
}
ERROR_BG = (80, 30, 34)


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


class App:
    """Window owner: routes events to the one active screen and tracks quit."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screen: Screen | None = None
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def show(self, screen: Screen) -> None:
        self._screen = screen

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
        elif self._screen is not None:
            self._screen.handle_event(event)

    def render(self) -> None:
        if self._screen is not None:
            self._screen.render(self._surface)


def wrap_indices(text: str, max_width: int, measure: Callable[[str], int]) -> list[range]:
    """Greedy word wrap returning the reference index range of each line.

    Spaces stay attached to the word before them so every index is drawn.
    """

    lines: list[range] = []
    line_start = 0
    line_width = 0
    i = 0
    n = len(text)
    while i < n:
        j = i
        while j < n and text[j] != " ":
            j += 1
        while j < n and text[j] == " ":
            j += 1
        width = measure(text[i:j])
        if line_width > 0 and line_width + width > max_width:
            lines.append(range(line_start, i))
            line_start = i
            line_width = 0
        line_width += width
        i = j
    lines.append(range(line_start, n))
    return lines


class TypingTestScreen:
    def __init__(self, app: App, *, test: TypingTest) -> None:
        self._app = app
        self._test = test
        self._restart_armed = False

        self._text_font = pygame.font.Font(None, 40)
        self._stat_font = pygame.font.Font(None, 48)
        self._small_font = pygame.font.Font(None, 24)
        self._big_font = pygame.font.Font(None, 72)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == TICK_EVENT:
            self._test.tick()
            return

        if event.type == pygame.TEXTINPUT:
            self._restart_armed = False
            if self._test.phase is Phase.FINISHED:
                return
            snap = self._test.snapshot()
            self._test.submit_input(snap.input + str(event.text))
            return

        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_ESCAPE:
            self._app.quit()
            return
        if event.key == pygame.K_F5 or (event.key == pygame.K_RETURN and self._restart_armed):
            self._restart_armed = False
            self._test.start()
            return
        if event.key == pygame.K_TAB:
            self._restart_armed = True
            return

        self._restart_armed = False
        if event.key == pygame.K_BACKSPACE and self._test.phase is Phase.RUNNING:
            snap = self._test.snapshot()
            self._test.submit_input(snap.input[:-1])

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BG)
        w, h = surface.get_size()
        snap = self._test.snapshot()

        title = self._big_font.render("typespeed", True, FG)
        surface.blit(title, title.get_rect(midtop=(w // 2, 30)))

        stats = [format_time(snap.elapsed_s), f"{snap.wpm} wpm", f"{snap.accuracy_pct}%"]
        col_w = w // (len(stats) + 1)
        for i, label in enumerate(stats):
            s = self._stat_font.render(label, True, FG)
            surface.blit(s, s.get_rect(midtop=(col_w * (i + 1), 110)))

        card = pygame.Rect(40, 180, w - 80, 240)
        pygame.draw.rect(surface, CARD, card, border_radius=12)
        self._render_text(surface, card.inflate(-48, -40))

        if snap.finished:
            self._render_results(surface, w, card.bottom + 20)
        elif not snap.started:
            hint = self._small_font.render("Start typing to begin the test", True, MUTED)
            surface.blit(hint, hint.get_rect(midtop=(w // 2, card.bottom + 24)))

        footer = self._small_font.render("Tab + Enter to restart   Esc to quit", True, MUTED)
        surface.blit(footer, footer.get_rect(midbottom=(w // 2, h - 16)))

    def _render_text(self, surface: pygame.Surface, area: pygame.Rect) -> None:
        font = self._text_font
        text = self._test.reference_text
        line_h = font.get_linesize()

        y = area.top
        for line in wrap_indices(text, area.width, lambda s: font.size(s)[0]):
            x = area.left
            for i in line:
                state = self._test.char_state(i)
                ch = text[i]
                glyph = font.render(ch, True, CHAR_COLOURS[state])
                if state is CharState.INCORRECT:
                    pygame.draw.rect(surface, ERROR_BG, pygame.Rect(x, y, glyph.get_width(), line_h), border_radius=3)
                if state is CharState.CURRENT:
                    pygame.draw.rect(surface, ACCENT, pygame.Rect(x - 1, y, 2, line_h))
                surface.blit(glyph, (x, y))
                x += glyph.get_width()
            y += line_h
            if y > area.bottom:
                break

    def _render_results(self, surface: pygame.Surface, w: int, top: int) -> None:
        result = typing_result_from_test(self._test)
        heading = self._app.font.render("Test Complete!", True, FG)
        surface.blit(heading, heading.get_rect(midtop=(w // 2, top)))
        line = self._small_font.render(
            f"{result.wpm} words/min   {result.accuracy_pct}% accuracy   "
            f"{format_time(result.elapsed_s)}   {result.incorrect_chars} errors",
            True,
            SUCCESS,
        )
        surface.blit(line, line.get_rect(midtop=(w // 2, top + 50)))


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    text_provider: TextProvider | None = None,
    config: TypingTestConfig | None = None,
) -> int:
    pygame.init()

    pygame.display.set_caption("typespeed")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    test = build_typing_test(clock=RealClock(), provider=text_provider, config=config)
    app.show(TypingTestScreen(app, test=test))

    pygame.key.start_text_input()
    pygame.time.set_timer(TICK_EVENT, max(1, int(round(test.config.tick_interval_s * 1000.0))))
    logger.info("typing test window opened")

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.time.set_timer(TICK_EVENT, 0)
        pygame.quit()

    return 0
