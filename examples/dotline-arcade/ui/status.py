"""Bottom status bar and outcome banner."""
from __future__ import annotations

import pygame

from dotline import LevelState, Mode, Outcome
from ui.constants import (
    LINE_Y,
    MISS_COLOR,
    SCREEN_H,
    SCREEN_W,
    STATUS_BG,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
    WIN_COLOR,
)


def draw_status_bar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    state: LevelState,
    wins: int,
    misses: int,
) -> None:
    y = SCREEN_H - STATUS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))

    mode = "meet" if state.mode is Mode.MEET else "confirm"
    left = f"Level {state.level}  Attempt {state.attempt}  Wins {wins}  Misses {misses}  [{mode}]"
    surface.blit(font.render(left, True, TEXT_COLOR), (10, y + 10))

    hint = font.render("A / L or tap a side   S skip   Esc quit", True, TEXT_DIM)
    surface.blit(hint, (SCREEN_W - hint.get_width() - 10, y + 10))


def draw_outcome_banner(
    surface: pygame.Surface, font: pygame.font.Font, state: LevelState
) -> None:
    """Show the pending result while the level is frozen."""
    if state.pending is Outcome.SUCCESS:
        text, color = "Success!", WIN_COLOR
    elif state.pending is Outcome.FAILURE:
        text, color = "Missed. Try again.", MISS_COLOR
    else:
        return
    rendered = font.render(text, True, color)
    surface.blit(rendered, rendered.get_rect(center=(SCREEN_W // 2, LINE_Y - 80)))
