"""Line, goal range and dot renderer."""
from __future__ import annotations

import pygame

from dotline import LevelConfig, LevelState
from dotline.input import world_to_screen_x
from ui.constants import (
    DOT_HIGHLIGHT,
    DOT_IDLE,
    DOT_MOVING,
    DOT_RADIUS,
    GOAL_COLOR,
    GOAL_H,
    LINE_COLOR,
    LINE_WIDTH,
    LINE_Y,
    SCREEN_H,
    SCREEN_W,
    STATUS_H,
    ZONE_DIVIDER,
)


def _px(x: float, config: LevelConfig) -> int:
    return round(world_to_screen_x(x, SCREEN_W, config.viewport_half_width, config.center_x))


def _dot_color(launched: bool, highlighted: bool) -> tuple[int, int, int]:
    if highlighted:
        return DOT_HIGHLIGHT
    return DOT_MOVING if launched else DOT_IDLE


def draw_scene(surface: pygame.Surface, state: LevelState, config: LevelConfig) -> None:
    """Draw the input zone divider, the line, the goal range and both dots."""
    mid = _px(config.center_x, config)
    pygame.draw.line(surface, ZONE_DIVIDER, (mid, 0), (mid, SCREEN_H - STATUS_H))

    left, right = _px(state.line.left_x, config), _px(state.line.right_x, config)
    pygame.draw.line(surface, LINE_COLOR, (left, LINE_Y), (right, LINE_Y), LINE_WIDTH)

    gl, gr = _px(state.goal.goal_left, config), _px(state.goal.goal_right, config)
    goal_rect = pygame.Rect(gl, LINE_Y - GOAL_H // 2, max(gr - gl, 1), GOAL_H)
    pygame.draw.rect(surface, GOAL_COLOR, goal_rect, 2)

    for dot in (state.left, state.right):
        x = _px(dot.position, config)
        pygame.draw.circle(
            surface, _dot_color(dot.launched, dot.highlighted), (x, LINE_Y), DOT_RADIUS
        )
