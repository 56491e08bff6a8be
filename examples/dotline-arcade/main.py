"""Dotline Arcade - pygame front-end for the dotline level state machine.

Controls:
  A       Launch / confirm the left dot
  L       Launch / confirm the right dot
  Click   Left or right half of the screen acts as A / L
  Touch   Same as click
  S       Skip to a new level
  Esc     Quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pygame

from dotline import Engine, InputQueue, LevelConfig, Mode, load_config, screen_to_world_x
from dotline.signals import LEVEL_MISSED, LEVEL_WON
from ui.constants import BG_COLOR, FPS, SCREEN_H, SCREEN_W
from ui.scene import draw_scene
from ui.status import draw_outcome_banner, draw_status_bar

LEVELS_DIR = Path(__file__).resolve().parent / "levels"


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Dotline Arcade - make the dots meet")
    p.add_argument("--config", type=str, default=None, metavar="FILE",
                   help="YAML level config (default: levels/meet.yaml)")
    p.add_argument("--confirm", action="store_true",
                   help="Use levels/confirm.yaml when no --config is given")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args()


class Session:
    """Engine plus the counters the status bar shows."""

    def __init__(self, config: LevelConfig, seed: int | None) -> None:
        self.engine = Engine(config, seed=seed)
        self.queue = InputQueue(center_x=config.center_x)
        self.wins = 0
        self.misses = 0
        self.engine.bus.subscribe(LEVEL_WON, self._on_won)
        self.engine.bus.subscribe(LEVEL_MISSED, self._on_missed)

    def _on_won(self, signal: str, data: dict) -> None:
        self.wins += 1

    def _on_missed(self, signal: str, data: dict) -> None:
        self.misses += 1

    def press_screen(self, screen_x: float) -> None:
        cfg = self.engine.config
        self.queue.press_at(
            screen_to_world_x(screen_x, SCREEN_W, cfg.viewport_half_width, cfg.center_x)
        )

    def step(self, dt: float) -> None:
        self.engine.step(dt, self.queue.drain(self.engine.state))


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.config is not None:
        path = Path(args.config)
    else:
        path = LEVELS_DIR / ("confirm.yaml" if args.confirm else "meet.yaml")
    config = load_config(path)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    mode = "confirm" if config.mode is Mode.CONFIRM else "meet"
    pygame.display.set_caption(f"Dotline Arcade - {mode}")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 15)
    big_font = pygame.font.SysFont("monospace", 32, bold=True)

    session = Session(config, args.seed)
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_s:
                    session.engine.skip()
                else:
                    session.queue.press_key(pygame.key.name(event.key))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                session.press_screen(event.pos[0])

            elif event.type == pygame.FINGERDOWN:
                session.press_screen(event.x * SCREEN_W)

        # --- Tick ---
        session.step(dt)

        # --- Render ---
        state = session.engine.state
        screen.fill(BG_COLOR)
        draw_scene(screen, state, config)
        draw_outcome_banner(screen, big_font, state)
        draw_status_bar(screen, font, state, session.wins, session.misses)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
