# main.py
import argparse
import logging
from typing import Optional

import numpy as np
import pygame

from config import (
    BG_COLOR,
    FOOD_COLOR,
    OVERLAY_COLOR,
    SEGMENT_SIZE,
    SNAKE_COLOR,
    START_CELL,
    TEXT_COLOR,
    TICK_MS,
    GameConfig,
)
from game import Game, GameOver
from snake import Direction

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

RESTART_KEYS = (pygame.K_r, pygame.K_RETURN)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


def direction_for_key(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


class SnakeApp:
    """
    pygame front end: forwards keys to the game, ticks it on a timer and draws
    the board after every tick.
    """

    def __init__(self, config: GameConfig, tick_ms: int = TICK_MS):
        pygame.init()
        pygame.display.set_caption("Snake Game")
        self.screen = pygame.display.set_mode((config.width, config.height))
        self.font = pygame.font.SysFont("consolas", 24)
        self.config = config
        self.tick_ms = tick_ms
        self.game = Game(config)
        self.result: Optional[GameOver] = None
        self.best_score = 0

    def start_timer(self):
        pygame.time.set_timer(TICK_EVENT, self.tick_ms)

    def stop_timer(self):
        pygame.time.set_timer(TICK_EVENT, 0)

    def restart(self):
        self.game = self.game.restart()
        self.result = None
        self.start_timer()

    def handle_event(self, event) -> bool:
        if event.type == pygame.QUIT:
            return False

        if event.type == TICK_EVENT and self.result is None:
            outcome = self.game.tick()
            if isinstance(outcome, GameOver):
                self.stop_timer()
                self.result = outcome
                self.best_score = max(self.best_score, outcome.score)
                print(outcome.message)

        elif event.type == pygame.KEYDOWN:
            if self.result is None:
                direction = direction_for_key(event.key)
                if direction is not None:
                    self.game.set_direction(direction)
                elif event.key in QUIT_KEYS:
                    return False
            else:
                if event.key in RESTART_KEYS:
                    self.restart()
                elif event.key in QUIT_KEYS:
                    return False
        return True

    def draw(self):
        size = self.config.segment_size
        self.screen.fill(BG_COLOR)

        board = self.game.board()
        for color, value in ((SNAKE_COLOR, 1.0), (FOOD_COLOR, 2.0)):
            for row, col in np.argwhere(board == value):
                rect = pygame.Rect(int(col) * size, int(row) * size, size, size)
                pygame.draw.rect(self.screen, color, rect)

        score_surf = self.font.render(f"Score: {self.game.score}", True, TEXT_COLOR)
        self.screen.blit(score_surf, (10, 10))

        if self.result is not None:
            self.draw_game_over()

        pygame.display.flip()

    def draw_game_over(self):
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        self.screen.blit(overlay, (0, 0))

        center_x = self.config.width // 2
        center_y = self.config.height // 2
        lines = [
            self.result.message,
            f"Best: {self.best_score}",
            "R / Enter: Restart Game    Esc / Q: Quit",
        ]
        for i, text in enumerate(lines):
            surf = self.font.render(text, True, TEXT_COLOR)
            rect = surf.get_rect(center=(center_x, center_y + (i - 1) * 32))
            self.screen.blit(surf, rect)

    def run(self) -> int:
        self.start_timer()
        running = True
        try:
            while running:
                # Block until the next key or tick; drawing follows each event
                running = self.handle_event(pygame.event.wait())
                if running:
                    self.draw()
        finally:
            self.stop_timer()
            pygame.quit()
        return self.best_score


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid snake game")
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in pixels (default: desktop width)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in pixels (default: desktop height)")
    parser.add_argument("--segment-size", type=int, default=SEGMENT_SIZE,
                        help="Size of one snake segment / grid cell in pixels")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement")
    parser.add_argument("--tick-ms", type=int, default=TICK_MS,
                        help="Milliseconds between moves")
    parser.add_argument("--allow-reversal", action="store_true",
                        help="Let the snake turn straight back into itself")
    parser.add_argument("--avoid-occupied-cells", action="store_true",
                        help="Never spawn food under the snake or other food")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def desktop_size(segment_size: int):
    pygame.display.init()
    info = pygame.display.Info()
    width = info.current_w - info.current_w % segment_size
    height = info.current_h - info.current_h % segment_size
    return width, height


def build_config(args: argparse.Namespace) -> GameConfig:
    width, height = args.width, args.height
    if width is None or height is None:
        desktop_w, desktop_h = desktop_size(args.segment_size)
        width = width if width is not None else desktop_w
        height = height if height is not None else desktop_h

    start_x, start_y = START_CELL
    return GameConfig(
        width=width,
        height=height,
        segment_size=args.segment_size,
        # Same starting cell (column 5, row 5) whatever the segment size
        start=(
            start_x // SEGMENT_SIZE * args.segment_size,
            start_y // SEGMENT_SIZE * args.segment_size,
        ),
        allow_reversal=args.allow_reversal,
        avoid_occupied_cells=args.avoid_occupied_cells,
        seed=args.seed,
    )


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    config = build_config(args)
    logger.info("Starting %dx%d board, segment=%d", config.width, config.height, config.segment_size)
    best = SnakeApp(config, tick_ms=args.tick_ms).run()
    print(f"Best score this session: {best}")


if __name__ == "__main__":
    main()
