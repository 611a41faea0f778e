# main.py
from typing import List
import logging
import sys

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, CAPTION, CFG, UP, DOWN, LEFT, RIGHT
from .game import Direction
from .render import AssetError, load_food_texture, draw_game, draw_game_over
from .session import GameSession

logger = logging.getLogger(__name__)

# direction -> keys that hold it, in input priority order
KEYMAP = (
    (UP,    (pygame.K_w, pygame.K_UP)),
    (DOWN,  (pygame.K_s, pygame.K_DOWN)),
    (LEFT,  (pygame.K_a, pygame.K_LEFT)),
    (RIGHT, (pygame.K_d, pygame.K_RIGHT)),
)

def held_directions(pressed) -> List[Direction]:
    """Directions whose keys are down this frame (level-sensed, not event-queued)."""
    return [d for d, keys in KEYMAP if any(pressed[k] for k in keys)]

def handle_events(session: GameSession) -> bool:
    """Drain the event queue. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_r and session.is_over:
                session.restart(pygame.time.get_ticks())
    return True

def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(CAPTION)
    font = pygame.font.SysFont(None, 50)
    big_font = pygame.font.SysFont(None, 120)
    clock = pygame.time.Clock()

    try:
        food_icon = load_food_texture(CFG.food_icon)
    except AssetError:
        logger.error("Startup aborted: food icon is missing or unreadable", exc_info=True)
        pygame.quit()
        return 1

    session = GameSession(CFG, now_ms=pygame.time.get_ticks())
    running = True

    while running:
        # 1) input
        running = handle_events(session)
        if not running:
            break

        # 2) update (movement gated inside the session)
        now = pygame.time.get_ticks()
        session.update(held_directions(pygame.key.get_pressed()), now)

        # 3) render
        draw_game(screen, font, food_icon, session)
        if session.is_over:
            draw_game_over(screen, big_font, font, session, now / 1000.0)
        pygame.display.flip()
        clock.tick(CFG.fps)

    pygame.quit()
    return 0

if __name__ == "__main__":
    sys.exit(main())
