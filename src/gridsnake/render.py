# render.py
from pathlib import Path
from typing import Tuple
import logging
import math

import pygame  # type: ignore

from .config import (
    WIDTH, HEIGHT, CELL_SIZE, OFFSET, GRID_W, GRID_H, BOARD_W, BOARD_H,
    BG, GRID_LINE, BORDER, SNAKE, TEXT, GAME_OVER,
)
from .game import Cell, Outcome
from .session import GameSession

logger = logging.getLogger(__name__)

BORDER_WIDTH = 8


class AssetError(RuntimeError):
    """A required image could not be loaded."""


# ---------- Assets ----------
def load_food_texture(path: Path) -> pygame.Surface:
    """Load the food icon and scale it to one cell. Fails hard: there is no fallback art."""
    try:
        image = pygame.image.load(str(path))
    except (pygame.error, OSError) as exc:
        raise AssetError(f"Could not load food icon {path}: {exc}") from exc
    # convert() needs a display; tests load headless
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    logger.debug("Loaded food icon %s (%dx%d)", path, *image.get_size())
    return pygame.transform.scale(image, (CELL_SIZE, CELL_SIZE))

# ---------- Helpers ----------
def cell_rect(cell: Cell) -> pygame.Rect:
    gx, gy = cell
    return pygame.Rect(OFFSET + gx * CELL_SIZE, OFFSET + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)

def overlay_alpha(seconds: float, speed: float = 3.0) -> int:
    """Pulse between 0 and 255: sin shifted from [-1, 1] to [0, 1]."""
    return int((math.sin(seconds * speed) + 1) * 0.5 * 255)

def death_message(cause: Outcome) -> str:
    if cause is Outcome.HIT_SELF:
        return "You ran into yourself"
    return "You hit the wall"

# ---------- Draw ----------
def draw_background(screen: pygame.Surface) -> None:
    screen.fill(BG[:3])
    border = pygame.Rect(
        OFFSET - BORDER_WIDTH, OFFSET - BORDER_WIDTH,
        BOARD_W + 2 * BORDER_WIDTH, BOARD_H + 2 * BORDER_WIDTH,
    )
    pygame.draw.rect(screen, BORDER, border, BORDER_WIDTH)

    # translucent lines need their own alpha surface
    lines = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    for i in range(GRID_H + 1):
        y = OFFSET + i * CELL_SIZE
        pygame.draw.line(lines, GRID_LINE, (OFFSET, y), (OFFSET + BOARD_W, y))
    for j in range(GRID_W + 1):
        x = OFFSET + j * CELL_SIZE
        pygame.draw.line(lines, GRID_LINE, (x, OFFSET), (x, OFFSET + BOARD_H))
    screen.blit(lines, (0, 0))

def draw_game(screen: pygame.Surface, font: pygame.font.Font,
              food_icon: pygame.Surface, session: GameSession) -> None:
    draw_background(screen)
    # food
    screen.blit(food_icon, cell_rect(session.food_position))
    # snake
    for segment in session.body:
        pygame.draw.rect(screen, SNAKE, cell_rect(segment), border_radius=CELL_SIZE // 4)
    # score / length
    text_y = BOARD_H + int(1.5 * OFFSET)
    score = font.render(f"Score : {session.score}", True, TEXT)
    length = font.render(f"Length : {session.length}", True, TEXT)
    screen.blit(score, (OFFSET, text_y))
    screen.blit(length, (BOARD_W + OFFSET - length.get_width(), text_y))

def draw_game_over(screen: pygame.Surface, big_font: pygame.font.Font,
                   font: pygame.font.Font, session: GameSession, seconds: float) -> None:
    title = big_font.render("GAME OVER!", True, GAME_OVER)
    title.set_alpha(overlay_alpha(seconds))
    sub = font.render(f"{death_message(session.death_cause)} - press R to restart", True, TEXT)

    center: Tuple[int, int] = (OFFSET + BOARD_W // 2, OFFSET + BOARD_H // 2)
    screen.blit(title, title.get_rect(center=center))
    screen.blit(sub, sub.get_rect(center=(center[0], center[1] + 60)))
