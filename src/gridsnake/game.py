# game.py
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterable, Optional, Sequence, Tuple
import logging
import random

from .config import (
    GRID_W, GRID_H,
    UP, DOWN, LEFT, RIGHT,
    SCORE_PER_FOOD, START_LENGTH,
)

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Direction = Tuple[int, int]

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)  # input priority order

# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]

def in_bounds(cell: Cell, grid_w: int = GRID_W, grid_h: int = GRID_H) -> bool:
    x, y = cell
    return 0 <= x < grid_w and 0 <= y < grid_h

def spawn_food(excluded: Iterable[Cell], rng: random.Random,
               grid_w: int = GRID_W, grid_h: int = GRID_H) -> Cell:
    """Uniformly random free cell. Retries without a cap, so `excluded` must not cover the grid."""
    taken = set(excluded)
    while True:
        cell = (rng.randrange(grid_w), rng.randrange(grid_h))
        if cell not in taken:
            return cell

# ---------- Clock ----------
def should_advance(now_ms: int, last_advance_ms: int, interval_ms: int) -> bool:
    return now_ms - last_advance_ms >= interval_ms

@dataclass
class TickClock:
    interval_ms: int
    last_advance_ms: int = 0

    def poll(self, now_ms: int) -> bool:
        """Open the gate at most once per call; late frames never queue extra ticks."""
        if not should_advance(now_ms, self.last_advance_ms, self.interval_ms):
            return False
        self.last_advance_ms = now_ms
        return True

# ---------- Actor ----------
def compute_heading(held: Sequence[Direction], current: Direction) -> Direction:
    """First held direction that is not a 180° turn; keep going straight otherwise."""
    for cand in held:
        if not is_opposite(cand, current):
            return cand
    return current

@dataclass
class Actor:
    body: Deque[Cell]              # head at index 0
    heading: Direction             # last committed direction
    pending: Optional[Direction] = None
    pending_growth: bool = False
    dropped_tail: Optional[Cell] = None  # tail removed by the last advance

    def __post_init__(self):
        self.body = deque(self.body)
        if self.pending is None:
            self.pending = self.heading

    @property
    def head(self) -> Cell:
        return self.body[0]

    def steer(self, held: Sequence[Direction]) -> Direction:
        # Compare against the committed heading, not the previous pending one
        self.pending = compute_heading(held, self.heading)
        return self.pending

    def advance(self, direction: Direction) -> Cell:
        if direction not in DIRECTIONS:
            raise ValueError(f"Not a unit direction: {direction}")
        hx, hy = self.head
        new_head = (hx + direction[0], hy + direction[1])
        self.body.appendleft(new_head)
        if self.pending_growth:
            self.pending_growth = False
            self.dropped_tail = None
        else:
            self.dropped_tail = self.body.pop()
        self.heading = direction
        return new_head

    def grow(self) -> bool:
        """
        Grow by one segment. Puts back the tail the last advance dropped, so the
        eating move itself grows; if that move already kept its tail, the growth
        is queued for the next advance instead.
        """
        if self.dropped_tail is None:
            self.pending_growth = True
            return False
        self.body.append(self.dropped_tail)
        self.dropped_tail = None
        return True

def new_actor(grid_w: int = GRID_W, grid_h: int = GRID_H) -> Actor:
    head = (grid_w // 2 - 1, grid_h // 2 - 1)
    return Actor(body=deque([head, (head[0] + 1, head[1])]), heading=LEFT)

@dataclass
class Food:
    position: Cell

# ---------- Score ----------
@dataclass
class ScoreState:
    score: int = 0
    length: int = START_LENGTH

class ScoreTracker:
    """Applies one food's worth of score each time `food_eaten` is raised."""

    def __init__(self, state: ScoreState):
        self.state = state
        self.food_eaten = False

    def update(self) -> bool:
        if not self.food_eaten:
            return False
        self.state.score += SCORE_PER_FOOD
        self.state.length += 1
        self.food_eaten = False
        return True

# ---------- Collisions ----------
class Outcome(Enum):
    CONTINUING = "continuing"
    ATE_FOOD = "ate_food"
    HIT_BOUNDARY = "hit_boundary"
    HIT_SELF = "hit_self"

    @property
    def terminal(self) -> bool:
        return self in (Outcome.HIT_BOUNDARY, Outcome.HIT_SELF)

def evaluate_collisions(actor: Actor, food: Food, tracker: ScoreTracker,
                        rng: random.Random,
                        grid_w: int = GRID_W, grid_h: int = GRID_H) -> Outcome:
    """
    Check the freshly advanced head, in order:
    1) food  -> grow this move, respawn food off the grown body, flag the score tracker
    2) wall  -> HIT_BOUNDARY
    3) body  -> HIT_SELF, checked against the grown body
    """
    head = actor.head
    outcome = Outcome.CONTINUING

    if head == food.position:
        actor.grow()
        food.position = spawn_food(actor.body, rng, grid_w, grid_h)
        tracker.food_eaten = True
        outcome = Outcome.ATE_FOOD
        logger.debug("Food eaten at %s, respawned at %s", head, food.position)

    if not in_bounds(head, grid_w, grid_h):
        return Outcome.HIT_BOUNDARY

    for i in range(1, len(actor.body)):
        if actor.body[i] == head:
            return Outcome.HIT_SELF

    return outcome
