# session.py
from enum import Enum
from typing import Optional, Sequence
import logging
import random

from .config import CFG, Config
from .game import (
    Actor, Cell, Direction, Food, Outcome, ScoreState, ScoreTracker, TickClock,
    evaluate_collisions, new_actor, spawn_food,
)

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameSession:
    """
    One run of the game: owns the snake, the food, the tick clock and the score.

    `update()` is called once per rendered frame. The snake only moves when the
    tick clock opens, so the simulation rate is independent of the frame rate.
    Once a collision ends the run the session is frozen until `restart()`.
    """

    def __init__(self, config: Optional[Config] = None, now_ms: int = 0,
                 rng: Optional[random.Random] = None):
        config = config if config is not None else CFG
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self._reset(now_ms)

    def _reset(self, now_ms: int) -> None:
        cfg = self.config
        self.actor: Actor = new_actor(cfg.grid_w, cfg.grid_h)
        # the body must exist before food can be placed off it
        self.food = Food(spawn_food(self.actor.body, self.rng, cfg.grid_w, cfg.grid_h))
        self.clock = TickClock(cfg.interval_ms, last_advance_ms=now_ms)
        self.scores = ScoreState()
        self.tracker = ScoreTracker(self.scores)
        self.state = SessionState.RUNNING
        self.death_cause: Optional[Outcome] = None
        self.game_over_at_ms: Optional[int] = None
        self.ticks = 0
        logger.info(
            "New session: difficulty=%s interval=%dms grid=%dx%d food=%s",
            cfg.difficulty, self.clock.interval_ms, cfg.grid_w, cfg.grid_h,
            self.food.position,
        )

    # ---------- State machine ----------
    def update(self, held: Sequence[Direction], now_ms: int) -> Outcome:
        """Advance at most one tick. Returns what happened on this frame."""
        if self.state is SessionState.GAME_OVER:
            return self.death_cause

        self.actor.steer(held)
        if not self.clock.poll(now_ms):
            return Outcome.CONTINUING

        self.actor.advance(self.actor.pending)
        self.ticks += 1
        outcome = evaluate_collisions(
            self.actor, self.food, self.tracker, self.rng,
            self.config.grid_w, self.config.grid_h,
        )
        self.tracker.update()

        if outcome.terminal:
            self.state = SessionState.GAME_OVER
            self.death_cause = outcome
            self.game_over_at_ms = now_ms
            logger.info(
                "Game over (%s) after %d ticks: score=%d length=%d",
                outcome.value, self.ticks, self.scores.score, self.scores.length,
            )
        return outcome

    def restart(self, now_ms: int) -> None:
        if self.state is not SessionState.GAME_OVER:
            raise RuntimeError("restart() is only allowed once the game is over")
        logger.info("Restarting session")
        self._reset(now_ms)

    # ---------- Read-only view for the renderer ----------
    @property
    def is_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    @property
    def body(self) -> Sequence[Cell]:
        return tuple(self.actor.body)

    @property
    def food_position(self) -> Cell:
        return self.food.position

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def length(self) -> int:
        return self.scores.length
