import random
from collections import deque

import pytest

from gridsnake.config import UP, DOWN, LEFT, RIGHT, SCORE_PER_FOOD
from gridsnake.game import (
    Actor, Food, Outcome, ScoreState, ScoreTracker, TickClock,
    compute_heading, evaluate_collisions, is_opposite, new_actor,
    should_advance, spawn_food,
)


def make_tracker():
    return ScoreTracker(ScoreState())


# ---------- Clock ----------
def test_should_advance_is_inclusive():
    assert not should_advance(now_ms=299, last_advance_ms=0, interval_ms=300)
    assert should_advance(now_ms=300, last_advance_ms=0, interval_ms=300)
    assert should_advance(now_ms=1000, last_advance_ms=0, interval_ms=300)


def test_tick_clock_does_not_batch_missed_ticks():
    clock = TickClock(interval_ms=100, last_advance_ms=0)
    # a long stall only yields one tick
    assert clock.poll(1000)
    assert not clock.poll(1050)
    assert clock.poll(1100)
    assert clock.last_advance_ms == 1100


# ---------- Heading ----------
@pytest.mark.parametrize("heading", [UP, DOWN, LEFT, RIGHT])
def test_compute_heading_never_reverses(heading):
    for held in ([UP], [DOWN], [LEFT], [RIGHT], [UP, DOWN, LEFT, RIGHT]):
        assert not is_opposite(compute_heading(held, heading), heading)


def test_compute_heading_keeps_going_straight_without_input():
    assert compute_heading([], LEFT) == LEFT


def test_compute_heading_skips_reversal_for_next_held_key():
    # moving down: UP is rejected, LEFT is the next held key
    assert compute_heading([UP, LEFT], DOWN) == LEFT
    assert compute_heading([RIGHT], LEFT) == LEFT


def test_steer_checks_against_committed_heading():
    actor = Actor(body=[(5, 5), (6, 5)], heading=LEFT)
    actor.steer([UP])
    actor.steer([RIGHT])  # would reverse the committed LEFT
    assert actor.pending == LEFT


# ---------- Actor ----------
def test_new_actor_starts_with_two_cells_heading_left():
    actor = new_actor(16, 16)
    assert list(actor.body) == [(7, 7), (8, 7)]
    assert actor.heading == LEFT


def test_advance_moves_without_growth():
    actor = Actor(body=[(2, 2), (3, 2)], heading=LEFT)
    actor.advance(UP)
    assert list(actor.body) == [(2, 1), (2, 2)]
    assert actor.heading == UP


def test_advance_keeps_tail_when_growth_pending():
    actor = Actor(body=[(2, 2), (3, 2)], heading=LEFT, pending_growth=True)
    actor.advance(LEFT)
    assert list(actor.body) == [(1, 2), (2, 2), (3, 2)]
    assert not actor.pending_growth


def test_advance_rejects_non_unit_direction():
    actor = Actor(body=[(2, 2), (3, 2)], heading=LEFT)
    with pytest.raises(ValueError):
        actor.advance((2, 0))


# ---------- Food ----------
def test_spawn_food_only_returns_the_free_cell():
    rng = random.Random(7)
    grid = [(x, y) for x in range(3) for y in range(3)]
    free = (1, 2)
    excluded = [c for c in grid if c != free]
    for _ in range(10_000):
        assert spawn_food(excluded, rng, 3, 3) == free


def test_spawn_food_stays_on_grid():
    rng = random.Random(1)
    for _ in range(500):
        x, y = spawn_food([], rng, 4, 5)
        assert 0 <= x < 4 and 0 <= y < 5


# ---------- Score ----------
def test_score_tracker_is_edge_triggered():
    tracker = make_tracker()
    tracker.food_eaten = True
    assert tracker.update()
    assert not tracker.update()
    assert tracker.state.score == SCORE_PER_FOOD
    assert tracker.state.length == 3


# ---------- Collisions ----------
@pytest.mark.parametrize("head", [(-1, 1), (4, 1), (1, -1), (1, 4)])
def test_head_just_outside_each_edge_is_terminal(head):
    actor = Actor(body=[head, (1, 1)], heading=LEFT)
    outcome = evaluate_collisions(actor, Food((3, 3)), make_tracker(), random.Random(0), 4, 4)
    assert outcome is Outcome.HIT_BOUNDARY
    assert outcome.terminal


@pytest.mark.parametrize("head", [(0, 1), (3, 1), (1, 0), (1, 3)])
def test_head_on_edge_cell_is_alive(head):
    actor = Actor(body=[head, (2, 2)], heading=LEFT)
    outcome = evaluate_collisions(actor, Food((3, 3)), make_tracker(), random.Random(0), 4, 4)
    assert outcome is Outcome.CONTINUING
    assert not outcome.terminal


def test_head_on_own_body_is_terminal():
    body = [(2, 2), (2, 3), (3, 3), (3, 2), (2, 2)]
    actor = Actor(body=body, heading=UP)
    outcome = evaluate_collisions(actor, Food((0, 0)), make_tracker(), random.Random(0), 8, 8)
    assert outcome is Outcome.HIT_SELF


def test_unique_body_is_not_a_self_hit():
    actor = Actor(body=[(2, 2), (2, 3), (3, 3), (3, 2)], heading=UP)
    outcome = evaluate_collisions(actor, Food((0, 0)), make_tracker(), random.Random(0), 8, 8)
    assert outcome is Outcome.CONTINUING


def test_eating_scenario_on_small_grid():
    actor = Actor(body=deque([(1, 1), (2, 1)]), heading=LEFT)
    food = Food((0, 1))
    tracker = make_tracker()

    actor.advance(actor.heading)
    outcome = evaluate_collisions(actor, food, tracker, random.Random(3), 4, 4)
    tracker.update()

    assert outcome is Outcome.ATE_FOOD
    assert list(actor.body) == [(0, 1), (1, 1), (2, 1)]
    assert food.position not in {(0, 1), (1, 1), (2, 1)}
    assert tracker.state.length == len(actor.body) == 3
    assert tracker.state.score == 10
    assert not tracker.food_eaten


def test_length_tracks_body_over_many_meals():
    rng = random.Random(11)
    actor = Actor(body=deque([(1, 0), (0, 0)]), heading=RIGHT)
    tracker = make_tracker()
    eaten = 0
    # walk right along row 0, food always placed just ahead
    for _ in range(5):
        food = Food((actor.head[0] + 1, 0))
        actor.advance(RIGHT)
        assert evaluate_collisions(actor, food, tracker, rng, 12, 12) is Outcome.ATE_FOOD
        tracker.update()
        eaten += 1
        assert tracker.state.length == 2 + eaten == len(actor.body)


def test_grow_puts_back_the_dropped_tail():
    actor = Actor(body=[(2, 2), (3, 2)], heading=LEFT)
    actor.advance(LEFT)
    assert actor.grow()
    assert list(actor.body) == [(1, 2), (2, 2), (3, 2)]
    assert not actor.pending_growth


def test_grow_after_a_tail_keeping_move_waits_for_the_next_one():
    actor = Actor(body=[(2, 2), (3, 2)], heading=LEFT, pending_growth=True)
    actor.advance(LEFT)
    assert not actor.grow()
    assert actor.pending_growth
    actor.advance(LEFT)
    assert list(actor.body) == [(0, 2), (1, 2), (2, 2), (3, 2)]
