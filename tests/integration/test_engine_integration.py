import random

import pytest

from pursuit_grid.actions import Action
from pursuit_grid.config import Difficulty, WorldConfig, config_for
from pursuit_grid.engine import PursuitEngine, new_game, snapshot, tick
from pursuit_grid.errors import InvalidMoveError
from pursuit_grid.events import PlayerQuit, TickResult
from pursuit_grid.moves import valid_moves
from pursuit_grid.state import State
from pursuit_grid.types import Phase
from pursuit_grid.utils.grid import is_in_interior
from tests.test_utils import make_state, on_border_ring


def play(engine: PursuitEngine, ticks: int) -> None:
    for _ in range(ticks):
        if engine.phase != Phase.RUNNING:
            return
        moves = valid_moves(engine.state)
        if not moves:
            return
        tick(engine, moves[engine.state.turn % len(moves)])


def test_new_game_layout() -> None:
    engine = new_game(seed=42)
    snap = snapshot(engine)
    config = WorldConfig()

    assert snap.phase == Phase.RUNNING
    assert (snap.wave, snap.turn) == (1, 0)
    assert snap.player is not None
    assert (snap.player.position.x, snap.player.position.y) == config.player_start
    start = snap.player.position

    assert len(snap.enemies) == config.initial_enemy_count
    assert all(on_border_ring(e.position, config.width, config.height) for e in snap.enemies)
    assert all(e.speed == pytest.approx(config.base_speed) for e in snap.enemies)

    assert 0 < len(snap.obstacles) <= config.obstacle_count
    for pos in snap.obstacles:
        assert 2 <= pos.x <= config.width - 3
        assert 2 <= pos.y <= config.height - 3
        assert pos.distance_to(start) >= config.obstacle_min_distance

    assert 0 < len(snap.tokens) <= config.token_count
    assert not any(t.collected for t in snap.tokens)

    cells = (
        [start]
        + [e.position for e in snap.enemies]
        + list(snap.obstacles)
        + [t.position for t in snap.tokens]
    )
    assert len(cells) == len(set(cells))
    assert all(is_in_interior(config.width, config.height, c) for c in cells)


def test_same_seed_same_game() -> None:
    first = new_game(seed=7)
    second = new_game(seed=7)
    assert snapshot(first) == snapshot(second)

    play(first, 40)
    play(second, 40)

    assert snapshot(first) == snapshot(second)


def test_different_seed_different_world() -> None:
    assert snapshot(new_game(seed=1)).tokens != snapshot(new_game(seed=2)).tokens


def test_tick_none_does_nothing() -> None:
    engine = new_game(seed=3)
    before = engine.state
    assert tick(engine, None) == TickResult(Phase.RUNNING)
    assert engine.state is before


def test_invalid_move_leaves_engine_untouched() -> None:
    engine = PursuitEngine(make_state(player=(1, 5)), random.Random(0))
    before = engine.state
    with pytest.raises(InvalidMoveError):
        engine.tick(Action.LEFT)
    assert engine.state is before
    assert engine.phase == Phase.RUNNING


def test_quit_then_no_more_progress() -> None:
    engine = new_game(seed=5)
    result = tick(engine, Action.QUIT)
    assert result.phase == Phase.LOST
    assert result.events == (PlayerQuit(0),)

    moves = valid_moves(engine.state)
    assert tick(engine, moves[0]) == TickResult(Phase.LOST)


def test_engine_requires_player() -> None:
    with pytest.raises(ValueError):
        PursuitEngine(State(), random.Random(0))


def test_difficulty_presets_drive_generation() -> None:
    engine = new_game(config_for(Difficulty.HARD), seed=11)
    assert len(engine.state.enemy) == 3
    assert engine.state.player[engine.player_id].tokens_to_win == 12


def test_invariants_hold_during_play() -> None:
    engine = new_game(config_for(Difficulty.NORMAL, width=30, height=15), seed=9)
    config = engine.state.config
    enemy_counts = []
    for _ in range(60):
        if engine.phase != Phase.RUNNING:
            break
        moves = valid_moves(engine.state)
        if not moves:
            break
        tick(engine, moves[engine.state.turn % len(moves)])
        snap = snapshot(engine)
        enemy_counts.append(len(snap.enemies))

        assert snap.player is not None
        assert is_in_interior(config.width, config.height, snap.player.position)
        assert snap.player.position not in snap.obstacles
        for enemy in snap.enemies:
            assert is_in_interior(config.width, config.height, enemy.position)
            assert enemy.position not in snap.obstacles
        if snap.phase == Phase.RUNNING:
            assert snap.wave == 1 + snap.player.move_count // config.moves_per_wave
        assert snap.player.tokens_collected == sum(t.collected for t in snap.tokens)
        if snap.phase == Phase.LOST:
            assert not snap.player.alive

    assert enemy_counts == sorted(enemy_counts)


def test_engine_logs_game_lifecycle(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO", logger="pursuit_grid"):
        engine = new_game(seed=13)
        tick(engine, Action.QUIT)
    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("New 80x28 game (seed=13)") for m in messages)
    assert "Player quit after 0 moves" in messages
