from pursuit_grid.components import Position
from pursuit_grid.events import Caught
from pursuit_grid.systems.terminal import catch_system, is_terminal_state, win_system
from pursuit_grid.types import Phase
from tests.test_utils import enemy_ids, make_state, player_id, with_player


def test_win_at_threshold() -> None:
    state = with_player(make_state(), tokens_collected=3)
    state = win_system(state, player_id(state))
    assert state.win
    assert state.phase == Phase.WON
    assert is_terminal_state(state)


def test_no_win_below_threshold() -> None:
    state = with_player(make_state(), tokens_collected=2)
    state = win_system(state, player_id(state))
    assert not state.win
    assert state.phase == Phase.RUNNING


def test_catch_when_enemy_on_player() -> None:
    state = make_state(player=(5, 5), enemies=[(4, 5), (5, 5), (5, 5)])
    _, first_on_cell, _ = enemy_ids(state)
    pid = player_id(state)

    state, event = catch_system(state, pid)

    assert event == Caught(first_on_cell, Position(5, 5))
    assert state.lose
    assert not state.player[pid].alive
    assert state.phase == Phase.LOST
    assert state.message == "Caught by an enemy"


def test_adjacent_enemy_does_not_catch() -> None:
    state = make_state(player=(5, 5), enemies=[(4, 5)])
    new_state, event = catch_system(state, player_id(state))
    assert event is None
    assert new_state is state


def test_terminal_state_is_not_changed_again() -> None:
    state = with_player(make_state(player=(5, 5), enemies=[(5, 5)]), tokens_collected=3)
    pid = player_id(state)
    state = win_system(state, pid)

    state, event = catch_system(state, pid)

    assert event is None
    assert state.win and not state.lose
    assert state.player[pid].alive
