import pytest

from pursuit_grid.actions import Action
from pursuit_grid.components import Position
from pursuit_grid.moves import destination, is_valid_move, valid_moves
from pursuit_grid.state import State
from tests.test_utils import make_state


def test_destination() -> None:
    state = make_state(player=(5, 5))
    assert destination(state, Action.UP) == Position(5, 4)
    assert destination(state, Action.DOWN) == Position(5, 6)
    assert destination(state, Action.LEFT) == Position(4, 5)
    assert destination(state, Action.RIGHT) == Position(6, 5)


def test_destination_rejects_quit() -> None:
    with pytest.raises(ValueError):
        destination(make_state(), Action.QUIT)


def test_move_into_border_is_invalid() -> None:
    state = make_state(player=(1, 1))
    assert not is_valid_move(state, Action.UP)
    assert not is_valid_move(state, Action.LEFT)
    assert is_valid_move(state, Action.DOWN)


def test_move_into_obstacle_is_invalid() -> None:
    state = make_state(player=(5, 5), obstacles=[(6, 5)])
    assert not is_valid_move(state, Action.RIGHT)


def test_move_onto_enemy_or_token_is_valid() -> None:
    state = make_state(player=(5, 5), enemies=[(6, 5)], tokens=[(4, 5)])
    assert is_valid_move(state, Action.RIGHT)
    assert is_valid_move(state, Action.LEFT)


def test_quit_is_not_a_move() -> None:
    assert not is_valid_move(make_state(), Action.QUIT)


def test_valid_moves_order() -> None:
    state = make_state(player=(10, 8), obstacles=[(10, 7)])
    assert valid_moves(state) == [Action.LEFT]
    assert valid_moves(make_state()) == [
        Action.UP,
        Action.DOWN,
        Action.LEFT,
        Action.RIGHT,
    ]


def test_no_player_has_no_moves() -> None:
    assert valid_moves(State()) == []
