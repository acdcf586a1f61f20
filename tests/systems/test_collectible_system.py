from pursuit_grid.components import Position
from pursuit_grid.events import TokenCollected
from pursuit_grid.systems.collectible import collectible_system
from tests.test_utils import make_state, player_id, token_ids


def test_collect_token_under_player() -> None:
    state = make_state(player=(5, 5), tokens=[(5, 5), (6, 5)])
    here, elsewhere = token_ids(state)
    pid = player_id(state)

    state, event = collectible_system(state, pid)

    assert event == TokenCollected(here, Position(5, 5), 1)
    assert state.token[here].collected
    assert not state.token[elsewhere].collected
    assert state.player[pid].tokens_collected == 1
    # Collected tokens stay in the world.
    assert state.position[here] == Position(5, 5)


def test_collected_token_is_not_collected_twice() -> None:
    state = make_state(player=(5, 5), tokens=[(5, 5)])
    pid = player_id(state)
    state, _ = collectible_system(state, pid)

    state, event = collectible_system(state, pid)

    assert event is None
    assert state.player[pid].tokens_collected == 1


def test_no_token_no_change() -> None:
    state = make_state(player=(5, 5), tokens=[(6, 5)])
    new_state, event = collectible_system(state, player_id(state))
    assert event is None
    assert new_state is state
