import pytest

from dotbox.errors import DuplicatePlayerError, PlayerNotFoundError
from dotbox.services.games.roster import PALETTE, Roster


def test_insertion_order_is_turn_order():
    roster = Roster()
    for pid in ['c', 'a', 'b']:
        roster.add_player(pid, pid.upper())
    assert roster.ids == ['c', 'a', 'b']
    assert roster[1].name == 'A'


def test_colors_cycle_by_roster_size():
    roster = Roster()
    players = [roster.add_player(f"p{i}", f"P{i}") for i in range(len(PALETTE) + 1)]
    assert [p.color for p in players[:len(PALETTE)]] == list(PALETTE)
    # Palette exhausted: wraps around
    assert players[-1].color_index == 0


def test_free_color_preferred_after_departure():
    roster = Roster()
    roster.add_player('a', 'A')
    roster.add_player('b', 'B')
    roster.add_player('c', 'C')
    roster.remove_player('a')
    # Size is 2 so the search starts at index 2, which 'c' still holds
    d = roster.add_player('d', 'D')
    assert d.color_index == 3


def test_duplicate_id_rejected():
    roster = Roster()
    roster.add_player('a', 'A')
    with pytest.raises(DuplicatePlayerError):
        roster.add_player('a', 'Again')
    assert len(roster) == 1


def test_remove_unknown_player():
    roster = Roster()
    with pytest.raises(PlayerNotFoundError):
        roster.remove_player('ghost')


def test_host_leaving_promotes_next_oldest():
    roster = Roster()
    roster.add_player('a', 'A', is_host=True)
    roster.add_player('b', 'B')
    roster.add_player('c', 'C')
    idx, removed = roster.remove_player('a')
    assert idx == 0 and removed.is_host
    assert roster.host.id == 'b'
    assert sum(p.is_host for p in roster) == 1


def test_non_host_leaving_keeps_host():
    roster = Roster()
    roster.add_player('a', 'A', is_host=True)
    roster.add_player('b', 'B')
    roster.remove_player('b')
    assert roster.host.id == 'a'
