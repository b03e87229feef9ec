import pytest

from dotbox.errors import InvalidRequestError
from dotbox.requests import (
    CreateRoomRequest,
    JoinRoomRequest,
    LeaveRoomRequest,
    MakeMoveRequest,
    StartGameRequest,
    parse_request,
)
from dotbox.services.games import make_edge


def test_create_room_strips_name():
    req = parse_request('create_room', {'player_name': '  Alice  '})
    assert isinstance(req, CreateRoomRequest)
    assert req.player_name == 'Alice'


@pytest.mark.parametrize('name', ['', '   ', 'x' * 33])
def test_create_room_rejects_bad_names(name):
    with pytest.raises(InvalidRequestError):
        parse_request('create_room', {'player_name': name})


def test_join_room_normalizes_room_id():
    req = parse_request('join_room', {'room_id': ' ab12cd ', 'player_name': 'Bob'})
    assert isinstance(req, JoinRoomRequest)
    assert req.room_id == 'AB12CD'


def test_room_id_must_be_alphanumeric():
    with pytest.raises(InvalidRequestError):
        parse_request('join_room', {'room_id': 'AB-12', 'player_name': 'Bob'})


def test_start_game_grid_is_optional():
    req = parse_request('start_game', {'room_id': 'AB12CD'})
    assert isinstance(req, StartGameRequest)
    assert req.rows is None and req.cols is None
    req = parse_request('start_game', {'room_id': 'AB12CD', 'rows': 5, 'cols': '6'})
    assert (req.rows, req.cols) == (5, 6)


def test_make_move_builds_canonical_edge():
    req = parse_request('make_move', {'room_id': 'AB12CD', 'edge': {'x1': 1, 'y1': 0, 'x2': 0, 'y2': 0}})
    assert isinstance(req, MakeMoveRequest)
    assert req.edge.to_edge() == make_edge((0, 0), (1, 0))


@pytest.mark.parametrize('edge', [
    {'x1': 0, 'y1': 0, 'x2': 1, 'y2': 1},
    {'x1': 0, 'y1': 0, 'x2': 0, 'y2': 0},
    {'x1': -1, 'y1': 0, 'x2': 0, 'y2': 0},
    {'x1': 0, 'y1': 0},
])
def test_make_move_rejects_bad_edges(edge):
    with pytest.raises(InvalidRequestError):
        parse_request('make_move', {'room_id': 'AB12CD', 'edge': edge})


def test_leave_room():
    assert isinstance(parse_request('leave_room', {'room_id': 'ab12cd'}), LeaveRoomRequest)


def test_missing_and_malformed_payloads():
    with pytest.raises(InvalidRequestError):
        parse_request('join_room', None)
    with pytest.raises(InvalidRequestError):
        parse_request('join_room', ['AB12CD'])
    with pytest.raises(InvalidRequestError):
        parse_request('teleport', {'room_id': 'AB12CD'})


def test_error_code_is_invalid_request():
    with pytest.raises(InvalidRequestError) as info:
        parse_request('create_room', {})
    assert info.value.to_dict()['code'] == 'invalid_request'
    assert 'player_name' in info.value.message
