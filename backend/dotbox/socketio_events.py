import functools

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from dotbox import get_registry, socketio
from dotbox.errors import GameError, PlayerNotFoundError
from dotbox.requests import (
    CreateRoomRequest,
    JoinRoomRequest,
    LeaveRoomRequest,
    MakeMoveRequest,
    StartGameRequest,
    parse_request,
)
from dotbox.services.games.registry import LeaveResult


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _channel(room_id: str) -> str:
    return f"room:{room_id}"


def _report(exc: GameError) -> None:
    """Send a failed action back to the socket that issued it, nobody else."""
    current_app.logger.info(f"[rejected] sid={_get_sid()} code={exc.code} message={exc.message}")
    emit('error', exc.to_dict())


def _handles(action: str):
    """Parse the payload for `action` and turn GameErrors into an error event."""
    def decorator(func):
        @functools.wraps(func)
        def handler(data=None):
            try:
                func(parse_request(action, data))
            except GameError as exc:
                _report(exc)
        return handler
    return decorator


def _announce_departure(player_id: str, left: LeaveResult | None) -> None:
    """Tell the survivors of a room that `player_id` left it, if any remain."""
    if left is None:
        return
    room_id, session, player = left
    leave_room(_channel(room_id))
    current_app.logger.info(f"[player-left] room={room_id} player={player_id} destroyed={session is None}")
    if session is not None:
        emit('player_left', {'player_id': player_id, 'state': session.snapshot().to_payload()},
             to=_channel(room_id))


def _leave_current_room(player_id: str) -> None:
    """Drop the player from its room, telling the survivors or destroying the room."""
    _announce_departure(player_id, get_registry().leave(player_id))


def handle_connect(auth=None):
    emit('connected', {'player_id': _get_sid()})


def handle_disconnect(*args):
    _leave_current_room(_get_sid())


@_handles('create_room')
def handle_create_room(req: CreateRoomRequest):
    sid = _get_sid()
    _leave_current_room(sid)
    session = get_registry().create_room(sid, req.player_name)
    join_room(_channel(session.room_id))
    emit('room_created', {
        'room_id': session.room_id,
        'player_id': sid,
        'state': session.snapshot().to_payload(),
    })


@_handles('join_room')
def handle_join_room(req: JoinRoomRequest):
    sid = _get_sid()
    registry = get_registry()
    if registry.room_of(sid) == req.room_id:
        # Already seated here; just resend state
        emit('player_joined', {'player_id': sid, 'state': registry.get_room(req.room_id).snapshot().to_payload()})
        return
    # The old room is only vacated once the new one has accepted the player
    session, left = registry.switch_room(req.room_id, sid, req.player_name)
    _announce_departure(sid, left)
    join_room(_channel(session.room_id))
    current_app.logger.info(f"[player-joined] room={session.room_id} player={sid}")
    emit('player_joined', {'player_id': sid, 'state': session.snapshot().to_payload()},
         to=_channel(session.room_id))


@_handles('start_game')
def handle_start_game(req: StartGameRequest):
    session = get_registry().get_room(req.room_id)
    session.start(_get_sid(), req.rows, req.cols)
    current_app.logger.info(f"[game-started] room={session.room_id} grid={session.rows}x{session.cols}")
    emit('game_started', {'state': session.snapshot().to_payload()}, to=_channel(session.room_id))


@_handles('make_move')
def handle_make_move(req: MakeMoveRequest):
    sid = _get_sid()
    session = get_registry().get_room(req.room_id)
    result = session.apply_move(sid, req.edge.to_edge())
    current_app.logger.info(
        f"[move] room={session.room_id} player={sid} edge={result.edge.key} "
        f"boxes={len(result.newly_completed_boxes)} finished={result.finished}"
    )
    emit('move_made', {
        'state': session.snapshot().to_payload(),
        'last_move': result.to_dict(),
    }, to=_channel(session.room_id))


@_handles('leave_room')
def handle_leave_room(req: LeaveRoomRequest):
    sid = _get_sid()
    if get_registry().room_of(sid) != req.room_id:
        get_registry().get_room(req.room_id)
        raise PlayerNotFoundError('You are not in this room')
    _leave_current_room(sid)
    emit('left', {'room_id': req.room_id})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on `namespace`."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('start_game', handle_start_game, namespace=namespace)
    socketio.on_event('make_move', handle_make_move, namespace=namespace)
    socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
