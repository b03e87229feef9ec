from flask import Blueprint, jsonify
from dotbox import get_registry
from dotbox.errors import RoomNotFoundError

rooms = Blueprint('rooms', __name__)


@rooms.errorhandler(RoomNotFoundError)
def room_not_found(exc: RoomNotFoundError):
    return jsonify({'error': exc.message, 'code': exc.code}), 404


@rooms.route('/<string:room_id>/state', methods=['GET'])
def get_room_state(room_id):
    """
    Returns the read-only state of a live room, as broadcast to its players.
    """
    session = get_registry().get_room(room_id)
    return jsonify(session.snapshot().to_payload())
