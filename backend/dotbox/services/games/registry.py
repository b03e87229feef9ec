"""Process-wide room registry.

Built once by the app factory and handed to handlers through
``current_app.extensions['room_registry']``. Its lock only guards the room and
membership maps; gameplay runs under each session's own lock.
"""

import logging
import random
import string
import threading

from dotbox.errors import DuplicatePlayerError, RoomNotFoundError

from .roster import Player
from .session import GameSession, SessionSettings

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits

# (room_id, surviving session or None once destroyed, departed player)
LeaveResult = tuple[str, GameSession | None, Player]


def normalize_room_id(room_id: str) -> str:
    return (room_id or '').strip().upper()


class RoomRegistry:
    def __init__(
        self,
        settings: SessionSettings | None = None,
        code_length: int = 6,
        logger: logging.Logger | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or SessionSettings()
        self.code_length = code_length
        self.logger = logger or logging.getLogger(__name__)
        self._rng = rng or random.SystemRandom()
        self._rooms: dict[str, GameSession] = {}
        self._player_rooms: dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        with self._lock:
            return isinstance(room_id, str) and normalize_room_id(room_id) in self._rooms

    def _generate_room_id(self) -> str:
        # Caller holds the lock
        while True:
            code = ''.join(self._rng.choices(ROOM_CODE_ALPHABET, k=self.code_length))
            if code not in self._rooms:
                return code

    def _check_unseated(self, player_id: str) -> None:
        # Caller holds the lock
        if player_id in self._player_rooms:
            raise DuplicatePlayerError(
                f"Player {player_id!r} is already seated in room {self._player_rooms[player_id]}"
            )

    def create_room(self, host_id: str, host_name: str) -> GameSession:
        with self._lock:
            self._check_unseated(host_id)
            room_id = self._generate_room_id()
            session = GameSession.create(room_id, host_id, host_name, settings=self.settings)
            self._rooms[room_id] = session
            self._player_rooms[host_id] = room_id
        self.logger.info(f"[room-created] room={room_id} host={host_id}")
        return session

    def get_room(self, room_id: str) -> GameSession:
        with self._lock:
            session = self._rooms.get(normalize_room_id(room_id))
        if session is None:
            raise RoomNotFoundError(f"Room {room_id!r} not found")
        return session

    def join_room(self, room_id: str, player_id: str, name: str) -> GameSession:
        """Seat a player who is not in any room yet.

        A room emptied concurrently is closed, so `session.join` raises RoomNotFoundError
        instead of seating anyone in a destroyed room.
        """
        session = self.get_room(room_id)
        with self._lock:
            self._check_unseated(player_id)
        session.join(player_id, name)
        with self._lock:
            self._player_rooms[player_id] = session.room_id
        return session

    def switch_room(self, room_id: str, player_id: str, name: str) -> tuple[GameSession, LeaveResult | None]:
        """Seat a player in `room_id`, then vacate the room it held before.

        Nothing changes if the new room refuses the player. Returns the new session
        and the departure from the previous room, if there was one.
        """
        session = self.get_room(room_id)
        previous = self.room_of(player_id)
        if previous == session.room_id:
            raise DuplicatePlayerError(f"Player {player_id!r} is already seated in room {previous}")
        session.join(player_id, name)
        left = self._vacate(previous, player_id) if previous else None
        with self._lock:
            self._player_rooms[player_id] = session.room_id
        return session, left

    def room_of(self, player_id: str) -> str | None:
        with self._lock:
            return self._player_rooms.get(player_id)

    def remove_if_empty(self, room_id: str) -> bool:
        room_id = normalize_room_id(room_id)
        with self._lock:
            session = self._rooms.get(room_id)
            if session is None or not session.is_empty:
                return False
            del self._rooms[room_id]
        self.logger.info(f"[room-destroyed] room={room_id}")
        return True

    def leave(self, player_id: str) -> LeaveResult | None:
        """Remove `player_id` from whatever room it is in.

        Returns (room_id, session or None if the room was destroyed, removed player),
        or None when the player is not in any room.
        """
        with self._lock:
            room_id = self._player_rooms.pop(player_id, None)
        if room_id is None:
            return None
        return self._vacate(room_id, player_id)

    def _vacate(self, room_id: str, player_id: str) -> LeaveResult | None:
        with self._lock:
            session = self._rooms.get(room_id)
        if session is None:
            return None
        player = session.leave(player_id)
        if self.remove_if_empty(room_id):
            return room_id, None, player
        return room_id, session, player
