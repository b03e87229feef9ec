"""The authoritative state machine for one room.

Lifecycle: waiting -> playing -> finished, and `start` re-enters playing from
any state. Every public method holds the session lock for its whole duration,
so moves from different connections are applied one at a time. A method either
commits all of its changes or raises a GameError before touching state.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from dotbox.errors import (
    GameInProgressError,
    GameNotInProgressError,
    InsufficientPlayersError,
    InvalidEdgeError,
    InvalidGridError,
    LineAlreadyDrawnError,
    NotHostError,
    NotYourTurnError,
    RoomNotFoundError,
)

from .boxes import Box, find_boxes_completed_by, find_newly_completed_boxes, total_boxes
from .edges import Edge, edge_in_grid
from .roster import Player, Roster
from .state import GridState, MoveState, PlayerState, RoomState, Status

BOX_DETECTION_STRATEGIES = ('incremental', 'rescan')


def box_key(box: Box) -> str:
    return f"{box[0]},{box[1]}"


@dataclass(frozen=True)
class SessionSettings:
    min_players: int = 2
    min_grid_size: int = 3
    max_grid_size: int = 8
    default_rows: int = 4
    default_cols: int = 4
    box_detection: str = 'incremental'

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'SessionSettings':
        settings = cls(
            min_players=int(config.get('MIN_PLAYERS', 2)),
            min_grid_size=int(config.get('MIN_GRID_SIZE', 3)),
            max_grid_size=int(config.get('MAX_GRID_SIZE', 8)),
            default_rows=int(config.get('DEFAULT_GRID_ROWS', 4)),
            default_cols=int(config.get('DEFAULT_GRID_COLS', 4)),
            box_detection=str(config.get('BOX_DETECTION', 'incremental')).lower(),
        )
        if settings.box_detection not in BOX_DETECTION_STRATEGIES:
            raise ValueError(f"BOX_DETECTION must be one of {BOX_DETECTION_STRATEGIES}, got {settings.box_detection!r}")
        return settings


@dataclass(frozen=True)
class MoveRecord:
    player_id: str
    edge: Edge
    timestamp: float
    completed_boxes: tuple[Box, ...] = ()


@dataclass(frozen=True)
class MoveResult:
    player_id: str
    edge: Edge
    newly_completed_boxes: tuple[Box, ...]
    bonus_turn: bool
    finished: bool

    def to_dict(self) -> dict:
        return {
            'player_id': self.player_id,
            'edge': self.edge.key,
            'newly_completed_boxes': [box_key(b) for b in self.newly_completed_boxes],
            'bonus_turn': self.bonus_turn,
        }


@dataclass
class GameSession:
    room_id: str
    settings: SessionSettings = field(default_factory=SessionSettings)
    clock: Callable[[], float] = time.time

    def __post_init__(self):
        self.roster = Roster()
        self.status = Status.WAITING
        self.rows = self.settings.default_rows
        self.cols = self.settings.default_cols
        self.drawn_edges: set[Edge] = set()
        self.box_owner: dict[Box, str] = {}
        self.scores: dict[str, int] = {}
        self.turn_index = 0
        self.move_history: list[MoveRecord] = []
        # Set once the last player leaves; a closed room never seats anyone again
        self.closed = False
        self._lock = threading.RLock()

    @classmethod
    def create(cls, room_id: str, host_id: str, host_name: str, **kwargs) -> 'GameSession':
        session = cls(room_id, **kwargs)
        session.roster.add_player(host_id, host_name, is_host=True)
        session.scores[host_id] = 0
        return session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return len(self.roster) == 0

    @property
    def total_boxes(self) -> int:
        return total_boxes(self.rows, self.cols)

    @property
    def current_player(self) -> Player | None:
        if self.status != Status.PLAYING or not self.roster:
            return None
        return self.roster[self.turn_index]

    def has_player(self, player_id: str) -> bool:
        return player_id in self.roster

    def winners(self) -> list[str]:
        if self.status != Status.FINISHED or not self.scores:
            return []
        best = max(self.scores.values())
        return [pid for pid in self.roster.ids if self.scores.get(pid) == best]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def join(self, player_id: str, name: str) -> Player:
        with self._lock:
            if self.closed:
                raise RoomNotFoundError(f"Room {self.room_id} has closed")
            if self.status != Status.WAITING:
                raise GameInProgressError(f"Room {self.room_id} is {self.status}; joining is closed")
            player = self.roster.add_player(player_id, name)
            self.scores[player_id] = 0
            return player

    def start(self, requester_id: str, rows: int | None = None, cols: int | None = None) -> None:
        with self._lock:
            requester = self.roster.get(requester_id)
            if requester is None or not requester.is_host:
                raise NotHostError()
            if len(self.roster) < self.settings.min_players:
                raise InsufficientPlayersError(f"Need at least {self.settings.min_players} players to start")
            rows = self.settings.default_rows if rows is None else int(rows)
            cols = self.settings.default_cols if cols is None else int(cols)
            lo, hi = self.settings.min_grid_size, self.settings.max_grid_size
            if not (lo <= rows <= hi and lo <= cols <= hi):
                raise InvalidGridError(f"Grid must be between {lo}x{lo} and {hi}x{hi} dots, got {rows}x{cols}")

            self.rows, self.cols = rows, cols
            self.drawn_edges = set()
            self.box_owner = {}
            self.scores = {pid: 0 for pid in self.roster.ids}
            self.move_history = []
            self.turn_index = 0
            self.status = Status.PLAYING

    def apply_move(self, player_id: str, edge: Edge) -> MoveResult:
        with self._lock:
            if self.status != Status.PLAYING:
                raise GameNotInProgressError(f"Room {self.room_id} is {self.status}")
            if self.roster[self.turn_index].id != player_id:
                raise NotYourTurnError()
            if not edge_in_grid(edge, self.rows, self.cols):
                raise InvalidEdgeError(f"Edge {edge.key} lies outside the {self.rows}x{self.cols} grid")
            if edge in self.drawn_edges:
                raise LineAlreadyDrawnError(f"Line {edge.key} already drawn")

            self.drawn_edges.add(edge)
            if self.settings.box_detection == 'rescan':
                completed = find_newly_completed_boxes(self.drawn_edges, self.rows, self.cols, self.box_owner)
            else:
                completed = find_boxes_completed_by(edge, self.drawn_edges, self.rows, self.cols, self.box_owner)

            for box in completed:
                self.box_owner[box] = player_id
                self.scores[player_id] = self.scores.get(player_id, 0) + 1

            self.move_history.append(MoveRecord(player_id, edge, self.clock(), tuple(completed)))

            bonus_turn = bool(completed)
            if not bonus_turn:
                self.turn_index = (self.turn_index + 1) % len(self.roster)

            if len(self.box_owner) == self.total_boxes:
                self.status = Status.FINISHED

            return MoveResult(
                player_id=player_id,
                edge=edge,
                newly_completed_boxes=tuple(completed),
                bonus_turn=bonus_turn,
                finished=self.status == Status.FINISHED,
            )

    def leave(self, player_id: str) -> Player:
        """Remove a player; the caller destroys the room once it is empty.

        Boxes the player owned stay owned so the board can still fill up.
        """
        with self._lock:
            idx, player = self.roster.remove_player(player_id)
            self.scores.pop(player_id, None)
            if not self.roster:
                self.turn_index = 0
                self.closed = True
            elif idx < self.turn_index:
                self.turn_index -= 1
            else:
                self.turn_index %= len(self.roster)
            return player

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------
    def snapshot(self) -> RoomState:
        with self._lock:
            current = self.current_player
            return RoomState(
                room_id=self.room_id,
                status=self.status,
                current_turn_index=self.turn_index,
                current_player_id=current.id if current else None,
                grid=GridState(rows=self.rows, cols=self.cols),
                edges=tuple(sorted(edge.key for edge in self.drawn_edges)),
                boxes={box_key(box): owner for box, owner in sorted(self.box_owner.items())},
                scores=dict(self.scores),
                players=tuple(PlayerState(**p.to_dict()) for p in self.roster),
                move_history=tuple(
                    MoveState(
                        player_id=m.player_id,
                        edge=m.edge.key,
                        timestamp=m.timestamp,
                        completed_boxes=tuple(box_key(b) for b in m.completed_boxes),
                    )
                    for m in self.move_history
                ),
                winners=tuple(self.winners()),
            )
