"""Read-only projection of a room, broadcast to every subscriber after a change."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Status(StrEnum):
    WAITING = 'waiting'
    PLAYING = 'playing'
    FINISHED = 'finished'


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class GridState(_Frozen):
    rows: int
    cols: int


class PlayerState(_Frozen):
    id: str
    name: str
    color: str
    color_index: int
    is_host: bool
    connected: bool


class MoveState(_Frozen):
    player_id: str
    edge: str
    timestamp: float
    completed_boxes: tuple[str, ...]


class RoomState(_Frozen):
    room_id: str
    status: Status
    current_turn_index: int
    current_player_id: str | None
    grid: GridState
    edges: tuple[str, ...]
    boxes: dict[str, str]
    scores: dict[str, int]
    players: tuple[PlayerState, ...]
    move_history: tuple[MoveState, ...]
    winners: tuple[str, ...]

    def to_payload(self) -> dict:
        return self.model_dump(mode='json')
