"""Inbound action payloads, validated at the socket boundary.

Each action kind has its own model; `parse_request` picks the model by the
`action` tag and turns any validation failure into an InvalidRequestError.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from dotbox.errors import InvalidRequestError
from dotbox.services.games.edges import Edge, make_edge

PlayerName = Annotated[str, Field(min_length=1, max_length=32)]
Coordinate = Annotated[int, Field(ge=0)]


class _ActionRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class _RoomRequest(_ActionRequest):
    room_id: str

    @field_validator('room_id')
    @classmethod
    def normalize_room_id(cls, value: str) -> str:
        value = value.upper()
        if not value.isalnum():
            raise ValueError(f"Room id {value!r} must be alphanumeric")
        return value


class EdgePayload(BaseModel):
    x1: Coordinate
    y1: Coordinate
    x2: Coordinate
    y2: Coordinate

    @model_validator(mode='after')
    def check_adjacent(self) -> 'EdgePayload':
        if abs(self.x1 - self.x2) + abs(self.y1 - self.y2) != 1:
            raise ValueError('Edge endpoints must be adjacent dots')
        return self

    def to_edge(self) -> Edge:
        return make_edge((self.x1, self.y1), (self.x2, self.y2))


class CreateRoomRequest(_ActionRequest):
    action: Literal['create_room'] = 'create_room'
    player_name: PlayerName


class JoinRoomRequest(_RoomRequest):
    action: Literal['join_room'] = 'join_room'
    player_name: PlayerName


class StartGameRequest(_RoomRequest):
    action: Literal['start_game'] = 'start_game'
    rows: Optional[int] = None
    cols: Optional[int] = None


class MakeMoveRequest(_RoomRequest):
    action: Literal['make_move'] = 'make_move'
    edge: EdgePayload


class LeaveRoomRequest(_RoomRequest):
    action: Literal['leave_room'] = 'leave_room'


ActionRequest = Annotated[
    Union[CreateRoomRequest, JoinRoomRequest, StartGameRequest, MakeMoveRequest, LeaveRoomRequest],
    Field(discriminator='action'),
]

_adapter = TypeAdapter(ActionRequest)


def parse_request(action: str, payload: dict | None) -> ActionRequest:
    if payload is not None and not isinstance(payload, dict):
        raise InvalidRequestError(f"Payload for {action!r} must be an object")
    try:
        return _adapter.validate_python({**(payload or {}), 'action': action})
    except ValidationError as exc:
        details = '; '.join(
            f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidRequestError(f"Invalid {action} request: {details}") from exc
