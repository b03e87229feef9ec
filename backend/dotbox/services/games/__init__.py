"""Game domain services: edges, box detection, roster, sessions and the room registry.

This package contains pure domain logic that is imported by HTTP routes and
socket handlers, keeping transport concerns separated from core game mechanics.
"""

from .edges import Edge, make_edge
from .registry import RoomRegistry
from .session import GameSession, MoveResult, SessionSettings
from .state import RoomState, Status

__all__ = [
    'Edge',
    'GameSession',
    'MoveResult',
    'RoomRegistry',
    'RoomState',
    'SessionSettings',
    'Status',
    'make_edge',
]
