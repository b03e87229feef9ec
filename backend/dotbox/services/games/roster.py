"""Ordered player roster for one room.

Insertion order is turn order and is never re-sorted.
"""

from dataclasses import dataclass
from typing import Iterator

from dotbox.errors import DuplicatePlayerError, PlayerNotFoundError

PALETTE = ('#3B82F6', '#EF4444', '#10B981', '#F97316', '#8B5CF6', '#06B6D4')


@dataclass
class Player:
    id: str
    name: str
    color_index: int
    is_host: bool = False
    connected: bool = True

    @property
    def color(self) -> str:
        return PALETTE[self.color_index]

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'color_index': self.color_index,
            'is_host': self.is_host,
            'connected': self.connected,
        }


class Roster:
    def __init__(self):
        self._players: list[Player] = []

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __contains__(self, player_id: object) -> bool:
        return any(p.id == player_id for p in self._players)

    def __getitem__(self, index: int) -> Player:
        return self._players[index]

    @property
    def ids(self) -> list[str]:
        return [p.id for p in self._players]

    @property
    def host(self) -> Player | None:
        return next((p for p in self._players if p.is_host), None)

    def get(self, player_id: str) -> Player | None:
        return next((p for p in self._players if p.id == player_id), None)

    def index_of(self, player_id: str) -> int:
        for idx, p in enumerate(self._players):
            if p.id == player_id:
                return idx
        raise PlayerNotFoundError(f"Player {player_id!r} not in room")

    def add_player(self, player_id: str, name: str, is_host: bool = False) -> Player:
        if player_id in self:
            raise DuplicatePlayerError(f"Player {player_id!r} already in room")
        player = Player(id=player_id, name=name, color_index=self._next_color_index(), is_host=is_host)
        self._players.append(player)
        return player

    def remove_player(self, player_id: str) -> tuple[int, Player]:
        """Remove and return (former index, player).

        If the host left, the next-oldest remaining player is promoted.
        """
        idx = self.index_of(player_id)
        player = self._players.pop(idx)
        if player.is_host and self._players:
            self._players[0].is_host = True
        return idx, player

    def _next_color_index(self) -> int:
        # Cycle by roster size, skipping colors still held after departures
        in_use = {p.color_index for p in self._players}
        start = len(self._players) % len(PALETTE)
        for step in range(len(PALETTE)):
            candidate = (start + step) % len(PALETTE)
            if candidate not in in_use:
                return candidate
        return start
