"""Game errors raised by the domain layer.

Every error carries a stable `code` that the transport layer sends back to the
originating client. None of them are fatal to a room.
"""


class GameError(Exception):
    code = 'game_error'
    default_message = 'Game error'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict:
        return {'code': self.code, 'message': self.message}


class RoomNotFoundError(GameError):
    code = 'room_not_found'
    default_message = 'Room not found'


class GameInProgressError(GameError):
    code = 'game_in_progress'
    default_message = 'Game already in progress'


class NotHostError(GameError):
    code = 'not_host'
    default_message = 'Only host can start the game'


class InsufficientPlayersError(GameError):
    code = 'insufficient_players'
    default_message = 'Need at least 2 players to start'


class NotYourTurnError(GameError):
    code = 'not_your_turn'
    default_message = 'Not your turn'


class LineAlreadyDrawnError(GameError):
    code = 'line_already_drawn'
    default_message = 'Line already drawn'


class InvalidEdgeError(GameError):
    code = 'invalid_edge'
    default_message = 'Edge must join two adjacent dots on the grid'


class InvalidGridError(GameError):
    code = 'invalid_grid'
    default_message = 'Grid size out of bounds'


class GameNotInProgressError(GameError):
    code = 'game_not_in_progress'
    default_message = 'Game is not in progress'


class DuplicatePlayerError(GameError):
    code = 'duplicate_player'
    default_message = 'Player already in room'


class PlayerNotFoundError(GameError):
    code = 'player_not_found'
    default_message = 'Player not in room'


class InvalidRequestError(GameError):
    code = 'invalid_request'
    default_message = 'Invalid request'
