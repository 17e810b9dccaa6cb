"""Lobby error taxonomy.

Every failure a client can provoke is a ``LobbyError``: the handler aborts
before touching shared state and reports the error to the requester only.
"""
from enum import Enum
from typing import Optional


class LobbyErrorCode(str, Enum):
    NOT_FOUND = 'NOT_FOUND'
    ALREADY_STARTED = 'ALREADY_STARTED'
    FULL = 'FULL'
    NAME_TAKEN = 'NAME_TAKEN'
    NOT_YOUR_TURN = 'NOT_YOUR_TURN'
    INVALID_MOVE = 'INVALID_MOVE'
    DECK_EMPTY = 'DECK_EMPTY'
    DISCARD_EMPTY = 'DISCARD_EMPTY'
    INVALID_REQUEST = 'INVALID_REQUEST'


DEFAULT_MESSAGES = {
    LobbyErrorCode.NOT_FOUND: 'Lobby not found',
    LobbyErrorCode.ALREADY_STARTED: 'Game already started',
    LobbyErrorCode.FULL: 'Lobby is full',
    LobbyErrorCode.NAME_TAKEN: 'Name already taken',
    LobbyErrorCode.NOT_YOUR_TURN: 'Not your turn',
    LobbyErrorCode.INVALID_MOVE: 'Invalid move',
    LobbyErrorCode.DECK_EMPTY: 'No cards left in deck',
    LobbyErrorCode.DISCARD_EMPTY: 'Discard pile is empty',
    LobbyErrorCode.INVALID_REQUEST: 'Invalid request',
}


class LobbyError(Exception):
    """A recoverable, client-local failure."""

    def __init__(self, code: LobbyErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or DEFAULT_MESSAGES[code]
        super().__init__(self.message)

    def to_dict(self):
        return {
            'code': self.code.value,
            'message': self.message,
        }
