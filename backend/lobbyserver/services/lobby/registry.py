import logging
import random
import threading
from typing import Dict, List, Optional

from lobbyserver.errors import LobbyError, LobbyErrorCode
from lobbyserver.models import Lobby, Player, redact

logger = logging.getLogger(__name__)

PIN_LENGTH = 6


class LobbyRegistry:
    """In-memory owner of every live lobby, keyed by lobby id.

    ``lock`` serialises inbound events: the transport layer holds it for the
    full read-modify-write and outbound emits of each event.
    """

    def __init__(self, max_players: int = 6, rng: Optional[random.Random] = None):
        self.max_players = max_players
        self.rng = rng or random.Random()
        self.lock = threading.RLock()
        self._lobbies: Dict[str, Lobby] = {}

    def __len__(self) -> int:
        return len(self._lobbies)

    def __contains__(self, lobby_id) -> bool:
        return lobby_id in self._lobbies

    def generate_pin(self) -> str:
        """Draw 6-digit pins until one is free among the live lobbies."""
        taken = {lobby.pin for lobby in self._lobbies.values()}
        while True:
            pin = str(self.rng.randrange(10 ** PIN_LENGTH)).zfill(PIN_LENGTH)
            if pin not in taken:
                return pin
            logger.warning(f"[pin-collision] pin={pin} regenerating")

    def get(self, lobby_id) -> Lobby:
        lobby = self._lobbies.get(lobby_id) if lobby_id else None
        if lobby is None:
            raise LobbyError(LobbyErrorCode.NOT_FOUND)
        return lobby

    def find_by_pin(self, pin) -> Optional[Lobby]:
        for lobby in self._lobbies.values():
            if lobby.pin == pin:
                return lobby
        return None

    def lobbies_for_player(self, player_id: str) -> List[Lobby]:
        return [lobby for lobby in self._lobbies.values() if lobby.has_player(player_id)]

    def list_lobbies(self) -> List[Lobby]:
        return list(self._lobbies.values())

    def snapshot(self, viewer_id: Optional[str] = None) -> list:
        return [redact(lobby, viewer_id) for lobby in self.list_lobbies()]

    def create_lobby(self, player_id: str, player_name: str) -> Lobby:
        lobby = Lobby(pin=self.generate_pin(), max_players=self.max_players)
        lobby.players.append(Player(player_id, player_name))
        self._lobbies[lobby.id] = lobby
        logger.info(f"[lobby-created] lobby={lobby.id} pin={lobby.pin} host={player_name}")
        return lobby

    def join_lobby(self, pin, player_id: str, player_name: str) -> Lobby:
        lobby = self.find_by_pin(pin)
        if lobby is None:
            raise LobbyError(LobbyErrorCode.NOT_FOUND)
        if lobby.started:
            raise LobbyError(LobbyErrorCode.ALREADY_STARTED)
        if lobby.is_full:
            raise LobbyError(LobbyErrorCode.FULL)
        if lobby.name_taken(player_name):
            raise LobbyError(LobbyErrorCode.NAME_TAKEN)
        if lobby.has_player(player_id):
            raise LobbyError(LobbyErrorCode.INVALID_MOVE, 'Already in this lobby')
        lobby.players.append(Player(player_id, player_name))
        logger.info(f"[lobby-joined] lobby={lobby.id} player={player_name} count={len(lobby.players)}")
        return lobby

    def leave_lobby(self, lobby_id, player_id: str) -> Optional[Lobby]:
        """Remove a player; returns the lobby, or None once it was deleted."""
        lobby = self.get(lobby_id)
        if not lobby.has_player(player_id):
            raise LobbyError(LobbyErrorCode.INVALID_MOVE, 'Not in this lobby')
        return self._remove_player(lobby, player_id)

    def disconnect_cleanup(self, player_id: str) -> List[Lobby]:
        """Vacate every seat held by a closed connection.

        Returns the lobbies that still exist afterwards.
        """
        remaining = []
        for lobby in self.lobbies_for_player(player_id):
            if self._remove_player(lobby, player_id) is not None:
                remaining.append(lobby)
        return remaining

    def _remove_player(self, lobby: Lobby, player_id: str) -> Optional[Lobby]:
        lobby.remove_player(player_id)
        if lobby.is_empty:
            del self._lobbies[lobby.id]
            logger.info(f"[lobby-deleted] lobby={lobby.id} pin={lobby.pin}")
            return None
        if lobby.started:
            lobby.reset_game()
            logger.info(f"[game-reset] lobby={lobby.id} reason=player-left")
        logger.info(f"[lobby-left] lobby={lobby.id} player={player_id} count={len(lobby.players)}")
        return lobby
