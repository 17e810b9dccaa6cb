import uuid
from typing import Dict, List, Optional


class Player:
    """A seated player; ``id`` is the Socket.IO connection id."""

    def __init__(self, id: str, name: str):
        self.id = id
        self.name = name

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
        }


class Lobby:
    def __init__(self, pin: str, max_players: int, id: Optional[str] = None):
        self.id = id or str(uuid.uuid4())
        self.pin = pin
        self.players: List[Player] = []
        self.max_players = max_players
        self.started = False
        # Game fields, populated only while started
        self.available_cards: List[int] = []
        self.player_cards: Dict[str, List[int]] = {}
        self.discard_pile: List[int] = []
        self.current_player_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def get_player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def has_player(self, player_id: str) -> bool:
        return self.get_player(player_id) is not None

    def name_taken(self, name: str) -> bool:
        return any(p.name == name for p in self.players)

    def hand(self, player_id: str) -> List[int]:
        return self.player_cards.setdefault(player_id, [])

    def remove_player(self, player_id: str) -> None:
        self.players = [p for p in self.players if p.id != player_id]
        self.player_cards.pop(player_id, None)

    def reset_game(self) -> None:
        """Return the lobby to the waiting state with every game field cleared."""
        self.started = False
        self.available_cards = []
        self.player_cards = {}
        self.discard_pile = []
        self.current_player_id = None

    def card_count(self) -> int:
        return (
            len(self.available_cards)
            + len(self.discard_pile)
            + sum(len(cards) for cards in self.player_cards.values())
        )

    def to_dict(self, viewer_id: Optional[str] = None):
        """Serialize for the wire, revealing only ``viewer_id``'s own hand.

        The deck is exposed as a count; its contents would let a client
        deduce the other hands.
        """
        return {
            'id': self.id,
            'pin': self.pin,
            'players': [p.to_dict() for p in self.players],
            'maxPlayers': self.max_players,
            'started': self.started,
            'playerCards': {
                pid: (list(cards) if pid == viewer_id else [])
                for pid, cards in self.player_cards.items()
            },
            'deckCount': len(self.available_cards),
            'discardPile': list(self.discard_pile),
            'currentPlayerId': self.current_player_id,
        }


def redact(lobby: Lobby, viewer_id: Optional[str] = None):
    return lobby.to_dict(viewer_id=viewer_id)
