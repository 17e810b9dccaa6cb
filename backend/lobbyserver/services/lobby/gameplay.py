import logging
import random
from typing import List, Optional

from lobbyserver.errors import LobbyError, LobbyErrorCode
from lobbyserver.models import Lobby

logger = logging.getLogger(__name__)

DECK_SIZE = 52
HAND_SIZE = 7


def build_deck(size: int = DECK_SIZE) -> List[int]:
    return list(range(1, size + 1))


def _take_random(cards: List[int], rng: random.Random) -> int:
    return cards.pop(rng.randrange(len(cards)))


def start_game(lobby: Lobby, rng: random.Random, deck_size: int = DECK_SIZE,
               hand_size: int = HAND_SIZE) -> bool:
    """Deal a fresh deck and hand the first turn to the earliest joiner.

    Players are dealt one full hand at a time in join order. Starting an
    already-started lobby is a no-op; returns whether a deal happened.
    """
    if lobby.started:
        return False

    lobby.reset_game()
    lobby.started = True
    lobby.available_cards = build_deck(deck_size)
    lobby.current_player_id = lobby.players[0].id if lobby.players else None

    for player in lobby.players:
        hand = []
        for _ in range(hand_size):
            if not lobby.available_cards:
                break
            hand.append(_take_random(lobby.available_cards, rng))
        lobby.player_cards[player.id] = hand

    logger.info(
        f"[game-started] lobby={lobby.id} players={len(lobby.players)} "
        f"deck={len(lobby.available_cards)} first={lobby.current_player_id}"
    )
    return True


def _require_turn(lobby: Lobby, player_id: str) -> None:
    if not lobby.started:
        raise LobbyError(LobbyErrorCode.INVALID_MOVE, 'Game has not started')
    if lobby.current_player_id != player_id:
        raise LobbyError(LobbyErrorCode.NOT_YOUR_TURN)


def draw_from_deck(lobby: Lobby, player_id: str, rng: random.Random) -> int:
    _require_turn(lobby, player_id)
    if not lobby.available_cards:
        raise LobbyError(LobbyErrorCode.DECK_EMPTY)

    card = _take_random(lobby.available_cards, rng)
    lobby.hand(player_id).append(card)
    logger.debug(f"[draw-deck] lobby={lobby.id} player={player_id} deck={len(lobby.available_cards)}")
    return card


def draw_from_discard(lobby: Lobby, player_id: str) -> int:
    _require_turn(lobby, player_id)
    if not lobby.discard_pile:
        raise LobbyError(LobbyErrorCode.DISCARD_EMPTY)

    card = lobby.discard_pile.pop()
    lobby.hand(player_id).append(card)
    logger.debug(f"[draw-discard] lobby={lobby.id} player={player_id} card={card}")
    return card


def discard_card(lobby: Lobby, player_id: str, card_index) -> int:
    """Move one card from the player's hand to the discard pile and pass the turn."""
    _require_turn(lobby, player_id)
    hand = lobby.player_cards.get(player_id, [])
    # bool is an int subclass but never a valid index here
    if isinstance(card_index, bool) or not isinstance(card_index, int):
        raise LobbyError(LobbyErrorCode.INVALID_MOVE, 'Card index must be an integer')
    if not 0 <= card_index < len(hand):
        raise LobbyError(LobbyErrorCode.INVALID_MOVE, 'Card index out of range')

    card = hand.pop(card_index)
    lobby.discard_pile.append(card)
    next_turn(lobby)
    logger.debug(
        f"[discard] lobby={lobby.id} player={player_id} card={card} next={lobby.current_player_id}"
    )
    return card


def next_turn(lobby: Lobby) -> Optional[str]:
    """Advance the turn pointer to the next player in join order.

    The successor is computed from the current ``players`` sequence. If the
    current player is no longer seated the turn goes to the first player.
    """
    if not lobby.players:
        lobby.current_player_id = None
        return None

    ids = [p.id for p in lobby.players]
    if lobby.current_player_id in ids:
        next_index = (ids.index(lobby.current_player_id) + 1) % len(ids)
    else:
        next_index = 0
    lobby.current_player_id = ids[next_index]
    return lobby.current_player_id
