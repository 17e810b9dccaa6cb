"""Lobby domain services: the registry and the card-game session.

Transport-free logic imported by the Socket.IO handlers and HTTP routes;
nothing here emits events or touches the request context.
"""
from .registry import LobbyRegistry
from .gameplay import (
    build_deck,
    start_game,
    draw_from_deck,
    draw_from_discard,
    discard_card,
    next_turn,
)

__all__ = [
    'LobbyRegistry',
    'build_deck',
    'start_game',
    'draw_from_deck',
    'draw_from_discard',
    'discard_card',
    'next_turn',
]
