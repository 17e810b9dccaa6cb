from functools import wraps
from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from lobbyserver import socketio, get_registry
from lobbyserver.errors import LobbyError, LobbyErrorCode
from lobbyserver.models import redact
from lobbyserver.services.lobby import gameplay
from typing import Any, Dict, Optional

NAMESPACE = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def serialized(handler):
    """Run a handler to completion under the registry lock.

    A LobbyError aborts the handler and is reported to the requester only.
    """
    @wraps(handler)
    def wrapper(*args, **kwargs):
        registry = get_registry()
        with registry.lock:
            try:
                return handler(*args, **kwargs)
            except LobbyError as exc:
                current_app.logger.warning(
                    f"[lobby-error] sid={_get_sid()} event={handler.__name__} code={exc.code.value} message={exc.message}"
                )
                emit('lobbyError', exc.to_dict())
                return {'error': exc.to_dict()}
    return wrapper


# ---- Payload validation ----

def _payload(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LobbyError(LobbyErrorCode.INVALID_REQUEST, 'Payload must be an object')
    return data


def _require(data: Optional[Dict[str, Any]], key: str) -> str:
    value = _payload(data).get(key)
    if value is None:
        raise LobbyError(LobbyErrorCode.INVALID_REQUEST, f'{key} is required')
    if not isinstance(value, str):
        raise LobbyError(LobbyErrorCode.INVALID_REQUEST, f'{key} must be a string')
    if not value.strip():
        raise LobbyError(LobbyErrorCode.INVALID_REQUEST, f'{key} is required')
    return value.strip()


def _require_name(data: Optional[Dict[str, Any]]) -> str:
    name = _require(data, 'playerName')
    max_len = current_app.config.get('MAX_NAME_LENGTH', 24)
    if len(name) > max_len:
        raise LobbyError(LobbyErrorCode.INVALID_REQUEST, f'playerName must be at most {max_len} characters')
    return name


# ---- Outbound helpers ----

def _broadcast_lobby_list(registry) -> None:
    socketio.emit('lobbyList', registry.snapshot(), namespace=NAMESPACE)


def _broadcast_lobby_update(lobby) -> None:
    # One emit per member so each snapshot carries only the recipient's hand
    for player in lobby.players:
        socketio.emit('lobbyUpdated', redact(lobby, player.id), to=player.id, namespace=NAMESPACE)


def _send_hand(lobby, player_id: str) -> None:
    cards = list(lobby.player_cards.get(player_id, []))
    socketio.emit('dealCards', {'cards': cards}, to=player_id, namespace=NAMESPACE)


# ---- Connection lifecycle ----

def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


@serialized
def handle_disconnect(reason=None):
    sid = _get_sid()
    registry = get_registry()
    affected = registry.lobbies_for_player(sid)
    remaining = registry.disconnect_cleanup(sid)
    current_app.logger.info(f"[disconnect] sid={sid} lobbies={len(affected)}")
    for lobby in remaining:
        _broadcast_lobby_update(lobby)
    if affected:
        _broadcast_lobby_list(registry)


# ---- Lobby registry events ----

@serialized
def handle_create_lobby(data=None):
    name = _require_name(data)
    registry = get_registry()
    lobby = registry.create_lobby(_get_sid(), name)
    join_room(lobby.id)
    snapshot = redact(lobby, _get_sid())
    emit('lobbyCreated', snapshot)
    _broadcast_lobby_list(registry)
    return snapshot


@serialized
def handle_join_lobby(data=None):
    pin = _require(data, 'pin')
    name = _require_name(data)
    registry = get_registry()
    lobby = registry.join_lobby(pin, _get_sid(), name)
    join_room(lobby.id)
    emit('lobbyJoined', redact(lobby, _get_sid()))
    _broadcast_lobby_update(lobby)
    _broadcast_lobby_list(registry)


@serialized
def handle_leave_lobby(data=None):
    lobby_id = _require(data, 'lobbyId')
    registry = get_registry()
    lobby = registry.leave_lobby(lobby_id, _get_sid())
    leave_room(lobby_id)
    if lobby is not None:
        _broadcast_lobby_update(lobby)
    _broadcast_lobby_list(registry)


@serialized
def handle_get_lobby(data=None):
    lobby = get_registry().get(_require(data, 'lobbyId'))
    emit('lobbyData', redact(lobby, _get_sid()))


@serialized
def handle_get_lobbies(data=None):
    emit('lobbyList', get_registry().snapshot())


# ---- Game session events ----

@serialized
def handle_start_lobby(data=None):
    registry = get_registry()
    lobby = registry.get(_require(data, 'lobbyId'))
    dealt = gameplay.start_game(
        lobby,
        registry.rng,
        deck_size=current_app.config.get('DECK_SIZE', gameplay.DECK_SIZE),
        hand_size=current_app.config.get('HAND_SIZE', gameplay.HAND_SIZE),
    )
    if not dealt:
        current_app.logger.info(f"[start-ignored] lobby={lobby.id} already started")
        return
    socketio.emit('lobbyStarted', to=lobby.id, namespace=NAMESPACE)
    _broadcast_lobby_update(lobby)
    for player in lobby.players:
        _send_hand(lobby, player.id)
    _broadcast_lobby_list(registry)


@serialized
def handle_draw_from_deck(data=None):
    registry = get_registry()
    lobby = registry.get(_require(data, 'lobbyId'))
    gameplay.draw_from_deck(lobby, _get_sid(), registry.rng)
    _broadcast_lobby_update(lobby)
    _send_hand(lobby, _get_sid())


@serialized
def handle_draw_from_discard(data=None):
    lobby = get_registry().get(_require(data, 'lobbyId'))
    gameplay.draw_from_discard(lobby, _get_sid())
    _broadcast_lobby_update(lobby)
    _send_hand(lobby, _get_sid())


@serialized
def handle_discard_card(data=None):
    lobby = get_registry().get(_require(data, 'lobbyId'))
    gameplay.discard_card(lobby, _get_sid(), _payload(data).get('cardIndex'))
    _broadcast_lobby_update(lobby)
    _send_hand(lobby, _get_sid())


EVENT_HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'createLobby': handle_create_lobby,
    'joinLobby': handle_join_lobby,
    'leaveLobby': handle_leave_lobby,
    'startLobby': handle_start_lobby,
    'getLobby': handle_get_lobby,
    'getLobbies': handle_get_lobbies,
    'drawFromDeck': handle_draw_from_deck,
    'drawFromDiscard': handle_draw_from_discard,
    'discardCard': handle_discard_card,
}


def register_socketio_handlers(namespace: str = NAMESPACE) -> None:
    """Register every Socket.IO event handler on the given namespace."""
    for event, handler in EVENT_HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
