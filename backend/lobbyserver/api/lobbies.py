from flask import Blueprint, jsonify
from lobbyserver import get_registry
from lobbyserver.errors import LobbyError, LobbyErrorCode
from lobbyserver.models import redact


lobbies = Blueprint('lobbies', __name__)


@lobbies.errorhandler(LobbyError)
def handle_lobby_error(exc):
    status = 404 if exc.code == LobbyErrorCode.NOT_FOUND else 400
    return jsonify(exc.to_dict()), status


@lobbies.route('', methods=['GET'])
def list_lobbies():
    """Live lobbies with every hand redacted."""
    registry = get_registry()
    with registry.lock:
        return jsonify(registry.snapshot())


@lobbies.route('/<string:lobby_id>', methods=['GET'])
def get_lobby(lobby_id):
    registry = get_registry()
    with registry.lock:
        lobby = registry.get(lobby_id)
        return jsonify(redact(lobby))


@lobbies.route('/pin/<string:pin>', methods=['GET'])
def get_lobby_by_pin(pin):
    registry = get_registry()
    with registry.lock:
        lobby = registry.find_by_pin(pin)
        if lobby is None:
            raise LobbyError(LobbyErrorCode.NOT_FOUND)
        return jsonify(redact(lobby))
