from flask import Blueprint, jsonify
from lobbyserver import get_registry

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the card lobby server!'})

@main.route('/health')
def health():
    registry = get_registry()
    with registry.lock:
        count = len(registry)
    return jsonify({'status': 'healthy', 'lobbies': count})
