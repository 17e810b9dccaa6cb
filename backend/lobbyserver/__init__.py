from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per application: tests get a fresh, isolated set of lobbies
    from lobbyserver.services.lobby import LobbyRegistry
    flask_app.extensions['lobby_registry'] = LobbyRegistry(
        max_players=flask_app.config.get('MAX_PLAYERS', 6),
        rng=flask_app.config.get('LOBBY_RNG'),
    )

    from lobbyserver.routes import main
    flask_app.register_blueprint(main)

    from lobbyserver.api.lobbies import lobbies
    flask_app.register_blueprint(lobbies, url_prefix='/api/lobbies')

    from lobbyserver.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app


def get_registry():
    """The LobbyRegistry owned by the current application."""
    return current_app.extensions['lobby_registry']
