import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of front-end origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000',
        ).split(',')
        if origin.strip()
    ]
    # Lobby limits
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '6'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '24'))
    # Dealing: cards are the integers 1..DECK_SIZE
    DECK_SIZE = int(os.environ.get('DECK_SIZE', '52'))
    HAND_SIZE = int(os.environ.get('HAND_SIZE', '7'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
