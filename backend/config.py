import os

_DEFAULT_ORIGINS = 'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174'


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', _DEFAULT_ORIGINS).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Minimum players needed before the host may start
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    # Grid bounds in dots (inclusive) and the size used when start omits them
    MIN_GRID_SIZE = int(os.environ.get('MIN_GRID_SIZE', '3'))
    MAX_GRID_SIZE = int(os.environ.get('MAX_GRID_SIZE', '8'))
    DEFAULT_GRID_ROWS = int(os.environ.get('DEFAULT_GRID_ROWS', '4'))
    DEFAULT_GRID_COLS = int(os.environ.get('DEFAULT_GRID_COLS', '4'))
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))
    # 'incremental' re-tests only the boxes next to the new edge; 'rescan' checks the whole grid
    BOX_DETECTION = os.environ.get('BOX_DETECTION', 'incremental')
