from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config
from dotbox.services.games import RoomRegistry, SessionSettings

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config, registry: RoomRegistry | None = None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per app; handlers reach it through get_registry()
    if registry is None:
        registry = RoomRegistry(
            settings=SessionSettings.from_config(flask_app.config),
            code_length=int(flask_app.config.get('ROOM_CODE_LENGTH', 6)),
            logger=flask_app.logger,
        )
    flask_app.extensions['room_registry'] = registry

    from dotbox.main import main
    flask_app.register_blueprint(main)

    from dotbox.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    from dotbox.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/ws'))

    return flask_app


def get_registry() -> RoomRegistry:
    return current_app.extensions['room_registry']
