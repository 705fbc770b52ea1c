from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from chessmatch.config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from chessmatch.main import main
    flask_app.register_blueprint(main)

    from chessmatch.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    # One lobby per app: a fresh app starts with no sessions and a zero counter
    from chessmatch.services.sessions.lobby import Lobby
    from chessmatch.socketio_events import SocketIOTransport, register_socketio_handlers
    flask_app.extensions['chessmatch'] = Lobby.from_config(flask_app.config, SocketIOTransport(namespace))
    register_socketio_handlers(namespace=namespace)

    return flask_app
