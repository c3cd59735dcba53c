from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config, scheduler=None, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from repguess.services.games.engine import RoundEngine
    from repguess.services.games.scheduler import SocketIOScheduler
    from repguess.socketio_events import broadcast_state

    engine = RoundEngine.from_config(
        flask_app.config,
        scheduler or SocketIOScheduler(socketio),
        publish=broadcast_state,
        rng=rng,
        logger=flask_app.logger,
    )
    flask_app.extensions['repguess'] = {'engine': engine, 'clock': None}

    # Import and register blueprints here
    from repguess.main import main
    flask_app.register_blueprint(main)

    from repguess.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    # Register Socket.IO event handlers
    from repguess.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('difficulties')
    def difficulties_command():
        """Lists the difficulty presets and their target ranges."""
        from repguess.models import Difficulty
        for difficulty in Difficulty:
            low, high = difficulty.bounds
            click.echo(f"{difficulty.label}: {low}-{high}")

    flask_app.cli.add_command(difficulties_command)

    return flask_app
