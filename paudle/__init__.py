"""
Paudle Application Package

A daily word-guessing game served as a small JSON API: guess evaluation,
keyboard status, persisted history with streaks, and the share text.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, store=None, word_source=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        store: Key-value store to persist into, built from the config when omitted
        word_source: Word source to draw secret words from, the bundled word list when omitted

    Returns:
        Flask application instance with the game service initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    from .utils.game_logger import configure_game_logger
    configure_game_logger(app.config['LOG_DIR'], app.config['LOG_LEVEL'])

    from .config.game_settings import WORD_LIST
    from .services.storage import create_store
    from .services.word_source import WordSource
    from .services.game_service import initialize_game_service

    if store is None:
        store = create_store(app.config)
    if word_source is None:
        word_source = WordSource(WORD_LIST)
    initialize_game_service(app, store, word_source)

    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    return app
