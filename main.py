"""
Paudle Game Server - Main Entry Point

This is the main entry point for the Paudle game server.
It creates the Flask application and starts serving the game API.
"""

import os

from paudle import create_app
from paudle.config import config
from paudle.utils.game_logger import get_game_logger


def main():
    """Main function to create the application and start the server."""
    config_class = config[os.getenv('PAUDLE_ENV', 'default')]
    try:
        print("Creating Flask application...")
        app = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger = get_game_logger()
        game_logger.logger.info("Paudle Server Starting")

        print(f"\nStarting Paudle Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Store backend: {config_class.STORE_BACKEND}")
        print("=" * 50)

        app.run(host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        get_game_logger().logger.info("Paudle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        get_game_logger().logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
