"""
Folio Server
============

Run with:
    folio            (console script)
    python -m folio.server

Visit:
    http://localhost:3002           - Frontend
    http://localhost:3002/api/posts - Posts API
"""

import signal
import socket
import sys
import logging
from flask import Flask

from folio import Folio
from folio.core import Config

logger = logging.getLogger(__name__)


def create_app(config_overrides=None, features=None):
    """Build the Flask app with every Folio module registered"""
    app = Flask(__name__, static_folder=None)
    app.config['SECRET_KEY'] = Config.SECRET_KEY
    if config_overrides:
        app.config.update(config_overrides)

    Folio(app, {'features': features or {}})
    return app


def _port_in_use(port):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex(('127.0.0.1', port)) == 0


def _handle_sigterm(signum, frame):
    logger.info("SIGTERM received. Shutting down gracefully...")
    sys.exit(0)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='[%(asctime)s] %(levelname)s %(name)s: %(message)s'
    )

    app = create_app()
    port = Config.PORT
    signal.signal(signal.SIGTERM, _handle_sigterm)

    if _port_in_use(port):
        logger.error(f"Port {port} is already in use. Please try a different port.")
        sys.exit(1)

    logger.info(f"Server is running on http://localhost:{port}")
    logger.info(f"CORS is enabled for {', '.join(app.config['CORS_ORIGINS'])}")

    try:
        app.run(host='0.0.0.0', port=port, debug=not Config.IS_PRODUCTION, use_reloader=False)
    except OSError as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
