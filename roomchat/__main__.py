from __future__ import annotations

import argparse
import logging

import uvicorn

from .app import create_app
from .config import Settings
from .logging_config import configure_logging

logger = logging.getLogger("roomchat")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="roomchat", description="Room-based chat relay server")
    parser.add_argument("--host", default=None, help="bind address (default: ROOMCHAT_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="listen port (default: ROOMCHAT_PORT or 3500)")
    parser.add_argument("--log-level", default=None, help="override ROOMCHAT_LOG_LEVEL")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.host is not None:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port

    configure_logging(settings, override_level=args.log_level)
    app = create_app(settings)
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")


if __name__ == "__main__":
    main()
