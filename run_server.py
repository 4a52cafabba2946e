#!/usr/bin/env python3
"""CLI entry point for the Timestamp Microservice API server.

Usage:
    python run_server.py

Or with custom options:
    PORT=8080 python run_server.py --log-file api.log
    python run_server.py --host 127.0.0.1 --port 8080 --reload
"""
import argparse
import os

import uvicorn

from api.services.logging import get_logger, setup_logging

DEFAULT_HOST = os.getenv("HOST", "0.0.0.0")
DEFAULT_PORT = int(os.getenv("PORT", "3000"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the Timestamp Microservice API server"
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Interface to bind (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to listen on (default: $PORT or 3000, currently {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write JSON logs to this file inside $LOGS_DIR",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )
    return parser


def main(argv=None):
    """Configure logging and serve the app with uvicorn."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("run_server")
    logger.info("Server listening", extra={"host": args.host, "port": args.port})

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
