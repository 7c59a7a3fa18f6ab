"""Run the DevLog API server.

Usage:
    python -m src.devlog.serve
    python -m src.devlog.serve --port 8080 --migrate-only
"""

import argparse

import uvicorn

from src.devlog.core.config import get_settings
from src.devlog.core.db import run_migrations_sync
from src.devlog.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="DevLog API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--migrate-only",
        action="store_true",
        help="Apply database migrations and exit",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    if args.migrate_only:
        if settings.store_backend != "sql":
            logger.info("In-memory store configured, nothing to migrate")
            return
        run_migrations_sync(settings.database_url)
        logger.info("Migrations applied")
        return

    uvicorn.run(
        "src.devlog.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
