# paint_queue/__main__.py
"""Run the API server or bootstrap the schema.

    python -m paint_queue serve
    python -m paint_queue init-db
"""
import argparse

import uvicorn

from .config import Settings
from .db import Database
from .logging import configure_logging, get_logger
from .schema import DDL

logger = get_logger(__name__)


def init_db(settings: Settings) -> None:
    db = Database(settings)
    db.open()
    try:
        db.apply_schema(DDL)
        logger.info("schema_applied")
    finally:
        db.close()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="paint_queue", description="Paint queue order tracker")
    parser.add_argument("command", nargs="?", default="serve", choices=["serve", "init-db"])
    parser.add_argument("--env-file", default=None, help="dotenv file to load before reading settings")
    args = parser.parse_args(argv)

    settings = Settings.from_env(args.env_file)
    configure_logging(settings.log_level)

    if args.command == "init-db":
        init_db(settings)
        return

    uvicorn.run(
        "paint_queue.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
