# paint_queue/db.py
from contextlib import contextmanager
from typing import Iterator

import psycopg
from psycopg_pool import ConnectionPool

from .config import Settings
from .errors import AppError, DatastoreError
from .logging import get_logger
from .repositories import UnitOfWork
from .repositories.base import fetch_one

logger = get_logger(__name__)


class Database:
    """Connection pool with an explicit open/close lifecycle.

    ``transaction()`` commits on success and rolls back on any exception;
    ``connection()`` is for reads and always rolls back.
    """

    def __init__(self, settings: Settings):
        self.pool = ConnectionPool(
            conninfo=settings.conninfo,
            min_size=settings.pool_min,
            max_size=settings.pool_max,
            kwargs={"autocommit": False},  # we manage transactions
            open=False,
        )

    def open(self) -> None:
        self.pool.open(wait=True)
        logger.info("db_pool_opened", min_size=self.pool.min_size, max_size=self.pool.max_size)

    def close(self) -> None:
        self.pool.close()
        logger.info("db_pool_closed")

    def ping(self) -> bool:
        with self.connection() as uow:
            row = fetch_one(uow.conn, "SELECT 1 AS ok")
            return row["ok"] == 1

    @contextmanager
    def connection(self) -> Iterator[UnitOfWork]:
        with self.pool.connection() as conn:
            try:
                yield UnitOfWork(conn)
            except psycopg.Error as exc:
                logger.error("db_query_failed", error=str(exc))
                raise DatastoreError() from exc
            finally:
                conn.rollback()

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWork]:
        with self.pool.connection() as conn:
            try:
                yield UnitOfWork(conn)
                conn.commit()
            except AppError as exc:
                conn.rollback()
                logger.warning("transaction_rolled_back", error=exc.message)
                raise
            except psycopg.Error as exc:
                conn.rollback()
                logger.error("transaction_rolled_back", error=str(exc))
                raise DatastoreError() from exc
            except Exception:
                conn.rollback()
                logger.exception("transaction_rolled_back")
                raise

    def apply_schema(self, ddl: str) -> None:
        with self.transaction() as uow:
            uow.conn.execute(ddl)
