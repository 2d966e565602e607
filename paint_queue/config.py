# paint_queue/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _split(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str] = None
    db_host: Optional[str] = None
    db_port: int = 5432
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_ssl: bool = False

    pool_min: int = 1
    pool_max: int = 10

    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    archive_cutoff_days: int = 21
    admin_log_enabled: bool = False

    host: str = "0.0.0.0"
    port: int = 10000

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        load_dotenv(env_file)
        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            db_host=os.getenv("DB_HOST"),
            db_port=int(os.getenv("DB_PORT", "5432")),
            db_user=os.getenv("DB_USER"),
            db_password=os.getenv("DB_PASSWORD"),
            db_name=os.getenv("DB_NAME"),
            db_ssl=_flag(os.getenv("DB_SSL")),
            pool_min=int(os.getenv("APP_POOL_MIN", "1")),
            pool_max=int(os.getenv("APP_POOL_MAX", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=_split(os.getenv("CORS_ORIGINS")) or ["http://localhost:3000"],
            archive_cutoff_days=int(os.getenv("ARCHIVE_CUTOFF_DAYS", "21")),
            admin_log_enabled=_flag(os.getenv("ADMIN_LOG_ENABLED")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "10000")),
        )

    @property
    def conninfo(self) -> str:
        """libpq connection string; DATABASE_URL wins over the discrete DB_* fields."""
        sslmode = "require" if self.db_ssl else None
        if self.database_url:
            return make_conninfo(self.database_url, sslmode=sslmode)
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
            sslmode=sslmode,
        )
