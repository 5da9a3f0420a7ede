import os
import logging
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass
class Settings:
    # Raw database URL; falls back to an absolute-path SQLite file when empty
    database_url_raw: str = os.getenv("DATABASE_URL", "")
    env: str = os.getenv("ENV", os.getenv("APP_ENV", "dev")).lower()
    sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

    @property
    def database_url(self) -> str:
        """Database connection URL.

        DATABASE_URL wins when set; otherwise an absolute SQLite path under
        the backend directory (src/backend/data/blog.db) is used.
        """
        if self.database_url_raw:
            return self.database_url_raw

        base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
        default_db_path = os.path.join(base_dir, "data", "blog.db")
        return f"sqlite:///{default_db_path if default_db_path.startswith('/') else '/' + default_db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def allows_create_all(self) -> bool:
        return self.env in ("dev", "development", "test", "testing")


settings = Settings()
