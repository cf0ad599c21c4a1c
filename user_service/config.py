"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Store credentials come from environment variables (DB_HOST, DB_PORT,
      DB_USER, DB_PASSWORD, DB_NAME), never hardcoded
    - get_settings() is cached (lru_cache): single instance per process
    - DATABASE_URL, when set, wins over the DB_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - URL assembled with sqlalchemy URL.create: passwords with special characters
      are escaped correctly
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Record store
    db_driver: str = "mysql+aiomysql"
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "users"
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_mysql_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out mysql:// but the pool needs an async driver."""
        if isinstance(v, str) and v.startswith("mysql://"):
            return v.replace("mysql://", "mysql+aiomysql://", 1)
        return v or None

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = []

    # Errors: pass driver messages to clients (off in production)
    expose_error_details: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def store_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
