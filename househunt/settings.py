import enum
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from yarl import URL


class LogLevel(str, enum.Enum):
    """Possible log levels."""

    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class Settings(BaseSettings):
    """
    Application settings.

    These parameters can be configured
    with environment variables.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    # quantity of workers for uvicorn
    workers_count: int = 1
    # Enable uvicorn reloading
    reload: bool = False

    # Current environment
    environment: str = "dev"

    log_level: LogLevel = LogLevel.INFO

    # Apps whose models.py gets imported on startup
    app_names: List[str] = ["accounts", "listings"]

    # Variables for the database
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "househunt"
    db_pass: str = "househunt"
    db_base: str = "househunt"
    db_echo: bool = False
    # Full URL, takes precedence over the parts above (e.g. sqlite+aiosqlite:///...)
    db_dsn: Optional[str] = None

    # Token signing
    jwt_secret: str = "your-secret-key"
    jwt_refresh_secret: str = "refresh-secret-key"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7
    refresh_token_expire_days: int = 30

    # Work factor for password hashes
    bcrypt_rounds: int = 10

    # Variables for RabbitMQ
    rabbit_host: str = "localhost"
    rabbit_port: int = 5672
    rabbit_user: str = "guest"
    rabbit_pass: str = "guest"
    rabbit_vhost: str = "/"

    # Origins allowed to call the API from a browser
    cors_origins: List[str] = ["http://localhost:5173"]

    # Grpc endpoint for opentelemetry.
    # E.G. http://localhost:4317
    opentelemetry_endpoint: Optional[str] = None

    @property
    def db_url(self) -> URL:
        """
        Assemble database URL from settings.

        :return: database URL.
        """
        if self.db_dsn:
            return URL(self.db_dsn)
        return URL.build(
            scheme="postgresql+asyncpg",
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_pass,
            path=f"/{self.db_base}",
        )

    @property
    def rabbit_url(self) -> URL:
        """
        Assemble RabbitMQ URL from settings.

        :return: rabbit URL.
        """
        return URL.build(
            scheme="amqp",
            host=self.rabbit_host,
            port=self.rabbit_port,
            user=self.rabbit_user,
            password=self.rabbit_pass,
            path=self.rabbit_vhost,
        )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("dev", "development", "pytest")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HOUSEHUNT_",
        env_file_encoding="utf-8",
    )


settings = Settings()
