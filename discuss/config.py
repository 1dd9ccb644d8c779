"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database configuration (used by the SQL store backend)."""

    url: str = "sqlite+aiosqlite:///./discuss.db"
    pool_size: int = 5
    max_overflow: int = 10


class StoreLatency(BaseModel):
    """Simulated round-trip latency per store operation, in milliseconds."""

    list_ms: int = Field(default=300, ge=0)
    add_ms: int = Field(default=500, ge=0)
    delete_ms: int = Field(default=300, ge=0)


class StoreSettings(BaseModel):
    """Record store configuration."""

    # "memory": simulated store with latency and failure injection
    # "sql": durable store backed by the configured database
    backend: Literal["memory", "sql"] = "memory"

    latency: StoreLatency = StoreLatency()

    # Probability (0.0 - 1.0) that an add or delete call fails
    failure_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    # Seed the sample thread the first time an empty store is listed
    seed_sample_data: bool = True

    # Seed for the failure injection RNG (None = nondeterministic)
    random_seed: int | None = None


class ThreadSettings(BaseModel):
    """Mutation coordinator configuration."""

    # Upper bound for a single store round trip. A call that exceeds it is
    # cancelled and rolled back like any other store failure.
    # None waits indefinitely.
    store_timeout_seconds: float | None = Field(default=10.0, gt=0)

    # Namespace for locally generated ids of optimistic comments
    temp_id_prefix: str = Field(default="temp_", min_length=1)

    # Maximum number of undelivered failure notifications kept
    notification_backlog: int = Field(default=50, ge=1)


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]
    frontend_host: str

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            # Production uses standard ports (80/443)
            return f"{self.protocol}://{self.host}"

    @computed_field
    @property
    def frontend_url(self) -> str:
        """Frontend URL allowed by CORS.

        In development: http://localhost:3000
        """
        if self.frontend_host == "localhost":
            return "http://localhost:3000"
        else:
            return f"{self.protocol}://{self.frontend_host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        ENVIRONMENT=production
        STORE__BACKEND=sql
        DATABASE__URL=sqlite+aiosqlite:///./discuss.db
        STORE__FAILURE_RATE=0.2
        THREAD__STORE_TIMEOUT_SECONDS=5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows STORE__BACKEND syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "localhost"
    port: int = 8000
    frontend_host: str = "localhost"

    # Nested settings
    database: DatabaseSettings = DatabaseSettings()
    store: StoreSettings = StoreSettings()
    thread: ThreadSettings = ThreadSettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http", frontend_host="localhost"
    )  # Overwritten in validator
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(
            host=self.host,
            port=self.port,
            protocol=protocol,
            frontend_host=self.frontend_host,
        )
        return self

    @property
    def database_url(self) -> str:
        """Shortcut for the database URL."""
        return self.database.url
