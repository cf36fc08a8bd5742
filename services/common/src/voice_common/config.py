"""Shared configuration models for infrastructure components."""

from pydantic import BaseModel, computed_field


class RedisConfig(BaseModel, frozen=True):
    """Redis connection configuration."""

    host: str
    port: int = 6379
    db: int = 0
    buffer_ttl_seconds: int = 3600  # abandoned sessions expire after an hour


class PostgresConfig(BaseModel, frozen=True):
    """Immutable PostgreSQL connection configuration."""

    host: str
    port: int
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )
