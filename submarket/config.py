"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - rent_schedule() is the only place rent parameters become a RentSchedule

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Faucet off by default: only development ledgers mint value
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from submarket.core.rent import (
    DEFAULT_EXEMPTION_THRESHOLD_YEARS, DEFAULT_LAMPORTS_PER_BYTE_YEAR, RentSchedule,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://submarket:submarket@db:5432/submarket"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Rent
    rent_lamports_per_byte_year: int = Field(DEFAULT_LAMPORTS_PER_BYTE_YEAR, ge=0)
    rent_exemption_threshold_years: int = Field(DEFAULT_EXEMPTION_THRESHOLD_YEARS, ge=0)

    # Faucet (development ledgers only)
    faucet_enabled: bool = False
    faucet_max_lamports: int = Field(10_000_000_000, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def rent_schedule(self) -> RentSchedule:
        return RentSchedule(
            lamports_per_byte_year=self.rent_lamports_per_byte_year,
            exemption_threshold_years=self.rent_exemption_threshold_years,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
