import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from salon_commission.calculator import RateCard

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Salon Commission API"
    database_url: str = Field(
        default="sqlite:///./salon.db",
        description="Database connection string",
    )
    cors_origins: str = Field(default="", description="Comma separated list of allowed origins")
    log_level: str = "INFO"
    app_version: str = "0.1.0"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    sentry_traces_sample_rate: float = Field(default=0.2, ge=0, le=1)
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")

    holiday_pay_rate: Decimal = Decimal("0.12")
    employer_nic_rate: Decimal = Decimal("0.138")
    commission_rate: Decimal = Decimal("0.10")
    self_employed_share: Decimal = Decimal("0.40")

    model_config = SettingsConfigDict(env_prefix="SALON_", extra="ignore")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @field_validator("holiday_pay_rate", "employer_nic_rate", "commission_rate", "self_employed_share")
    @classmethod
    def check_fraction(cls, value: Decimal) -> Decimal:
        if not 0 <= value <= 1:
            raise ValueError("Rates are fractions between 0 and 1")
        return value

    def rate_card(self) -> RateCard:
        return RateCard(
            holiday_pay_rate=self.holiday_pay_rate,
            employer_nic_rate=self.employer_nic_rate,
            commission_rate=self.commission_rate,
            self_employed_share=self.self_employed_share,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("SALON_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


settings = get_settings()
