"""Runtime configuration for the offering.

Values come from environment variables with the ``OFFERING_`` prefix (or a
local ``.env`` file), e.g. ``OFFERING_MINIMUM_INVESTMENT=2500``.

The share price and tier tables are not configurable: they are part of the
offering terms and live in ``offering_domain.schemas.tiers``.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OfferingSettings(BaseSettings):
    minimum_investment: Decimal = Field(
        default=Decimal("999.90"),
        ge=0,
        description="Smallest amount the form accepts",
    )
    default_investment_amount: Decimal = Field(
        default=Decimal("99500"),
        ge=0,
        description="Amount preselected when the form starts",
    )

    log_level: str = Field(default="INFO", description="Root level for offering loggers")
    log_format: Literal["text", "json"] = "text"

    model_config = SettingsConfigDict(
        env_prefix="OFFERING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _default_meets_minimum(self) -> "OfferingSettings":
        if self.default_investment_amount < self.minimum_investment:
            raise ValueError(
                f"default_investment_amount ({self.default_investment_amount}) is below "
                f"minimum_investment ({self.minimum_investment})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> OfferingSettings:
    """Return process-wide settings (read once from the environment)."""
    return OfferingSettings()
