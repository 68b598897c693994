"""Investment calculation result model."""

from decimal import Decimal
from pydantic import Field, model_validator

from .base import ValueModel, MoneyAmount, ShareCount, BonusPercentage


class InvestmentCalculation(ValueModel):
    """Immutable share allocation for one investment amount.

    Example:
        $1,000 non-accredited (MEMBER tier, 5% bonus):
            base_shares=3333       (floor(1000 / 0.30))
            bonus_shares=166       (floor(3333 * 5 / 100))
            total_shares=3499
            effective_price=0.2858 (1000 / 3499, 4 dp)
            bonus_percentage=5
            total_investment=1000
    """

    base_shares: ShareCount = Field(
        description="Shares purchased at face value"
    )

    bonus_shares: ShareCount = Field(
        description="Additional shares granted by the bonus tier"
    )

    total_shares: ShareCount = Field(
        description="base_shares + bonus_shares"
    )

    effective_price: Decimal = Field(
        gt=0,
        description="Investment divided by total shares, 4 decimal places"
    )

    bonus_percentage: BonusPercentage = Field(
        description="Bonus percentage of the qualifying tier (0 if none)"
    )

    total_investment: MoneyAmount = Field(
        description="The investment amount, echoed unchanged"
    )

    @model_validator(mode='after')
    def validate_totals(self):
        if self.total_shares != self.base_shares + self.bonus_shares:
            raise ValueError(
                f"total_shares ({self.total_shares}) must equal base_shares + bonus_shares "
                f"({self.base_shares} + {self.bonus_shares})"
            )
        return self
