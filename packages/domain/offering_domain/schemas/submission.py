"""Investment submission records.

A submission is the final record handed to the persistence layer once all three
form steps are complete. It stores the raw investor answers alongside the share
allocation (base, bonus and total shares, effective share price, bonus
percentage) so the allocation can be audited later without recomputing it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from pydantic import Field, model_validator

from .base import ValueModel, MoneyAmount, SharePrice, ShareCount, BonusPercentage
from .calculation import InvestmentCalculation
from .investor import InvestorProfile, InvestorType
from .tiers import SHARE_PRICE


class InvestmentSubmissionCreate(ValueModel):
    """Submission payload before it is stored (no id or timestamp yet)."""

    # Investor profile
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    is_accredited: bool
    consent_given: bool

    # Investment
    investment_amount: MoneyAmount = Field(
        max_digits=10,
        decimal_places=2,
        description="Amount invested, in currency units (at most 99,999,999.99)"
    )

    investor_type: InvestorType

    investor_information: Dict[str, Any] = Field(
        description="Type-specific investor information as submitted"
    )

    # Allocation (audit copy of the InvestmentCalculation)
    share_price: SharePrice = Field(default=SHARE_PRICE)
    base_shares: ShareCount
    bonus_shares: ShareCount
    total_shares: ShareCount
    effective_share_price: SharePrice = Field(decimal_places=4)
    bonus_percentage: BonusPercentage

    @model_validator(mode='after')
    def validate_allocation(self):
        if self.total_shares != self.base_shares + self.bonus_shares:
            raise ValueError("total_shares must equal base_shares + bonus_shares")
        return self

    @classmethod
    def from_form(
        cls,
        profile: InvestorProfile,
        information,
        calculation: InvestmentCalculation,
    ) -> "InvestmentSubmissionCreate":
        """Assemble a submission from completed form data.

        Args:
            profile: Step 1 investor profile
            information: Step 3 investor information (any InvestorInformation member)
            calculation: Calculation for the selected amount and accreditation

        Returns:
            Submission payload ready for SubmissionStore.create_submission()
        """
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            phone=profile.phone,
            is_accredited=profile.is_accredited,
            consent_given=profile.consent_given,
            investment_amount=calculation.total_investment,
            investor_type=information.type,
            investor_information=information.model_dump(mode="json"),
            base_shares=calculation.base_shares,
            bonus_shares=calculation.bonus_shares,
            total_shares=calculation.total_shares,
            effective_share_price=calculation.effective_price,
            bonus_percentage=calculation.bonus_percentage,
        )


class InvestmentSubmission(InvestmentSubmissionCreate):
    """A stored submission."""

    id: str = Field(description="Unique submission id (UUID4)")

    submitted_at: datetime = Field(description="UTC time the submission was stored")

    @property
    def investor_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def bonus_value(self) -> Decimal:
        """Face value of the bonus shares at the offering share price."""
        return self.bonus_shares * self.share_price
