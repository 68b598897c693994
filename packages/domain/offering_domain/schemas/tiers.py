"""Bonus tier definitions for the offering.

A tier grants a bonus-share percentage to any investment at or above its
threshold. Two static tier tables exist, one for non-accredited investors
(lower thresholds) and one for accredited investors (higher thresholds). The
calculator picks a table by the accreditation flag; there is no inheritance
between them.

Both tables are validated when this module is imported, so an edit that puts
tiers out of order fails loudly instead of silently changing allocations.
"""

from decimal import Decimal
from typing import Optional, Tuple
from pydantic import Field, model_validator

from .base import ValueModel, MoneyAmount, BonusPercentage

# Face value of one share in currency units
SHARE_PRICE = Decimal("0.30")


# =============================================================================
# Investment Tier
# =============================================================================

class InvestmentTier(ValueModel):
    """A (threshold, bonus%) pair defining bonus-share eligibility.

    Example:
        InvestmentTier(threshold_amount=Decimal("24950"), bonus_percentage=80, label="TITANIUM")

        An investment of $24,950 or more (up to the next threshold) earns
        80% bonus shares on top of the base shares.
    """

    threshold_amount: MoneyAmount = Field(
        description="Minimum investment (inclusive) that qualifies for this tier"
    )

    bonus_percentage: BonusPercentage = Field(
        description="Bonus shares granted as whole percent of base shares"
    )

    label: str = Field(
        min_length=1,
        description="Display name of the tier (e.g., 'MEMBER', 'SOVEREIGN')"
    )


# =============================================================================
# Tier Table
# =============================================================================

class TierTable(ValueModel):
    """An ordered, immutable sequence of tiers.

    Invariants (checked at construction):
        - at least one tier
        - thresholds strictly ascending
        - bonus percentages non-decreasing, so a larger investment never
          earns a smaller bonus
    """

    name: str = Field(
        description="Table identifier (e.g., 'non_accredited', 'accredited')"
    )

    tiers: Tuple[InvestmentTier, ...] = Field(
        description="Tiers in ascending threshold order"
    )

    @model_validator(mode='after')
    def validate_ordering(self):
        """Reject empty or out-of-order tables."""
        if not self.tiers:
            raise ValueError(f"Tier table '{self.name}' must contain at least one tier")

        for previous, current in zip(self.tiers, self.tiers[1:]):
            if current.threshold_amount <= previous.threshold_amount:
                raise ValueError(
                    f"Tier table '{self.name}' is not sorted: "
                    f"{current.label} ({current.threshold_amount}) follows "
                    f"{previous.label} ({previous.threshold_amount})"
                )
            if current.bonus_percentage < previous.bonus_percentage:
                raise ValueError(
                    f"Tier table '{self.name}' bonus decreases from "
                    f"{previous.label} ({previous.bonus_percentage}%) to "
                    f"{current.label} ({current.bonus_percentage}%)"
                )
        return self

    @property
    def first(self) -> InvestmentTier:
        return self.tiers[0]

    @property
    def last(self) -> InvestmentTier:
        return self.tiers[-1]

    def qualifying_tier(self, amount: Decimal) -> Optional[InvestmentTier]:
        """Return the highest tier whose threshold is <= amount.

        Args:
            amount: Investment amount

        Returns:
            The qualifying tier, or None if amount is below every threshold
        """
        selected = None
        for tier in self.tiers:
            if amount >= tier.threshold_amount:
                selected = tier
        return selected

    def by_label(self, label: str) -> InvestmentTier:
        """Look up a tier by its label.

        Raises:
            KeyError: If no tier has this label
        """
        for tier in self.tiers:
            if tier.label == label:
                return tier
        raise KeyError(f"Tier '{label}' not found in table '{self.name}'")


def _table(name: str, rows) -> TierTable:
    return TierTable(
        name=name,
        tiers=tuple(
            InvestmentTier(threshold_amount=Decimal(amount), bonus_percentage=pct, label=label)
            for amount, pct, label in rows
        ),
    )


# =============================================================================
# Static Tier Tables
# =============================================================================

NON_ACCREDITED_TIERS = _table("non_accredited", [
    ("1000", 5, "MEMBER"),
    ("2500", 10, "SELECT"),
    ("5000", 15, "ELITE"),
    ("9500", 25, "PREMIER"),
    ("15000", 50, "PRESIDENTIAL"),
    ("24950", 80, "TITANIUM"),
    ("49500", 120, "IMPERIAL"),
    ("99500", 150, "SOVEREIGN"),
])

ACCREDITED_TIERS = _table("accredited", [
    ("5000", 5, "MEMBER"),
    ("10000", 10, "SELECT"),
    ("25000", 15, "ELITE"),
    ("50000", 25, "PREMIER"),
    ("100000", 50, "PRESIDENTIAL"),
    ("199500", 80, "TITANIUM"),
    ("499500", 120, "IMPERIAL"),
    ("999500", 150, "SOVEREIGN"),
])
