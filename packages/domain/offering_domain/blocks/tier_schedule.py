"""Tier schedule block.

Lays both tier tables out as a DataFrame, with the allocation an investor
would receive when investing exactly each tier's threshold.
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..calculator import calculate_investment
from ..schemas import ACCREDITED_TIERS, NON_ACCREDITED_TIERS

TIER_SCHEDULE_COLUMNS = [
    "investor_class",
    "tier_label",
    "threshold_amount",
    "bonus_percentage",
    "base_shares",
    "bonus_shares",
    "total_shares",
    "effective_price",
]


class TierScheduleBlock(Block):
    """Builds the tier schedule for both investor classes.

    Inputs (from context):
        - none

    Outputs (to context):
        - tier_schedule: DataFrame with columns:
            * investor_class: "non_accredited" or "accredited"
            * tier_label: Tier name
            * threshold_amount: Minimum investment for the tier
            * bonus_percentage: Bonus percent of base shares
            * base_shares / bonus_shares / total_shares: Allocation at the threshold
            * effective_price: Threshold amount / total shares

    Rows are ordered non-accredited first, then accredited, each by ascending threshold.
    """

    def inputs(self) -> List[str]:
        return []

    def outputs(self) -> List[str]:
        return ["tier_schedule"]

    def execute(self, context: BlockContext) -> None:
        rows = []
        for table, is_accredited in ((NON_ACCREDITED_TIERS, False), (ACCREDITED_TIERS, True)):
            for tier in table.tiers:
                calc = calculate_investment(tier.threshold_amount, is_accredited)
                rows.append({
                    "investor_class": table.name,
                    "tier_label": tier.label,
                    "threshold_amount": float(tier.threshold_amount),
                    "bonus_percentage": tier.bonus_percentage,
                    "base_shares": calc.base_shares,
                    "bonus_shares": calc.bonus_shares,
                    "total_shares": calc.total_shares,
                    "effective_price": float(calc.effective_price),
                })

        context.set("tier_schedule", pd.DataFrame(rows, columns=TIER_SCHEDULE_COLUMNS))
