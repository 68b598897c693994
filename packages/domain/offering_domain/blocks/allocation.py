"""Allocation audit block.

Turns stored submissions into DataFrames for audit review and Excel export.

Output DataFrames:
- allocation_ledger: One row per submission with its stored allocation
- allocation_by_tier: Submissions aggregated by investor class and tier
- allocation_summary: Offering-wide totals
"""

from decimal import Decimal
from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..calculator import tier_table_for
from ..schemas import SHARE_PRICE, InvestmentSubmission

NO_TIER_LABEL = "NO BONUS"

LEDGER_COLUMNS = [
    "submission_id",
    "submitted_at",
    "investor_name",
    "investor_type",
    "investor_class",
    "tier_label",
    "investment_amount",
    "share_price",
    "base_shares",
    "bonus_shares",
    "total_shares",
    "effective_share_price",
    "bonus_percentage",
]

BY_TIER_COLUMNS = [
    "investor_class",
    "tier_label",
    "submissions",
    "investment_amount",
    "base_shares",
    "bonus_shares",
    "total_shares",
]


class AllocationBlock(Block):
    """Builds allocation DataFrames from stored submissions.

    Inputs (from context):
        - submissions: List[InvestmentSubmission]

    Outputs (to context):
        - allocation_ledger: DataFrame (LEDGER_COLUMNS), ordered by submitted_at.
          tier_label is the tier the amount qualifies for in the investor's
          table, or "NO BONUS" below the first threshold.

        - allocation_by_tier: DataFrame (BY_TIER_COLUMNS), sums per
          (investor_class, tier_label), largest investment first

        - allocation_summary: DataFrame with single row:
            * submissions: Number of submissions
            * accredited_submissions: Number from accredited investors
            * total_investment: Sum of investment amounts
            * total_base_shares / total_bonus_shares / total_shares
            * blended_share_price: total_investment / total_shares
              (share price when no shares were allocated)

    Example:
        context = BlockContext()
        context.set("submissions", store.list_submissions())
        AllocationBlock().execute(context)
        summary = context.get("allocation_summary").iloc[0]
    """

    def __init__(self, submissions_key: str = "submissions"):
        """Initialize AllocationBlock.

        Args:
            submissions_key: Context key for the submission list (default: "submissions")
        """
        self.submissions_key = submissions_key

    def inputs(self) -> List[str]:
        return [self.submissions_key]

    def outputs(self) -> List[str]:
        return [
            "allocation_ledger",
            "allocation_by_tier",
            "allocation_summary",
        ]

    def execute(self, context: BlockContext) -> None:
        submissions: List[InvestmentSubmission] = context.get(self.submissions_key)

        ledger_df = self._compute_ledger(submissions)
        context.set("allocation_ledger", ledger_df)
        context.set("allocation_by_tier", self._compute_by_tier(ledger_df))
        context.set("allocation_summary", self._compute_summary(submissions))

    def _compute_ledger(self, submissions: List[InvestmentSubmission]) -> pd.DataFrame:
        rows = []
        for submission in sorted(submissions, key=lambda s: s.submitted_at):
            table = tier_table_for(submission.is_accredited)
            tier = table.qualifying_tier(submission.investment_amount)

            rows.append({
                "submission_id": submission.id,
                "submitted_at": submission.submitted_at,
                "investor_name": submission.investor_name,
                "investor_type": submission.investor_type,
                "investor_class": table.name,
                "tier_label": tier.label if tier else NO_TIER_LABEL,
                "investment_amount": float(submission.investment_amount),
                "share_price": float(submission.share_price),
                "base_shares": submission.base_shares,
                "bonus_shares": submission.bonus_shares,
                "total_shares": submission.total_shares,
                "effective_share_price": float(submission.effective_share_price),
                "bonus_percentage": submission.bonus_percentage,
            })

        return pd.DataFrame(rows, columns=LEDGER_COLUMNS)

    def _compute_by_tier(self, ledger_df: pd.DataFrame) -> pd.DataFrame:
        if ledger_df.empty:
            return pd.DataFrame(columns=BY_TIER_COLUMNS)

        by_tier = ledger_df.groupby(["investor_class", "tier_label"]).agg({
            "submission_id": "count",
            "investment_amount": "sum",
            "base_shares": "sum",
            "bonus_shares": "sum",
            "total_shares": "sum",
        }).reset_index()

        by_tier = by_tier.rename(columns={"submission_id": "submissions"})
        by_tier = by_tier.sort_values("investment_amount", ascending=False).reset_index(drop=True)

        return by_tier[BY_TIER_COLUMNS]

    def _compute_summary(self, submissions: List[InvestmentSubmission]) -> pd.DataFrame:
        # Sum in Decimal, convert once at the end
        total_investment = sum((s.investment_amount for s in submissions), Decimal("0"))
        total_base = sum(s.base_shares for s in submissions)
        total_bonus = sum(s.bonus_shares for s in submissions)
        total_shares = sum(s.total_shares for s in submissions)

        blended = total_investment / total_shares if total_shares else SHARE_PRICE

        return pd.DataFrame([{
            "submissions": len(submissions),
            "accredited_submissions": sum(1 for s in submissions if s.is_accredited),
            "total_investment": float(total_investment),
            "total_base_shares": total_base,
            "total_bonus_shares": total_bonus,
            "total_shares": total_shares,
            "blended_share_price": float(blended),
        }])
