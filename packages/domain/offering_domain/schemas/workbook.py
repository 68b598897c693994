"""Audit workbook configuration - top-level entry point for Excel export.

The AuditWorkbookCFG ties together the stored submissions to export and the
sheets to include. This is what gets passed to the Excel renderer.
"""

from typing import List
from pydantic import Field, model_validator

from .base import DomainModel
from .submission import InvestmentSubmission


class AuditWorkbookCFG(DomainModel):
    """Configuration for an allocation audit workbook.

    Sheets:
        - Tier Schedule: both tier tables with the allocation at each threshold
        - Submissions: one row per stored submission (always included)
        - Summary: totals and per-tier aggregation of the submissions

    Example:
        AuditWorkbookCFG(
            title="Q3 Offering Allocations",
            submissions=store.list_submissions(),
            include_tier_schedule=True,
        )
    """

    title: str = Field(
        default="Bonus Share Allocation Audit",
        min_length=1,
        description="Title written at the top of every sheet"
    )

    submissions: List[InvestmentSubmission] = Field(
        default_factory=list,
        description="Stored submissions to export"
    )

    include_tier_schedule: bool = Field(
        default=True,
        description="Add the tier schedule sheet"
    )

    include_summary: bool = Field(
        default=True,
        description="Add the summary sheet"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self):
        """Submission ids must be unique within one workbook."""
        ids = [submission.id for submission in self.submissions]
        duplicates = sorted({sid for sid in ids if ids.count(sid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate submission ids: {duplicates}")
        return self
