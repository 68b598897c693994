"""Reporting blocks for offering audits.

This package contains the computation layer that turns tier tables and stored
submissions into DataFrames suitable for Excel rendering or other consumption.

Architecture:
    Schemas (data models) → Blocks (computation) → DataFrames (output)

Available blocks:
- TierScheduleBlock: Both tier tables with the allocation at each threshold
- AllocationBlock: Ledger, per-tier aggregation and totals for submissions

Usage:
    from offering_domain.blocks import AllocationBlock, BlockContext, BlockExecutor

    context = BlockContext()
    context.set("submissions", store.list_submissions())
    BlockExecutor([AllocationBlock()]).execute(context)

    ledger_df = context.get("allocation_ledger")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError
from .tier_schedule import TierScheduleBlock
from .allocation import AllocationBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "TierScheduleBlock",
    "AllocationBlock",
]
