"""Offering Domain Engine - bonus-share calculation and investor form logic.

This package provides the domain layer for a securities offering with tiered
bonus shares:
- Investment calculation engine (tier selection, base/bonus/total shares)
- Investor data schemas and submission records
- Reducer-style form state for the three-step investment form
- In-memory submission store
- Reporting blocks for allocation audits

The domain layer is designed to be:
- Framework-agnostic (no web dependencies)
- Pure where it matters (the calculator has no state and no I/O)
- Testable (plain functions over Pydantic models)
"""

from .schemas import *  # noqa: F403, F401
from .calculator import (  # noqa: F401
    calculate_investment,
    resolve_tier,
    tier_table_for,
    to_amount,
)
from .errors import (  # noqa: F401
    OfferingError,
    InvalidArgument,
    MinimumInvestmentNotMet,
    IncompleteFormError,
    SubmissionNotFound,
)

__version__ = "0.1.0"
