"""Offering domain schemas.

This package contains all Pydantic models for the offering domain layer:
- Base types and conventions
- Bonus tiers and the two static tier tables
- Investment calculation results
- Investor data collected by the form
- Submission records
- Audit workbook configuration

Usage:
    from offering_domain.schemas import (
        InvestmentTier, NON_ACCREDITED_TIERS, InvestmentCalculation,
        InvestorProfile, InvestmentSubmission, AuditWorkbookCFG
    )
"""

# Base types
from .base import (
    DomainModel,
    ValueModel,
    MoneyAmount,
    SharePrice,
    ShareCount,
    BonusPercentage,
)

# Tiers
from .tiers import (
    SHARE_PRICE,
    InvestmentTier,
    TierTable,
    NON_ACCREDITED_TIERS,
    ACCREDITED_TIERS,
)

# Calculation
from .calculation import InvestmentCalculation

# Investor data
from .investor import (
    InvestorType,
    InvestorProfile,
    InvestmentAmountSelection,
    Address,
    SecondInvestor,
    IndividualInvestor,
    JointInvestor,
    CorporationInvestor,
    TrustInvestor,
    IRAInvestor,
    InvestorInformation,
)

# Submissions
from .submission import (
    InvestmentSubmissionCreate,
    InvestmentSubmission,
)

# Workbook
from .workbook import AuditWorkbookCFG

__all__ = [
    # Base types
    "DomainModel",
    "ValueModel",
    "MoneyAmount",
    "SharePrice",
    "ShareCount",
    "BonusPercentage",
    # Tiers
    "SHARE_PRICE",
    "InvestmentTier",
    "TierTable",
    "NON_ACCREDITED_TIERS",
    "ACCREDITED_TIERS",
    # Calculation
    "InvestmentCalculation",
    # Investor data
    "InvestorType",
    "InvestorProfile",
    "InvestmentAmountSelection",
    "Address",
    "SecondInvestor",
    "IndividualInvestor",
    "JointInvestor",
    "CorporationInvestor",
    "TrustInvestor",
    "IRAInvestor",
    "InvestorInformation",
    # Submissions
    "InvestmentSubmissionCreate",
    "InvestmentSubmission",
    # Workbook
    "AuditWorkbookCFG",
]
