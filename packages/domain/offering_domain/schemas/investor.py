"""Investor data collected by the multi-step form.

Step 1 collects an InvestorProfile (contact details, accreditation, consent).
Step 2 collects an InvestmentAmountSelection.
Step 3 collects InvestorInformation, whose shape depends on how the investment
is held (individual, joint, corporation, trust or IRA).

All of them are frozen: a form state holding one can never change after the
update that stored it.
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import EmailStr, Field, field_validator

from .base import ValueModel, MoneyAmount
from .tiers import InvestmentTier

InvestorType = Literal["individual", "joint", "corporation", "trust", "ira"]

PHONE_PATTERN = r'^\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})$'


# =============================================================================
# Step 1: Investor Profile
# =============================================================================

class InvestorProfile(ValueModel):
    """Contact details and accreditation status of the primary investor."""

    first_name: str = Field(min_length=1, max_length=50)

    last_name: str = Field(min_length=1, max_length=50)

    email: EmailStr

    phone: str = Field(
        pattern=PHONE_PATTERN,
        description="US phone number, e.g. '(555) 123-4567' or '555.123.4567'"
    )

    is_accredited: bool = Field(
        description="Accredited investors use the accredited tier table"
    )

    consent_given: bool = Field(
        description="Investor consented to the privacy policy (must be True)"
    )

    @field_validator('consent_given')
    @classmethod
    def require_consent(cls, value: bool) -> bool:
        if not value:
            raise ValueError("You must give consent to continue")
        return value


# =============================================================================
# Step 2: Investment Amount
# =============================================================================

class InvestmentAmountSelection(ValueModel):
    """Selected investment amount and the tier it resolved to."""

    amount: MoneyAmount
    tier: InvestmentTier


# =============================================================================
# Step 3: Investor Information
# =============================================================================

class Address(ValueModel):
    """Postal address fields shared by every investor type."""

    street_address: str = Field(min_length=1)
    apartment_unit: Optional[str] = None
    city: str = Field(min_length=1)
    zip_code: str = Field(min_length=5)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)


class SecondInvestor(Address):
    """Co-holder of a joint investment."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    date_of_birth: str = Field(min_length=1)
    tin_or_ssn: str = Field(min_length=9)


class IndividualInvestor(Address):
    type: Literal["individual"] = "individual"
    date_of_birth: str = Field(min_length=1)
    tin_or_ssn: str = Field(min_length=9)


class JointInvestor(Address):
    """Investment held jointly with a second investor.

    Example:
        joint_holding_type="Joint Tenants with Right of Survivorship"
    """

    type: Literal["joint"] = "joint"
    joint_holding_type: str = Field(min_length=1)
    date_of_birth: str = Field(min_length=1)
    tin_or_ssn: str = Field(min_length=9)
    second_investor: SecondInvestor


class CorporationInvestor(Address):
    type: Literal["corporation"] = "corporation"
    entity_name: str = Field(min_length=1)
    entity_type: str = Field(min_length=1)
    tax_id: str = Field(min_length=9)
    authorized_signatory: str = Field(min_length=1)


class TrustInvestor(Address):
    type: Literal["trust"] = "trust"
    entity_name: str = Field(min_length=1, description="Trust name")
    tax_id: str = Field(min_length=9)
    authorized_signatory: str = Field(min_length=1)


class IRAInvestor(Address):
    type: Literal["ira"] = "ira"
    custodian_name: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    ira_type: str = Field(min_length=1, description="e.g. 'Traditional', 'Roth'")
    date_of_birth: str = Field(min_length=1)
    tin_or_ssn: str = Field(min_length=9)


# =============================================================================
# Discriminated Union
# =============================================================================

InvestorInformation = Annotated[
    Union[
        IndividualInvestor,
        JointInvestor,
        CorporationInvestor,
        TrustInvestor,
        IRAInvestor,
    ],
    Field(discriminator='type')
]
"""Discriminated union of all investor information shapes.

The 'type' field selects which schema applies, so a joint investor without a
second_investor, or a corporation without a tax_id, fails validation.

Usage:
    from pydantic import TypeAdapter

    info = TypeAdapter(InvestorInformation).validate_python({
        "type": "trust",
        "street_address": "1 Main St",
        ...
    })
"""
