"""Shared fixtures for the domain and excel test suites."""

from decimal import Decimal

import pytest

from offering_domain.calculator import calculate_investment
from offering_domain.schemas import (
    IndividualInvestor,
    InvestmentSubmissionCreate,
    InvestorProfile,
    JointInvestor,
    SecondInvestor,
)
from offering_domain.settings import get_settings
from offering_domain.storage import InMemorySubmissionStore


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Settings are cached per process; read them from a clean environment in every test."""
    for name in ("OFFERING_MINIMUM_INVESTMENT", "OFFERING_DEFAULT_INVESTMENT_AMOUNT",
                 "OFFERING_LOG_LEVEL", "OFFERING_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_profile(is_accredited: bool = False, first_name: str = "Ada") -> InvestorProfile:
    return InvestorProfile(
        first_name=first_name,
        last_name="Lovelace",
        email=f"{first_name.lower()}@example.com",
        phone="(555) 123-4567",
        is_accredited=is_accredited,
        consent_given=True,
    )


def build_individual_info() -> IndividualInvestor:
    return IndividualInvestor(
        street_address="12 Analytical Way",
        city="Springfield",
        zip_code="62701",
        state="IL",
        country="United States",
        date_of_birth="1990-12-10",
        tin_or_ssn="123-45-6789",
    )


def build_joint_info() -> JointInvestor:
    return JointInvestor(
        street_address="12 Analytical Way",
        apartment_unit="4B",
        city="Springfield",
        zip_code="62701",
        state="IL",
        country="United States",
        joint_holding_type="Joint Tenants with Right of Survivorship",
        date_of_birth="1990-12-10",
        tin_or_ssn="123-45-6789",
        second_investor=SecondInvestor(
            first_name="Charles",
            last_name="Babbage",
            street_address="12 Analytical Way",
            city="Springfield",
            zip_code="62701",
            state="IL",
            country="United States",
            date_of_birth="1991-12-26",
            tin_or_ssn="987-65-4321",
        ),
    )


def build_submission(amount, is_accredited: bool = False, first_name: str = "Ada") -> InvestmentSubmissionCreate:
    return InvestmentSubmissionCreate.from_form(
        build_profile(is_accredited, first_name),
        build_individual_info(),
        calculate_investment(Decimal(amount), is_accredited),
    )


@pytest.fixture
def profile() -> InvestorProfile:
    return build_profile()


@pytest.fixture
def accredited_profile() -> InvestorProfile:
    return build_profile(is_accredited=True)


@pytest.fixture
def individual_info() -> IndividualInvestor:
    return build_individual_info()


@pytest.fixture
def joint_info() -> JointInvestor:
    return build_joint_info()


@pytest.fixture
def make_submission():
    return build_submission


@pytest.fixture
def populated_store() -> InMemorySubmissionStore:
    """Store with three submissions: $1,000 and $25,000 non-accredited, $200,000 accredited."""
    store = InMemorySubmissionStore()
    store.create_submission(build_submission("1000", first_name="Ada"))
    store.create_submission(build_submission("25000", first_name="Grace"))
    store.create_submission(build_submission("200000", is_accredited=True, first_name="Alan"))
    return store
