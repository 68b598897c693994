"""Tests for the reducer-style investment form state.

Tests cover:
- Initial state and reset
- Step gating (can_go_to_step / go_to_step)
- Each step's update function, including recalculation on accreditation change
- Minimum-investment enforcement
- Immutability of previous states
- Building the final submission
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from offering_domain.calculator import calculate_investment
from offering_domain.errors import IncompleteFormError, InvalidArgument, MinimumInvestmentNotMet
from offering_domain.form_state import (
    InvestmentFormState,
    apply_amount_selected,
    apply_investor_information,
    apply_investor_profile,
    build_submission,
    can_go_to_step,
    go_to_step,
    initial_form_state,
    is_step_complete,
    mark_step_complete,
    reset_form,
)
from offering_domain.settings import OfferingSettings


@pytest.fixture
def completed_state(profile, individual_info) -> InvestmentFormState:
    state = initial_form_state()
    state = apply_investor_profile(state, profile)
    state = apply_amount_selected(state, Decimal("25000"))
    return apply_investor_information(state, individual_info)


class TestInitialState:

    def test_initial_state(self):
        state = initial_form_state()
        assert state.current_step == 1
        assert state.completed_steps == frozenset()
        assert state.investor_profile is None
        assert state.investor_information is None
        assert state.investment_amount.amount == Decimal("99500")
        assert state.investment_amount.tier.label == "SOVEREIGN"
        assert state.calculation == calculate_investment(Decimal("99500"), False)

    def test_default_amount_from_settings(self):
        settings = OfferingSettings(default_investment_amount=Decimal("5000"))
        state = initial_form_state(settings)
        assert state.investment_amount.amount == Decimal("5000")
        assert state.investment_amount.tier.label == "ELITE"

    def test_reset_returns_initial_state(self, completed_state):
        assert reset_form() == initial_form_state()
        assert reset_form() != completed_state


class TestStepGating:

    def test_only_step_one_reachable_at_start(self):
        state = initial_form_state()
        assert can_go_to_step(state, 1)
        assert not can_go_to_step(state, 2)
        assert not can_go_to_step(state, 3)

    def test_locked_step_leaves_state_unchanged(self):
        state = initial_form_state()
        assert go_to_step(state, 3) is state

    def test_unknown_step_is_never_reachable(self, completed_state):
        assert not can_go_to_step(completed_state, 4)

    def test_step_three_needs_steps_one_and_two(self):
        state = mark_step_complete(initial_form_state(), 2)
        assert can_go_to_step(state, 2) is False
        assert can_go_to_step(state, 3) is False
        state = mark_step_complete(state, 1)
        assert can_go_to_step(state, 3) is True

    def test_go_to_unlocked_step(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        moved = go_to_step(state, 2)
        assert moved.current_step == 2
        assert state.current_step == 1

    def test_mark_unknown_step(self):
        with pytest.raises(InvalidArgument, match="Unknown form step"):
            mark_step_complete(initial_form_state(), 4)


class TestInvestorProfileStep:

    def test_marks_step_one_complete(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        assert is_step_complete(state, 1)
        assert state.investor_profile == profile
        assert state.calculation == calculate_investment(Decimal("99500"), False)

    def test_accreditation_recomputes_calculation(self, accredited_profile):
        state = apply_investor_profile(initial_form_state(), accredited_profile)
        assert state.is_accredited
        assert state.investment_amount.tier.label == "PREMIER"
        assert state.calculation.bonus_percentage == 25
        assert state.calculation == calculate_investment(Decimal("99500"), True)

    def test_switching_accreditation_after_amount(self, profile, accredited_profile):
        state = apply_investor_profile(initial_form_state(), profile)
        state = apply_amount_selected(state, "25000")
        assert state.calculation.bonus_percentage == 80

        state = apply_investor_profile(state, accredited_profile)
        assert state.investment_amount.amount == Decimal("25000")
        assert state.investment_amount.tier.label == "ELITE"
        assert state.calculation.bonus_percentage == 15

    def test_profile_cannot_change_after_update(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        with pytest.raises(ValidationError, match="frozen"):
            profile.first_name = "Changed"
        assert state.investor_profile.first_name == "Ada"


class TestStateImmutability:
    """Nothing reachable from a state can be changed in place."""

    def test_accreditation_cannot_be_flipped_in_place(self, completed_state):
        with pytest.raises(ValidationError, match="frozen"):
            completed_state.investor_profile.is_accredited = True

        submission = build_submission(completed_state)
        assert submission.is_accredited is False
        assert submission.bonus_percentage == 80

    def test_second_investor_cannot_change_after_update(self, profile, joint_info):
        state = apply_investor_profile(initial_form_state(), profile)
        state = apply_amount_selected(state, Decimal("25000"))
        state = apply_investor_information(state, joint_info)

        with pytest.raises(ValidationError, match="frozen"):
            joint_info.second_investor.first_name = "Mallory"
        assert state.investor_information.second_investor.first_name == "Charles"

    def test_state_fields_cannot_be_assigned(self, completed_state):
        with pytest.raises(ValidationError, match="frozen"):
            completed_state.current_step = 3


class TestAmountStep:

    def test_selects_amount_and_tier(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        state = apply_amount_selected(state, Decimal("25000"))
        assert is_step_complete(state, 2)
        assert state.investment_amount.amount == Decimal("25000")
        assert state.investment_amount.tier.label == "TITANIUM"
        assert state.calculation.total_shares == 149999

    def test_uses_accredited_table(self, accredited_profile):
        state = apply_investor_profile(initial_form_state(), accredited_profile)
        state = apply_amount_selected(state, Decimal("200000"))
        assert state.investment_amount.tier.label == "TITANIUM"
        assert state.calculation.total_shares == 1199998

    def test_minimum_amount_accepted(self):
        state = apply_amount_selected(initial_form_state(), Decimal("999.90"))
        assert state.calculation.bonus_percentage == 0
        # Below every threshold the first tier is still reported
        assert state.investment_amount.tier.label == "MEMBER"

    def test_below_minimum_rejected(self):
        with pytest.raises(MinimumInvestmentNotMet, match="minimum investment not met") as excinfo:
            apply_amount_selected(initial_form_state(), Decimal("999.89"))
        assert isinstance(excinfo.value, InvalidArgument)
        assert excinfo.value.minimum == Decimal("999.90")

    def test_custom_minimum(self):
        settings = OfferingSettings(minimum_investment=Decimal("5000"))
        with pytest.raises(MinimumInvestmentNotMet):
            apply_amount_selected(initial_form_state(settings), Decimal("4999.99"), settings)

    def test_fractional_cents_rejected(self):
        with pytest.raises(InvalidArgument, match="whole cents"):
            apply_amount_selected(initial_form_state(), Decimal("1000.005"))

    def test_negative_rejected(self):
        with pytest.raises(InvalidArgument, match="non-negative"):
            apply_amount_selected(initial_form_state(), -5)

    def test_amount_beyond_default_precision(self):
        state = apply_amount_selected(initial_form_state(), Decimal("1e28"))
        assert is_step_complete(state, 2)
        assert state.investment_amount.tier.label == "SOVEREIGN"
        assert state.calculation.base_shares == 10**29 // 3

    def test_previous_state_is_untouched(self):
        original = initial_form_state()
        updated = apply_amount_selected(original, Decimal("1000"))
        assert original.completed_steps == frozenset()
        assert original.investment_amount.amount == Decimal("99500")
        assert updated is not original


class TestInvestorInformationStep:

    def test_marks_step_three_complete(self, joint_info):
        state = apply_investor_information(initial_form_state(), joint_info)
        assert is_step_complete(state, 3)
        assert state.investor_information.type == "joint"


class TestBuildSubmission:

    def test_complete_form(self, completed_state):
        submission = build_submission(completed_state)
        assert submission.first_name == "Ada"
        assert submission.investment_amount == Decimal("25000")
        assert submission.investor_type == "individual"
        assert submission.base_shares == 83333
        assert submission.bonus_shares == 66666
        assert submission.effective_share_price == Decimal("0.1667")

    def test_incomplete_form(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        with pytest.raises(IncompleteFormError, match="2, 3") as excinfo:
            build_submission(state)
        assert excinfo.value.missing_steps == (2, 3)

    def test_marked_step_without_data(self, profile):
        state = apply_investor_profile(initial_form_state(), profile)
        state = apply_amount_selected(state, Decimal("1000"))
        state = mark_step_complete(state, 3)
        with pytest.raises(IncompleteFormError) as excinfo:
            build_submission(state)
        assert excinfo.value.missing_steps == (3,)
