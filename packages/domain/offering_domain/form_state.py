"""Multi-step investment form state.

The form has three steps:
    1. Investor profile (contact details, accreditation, consent)
    2. Investment amount
    3. Investor information (address and holding-type details)

State is an immutable InvestmentFormState. Every update is a plain function
that takes a state and returns a new one, so transitions can be tested without
any UI:

    state = initial_form_state()
    state = apply_investor_profile(state, profile)
    state = apply_amount_selected(state, Decimal("25000"))
    state = apply_investor_information(state, info)
    submission = build_submission(state)

Step gating: step 1 is always reachable, step 2 requires step 1, step 3
requires steps 1 and 2. The calculation is recomputed whenever the amount or
the accreditation flag changes.
"""

import logging
from decimal import Decimal, localcontext
from typing import FrozenSet, Literal, Optional

from pydantic import Field

from .calculator import AmountLike, amount_context, calculate_investment, resolve_tier, to_amount
from .errors import IncompleteFormError, InvalidArgument, MinimumInvestmentNotMet
from .schemas import (
    InvestmentAmountSelection,
    InvestmentCalculation,
    InvestmentSubmissionCreate,
    InvestorInformation,
    InvestorProfile,
    ValueModel,
)
from .settings import OfferingSettings, get_settings

log = logging.getLogger(__name__)

FormStep = Literal[1, 2, 3]
FORM_STEPS = (1, 2, 3)

CENT = Decimal("0.01")


class InvestmentFormState(ValueModel):
    """Snapshot of the form after some sequence of updates."""

    current_step: FormStep = 1

    completed_steps: FrozenSet[FormStep] = Field(default_factory=frozenset)

    investor_profile: Optional[InvestorProfile] = None

    investment_amount: Optional[InvestmentAmountSelection] = None

    investor_information: Optional[InvestorInformation] = None

    calculation: Optional[InvestmentCalculation] = Field(
        default=None,
        description="Calculation for the current amount and accreditation"
    )

    @property
    def is_accredited(self) -> bool:
        return bool(self.investor_profile and self.investor_profile.is_accredited)


def _check_step(step: int) -> int:
    if step not in FORM_STEPS:
        raise InvalidArgument(f"Unknown form step: {step!r}")
    return step


def _select_amount(amount: Decimal, is_accredited: bool) -> dict:
    return {
        "investment_amount": InvestmentAmountSelection(
            amount=amount,
            tier=resolve_tier(amount, is_accredited),
        ),
        "calculation": calculate_investment(amount, is_accredited),
    }


def initial_form_state(settings: Optional[OfferingSettings] = None) -> InvestmentFormState:
    """Fresh form: on step 1, nothing complete, default amount preselected.

    The preselected amount is priced with the non-accredited table because no
    profile has been entered yet.
    """
    settings = settings or get_settings()
    return InvestmentFormState(**_select_amount(settings.default_investment_amount, False))


def reset_form(settings: Optional[OfferingSettings] = None) -> InvestmentFormState:
    return initial_form_state(settings)


def mark_step_complete(state: InvestmentFormState, step: int) -> InvestmentFormState:
    _check_step(step)
    return state.model_copy(update={"completed_steps": state.completed_steps | {step}})


def is_step_complete(state: InvestmentFormState, step: int) -> bool:
    return step in state.completed_steps


def can_go_to_step(state: InvestmentFormState, step: int) -> bool:
    if step == 1:
        return True
    if step == 2:
        return is_step_complete(state, 1)
    if step == 3:
        return is_step_complete(state, 1) and is_step_complete(state, 2)
    return False


def go_to_step(state: InvestmentFormState, step: int) -> InvestmentFormState:
    """Move to a step if its prerequisites are complete; otherwise return state unchanged."""
    if not can_go_to_step(state, step):
        log.debug("step %s is locked (completed=%s)", step, sorted(state.completed_steps))
        return state
    return state.model_copy(update={"current_step": step})


def apply_investor_profile(state: InvestmentFormState, profile: InvestorProfile) -> InvestmentFormState:
    """Store the step 1 profile and mark step 1 complete.

    If an amount is already selected, the tier and calculation are recomputed
    for the (possibly changed) accreditation status.
    """
    update = {"investor_profile": profile}
    if state.investment_amount is not None:
        update.update(_select_amount(state.investment_amount.amount, profile.is_accredited))

    new_state = state.model_copy(update=update)
    return mark_step_complete(new_state, 1)


def apply_amount_selected(
    state: InvestmentFormState,
    amount: AmountLike,
    settings: Optional[OfferingSettings] = None,
) -> InvestmentFormState:
    """Store the step 2 amount, recompute the calculation and mark step 2 complete.

    Raises:
        InvalidArgument: If amount is negative, not numeric, or has fractional cents
        MinimumInvestmentNotMet: If amount is below the configured minimum
    """
    settings = settings or get_settings()
    amount = to_amount(amount)

    with localcontext(amount_context(amount)):
        fractional_cents = amount != amount.quantize(CENT)
    if fractional_cents:
        raise InvalidArgument(f"Investment amount must be whole cents, got {amount}")
    if amount < settings.minimum_investment:
        raise MinimumInvestmentNotMet(amount, settings.minimum_investment)

    new_state = state.model_copy(update=_select_amount(amount, state.is_accredited))
    return mark_step_complete(new_state, 2)


def apply_investor_information(state: InvestmentFormState, information: InvestorInformation) -> InvestmentFormState:
    """Store the step 3 investor information and mark step 3 complete."""
    new_state = state.model_copy(update={"investor_information": information})
    return mark_step_complete(new_state, 3)


def build_submission(state: InvestmentFormState) -> InvestmentSubmissionCreate:
    """Assemble the submission record from a completed form.

    Raises:
        IncompleteFormError: If any step is incomplete or its data is missing
    """
    present = {
        1: state.investor_profile is not None,
        2: state.investment_amount is not None and state.calculation is not None,
        3: state.investor_information is not None,
    }
    missing = [step for step in FORM_STEPS if not (is_step_complete(state, step) and present[step])]
    if missing:
        raise IncompleteFormError(missing)

    return InvestmentSubmissionCreate.from_form(
        state.investor_profile,
        state.investor_information,
        state.calculation,
    )
