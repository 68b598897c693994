"""Investment calculation engine.

Maps an investment amount and accreditation status to a tiered bonus-share
allocation. Everything here is a pure function over immutable tier tables:
the same inputs always produce an equal InvestmentCalculation.

Algorithm:
    1. Pick the tier table by accreditation flag
    2. bonus% = bonus of the highest tier with threshold <= amount (0 if none)
    3. base shares = floor(amount / SHARE_PRICE)
    4. bonus shares = floor(base * bonus% / 100)
    5. effective price = amount / total shares (SHARE_PRICE when no shares),
       rounded to 4 decimal places with ROUND_HALF_UP

All arithmetic uses Decimal. Floats are converted through str() so that
binary artifacts never leak into share counts (0.90 / 0.30 is exactly 3).
"""

import logging
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Union

from .errors import InvalidArgument
from .schemas.calculation import InvestmentCalculation
from .schemas.tiers import (
    ACCREDITED_TIERS,
    NON_ACCREDITED_TIERS,
    SHARE_PRICE,
    InvestmentTier,
    TierTable,
)

log = logging.getLogger(__name__)

# Effective price precision (4 dp, HALF_UP)
PRICE_QUANTUM = Decimal("0.0001")

AmountLike = Union[Decimal, int, float, str]


def amount_context(amount: Decimal) -> Context:
    """Decimal context precise enough for exact share arithmetic on amount.

    The default context keeps 28 significant digits, so integer division of
    larger amounts would raise instead of returning a share count.
    """
    context = getcontext().copy()
    context.prec = max(context.prec, amount.adjusted() + 8)
    return context


def to_amount(value: AmountLike) -> Decimal:
    """Coerce an investment amount to Decimal and validate it.

    Args:
        value: Amount as Decimal, int, float or numeric string

    Returns:
        The amount as a Decimal

    Raises:
        InvalidArgument: If value is not numeric, not finite, or negative
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"Investment amount must be numeric, got {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidArgument(f"Investment amount must be numeric, got {value!r}") from None
    else:
        raise InvalidArgument(f"Investment amount must be numeric, got {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidArgument(f"Investment amount must be finite, got {value!r}")
    if amount < 0:
        raise InvalidArgument(f"Investment amount must be non-negative, got {amount}")
    return amount


def tier_table_for(is_accredited: bool) -> TierTable:
    """Select the tier table for an accreditation status."""
    return ACCREDITED_TIERS if is_accredited else NON_ACCREDITED_TIERS


def resolve_tier(amount: AmountLike, is_accredited: bool = False) -> InvestmentTier:
    """Return the tier that determines the bonus for this amount.

    If the amount is below every threshold, the table's first tier is returned
    (not None). Callers that need to know whether the tier actually applies
    should compare the amount to ``tier.threshold_amount`` or use
    ``calculate_investment(...).bonus_percentage``.

    Raises:
        InvalidArgument: If amount is negative or not numeric
    """
    table = tier_table_for(is_accredited)
    return table.qualifying_tier(to_amount(amount)) or table.first


def calculate_investment(amount: AmountLike, is_accredited: bool = False) -> InvestmentCalculation:
    """Compute the share allocation for an investment.

    Args:
        amount: Investment amount (>= 0). Minimum-investment rules are the caller's concern.
        is_accredited: Selects the accredited tier table when True

    Returns:
        A new immutable InvestmentCalculation

    Raises:
        InvalidArgument: If amount is negative or not numeric

    Example:
        >>> calc = calculate_investment(Decimal("25000"))
        >>> calc.bonus_percentage, calc.base_shares, calc.bonus_shares
        (80, 83333, 66666)
        >>> calc.effective_price
        Decimal('0.1667')
    """
    amount = to_amount(amount)
    tier = tier_table_for(is_accredited).qualifying_tier(amount)
    bonus_percentage = tier.bonus_percentage if tier else 0

    with localcontext(amount_context(amount)):
        # Decimal // is exact integer division; equals floor for non-negative amounts
        base_shares = int(amount // SHARE_PRICE)
        bonus_shares = base_shares * bonus_percentage // 100
        total_shares = base_shares + bonus_shares

        if total_shares > 0:
            effective_price = amount / Decimal(total_shares)
        else:
            effective_price = SHARE_PRICE
        effective_price = effective_price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)

    calculation = InvestmentCalculation(
        base_shares=base_shares,
        bonus_shares=bonus_shares,
        total_shares=total_shares,
        effective_price=effective_price,
        bonus_percentage=bonus_percentage,
        total_investment=amount,
    )
    log.debug(
        "calculated amount=%s accredited=%s bonus=%s%% total_shares=%s",
        amount, is_accredited, bonus_percentage, total_shares,
    )
    return calculation
