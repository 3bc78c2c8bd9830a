"""Late penalty calculation - daily rate, capped, then interest-adjusted"""

import math
from typing import List

from compliance_engine.domain.exceptions import ValidationError
from compliance_engine.domain.models import PenaltyConfig, PenaltyRequest, PenaltyResult
from compliance_engine.domain.validation import check_penalty_request

# Interest above this rate is flagged for review
HIGH_INTEREST_RATE = 0.10


def calc_penalty(request: PenaltyRequest, config: PenaltyConfig) -> PenaltyResult:
    """
    Calculate a late penalty with cap and interest.

    Steps (fixed order):
    1. base = days_late × rate_per_day
    2. capped = min(base, cap), warning when the cap bites
    3. interest = capped × interest_rate
    4. total = capped + interest

    No rounding is applied; formatting is left to the caller.

    Example:
        12 days × 100/day = 1200 → capped at 1000 → +5% interest = 1050
    """
    check_penalty_request(request)

    warnings: List[str] = []
    explanation: List[str] = []

    base_amount = request.days_late * config.rate_per_day
    if not math.isfinite(base_amount):
        raise ValidationError("days_late", "too large: base penalty overflows", request.days_late)
    explanation.append(
        f"Base penalty: {request.days_late:g} days × {config.rate_per_day:g} = {base_amount:.2f}"
    )

    capped_amount = min(base_amount, config.cap)
    if base_amount > config.cap:
        explanation.append(f"Applied cap: {base_amount:.2f} capped at {config.cap:.2f}")
        warnings.append(f"Base penalty {base_amount:.2f} exceeded cap of {config.cap:.2f}")
    else:
        explanation.append(f"No cap applied ({base_amount:.2f} ≤ {config.cap:.2f})")

    interest_amount = capped_amount * config.interest_rate
    explanation.append(
        f"Interest: {capped_amount:.2f} × {config.interest_rate * 100:.1f}% = {interest_amount:.2f}"
    )

    total = capped_amount + interest_amount
    explanation.append(f"Final penalty: {capped_amount:.2f} + {interest_amount:.2f} = {total:.2f}")

    if config.interest_rate > HIGH_INTEREST_RATE:
        warnings.append(f"High interest rate: {config.interest_rate * 100:.1f}%")

    return PenaltyResult(
        base_amount=base_amount,
        capped_amount=capped_amount,
        interest_amount=interest_amount,
        total=total,
        warnings=warnings,
        explanation=explanation,
    )
