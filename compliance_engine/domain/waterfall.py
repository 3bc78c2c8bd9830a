"""Cash waterfall - strict-priority allocation: senior debt, junior debt, equity"""

from typing import List

from compliance_engine.domain.models import WaterfallRequest, WaterfallResult
from compliance_engine.domain.validation import check_waterfall_request


def distribute_waterfall(request: WaterfallRequest) -> WaterfallResult:
    """
    Allocate available cash across claims in strict seniority order.

    senior_paid = min(cash, senior_debt)
    junior_paid = min(cash - senior_paid, junior_debt)
    equity_paid = whatever is left

    Every unit of cash lands in exactly one bucket, so
    senior_paid + junior_paid + equity_paid == cash_available, exactly for
    whole-number amounts and to float rounding otherwise.

    Warnings (independent, may fire together):
    - senior or junior debt underpaid, with the exact shortfall
    - cash available below total debt owed

    Example:
        cash 15M, senior 8M, junior 12M → senior 8M, junior 7M, equity 0,
        junior underpaid by 5M
    """
    check_waterfall_request(request)

    warnings: List[str] = []
    explanation = [f"Starting cash: {request.cash_available:.2f}"]

    senior_paid = min(request.cash_available, request.senior_debt)
    remaining = request.cash_available - senior_paid

    if request.senior_debt > 0:
        if senior_paid < request.senior_debt:
            shortfall = request.senior_debt - senior_paid
            explanation.append(
                f"Senior debt: partially paid ({senior_paid:.2f} of {request.senior_debt:.2f})"
            )
            warnings.append(f"Senior debt underpaid by {shortfall:.2f}")
        else:
            explanation.append(f"Senior debt: {request.senior_debt:.2f} fully paid")
    else:
        explanation.append("No senior debt to pay")
    explanation.append(f"Remaining after senior: {remaining:.2f}")

    junior_paid = min(remaining, request.junior_debt)
    remaining -= junior_paid

    if request.junior_debt > 0:
        if junior_paid < request.junior_debt:
            shortfall = request.junior_debt - junior_paid
            if junior_paid > 0:
                explanation.append(
                    f"Junior debt: partially paid ({junior_paid:.2f} of {request.junior_debt:.2f})"
                )
            else:
                explanation.append("Junior debt: no funds available")
            warnings.append(f"Junior debt underpaid by {shortfall:.2f}")
        else:
            explanation.append(f"Junior debt: {request.junior_debt:.2f} fully paid")
    else:
        explanation.append("No junior debt to pay")
    explanation.append(f"Remaining for equity: {remaining:.2f}")

    equity_paid = remaining
    if equity_paid > 0:
        explanation.append(f"Equity distribution: {equity_paid:.2f}")
    else:
        explanation.append("No funds available for equity")

    total_debt = request.senior_debt + request.junior_debt
    if request.cash_available < total_debt:
        warnings.append(
            f"Insufficient cash: {request.cash_available:.2f} available vs "
            f"{total_debt:.2f} total debt owed"
        )

    return WaterfallResult(
        senior_paid=senior_paid,
        junior_paid=junior_paid,
        equity_paid=equity_paid,
        warnings=warnings,
        explanation=explanation,
    )
