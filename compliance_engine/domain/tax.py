"""Progressive tax engine - marginal brackets plus conditional surcharge"""

from typing import List, Sequence

from compliance_engine.domain.models import TaxBracket, TaxConfig, TaxRequest, TaxResult
from compliance_engine.domain.validation import check_tax_request

HIGH_SURCHARGE_RATE = 0.05


def split_into_brackets(
    income: float,
    thresholds: Sequence[float],
    rates: Sequence[float],
) -> List[TaxBracket]:
    """
    Slice income across brackets and tax each slice at its marginal rate.

    Bracket i covers [lower_i, upper_i): lower_0 = 0, upper_i = thresholds[i],
    and the last bracket is open-ended. The slice falling in a bracket is
    max(0, min(income, upper) - lower).

    Returns one TaxBracket per rate, including brackets the income never
    reaches (taxed_amount 0).
    """
    lower_bounds = [0.0, *thresholds]
    brackets = []

    for index, rate in enumerate(rates):
        lower = lower_bounds[index]
        upper = thresholds[index] if index < len(thresholds) else None
        top = income if upper is None else min(income, upper)
        taxed_amount = max(0.0, top - lower)

        brackets.append(
            TaxBracket(
                index=index,
                lower_bound=lower,
                upper_bound=upper,
                taxed_amount=taxed_amount,
                rate=rate,
                tax=taxed_amount * rate,
            )
        )

    return brackets


def _describe_bracket(bracket: TaxBracket) -> str:
    if bracket.upper_bound is None:
        span = f"{bracket.lower_bound:.0f}+"
    else:
        span = f"{bracket.lower_bound:.0f}-{bracket.upper_bound:.0f}"
    return (
        f"Bracket {bracket.index + 1} ({span}): {bracket.taxed_amount:.2f} × "
        f"{bracket.rate * 100:.1f}% = {bracket.tax:.2f}"
    )


def calc_tax(request: TaxRequest, config: TaxConfig) -> TaxResult:
    """
    Calculate progressive tax with surcharge.

    subtotal = sum of per-bracket taxes. When subtotal strictly exceeds the
    surcharge threshold, surcharge = subtotal × surcharge_rate. The surcharge
    is mechanical and never produces a warning on its own.

    Example:
        income 40000, thresholds [10000], rates [10%, 20%]
        → 1000 + 6000 = 7000 > 5000 → +2% surcharge = 7140
    """
    check_tax_request(request)

    warnings: List[str] = []
    explanation = [f"Starting income: {request.income:.2f}"]

    brackets = split_into_brackets(request.income, config.thresholds, config.rates)
    explanation.extend(_describe_bracket(b) for b in brackets if b.taxed_amount > 0)

    subtotal = sum(b.tax for b in brackets)
    explanation.append(f"Subtotal tax: {subtotal:.2f}")

    if subtotal > config.surcharge_threshold:
        surcharge_amount = subtotal * config.surcharge_rate
        explanation.append(
            f"Surcharge applied (tax {subtotal:.2f} > {config.surcharge_threshold:.2f}): "
            f"{subtotal:.2f} × {config.surcharge_rate * 100:.1f}% = {surcharge_amount:.2f}"
        )
    else:
        surcharge_amount = 0.0
        explanation.append(f"No surcharge (tax {subtotal:.2f} ≤ {config.surcharge_threshold:.2f})")

    total = subtotal + surcharge_amount
    explanation.append(f"Final tax: {total:.2f}")

    if config.surcharge_rate > HIGH_SURCHARGE_RATE:
        warnings.append(f"High surcharge rate: {config.surcharge_rate * 100:.1f}%")

    return TaxResult(
        brackets=brackets,
        subtotal=subtotal,
        surcharge_amount=surcharge_amount,
        total=total,
        warnings=warnings,
        explanation=explanation,
    )
