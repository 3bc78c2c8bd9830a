"""Housing grant eligibility - AMI-based income threshold with subsidy exclusivity"""

from typing import List

from compliance_engine.domain.models import HousingConfig, HousingRequest, HousingResult
from compliance_engine.domain.validation import check_housing_request

AMI_FRACTION = 0.60
LARGE_HOUSEHOLD_SIZE = 4  # households above this size get the adjustment
LARGE_HOUSEHOLD_MULTIPLIER = 1.10

REASON_OTHER_SUBSIDY = "has another housing subsidy"
REASON_INCOME_TOO_HIGH = "income exceeds adjusted threshold"

REQUIREMENT_NO_OTHER_SUBSIDY = "Must not have any other housing subsidies or assistance"
REQUIREMENT_PROOF_OF_INCOME = "Must provide proof of income documentation"
REQUIREMENT_FIRST_TIME_BUYER = "Must be a first-time homebuyer or meet other program criteria"
REQUIREMENT_LARGE_HOUSEHOLD = "Large household size may require additional documentation"


def income_thresholds(ami: float, household_size: int) -> tuple[float, float]:
    """Return (base_threshold, adjusted_threshold) for a household"""
    base_threshold = ami * AMI_FRACTION
    if household_size > LARGE_HOUSEHOLD_SIZE:
        return base_threshold, base_threshold * LARGE_HOUSEHOLD_MULTIPLIER
    return base_threshold, base_threshold


def check_housing_grant(request: HousingRequest, config: HousingConfig) -> HousingResult:
    """
    Evaluate housing grant eligibility.

    Checks run in order and stop at the first failure:
    1. Another housing subsidy → ineligible
    2. Income above the adjusted threshold → ineligible
    3. Otherwise eligible (income equal to the threshold qualifies)

    Thresholds:
    - base = 60% of AMI
    - adjusted = base × 1.10 for households larger than 4, else base

    An eligible income within config.close_margin of the adjusted threshold
    adds an advisory warning; it never changes the outcome.
    """
    check_housing_request(request)

    warnings: List[str] = []
    additional_requirements: List[str] = []
    explanation = [
        f"Area Median Income (AMI): {request.ami:.2f}",
        f"Household size: {request.household_size}",
        f"Household income: {request.income:.2f}",
        f"Has other subsidy: {'Yes' if request.has_other_subsidy else 'No'}",
    ]

    base_threshold, adjusted_threshold = income_thresholds(request.ami, request.household_size)

    if request.has_other_subsidy:
        explanation.append("Subsidy check: FAILED (already has another subsidy)")
        explanation.append("Result: NOT ELIGIBLE")
        return HousingResult(
            eligible=False,
            base_threshold=base_threshold,
            adjusted_threshold=adjusted_threshold,
            reason=REASON_OTHER_SUBSIDY,
            additional_requirements=[REQUIREMENT_NO_OTHER_SUBSIDY],
            warnings=warnings,
            explanation=explanation,
        )

    explanation.append("Subsidy check: PASSED (no other subsidies)")
    explanation.append(f"Base income threshold: 60% of AMI = {base_threshold:.2f}")
    if request.household_size > LARGE_HOUSEHOLD_SIZE:
        explanation.append(
            f"Household size adjustment: {request.household_size} > {LARGE_HOUSEHOLD_SIZE}, "
            f"threshold increased by 10% to {adjusted_threshold:.2f}"
        )
    else:
        explanation.append(
            f"No household size adjustment needed ({request.household_size} ≤ {LARGE_HOUSEHOLD_SIZE})"
        )

    if request.income > adjusted_threshold:
        explanation.append(
            f"Income eligibility: {request.income:.2f} > {adjusted_threshold:.2f} - FAILED"
        )
        explanation.append("Result: NOT ELIGIBLE")
        return HousingResult(
            eligible=False,
            base_threshold=base_threshold,
            adjusted_threshold=adjusted_threshold,
            reason=REASON_INCOME_TOO_HIGH,
            additional_requirements=additional_requirements,
            warnings=warnings,
            explanation=explanation,
        )

    explanation.append(f"Income eligibility: {request.income:.2f} ≤ {adjusted_threshold:.2f} - PASSED")
    explanation.append("Result: ELIGIBLE")

    additional_requirements.append(REQUIREMENT_PROOF_OF_INCOME)
    additional_requirements.append(REQUIREMENT_FIRST_TIME_BUYER)
    if request.household_size > LARGE_HOUSEHOLD_SIZE:
        additional_requirements.append(REQUIREMENT_LARGE_HOUSEHOLD)

    if request.income >= adjusted_threshold * (1 - config.close_margin):
        warnings.append(
            f"Income is close to threshold (within {config.close_margin * 100:.0f}%) "
            f"- verify all deductions are included"
        )

    return HousingResult(
        eligible=True,
        base_threshold=base_threshold,
        adjusted_threshold=adjusted_threshold,
        reason=None,
        additional_requirements=additional_requirements,
        warnings=warnings,
        explanation=explanation,
    )
