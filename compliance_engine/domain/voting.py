"""Proposal vote check - quorum (turnout) then type-specific approval threshold"""

from fractions import Fraction
from typing import List

from compliance_engine.domain.models import ProposalType, VotingRequest, VotingResult
from compliance_engine.domain.validation import check_voting_request

# Thresholds are exact fractions; ratios are compared without float rounding
MIN_TURNOUT = Fraction(3, 5)
LOW_TURNOUT = Fraction(7, 10)
GENERAL_APPROVAL = Fraction(1, 2)  # strictly greater
AMENDMENT_APPROVAL = Fraction(2, 3)  # greater or equal


def _meets_approval(proposal_type: ProposalType, approval: Fraction) -> bool:
    if proposal_type is ProposalType.AMENDMENT:
        return approval >= AMENDMENT_APPROVAL
    return approval > GENERAL_APPROVAL


def check_voting(request: VotingRequest) -> VotingResult:
    """
    Decide whether a proposal passes.

    Rules:
    - turnout / eligible must be at least 60%, otherwise the proposal fails
      whatever the yes count
    - general: yes / turnout > 50%
    - amendment: yes / turnout ≥ two-thirds

    A passed vote with turnout below 70% carries a low turnout warning.
    """
    check_voting_request(request)

    warnings: List[str] = []
    explanation: List[str] = []

    turnout = Fraction(request.turnout, request.eligible_voters)
    approval = Fraction(request.yes_votes, request.turnout)
    turnout_ratio = float(turnout)
    approval_ratio = float(approval)

    explanation.append(
        f"Turnout: {request.turnout} out of {request.eligible_voters} eligible voters "
        f"({turnout_ratio * 100:.1f}%)"
    )

    if turnout < MIN_TURNOUT:
        explanation.append("Turnout requirement: ≥60% - FAILED")
        explanation.append(
            f"Proposal fails due to insufficient turnout "
            f"({(float(MIN_TURNOUT) - turnout_ratio) * 100:.1f} points short)"
        )
        return VotingResult(
            passed=False,
            turnout_ratio=turnout_ratio,
            approval_ratio=approval_ratio,
            warnings=warnings,
            explanation=explanation,
        )

    explanation.append("Turnout requirement: ≥60% - PASSED")
    explanation.append(
        f"Yes votes: {request.yes_votes} out of {request.turnout} ({approval_ratio * 100:.1f}%)"
    )

    passed = _meets_approval(request.proposal_type, approval)
    outcome = "PASSED" if passed else "FAILED"
    if request.proposal_type is ProposalType.AMENDMENT:
        explanation.append("Amendment requirement: ≥66.7% (two-thirds)")
        explanation.append(f"Vote threshold: {approval_ratio * 100:.1f}% ≥ 66.7% - {outcome}")
    else:
        explanation.append("General proposal requirement: >50%")
        explanation.append(f"Vote threshold: {approval_ratio * 100:.1f}% > 50% - {outcome}")

    explanation.append(f"Final result: Proposal {'PASSES' if passed else 'FAILS'}")

    if passed and turnout < LOW_TURNOUT:
        warnings.append("Low turnout (below 70%)")
    if request.yes_votes == 0:
        warnings.append("No yes votes recorded")

    return VotingResult(
        passed=passed,
        turnout_ratio=turnout_ratio,
        approval_ratio=approval_ratio,
        warnings=warnings,
        explanation=explanation,
    )
