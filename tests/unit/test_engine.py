"""Unit tests for the operation dispatcher"""

import pytest
from compliance_engine.domain.engine import OPERATIONS, evaluate
from compliance_engine.domain.exceptions import UnknownOperationError, ValidationError
from compliance_engine.domain.models import (
    HousingResult,
    PenaltyResult,
    TaxResult,
    VotingResult,
    WaterfallResult,
)


def test_all_five_operations_registered():
    assert set(OPERATIONS) == {
        "calc_penalty",
        "calc_tax",
        "check_voting",
        "distribute_waterfall",
        "check_housing_grant",
    }


def test_evaluate_dispatches_each_operation(engine_config):
    """Each operation parses its raw payload and returns its result type"""
    penalty = evaluate("calc_penalty", {"days_late": "12"}, engine_config)
    tax = evaluate("calc_tax", {"income": "40,000"}, engine_config)
    voting = evaluate(
        "check_voting",
        {"eligible_voters": 150, "turnout": 95, "yes_votes": 52, "proposal_type": "general"},
        engine_config,
    )
    waterfall = evaluate(
        "distribute_waterfall",
        {"cash_available": 15_000_000, "senior_debt": 8_000_000, "junior_debt": 12_000_000},
        engine_config,
    )
    housing = evaluate(
        "check_housing_grant",
        {"ami": 60000, "household_size": 6, "income": 35000, "has_other_subsidy": False},
        engine_config,
    )

    assert isinstance(penalty, PenaltyResult) and penalty.total == pytest.approx(1050.0)
    assert isinstance(tax, TaxResult) and tax.total == pytest.approx(7140.0)
    assert isinstance(voting, VotingResult) and voting.passed is True
    assert isinstance(waterfall, WaterfallResult) and waterfall.junior_paid == 7_000_000
    assert isinstance(housing, HousingResult) and housing.eligible is True


def test_evaluate_is_deterministic(engine_config):
    raw = {"cash_available": 100, "senior_debt": 60, "junior_debt": 60}

    assert evaluate("distribute_waterfall", raw, engine_config) == evaluate(
        "distribute_waterfall", raw, engine_config
    )


def test_evaluate_unknown_operation(engine_config):
    with pytest.raises(UnknownOperationError, match="calc_fee"):
        evaluate("calc_fee", {}, engine_config)


def test_evaluate_propagates_validation_error(engine_config):
    with pytest.raises(ValidationError) as exc_info:
        evaluate("calc_tax", {"income": -5}, engine_config)

    assert exc_info.value.field == "income"
