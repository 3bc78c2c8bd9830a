"""Unit tests for raw payload parsing and input screening"""

import pytest
from compliance_engine.domain.exceptions import ValidationError
from compliance_engine.domain.models import ProposalType
from compliance_engine.domain.validation import (
    parse_bool,
    parse_float,
    parse_housing_request,
    parse_int,
    parse_penalty_request,
    parse_voting_request,
    parse_waterfall_request,
    sanitize_for_message,
)


def test_parse_float_accepts_formatted_strings():
    """Thousands separators, currency and percent signs are stripped"""
    assert parse_float("income", "40,000") == 40000.0
    assert parse_float("income", " $1,250.50 ") == 1250.5
    assert parse_float("income", "€300") == 300.0
    assert parse_float("income", "12%") == 12.0
    assert parse_float("income", 7) == 7.0


def test_parse_float_rejects_garbage():
    with pytest.raises(ValidationError) as exc_info:
        parse_float("income", "abc")

    assert exc_info.value.field == "income"
    assert "cannot parse 'abc' as a number" in exc_info.value.constraint


@pytest.mark.parametrize("value", ["", "   ", "nan", "inf", True, None, [1]])
def test_parse_float_rejects_non_numbers(value):
    with pytest.raises(ValidationError):
        parse_float("income", value)


def test_parse_int_accepts_whole_floats_and_strings():
    assert parse_int("turnout", 95) == 95
    assert parse_int("turnout", 95.0) == 95
    assert parse_int("turnout", "1,500") == 1500


@pytest.mark.parametrize("value", [95.5, "95.5", "ninety", False])
def test_parse_int_rejects_fractions_and_words(value):
    with pytest.raises(ValidationError):
        parse_int("turnout", value)


@pytest.mark.parametrize("text", ["1_000", "١٢", "１２"])
def test_parse_float_rejects_underscores_and_non_ascii_digits(text):
    with pytest.raises(ValidationError) as exc_info:
        parse_float("income", text)

    assert exc_info.value.field == "income"
    assert "as a number" in exc_info.value.constraint


@pytest.mark.parametrize("text", ["1_500", "٩٥"])
def test_parse_int_rejects_underscores_and_non_ascii_digits(text):
    with pytest.raises(ValidationError) as exc_info:
        parse_int("turnout", text)

    assert "as an integer" in exc_info.value.constraint


@pytest.mark.parametrize("value", [1, 0, 1.0])
def test_parse_bool_rejects_numbers(value):
    with pytest.raises(ValidationError) as exc_info:
        parse_bool("has_other_subsidy", value)

    assert exc_info.value.constraint == "must be a boolean"


@pytest.mark.parametrize("text", ["true", "T", "Yes", "y", "1", "ON"])
def test_parse_bool_truthy_words(text):
    assert parse_bool("has_other_subsidy", text) is True


@pytest.mark.parametrize("text", ["false", "F", "No", "n", "0", "off"])
def test_parse_bool_falsy_words(text):
    assert parse_bool("has_other_subsidy", text) is False


def test_parse_bool_rejects_unknown_word():
    with pytest.raises(ValidationError, match="as a boolean"):
        parse_bool("has_other_subsidy", "maybe")


def test_input_length_limit():
    with pytest.raises(ValidationError, match="too long"):
        parse_float("income", "1" * 101)


def test_null_byte_rejected():
    with pytest.raises(ValidationError, match="null bytes"):
        parse_float("income", "100\x00")


def test_control_character_limit():
    with pytest.raises(ValidationError, match="control characters"):
        parse_float("income", "1\x01\x02\x0300")


def test_sanitize_for_message_escapes_dangerous_characters():
    assert sanitize_for_message('a"b\'c`d\\e<f>g') == "a?b?c?d?e?f?g"
    assert sanitize_for_message("line\nbreak\ttab") == "line break tab"
    assert sanitize_for_message("café") == "caf?"


def test_sanitize_for_message_truncates():
    text = "x" * 60
    assert sanitize_for_message(text) == "x" * 47 + "..."


def test_error_message_never_echoes_raw_markup():
    with pytest.raises(ValidationError) as exc_info:
        parse_float("income", "<script>")

    assert "<" not in exc_info.value.constraint
    assert "?script?" in exc_info.value.constraint


def test_parse_penalty_request_requires_field():
    with pytest.raises(ValidationError) as exc_info:
        parse_penalty_request({})

    assert exc_info.value.field == "days_late"
    assert exc_info.value.constraint == "required"


def test_parse_penalty_request_rejects_negative():
    with pytest.raises(ValidationError, match="must be >= 0"):
        parse_penalty_request({"days_late": "-3"})


def test_parse_voting_request_mixed_types():
    request = parse_voting_request(
        {"eligible_voters": "150", "turnout": 95.0, "yes_votes": 52, "proposal_type": " Amendment "}
    )

    assert request.eligible_voters == 150
    assert request.turnout == 95
    assert request.yes_votes == 52
    assert request.proposal_type is ProposalType.AMENDMENT


def test_parse_voting_request_unknown_proposal_type():
    with pytest.raises(ValidationError) as exc_info:
        parse_voting_request({"eligible_voters": 10, "turnout": 8, "yes_votes": 5, "proposal_type": "budget"})

    assert exc_info.value.field == "proposal_type"
    assert "budget" in exc_info.value.constraint


def test_parse_waterfall_request_strings():
    request = parse_waterfall_request(
        {"cash_available": "15,000,000", "senior_debt": "$8,000,000", "junior_debt": 12_000_000}
    )

    assert request.cash_available == 15_000_000
    assert request.senior_debt == 8_000_000


def test_parse_housing_request():
    request = parse_housing_request(
        {"ami": 65000, "income": "40000", "household_size": "7", "has_other_subsidy": "yes"}
    )

    assert request.ami == 65000.0
    assert request.income == 40000.0
    assert request.household_size == 7
    assert request.has_other_subsidy is True
