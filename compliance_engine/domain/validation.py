"""Input validation shared by all rule evaluations

Raw payloads (JSON-shaped dicts) are coerced into typed requests by the
parse_* functions; check_* functions enforce the range rules on typed
requests and are also called by each calculator on entry.
"""

import math
import unicodedata
from typing import Any, Mapping

from compliance_engine.domain.exceptions import ValidationError
from compliance_engine.domain.models import (
    HousingRequest,
    PenaltyRequest,
    ProposalType,
    TaxRequest,
    VotingRequest,
    WaterfallRequest,
)

MAX_INPUT_LENGTH = 100
MAX_CONTROL_CHARS = 2
MAX_ECHO_LENGTH = 50

# Formatting characters tolerated in numeric strings ("$1,200", "5%")
_NUMBER_NOISE = (",", "$", "€", "£", "¥", "%")

_TRUE_WORDS = {"true", "t", "yes", "y", "1", "on"}
_FALSE_WORDS = {"false", "f", "no", "n", "0", "off"}

_PROPOSAL_TYPES = {proposal.value for proposal in ProposalType}


def sanitize_for_message(raw: str) -> str:
    """
    Make user input safe to echo inside an error message.

    Long input is truncated to 47 characters plus "...". Line breaks and tabs
    become spaces; quotes, backslashes, angle brackets and anything
    non-printable become "?".
    """
    text = raw if len(raw) <= MAX_ECHO_LENGTH else raw[: MAX_ECHO_LENGTH - 3] + "..."

    cleaned = []
    for char in text:
        if char in "\n\r\t":
            cleaned.append(" ")
        elif char in "\"'`\\<>":
            cleaned.append("?")
        elif char.isascii() and char.isprintable():
            cleaned.append(char)
        else:
            cleaned.append("?")
    return "".join(cleaned)


def _screen(field: str, text: str) -> None:
    """Reject oversized or control-character-laden strings before parsing"""
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(field, f"input too long (max {MAX_INPUT_LENGTH} characters)")

    if "\0" in text:
        raise ValidationError(field, "input contains null bytes")

    control_count = sum(1 for char in text if unicodedata.category(char) == "Cc")
    if control_count > MAX_CONTROL_CHARS:
        raise ValidationError(field, "input contains too many control characters")


def _require(raw: Mapping[str, Any], field: str) -> Any:
    value = raw.get(field)
    if value is None:
        raise ValidationError(field, "required")
    return value


def _prepare_text(field: str, value: str, kind: str) -> str:
    text = value.strip()
    _screen(field, text)
    if not text:
        raise ValidationError(field, f"empty string cannot be parsed as {kind}")
    return text


def _plain_digits(text: str) -> str:
    # float() and int() also take "1_000" and non-ASCII digits such as "١٢"
    if "_" in text or not text.isascii():
        raise ValueError(text)
    return text


def parse_float(field: str, value: Any) -> float:
    """Coerce a number or numeric string to a finite float"""
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number, not a boolean", value)

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = _prepare_text(field, value, "number")
        cleaned = text
        for noise in _NUMBER_NOISE:
            cleaned = cleaned.replace(noise, "")
        try:
            number = float(_plain_digits(cleaned))
        except ValueError:
            safe = sanitize_for_message(text)
            raise ValidationError(field, f"cannot parse '{safe}' as a number", safe) from None
    else:
        raise ValidationError(field, "must be a number")

    if not math.isfinite(number):
        raise ValidationError(field, "must be a finite number", value)
    return number


def parse_int(field: str, value: Any) -> int:
    """Coerce an int, whole-valued float or integer string to int"""
    if isinstance(value, bool):
        raise ValidationError(field, "must be an integer, not a boolean", value)

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(field, f"expected integer, got float {value}", value)
        return int(value)

    if isinstance(value, str):
        text = _prepare_text(field, value, "integer")
        try:
            return int(_plain_digits(text.replace(",", "")))
        except ValueError:
            safe = sanitize_for_message(text)
            raise ValidationError(field, f"cannot parse '{safe}' as an integer", safe) from None

    raise ValidationError(field, "must be an integer")


def parse_bool(field: str, value: Any) -> bool:
    """Coerce a bool or a yes/no style string to bool"""
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        text = _prepare_text(field, value, "boolean")
        word = text.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        safe = sanitize_for_message(text)
        raise ValidationError(
            field,
            f"cannot parse '{safe}' as a boolean (expected: true/false, yes/no, 1/0)",
            safe,
        )

    raise ValidationError(field, "must be a boolean")


def parse_proposal_type(field: str, value: Any) -> ProposalType:
    if isinstance(value, ProposalType):
        return value

    if isinstance(value, str):
        text = value.strip()
        _screen(field, text)
        if text.lower() in _PROPOSAL_TYPES:
            return ProposalType(text.lower())
        safe = sanitize_for_message(text)
        raise ValidationError(field, f"invalid proposal type '{safe}' (must be 'general' or 'amendment')", safe)

    raise ValidationError(field, "must be 'general' or 'amendment'")


# Range checks on typed requests


def _non_negative(field: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValidationError(field, "must be a finite number", value)
    if value < 0:
        raise ValidationError(field, "must be >= 0", value)


def check_penalty_request(request: PenaltyRequest) -> None:
    _non_negative("days_late", request.days_late)


def check_tax_request(request: TaxRequest) -> None:
    _non_negative("income", request.income)


def check_voting_request(request: VotingRequest) -> None:
    if request.eligible_voters < 1:
        raise ValidationError("eligible_voters", "must be >= 1", request.eligible_voters)

    if request.turnout < 0:
        raise ValidationError("turnout", "must be >= 0", request.turnout)
    if request.turnout > request.eligible_voters:
        raise ValidationError("turnout", "cannot exceed eligible_voters", request.turnout)
    # A vote nobody took part in cannot be decided
    if request.turnout == 0:
        raise ValidationError("turnout", "must be >= 1 to decide a vote", request.turnout)

    if request.yes_votes < 0:
        raise ValidationError("yes_votes", "must be >= 0", request.yes_votes)
    if request.yes_votes > request.turnout:
        raise ValidationError("yes_votes", "cannot exceed turnout", request.yes_votes)

    if not isinstance(request.proposal_type, ProposalType):
        raise ValidationError("proposal_type", "must be 'general' or 'amendment'", request.proposal_type)


def check_waterfall_request(request: WaterfallRequest) -> None:
    _non_negative("cash_available", request.cash_available)
    _non_negative("senior_debt", request.senior_debt)
    _non_negative("junior_debt", request.junior_debt)


def check_housing_request(request: HousingRequest) -> None:
    _non_negative("ami", request.ami)
    _non_negative("income", request.income)
    if request.household_size < 1:
        raise ValidationError("household_size", "must be >= 1", request.household_size)


# Raw payload parsing


def parse_penalty_request(raw: Mapping[str, Any]) -> PenaltyRequest:
    request = PenaltyRequest(days_late=parse_float("days_late", _require(raw, "days_late")))
    check_penalty_request(request)
    return request


def parse_tax_request(raw: Mapping[str, Any]) -> TaxRequest:
    request = TaxRequest(income=parse_float("income", _require(raw, "income")))
    check_tax_request(request)
    return request


def parse_voting_request(raw: Mapping[str, Any]) -> VotingRequest:
    request = VotingRequest(
        eligible_voters=parse_int("eligible_voters", _require(raw, "eligible_voters")),
        turnout=parse_int("turnout", _require(raw, "turnout")),
        yes_votes=parse_int("yes_votes", _require(raw, "yes_votes")),
        proposal_type=parse_proposal_type("proposal_type", _require(raw, "proposal_type")),
    )
    check_voting_request(request)
    return request


def parse_waterfall_request(raw: Mapping[str, Any]) -> WaterfallRequest:
    request = WaterfallRequest(
        cash_available=parse_float("cash_available", _require(raw, "cash_available")),
        senior_debt=parse_float("senior_debt", _require(raw, "senior_debt")),
        junior_debt=parse_float("junior_debt", _require(raw, "junior_debt")),
    )
    check_waterfall_request(request)
    return request


def parse_housing_request(raw: Mapping[str, Any]) -> HousingRequest:
    request = HousingRequest(
        ami=parse_float("ami", _require(raw, "ami")),
        income=parse_float("income", _require(raw, "income")),
        household_size=parse_int("household_size", _require(raw, "household_size")),
        has_other_subsidy=parse_bool("has_other_subsidy", _require(raw, "has_other_subsidy")),
    )
    check_housing_request(request)
    return request
