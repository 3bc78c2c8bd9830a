"""Rule engine entry point - parse a raw payload and run the named operation"""

from typing import Any, Callable, Dict, Mapping, NamedTuple

from compliance_engine.domain import validation
from compliance_engine.domain.exceptions import UnknownOperationError
from compliance_engine.domain.housing import check_housing_grant
from compliance_engine.domain.models import EngineConfig
from compliance_engine.domain.penalty import calc_penalty
from compliance_engine.domain.tax import calc_tax
from compliance_engine.domain.voting import check_voting
from compliance_engine.domain.waterfall import distribute_waterfall


class Operation(NamedTuple):
    parse: Callable[[Mapping[str, Any]], Any]
    run: Callable[[Any, EngineConfig], Any]


OPERATIONS: Dict[str, Operation] = {
    "calc_penalty": Operation(
        validation.parse_penalty_request,
        lambda request, config: calc_penalty(request, config.penalty),
    ),
    "calc_tax": Operation(
        validation.parse_tax_request,
        lambda request, config: calc_tax(request, config.tax),
    ),
    "check_voting": Operation(
        validation.parse_voting_request,
        lambda request, config: check_voting(request),
    ),
    "distribute_waterfall": Operation(
        validation.parse_waterfall_request,
        lambda request, config: distribute_waterfall(request),
    ),
    "check_housing_grant": Operation(
        validation.parse_housing_request,
        lambda request, config: check_housing_grant(request, config.housing),
    ),
}


def evaluate(operation: str, raw: Mapping[str, Any], config: EngineConfig) -> Any:
    """
    Validate a raw payload and evaluate it with the named rule.

    Raises:
        UnknownOperationError: operation is not one of OPERATIONS
        ValidationError: payload is missing a field or a value is out of range
    """
    try:
        handler = OPERATIONS[operation]
    except KeyError:
        raise UnknownOperationError(
            f"Unknown operation '{operation}' (expected one of: {', '.join(OPERATIONS)})"
        ) from None

    request = handler.parse(raw)
    return handler.run(request, config)
