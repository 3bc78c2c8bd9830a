"""POST /v1/{penalty,tax,voting,waterfall,housing-grant} - rule evaluation endpoints"""

import time
import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from compliance_engine.api.dependencies import get_engine_config, get_request_id
from compliance_engine.api.v1.schemas import (
    HousingRequestBody,
    HousingResponse,
    PenaltyRequestBody,
    PenaltyResponse,
    TaxRequestBody,
    TaxResponse,
    ValidationErrorDetail,
    VotingRequestBody,
    VotingResponse,
    WaterfallRequestBody,
    WaterfallResponse,
)
from compliance_engine.domain.engine import evaluate
from compliance_engine.domain.exceptions import ValidationError
from compliance_engine.domain.models import EngineConfig
from compliance_engine.infrastructure.observability.logging import log_evaluation
from compliance_engine.infrastructure.observability.metrics import record_evaluation

router = APIRouter()

_ERROR_RESPONSES = {422: {"model": ValidationErrorDetail, "description": "Invalid input field"}}


def _run(operation: str, body: BaseModel, request: Request, config: EngineConfig) -> dict[str, Any]:
    """
    Evaluate one rule and record its outcome.

    Validation failures become 422 responses naming the field and the
    violated constraint.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = evaluate(operation, body.model_dump(), config)
    except ValidationError as e:
        record_evaluation(operation, "invalid")
        logging.warning(
            f"Validation failed: {e}",
            extra={"request_id": request_id, "operation": operation, "field": e.field},
        )
        raise HTTPException(
            status_code=422,
            detail={"field": e.field, "constraint": e.constraint, "message": str(e)},
        )

    duration_ms = (time.time() - start_time) * 1000
    record_evaluation(operation, "ok", len(result.warnings))
    log_evaluation(request_id, operation, "ok", len(result.warnings), duration_ms)

    return asdict(result)


@router.post("/penalty", response_model=PenaltyResponse, responses=_ERROR_RESPONSES)
def penalty(
    request_body: PenaltyRequestBody,
    request: Request,
    config: EngineConfig = Depends(get_engine_config),
):
    """Late penalty: min(days_late × rate_per_day, cap), plus interest"""
    return PenaltyResponse(**_run("calc_penalty", request_body, request, config))


@router.post("/tax", response_model=TaxResponse, responses=_ERROR_RESPONSES)
def tax(
    request_body: TaxRequestBody,
    request: Request,
    config: EngineConfig = Depends(get_engine_config),
):
    """Progressive bracket tax with surcharge above the configured threshold"""
    return TaxResponse(**_run("calc_tax", request_body, request, config))


@router.post("/voting", response_model=VotingResponse, responses=_ERROR_RESPONSES)
def voting(
    request_body: VotingRequestBody,
    request: Request,
    config: EngineConfig = Depends(get_engine_config),
):
    """Turnout (≥60%) and approval check for general or amendment proposals"""
    return VotingResponse(**_run("check_voting", request_body, request, config))


@router.post("/waterfall", response_model=WaterfallResponse, responses=_ERROR_RESPONSES)
def waterfall(
    request_body: WaterfallRequestBody,
    request: Request,
    config: EngineConfig = Depends(get_engine_config),
):
    """Distribute cash to senior debt, then junior debt, then equity"""
    return WaterfallResponse(**_run("distribute_waterfall", request_body, request, config))


@router.post("/housing-grant", response_model=HousingResponse, responses=_ERROR_RESPONSES)
def housing_grant(
    request_body: HousingRequestBody,
    request: Request,
    config: EngineConfig = Depends(get_engine_config),
):
    """Housing grant eligibility against 60% of AMI, adjusted for large households"""
    return HousingResponse(**_run("check_housing_grant", request_body, request, config))
