"""Pydantic schemas for API request/response validation

Request fields accept either JSON numbers/booleans or strings ("1,200",
"$5000", "yes"); the domain validator does the coercion and range checks.
"""

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from typing import List, Optional, Union

# Strict members keep JSON values as sent (no true -> 1 or 1 -> true);
# the domain validator rejects the wrong kind with a field-level error.
RawNumber = Union[StrictInt, StrictFloat, StrictStr, StrictBool]
RawBool = Union[StrictBool, StrictStr, StrictInt, StrictFloat]


class PenaltyRequestBody(BaseModel):
    """Request body for POST /v1/penalty"""

    days_late: RawNumber = Field(..., description="Number of days late")


class TaxRequestBody(BaseModel):
    """Request body for POST /v1/tax"""

    income: RawNumber = Field(..., description="Total income")


class VotingRequestBody(BaseModel):
    """Request body for POST /v1/voting"""

    eligible_voters: RawNumber = Field(..., description="Total number of eligible voters")
    turnout: RawNumber = Field(..., description="Number of people who voted")
    yes_votes: RawNumber = Field(..., description="Number of yes votes")
    proposal_type: str = Field(..., description="'general' or 'amendment'")


class WaterfallRequestBody(BaseModel):
    """Request body for POST /v1/waterfall"""

    cash_available: RawNumber = Field(..., description="Cash available for distribution")
    senior_debt: RawNumber = Field(..., description="Senior debt owed")
    junior_debt: RawNumber = Field(..., description="Junior debt owed")


class HousingRequestBody(BaseModel):
    """Request body for POST /v1/housing-grant"""

    ami: RawNumber = Field(..., description="Area Median Income")
    income: RawNumber = Field(..., description="Household income")
    household_size: RawNumber = Field(..., description="Household size")
    has_other_subsidy: RawBool = Field(..., description="true/false, or a string such as \"yes\", \"no\", \"1\", \"0\"")


class PenaltyResponse(BaseModel):
    """Response for POST /v1/penalty"""

    base_amount: float
    capped_amount: float
    interest_amount: float
    total: float
    warnings: List[str]
    explanation: List[str]


class TaxBracketSchema(BaseModel):
    """Tax owed on one bracket"""

    index: int
    lower_bound: float
    upper_bound: Optional[float] = None
    taxed_amount: float
    rate: float
    tax: float


class TaxResponse(BaseModel):
    """Response for POST /v1/tax"""

    brackets: List[TaxBracketSchema]
    subtotal: float
    surcharge_amount: float
    total: float
    warnings: List[str]
    explanation: List[str]


class VotingResponse(BaseModel):
    """Response for POST /v1/voting"""

    passed: bool
    turnout_ratio: float
    approval_ratio: float
    warnings: List[str]
    explanation: List[str]


class WaterfallResponse(BaseModel):
    """Response for POST /v1/waterfall"""

    senior_paid: float
    junior_paid: float
    equity_paid: float
    warnings: List[str]
    explanation: List[str]


class HousingResponse(BaseModel):
    """Response for POST /v1/housing-grant"""

    eligible: bool
    base_threshold: float
    adjusted_threshold: float
    reason: Optional[str] = None
    additional_requirements: List[str]
    warnings: List[str]
    explanation: List[str]


class ValidationErrorDetail(BaseModel):
    """Body of a 422 raised by the rule validator"""

    field: str
    constraint: str
    message: str
