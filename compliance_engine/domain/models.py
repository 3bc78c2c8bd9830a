"""Domain models - immutable dataclasses for rule requests, results and configuration"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from compliance_engine.domain.exceptions import ConfigurationError


class ProposalType(str, Enum):
    GENERAL = "general"
    AMENDMENT = "amendment"


# Configuration


def _require_non_negative(section: str, name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{section} {name} must be a non-negative number, got {value}")


@dataclass(frozen=True)
class PenaltyConfig:
    """Late penalty constants"""

    rate_per_day: float = 100.0
    cap: float = 1000.0
    interest_rate: float = 0.05

    def __post_init__(self) -> None:
        _require_non_negative("penalty", "rate_per_day", self.rate_per_day)
        _require_non_negative("penalty", "cap", self.cap)
        _require_non_negative("penalty", "interest_rate", self.interest_rate)


@dataclass(frozen=True)
class TaxConfig:
    """
    Progressive bracket layout.

    n ascending thresholds split income into n + 1 brackets, so exactly
    n + 1 rates are required. Checked once here so tax evaluations never see
    an inconsistent layout.
    """

    thresholds: Tuple[float, ...] = (10000.0,)
    rates: Tuple[float, ...] = (0.10, 0.20)
    surcharge_threshold: float = 5000.0
    surcharge_rate: float = 0.02

    def __post_init__(self) -> None:
        # Accept any sequence, store tuples
        object.__setattr__(self, "thresholds", tuple(self.thresholds))
        object.__setattr__(self, "rates", tuple(self.rates))

        if len(self.rates) != len(self.thresholds) + 1:
            raise ConfigurationError(
                f"Invalid bracket configuration: {len(self.rates)} rates for "
                f"{len(self.thresholds)} thresholds (should be {len(self.thresholds) + 1} rates)"
            )

        for threshold in self.thresholds:
            _require_non_negative("tax", "threshold", threshold)
        for rate in self.rates:
            _require_non_negative("tax", "rate", rate)

        if any(upper <= lower for lower, upper in zip(self.thresholds, self.thresholds[1:])):
            raise ConfigurationError("Tax thresholds must be in strictly ascending order")

        _require_non_negative("tax", "surcharge_threshold", self.surcharge_threshold)
        _require_non_negative("tax", "surcharge_rate", self.surcharge_rate)


@dataclass(frozen=True)
class HousingConfig:
    """Housing grant advisory settings"""

    close_margin: float = 0.05  # fraction of the adjusted threshold

    def __post_init__(self) -> None:
        _require_non_negative("housing", "close_margin", self.close_margin)
        if self.close_margin >= 1:
            raise ConfigurationError(f"housing close_margin must be below 1, got {self.close_margin}")


@dataclass(frozen=True)
class EngineConfig:
    """Read-only rule constants shared by every evaluation"""

    penalty: PenaltyConfig = field(default_factory=PenaltyConfig)
    tax: TaxConfig = field(default_factory=TaxConfig)
    housing: HousingConfig = field(default_factory=HousingConfig)


# Requests


@dataclass(frozen=True)
class PenaltyRequest:
    days_late: float


@dataclass(frozen=True)
class TaxRequest:
    income: float


@dataclass(frozen=True)
class VotingRequest:
    eligible_voters: int
    turnout: int
    yes_votes: int
    proposal_type: ProposalType


@dataclass(frozen=True)
class WaterfallRequest:
    cash_available: float
    senior_debt: float
    junior_debt: float


@dataclass(frozen=True)
class HousingRequest:
    ami: float
    income: float
    household_size: int
    has_other_subsidy: bool


# Results


@dataclass(frozen=True)
class PenaltyResult:
    """Penalty derivation: base -> capped -> interest -> total"""

    base_amount: float
    capped_amount: float
    interest_amount: float
    total: float
    warnings: List[str]
    explanation: List[str]


@dataclass(frozen=True)
class TaxBracket:
    """Tax owed on the slice of income falling in one bracket"""

    index: int
    lower_bound: float
    upper_bound: Optional[float]  # None for the open top bracket
    taxed_amount: float
    rate: float
    tax: float


@dataclass(frozen=True)
class TaxResult:
    brackets: List[TaxBracket]
    subtotal: float
    surcharge_amount: float
    total: float
    warnings: List[str]
    explanation: List[str]


@dataclass(frozen=True)
class VotingResult:
    passed: bool
    turnout_ratio: float
    approval_ratio: float
    warnings: List[str]
    explanation: List[str]


@dataclass(frozen=True)
class WaterfallResult:
    senior_paid: float
    junior_paid: float
    equity_paid: float
    warnings: List[str]
    explanation: List[str]


@dataclass(frozen=True)
class HousingResult:
    eligible: bool
    base_threshold: float
    adjusted_threshold: float
    reason: Optional[str]
    additional_requirements: List[str]
    warnings: List[str]
    explanation: List[str]
