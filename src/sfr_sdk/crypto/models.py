"""Pydantic models for the SFR token (crypto) API.

Token amounts (``SFRAmount``) travel as decimal strings with up to eight
fractional digits and are kept as ``str`` here. Most responses share the
:class:`ApiResponse` envelope (``timestamp``, ``responseId``, ``status``);
endpoint-specific fields stay on the model as extras.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ------------------------------------------------------------------ #
# Enums
# ------------------------------------------------------------------ #


class ResponseStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    PARTIAL_SUCCESS = "PARTIAL_SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


class TransactionType(str, enum.Enum):
    EARN = "EARN"
    SPEND = "SPEND"
    COLLECT = "COLLECT"
    BURN = "BURN"
    TRANSFER = "TRANSFER"


class CollectionDestination(str, enum.Enum):
    BURN = "BURN"
    RESERVE = "RESERVE"
    REDISTRIBUTE = "REDISTRIBUTE"


class ProposalType(str, enum.Enum):
    POLICY = "POLICY"
    PARAMETER = "PARAMETER"
    FEATURE = "FEATURE"
    GOVERNANCE = "GOVERNANCE"


class ProposalStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    VOTING = "VOTING"
    PASSED = "PASSED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class VoteChoice(str, enum.Enum):
    YES = "YES"
    NO = "NO"
    ABSTAIN = "ABSTAIN"


class CouncilStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    RESIGNED = "RESIGNED"
    REMOVED = "REMOVED"


class StatsPeriod(str, enum.Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class OracleDataType(str, enum.Enum):
    PRICE = "PRICE"
    VOLUME = "VOLUME"
    LIQUIDITY = "LIQUIDITY"
    RATE = "RATE"


class ParameterType(str, enum.Enum):
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    JSON = "JSON"


class TriggerType(str, enum.Enum):
    MANUAL = "MANUAL"
    AUTO_AI = "AUTO_AI"
    ORACLE = "ORACLE"
    GOVERNANCE = "GOVERNANCE"


# ------------------------------------------------------------------ #
# Envelopes
# ------------------------------------------------------------------ #


class ApiResponse(_CamelModel):
    """Response envelope. Payload fields are reachable as attributes or via ``model_extra``."""

    timestamp: Optional[str] = None
    response_id: Optional[str] = None
    status: Optional[ResponseStatus] = None


class Pagination(_CamelModel):
    page: int
    limit: int
    total_pages: int = 0
    total_count: int = 0
    has_next: bool = False
    has_previous: bool = False


class PagedResponse(ApiResponse):
    data: list[dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination


class ApiErrorBody(ApiResponse):
    """Error body of the token API: ``{error, message, details?, path, errorId?}``."""

    error: Optional[str] = None
    message: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    path: Optional[str] = None
    error_id: Optional[str] = None


# ------------------------------------------------------------------ #
# Request DTOs
# ------------------------------------------------------------------ #


class TransferRequest(_CamelModel):
    from_user_id: str
    to_user_id: str
    amount: str
    reason: str
    note: Optional[str] = None


class RewardIssueRequest(_CamelModel):
    user_id: str
    activity_score: float
    evaluation_score: float
    reward_reason: str
    force_issue: Optional[bool] = None


class RewardCalculateRequest(_CamelModel):
    user_id: str
    activity_score: float
    evaluation_score: float
    target_date: Optional[str] = None


class DailyDistributionRequest(_CamelModel):
    target_date: str
    dry_run: Optional[bool] = None
    force_redistribution: Optional[bool] = None


class CollectionRequest(_CamelModel):
    user_id: str
    force_collection: Optional[bool] = None
    collection_rate: Optional[float] = None
    collection_reason: Optional[str] = None


class MonthlyCollectionRequest(_CamelModel):
    target_month: str
    dry_run: Optional[bool] = None
    collection_threshold: Optional[str] = None


class MarketData(_CamelModel):
    price: Optional[float] = None
    volume: Optional[float] = None
    liquidity: Optional[float] = None


class BurnDecisionRequest(_CamelModel):
    trigger_source: str
    market_data: Optional[MarketData] = None


class CouncilAppointRequest(_CamelModel):
    user_id: str
    start_date: str
    end_date: str
    appointment_reason: str
    voting_power: Optional[float] = None


class CreateProposalRequest(_CamelModel):
    title: str
    description: str
    proposal_type: ProposalType
    voting_duration_hours: Optional[int] = None
    quorum_required: Optional[float] = None
    approval_threshold: Optional[float] = None


class VoteRequest(_CamelModel):
    vote_choice: VoteChoice
    comment: Optional[str] = None


class OracleFeedUpdateRequest(_CamelModel):
    source: str
    data_type: OracleDataType
    value: str
    confidence: Optional[float] = None
    metadata: Optional[dict[str, Any]] = None


class ParameterUpdateRequest(_CamelModel):
    parameter_value: str
    update_reason: str
    force_update: Optional[bool] = None
