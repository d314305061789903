"""Client and utilities for the SFR token (crypto) API."""

from sfr_sdk.crypto.client import (
    SfrCryptoApiClient,
    create_dev_crypto_client,
    create_prod_crypto_client,
    create_sfr_crypto_client,
    get_next_page,
    get_previous_page,
    has_next_page,
    has_previous_page,
    is_api_success,
)
from sfr_sdk.crypto.models import (
    ApiErrorBody,
    ApiResponse,
    BurnDecisionRequest,
    CollectionDestination,
    CollectionRequest,
    CouncilAppointRequest,
    CouncilStatus,
    CreateProposalRequest,
    DailyDistributionRequest,
    MarketData,
    MonthlyCollectionRequest,
    OracleDataType,
    OracleFeedUpdateRequest,
    PagedResponse,
    Pagination,
    ParameterType,
    ParameterUpdateRequest,
    ProposalStatus,
    ProposalType,
    ResponseStatus,
    RewardCalculateRequest,
    RewardIssueRequest,
    StatsPeriod,
    TransactionType,
    TransferRequest,
    TriggerType,
    VoteChoice,
    VoteRequest,
)

__all__ = [
    "ApiErrorBody",
    "ApiResponse",
    "BurnDecisionRequest",
    "CollectionDestination",
    "CollectionRequest",
    "CouncilAppointRequest",
    "CouncilStatus",
    "CreateProposalRequest",
    "DailyDistributionRequest",
    "MarketData",
    "MonthlyCollectionRequest",
    "OracleDataType",
    "OracleFeedUpdateRequest",
    "PagedResponse",
    "Pagination",
    "ParameterType",
    "ParameterUpdateRequest",
    "ProposalStatus",
    "ProposalType",
    "ResponseStatus",
    "RewardCalculateRequest",
    "RewardIssueRequest",
    "SfrCryptoApiClient",
    "StatsPeriod",
    "TransactionType",
    "TransferRequest",
    "TriggerType",
    "VoteChoice",
    "VoteRequest",
    "create_dev_crypto_client",
    "create_prod_crypto_client",
    "create_sfr_crypto_client",
    "get_next_page",
    "get_previous_page",
    "has_next_page",
    "has_previous_page",
    "is_api_success",
]
