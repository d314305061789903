"""Client for the SFR token API: balances, rewards, collections, governance,
statistics, oracle feeds and audit parameters.

Every call goes through the shared
:class:`~sfr_sdk.client.executor.RequestExecutor`, so the token API gets
the same header pipeline, retry policy and error normalization as the
learning API.

Example::

    async with create_dev_crypto_client(token="jwt") as crypto:
        balance = await crypto.get_user_balance(user_id)
        print(balance.currentBalance)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from sfr_sdk.client.executor import DebugSink, RequestExecutor, Sleep
from sfr_sdk.config import CRYPTO, DEVELOPMENT, PRODUCTION, preset_config
from sfr_sdk.crypto.models import (
    ApiResponse,
    BurnDecisionRequest,
    CollectionDestination,
    CollectionRequest,
    CouncilAppointRequest,
    CreateProposalRequest,
    DailyDistributionRequest,
    MonthlyCollectionRequest,
    OracleDataType,
    OracleFeedUpdateRequest,
    PagedResponse,
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
    VoteRequest,
)
from sfr_sdk.models import ClientConfig, HealthStatus


def _query(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Common list parameters plus endpoint-specific filters, in wire names."""
    params: dict[str, Any] = {"page": page, "limit": limit, "fromDate": from_date, "toDate": to_date}
    params.update(extra)
    return params


class SfrCryptoApiClient:
    """Typed access to the ``/api/v1`` token endpoints.

    Args:
        config: Connection parameters.
        transport: Optional :mod:`httpx` transport forwarded to the executor.
        sleep: Backoff sleep forwarded to the executor.
        debug_sink: Trace sink forwarded to the executor.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleep] = None,
        debug_sink: Optional[DebugSink] = None,
    ) -> None:
        kwargs: dict[str, Any] = {"transport": transport, "debug_sink": debug_sink}
        if sleep is not None:
            kwargs["sleep"] = sleep
        self._executor = RequestExecutor(config, **kwargs)

    async def __aenter__(self) -> SfrCryptoApiClient:
        await self._executor.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._executor.aclose()

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def set_auth_token(self, token: str) -> None:
        self._executor.set_access_token(token)

    def remove_auth_token(self) -> None:
        self._executor.clear_access_token()

    async def health_check(self) -> HealthStatus:
        return await self._executor.health_check()

    def get_config(self) -> ClientConfig:
        return self._executor.get_config()

    async def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return ApiResponse.model_validate(await self._executor.get(path, params=params))

    async def _get_page(self, path: str, params: Optional[Mapping[str, Any]] = None) -> PagedResponse:
        return PagedResponse.model_validate(await self._executor.get(path, params=params))

    async def _post(self, path: str, body: Any) -> ApiResponse:
        return ApiResponse.model_validate(await self._executor.post(path, body))

    # ------------------------------------------------------------------ #
    # Token management
    # ------------------------------------------------------------------ #

    async def get_user_balance(self, user_id: str) -> ApiResponse:
        return await self._get(f"/tokens/balance/{user_id}")

    async def get_balance_history(
        self,
        user_id: str,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> PagedResponse:
        return await self._get_page(
            f"/tokens/balance/{user_id}/history",
            _query(page, limit, from_date, to_date, transactionType=transaction_type),
        )

    async def transfer_tokens(self, request: TransferRequest) -> ApiResponse:
        return await self._post("/tokens/transfer", request)

    # ------------------------------------------------------------------ #
    # Rewards
    # ------------------------------------------------------------------ #

    async def issue_reward(self, request: RewardIssueRequest) -> ApiResponse:
        return await self._post("/rewards/issue", request)

    async def calculate_reward(self, request: RewardCalculateRequest) -> ApiResponse:
        """Estimate a reward without issuing it."""
        return await self._post("/rewards/calculate", request)

    async def distribute_daily(self, request: DailyDistributionRequest) -> ApiResponse:
        return await self._post("/rewards/distribute", request)

    async def get_reward_history(
        self,
        user_id: str,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> PagedResponse:
        return await self._get_page(
            f"/rewards/history/{user_id}", _query(page, limit, from_date, to_date)
        )

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #

    async def collect_tokens(self, request: CollectionRequest) -> ApiResponse:
        return await self._post("/collections/collect", request)

    async def monthly_collection(self, request: MonthlyCollectionRequest) -> ApiResponse:
        return await self._post("/collections/monthly", request)

    async def burn_decision(self, request: BurnDecisionRequest) -> ApiResponse:
        """Ask the burn/reserve decision engine to rule on collected tokens."""
        return await self._post("/collections/burn-decision", request)

    async def get_collection_history(
        self,
        user_id: str,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        destination: Optional[CollectionDestination] = None,
    ) -> PagedResponse:
        return await self._get_page(
            f"/collections/history/{user_id}",
            _query(page, limit, from_date, to_date, destination=destination),
        )

    # ------------------------------------------------------------------ #
    # Governance
    # ------------------------------------------------------------------ #

    async def get_council_members(self) -> ApiResponse:
        return await self._get("/governance/council")

    async def appoint_council_member(self, request: CouncilAppointRequest) -> ApiResponse:
        return await self._post("/governance/council/appoint", request)

    async def create_proposal(self, request: CreateProposalRequest) -> ApiResponse:
        return await self._post("/governance/proposals", request)

    async def get_proposals(
        self,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        status: Optional[ProposalStatus] = None,
        proposal_type: Optional[ProposalType] = None,
    ) -> PagedResponse:
        return await self._get_page(
            "/governance/proposals",
            _query(page, limit, from_date, to_date, status=status, proposalType=proposal_type),
        )

    async def get_proposal(self, proposal_id: str) -> ApiResponse:
        return await self._get(f"/governance/proposals/{proposal_id}")

    async def vote(self, proposal_id: str, request: VoteRequest) -> ApiResponse:
        return await self._post(f"/governance/proposals/{proposal_id}/vote", request)

    async def get_user_votes(
        self,
        user_id: str,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> PagedResponse:
        return await self._get_page(
            f"/governance/votes/{user_id}", _query(page, limit, from_date, to_date)
        )

    # ------------------------------------------------------------------ #
    # Statistics
    # ------------------------------------------------------------------ #

    async def get_stats_overview(self) -> ApiResponse:
        return await self._get("/statistics/overview")

    async def get_circulation_stats(
        self, period: StatsPeriod, from_date: str, to_date: str
    ) -> ApiResponse:
        return await self._get(
            "/statistics/circulation",
            {"period": period, "fromDate": from_date, "toDate": to_date},
        )

    async def get_reward_stats(self, from_date: str, to_date: str, group_by: str) -> ApiResponse:
        """Reward totals grouped by ``day``, ``week`` or ``month``."""
        return await self._get(
            "/statistics/rewards",
            {"fromDate": from_date, "toDate": to_date, "groupBy": group_by},
        )

    async def get_top_holders(self, limit: int = 100) -> ApiResponse:
        return await self._get("/statistics/top-holders", {"limit": limit})

    # ------------------------------------------------------------------ #
    # Oracle and audit
    # ------------------------------------------------------------------ #

    async def get_oracle_feeds(
        self, data_type: Optional[OracleDataType] = None, source: Optional[str] = None
    ) -> ApiResponse:
        return await self._get("/oracle/feeds", {"dataType": data_type, "source": source})

    async def update_oracle_feed(self, request: OracleFeedUpdateRequest) -> ApiResponse:
        return await self._post("/oracle/feeds", request)

    async def get_system_parameters(self) -> ApiResponse:
        return await self._get("/audit/parameters")

    async def update_system_parameter(
        self, parameter_id: str, request: ParameterUpdateRequest
    ) -> ApiResponse:
        data = await self._executor.put(f"/audit/parameters/{parameter_id}", request)
        return ApiResponse.model_validate(data)

    async def get_adjustment_logs(
        self,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        parameter_name: Optional[str] = None,
        trigger_type: Optional[TriggerType] = None,
    ) -> PagedResponse:
        return await self._get_page(
            "/audit/adjustments",
            _query(page, limit, from_date, to_date,
                   parameterName=parameter_name, triggerType=trigger_type),
        )


# ------------------------------------------------------------------ #
# Response helpers
# ------------------------------------------------------------------ #


def is_api_success(response: ApiResponse) -> bool:
    """True for ``SUCCESS`` and ``PARTIAL_SUCCESS`` envelopes."""
    return response.status in (ResponseStatus.SUCCESS, ResponseStatus.PARTIAL_SUCCESS)


def has_next_page(response: PagedResponse) -> bool:
    return response.pagination.has_next


def has_previous_page(response: PagedResponse) -> bool:
    return response.pagination.has_previous


def get_next_page(response: PagedResponse) -> Optional[int]:
    if response.pagination.has_next:
        return response.pagination.page + 1
    return None


def get_previous_page(response: PagedResponse) -> Optional[int]:
    if response.pagination.has_previous:
        return response.pagination.page - 1
    return None


# ------------------------------------------------------------------ #
# Factories
# ------------------------------------------------------------------ #


def create_sfr_crypto_client(
    base_url: str,
    *,
    token: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: Optional[int] = None,
    headers: Optional[Mapping[str, str]] = None,
    debug: Optional[bool] = None,
    **client_kwargs: Any,
) -> SfrCryptoApiClient:
    options = {
        "api_key": api_key,
        "timeout": timeout,
        "default_headers": dict(headers) if headers else None,
        "debug": debug,
    }
    config = ClientConfig(base_url=base_url, **{k: v for k, v in options.items() if v is not None})
    client = SfrCryptoApiClient(config, **client_kwargs)
    if token:
        client.set_auth_token(token)
    return client


def create_dev_crypto_client(token: Optional[str] = None, **client_kwargs: Any) -> SfrCryptoApiClient:
    client = SfrCryptoApiClient(preset_config(CRYPTO, DEVELOPMENT), **client_kwargs)
    if token:
        client.set_auth_token(token)
    return client


def create_prod_crypto_client(
    token: str, api_key: Optional[str] = None, **client_kwargs: Any
) -> SfrCryptoApiClient:
    client = SfrCryptoApiClient(preset_config(CRYPTO, PRODUCTION, api_key=api_key), **client_kwargs)
    client.set_auth_token(token)
    return client
