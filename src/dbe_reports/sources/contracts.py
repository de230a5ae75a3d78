"""
sources/contracts.py — Contracts-with-subgrants from the Supabase store.

This is the only suspension point around the engine: one async call that
returns the whole validated collection or raises UpstreamFetchFailure.
Transient failures are retried with exponential backoff before giving up.

Usage:
    from dbe_reports.sources.contracts import fetch_contracts

    contracts = await fetch_contracts()
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from dbe_shared.config import settings
from dbe_shared.db import get_supabase_client
from dbe_shared.errors import UpstreamFetchFailure
from dbe_shared.models import Contract, parse_contracts

from dbe_reports.utils.retry import with_retry

log = structlog.get_logger(__name__)

SUBGRANT_COLUMNS: tuple[str, ...] = (
    "id",
    "dbe_firm_name",
    "naics_code",
    "amount",
    "certified_dbe",
    "contract_type",
    "award_date",
)

CONTRACTS_SELECT = f"*, subgrants ({', '.join(SUBGRANT_COLUMNS)})"


class ContractSource:
    """Reads every contract with its embedded subgrants."""

    name = "Supabase"

    def __init__(
        self,
        client: Any | None = None,
        *,
        table: str | None = None,
        max_attempts: int | None = None,
        base_delay: float | None = None,
    ) -> None:
        self._client = client
        self._table = table or settings.contracts_table
        self._max_attempts = max_attempts or settings.fetch_max_attempts
        self._base_delay = (
            settings.fetch_base_delay if base_delay is None else base_delay
        )
        self._log = log.bind(source_name=self.name, table=self._table)

    def _query(self, client: Any) -> list[dict[str, Any]]:
        result = client.table(self._table).select(CONTRACTS_SELECT).execute()
        return list(result.data or [])

    async def _fetch_rows(self, client: Any) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._query, client)

    async def fetch(self) -> list[Contract]:
        """
        Fetch and validate all contracts.

        Raises:
            UpstreamFetchFailure: the store could not be reached or queried.
            InvalidArgument:      a returned row failed validation.
        """
        # Missing credentials are a configuration error, not retried
        try:
            client = self._client or get_supabase_client()
        except RuntimeError as exc:
            self._log.error("supabase_not_configured", error=str(exc))
            raise UpstreamFetchFailure(f"Could not fetch contracts: {exc}") from exc

        fetch_rows = with_retry(
            max_attempts=self._max_attempts, base_delay=self._base_delay
        )(self._fetch_rows)

        try:
            rows = await fetch_rows(client)
        except Exception as exc:
            self._log.error("contracts_fetch_failed", error=str(exc))
            raise UpstreamFetchFailure(f"Could not fetch contracts: {exc}") from exc

        contracts = parse_contracts(rows)
        self._log.info(
            "contracts_fetched",
            contracts=len(contracts),
            subgrants=sum(len(c.subgrants) for c in contracts),
        )
        return contracts


async def fetch_contracts(client: Any | None = None, **kwargs: Any) -> list[Contract]:
    """Shortcut for ContractSource(client, **kwargs).fetch()."""
    return await ContractSource(client, **kwargs).fetch()
