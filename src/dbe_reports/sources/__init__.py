"""
dbe_reports.sources — contract store adapters.

  ContractSource — Supabase contracts table with embedded subgrants
"""

from dbe_reports.sources.contracts import ContractSource, fetch_contracts

__all__ = ["ContractSource", "fetch_contracts"]
