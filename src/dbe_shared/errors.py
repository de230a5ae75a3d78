"""
errors.py — Error taxonomy shared by the engine, the API and the CLI.

  InvalidArgument       — malformed or unsupported caller input (bad grouping
                          key, unparsable date bound, malformed record).
  ExportFailure         — the export payload could not be built or handed off.
  UpstreamFetchFailure  — the contract store failed to return a collection.

None of these are retried by the engine.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base class for all DBE reporting errors."""


class InvalidArgument(ReportError, ValueError):
    """Caller supplied a malformed or unsupported parameter."""


class ExportFailure(ReportError):
    """The tabular payload could not be constructed or saved."""


class UpstreamFetchFailure(ReportError):
    """The external data source did not return a contract collection."""
