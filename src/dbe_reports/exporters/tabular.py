"""
exporters/tabular.py — Serialize flat rows to delimited text and save them.

The header is the key order of the first row; every following line holds one
row's values in that order. Lines are joined with "\\n" (no trailing newline)
and the payload is UTF-8.

Quoting: by default values containing the separator, a quote or a newline are
quoted (quote_style="necessary"). quote_style="never" writes values verbatim,
which corrupts the table when a value contains the separator; it exists to
reproduce legacy exports.

Usage:
    from dbe_reports.exporters.tabular import export_rows, MemorySink

    sink = MemorySink()
    export_rows(rows, "report.csv", sink=sink)
    sink.files["report.csv"]  # b"TAD Project #,Contract #,...\\n..."
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Literal, Protocol

import polars as pl
import structlog

from dbe_shared.config import settings
from dbe_shared.errors import ExportFailure

log = structlog.get_logger(__name__)

QuoteStyle = Literal["necessary", "never", "always"]


class BlobSink(Protocol):
    """Persistence collaborator: accepts a finished payload under a filename."""

    def __call__(self, payload: bytes, filename: str) -> None: ...


class FileSink:
    """Writes payloads into a directory (settings.export_dir by default)."""

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory or settings.export_dir)
        self.last_path: Path | None = None

    def __call__(self, payload: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Only the final path component is honoured
        path = self.directory / Path(filename).name
        path.write_bytes(payload)
        self.last_path = path


class MemorySink:
    """Keeps payloads in memory, keyed by filename."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    def __call__(self, payload: bytes, filename: str) -> None:
        self.files[filename] = payload


def _cell(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_delimited_text(
    rows: Iterable[Mapping[str, Any]],
    *,
    separator: str | None = None,
    quote_style: QuoteStyle | None = None,
) -> str:
    """
    Render rows as delimited text.

    Args:
        rows:        Flat records; the first one defines the header.
        separator:   Single-character field separator (default settings.export_separator).
        quote_style: "necessary" | "never" | "always" (default settings.export_quote_style).

    Returns:
        Header line plus one line per row, joined with "\\n".

    Raises:
        ExportFailure: for an empty row set, a first row without fields, or
            rows/options polars cannot write (non-string keys, bad separator).
    """
    rows = list(rows)
    if not rows:
        raise ExportFailure("Cannot export an empty row set: no header can be derived")

    header = list(rows[0].keys())
    if not header:
        raise ExportFailure("Cannot export rows without fields: the first row is empty")

    try:
        df = pl.DataFrame(
            {name: [_cell(row.get(name)) for row in rows] for name in header},
            schema={name: pl.String for name in header},
        )
        text = df.write_csv(
            separator=separator or settings.export_separator,
            quote_style=quote_style or settings.export_quote_style,
            line_terminator="\n",
        )
    except (TypeError, ValueError, pl.exceptions.PolarsError) as exc:
        raise ExportFailure(f"Cannot serialize rows: {exc}") from exc
    return text.removesuffix("\n")


def export_rows(
    rows: Iterable[Mapping[str, Any]],
    filename: str,
    *,
    sink: BlobSink | None = None,
    separator: str | None = None,
    quote_style: QuoteStyle | None = None,
) -> None:
    """
    Serialize rows and hand the UTF-8 payload to sink under filename.

    Raises:
        ExportFailure: if the payload cannot be built (empty rows, blank
            filename) or the sink cannot store it.
    """
    if not filename or not filename.strip():
        raise ExportFailure("Export filename must not be empty")

    rows = list(rows)
    payload = to_delimited_text(
        rows, separator=separator, quote_style=quote_style
    ).encode("utf-8")

    target = sink if sink is not None else FileSink()
    try:
        target(payload, filename)
    except OSError as exc:
        log.error("export_failed", filename=filename, error=str(exc))
        raise ExportFailure(f"Could not save {filename!r}: {exc}") from exc

    log.info("export_written", filename=filename, rows=len(rows), bytes=len(payload))
