"""
dbe_reports — DBE participation statistics and filtered contract reports.

Architecture:
  transforms/  — pure engine: sum-by-key grouping, aggregation, filtering
  exporters/   — delimited-text serialization handed to a blob sink
  reports/     — orchestrators: report rows + export, chart-ready stats
  sources/     — Supabase contract fetch, validated at the boundary
  utils/       — structlog configuration, async retry decorator

Quick start:
    from dbe_shared.models import parse_contracts
    from dbe_reports.reports.stats import build_participation_stats
    from dbe_reports.reports.generator import export_report

    contracts = parse_contracts(rows)
    stats = build_participation_stats(contracts)
    export_report(contracts, {"category": "Supplier"}, "report.csv")

CLI:
    dbe-reports stats --input contracts.json
    dbe-reports report --start-date 2024-01-01 --certified yes --output report.csv
"""

__version__ = "0.1.0"
