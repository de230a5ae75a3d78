"""
dbe_reports.reports — Orchestrators over an already-fetched contract collection.

    from dbe_reports.reports import generator, stats

    rows = generator.generate_report(contracts, {"certified": "yes"})
    charts = stats.build_participation_stats(contracts)
"""
