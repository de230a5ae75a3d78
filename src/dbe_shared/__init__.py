"""
dbe_shared — shared settings, errors, models, and formatters for DBE reporting.

Usage:
    from dbe_shared.config import settings
    from dbe_shared.db import get_supabase_client
    from dbe_shared.errors import InvalidArgument, ExportFailure, UpstreamFetchFailure
    from dbe_shared.models import Contract, Subgrant, FilterCriteria
"""

__version__ = "0.1.0"
