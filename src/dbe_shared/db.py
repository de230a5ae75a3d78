"""
db.py — Supabase client singleton.

Reports only read, so the client always uses the anon key (RLS applies).

Usage:
    from dbe_shared.db import get_supabase_client

    supabase = get_supabase_client()
"""

from __future__ import annotations

import threading
from typing import Optional

import structlog
from supabase import Client, create_client

from dbe_shared.config import settings

logger = structlog.get_logger(__name__)

# One client per process (thread-safe via lock)
_supabase_lock = threading.Lock()
_supabase_anon: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the singleton Supabase client.

    Raises:
        RuntimeError: SUPABASE_ANON_KEY is not configured.
    """
    global _supabase_anon

    with _supabase_lock:
        if _supabase_anon is None:
            if not settings.supabase_anon_key:
                raise RuntimeError("SUPABASE_ANON_KEY is not set. Set it in .env.")
            _supabase_anon = create_client(
                settings.supabase_url,
                settings.supabase_anon_key,
            )
            logger.info("supabase_client_created", role="anon")
        return _supabase_anon
