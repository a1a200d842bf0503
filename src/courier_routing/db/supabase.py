"""Supabase client for reading driver deliveries."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def check_health() -> bool:
    """Return True when a minimal query against the deliveries table succeeds."""
    client = get_supabase_client()
    if client is None:
        return False
    try:
        client.table(settings.deliveries_table).select("id").limit(1).execute()
        return True
    except Exception as e:
        logging.warning(f"Supabase health check failed: {e}")
        return False
