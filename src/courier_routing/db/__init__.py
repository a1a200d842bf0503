"""Database clients and utilities."""

from .supabase import check_health, get_supabase_client

__all__ = ["get_supabase_client", "check_health"]
