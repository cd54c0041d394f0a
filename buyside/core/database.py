"""
Supabase client for the campaigns table and the creative assets bucket.
"""

import logging
from typing import Optional

from supabase import Client, ClientOptions, create_client

from .config import Config

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


class SupabaseNotConfiguredError(RuntimeError):
    """SUPABASE_URL or the API key is missing."""


def _client_options() -> ClientOptions:
    return ClientOptions(
        postgrest_client_timeout=Config.SUPABASE_TIMEOUT_SECONDS,
        storage_client_timeout=Config.SUPABASE_TIMEOUT_SECONDS,
    )


def get_supabase_client() -> Client:
    """
    Shared Supabase client, created on first use.

    Table and storage requests time out after SUPABASE_TIMEOUT_SECONDS so a
    stalled backend surfaces as an error instead of hanging a submission.

    Raises:
        SupabaseNotConfiguredError: If the URL or key is missing. Nothing is
            cached, so a later call retries once the environment is fixed.
    """
    global _supabase_client

    if _supabase_client is None:
        if not Config.SUPABASE_URL or not Config.SUPABASE_KEY:
            raise SupabaseNotConfiguredError(
                "Supabase is not configured: set SUPABASE_URL and SUPABASE_ANON_KEY"
            )
        _supabase_client = create_client(
            Config.SUPABASE_URL,
            Config.SUPABASE_KEY,
            options=_client_options(),
        )
        logger.info(f"Connected Supabase client to {Config.SUPABASE_URL}")

    return _supabase_client


def reset_supabase_client():
    """Drop the cached client (tests, or after changing credentials)."""
    global _supabase_client
    _supabase_client = None
