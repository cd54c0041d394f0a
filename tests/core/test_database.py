"""
Tests for the shared Supabase client.
"""

import pytest
from unittest.mock import patch

from buyside.core import database
from buyside.core.config import Config
from buyside.core.database import (
    SupabaseNotConfiguredError,
    get_supabase_client,
    reset_supabase_client,
)


@pytest.fixture(autouse=True)
def fresh_client():
    reset_supabase_client()
    yield
    reset_supabase_client()


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(Config, "SUPABASE_KEY", "anon-key")
    monkeypatch.setattr(Config, "SUPABASE_TIMEOUT_SECONDS", 12)


def test_client_is_created_once(configured):
    with patch.object(database, "create_client") as create:
        first = get_supabase_client()
        second = get_supabase_client()

    assert first is second
    create.assert_called_once()
    url, key = create.call_args.args
    assert (url, key) == ("https://project.supabase.co", "anon-key")


def test_client_uses_configured_timeouts(configured):
    with patch.object(database, "create_client") as create:
        get_supabase_client()

    options = create.call_args.kwargs["options"]
    assert options.postgrest_client_timeout == 12
    assert options.storage_client_timeout == 12


def test_missing_url_raises_without_caching(monkeypatch, configured):
    monkeypatch.setattr(Config, "SUPABASE_URL", "")

    with patch.object(database, "create_client") as create:
        with pytest.raises(SupabaseNotConfiguredError):
            get_supabase_client()
        create.assert_not_called()

        monkeypatch.setattr(Config, "SUPABASE_URL", "https://project.supabase.co")
        get_supabase_client()

    create.assert_called_once()
