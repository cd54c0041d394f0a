"""
Tests for Config.validate: missing settings warn, never raise.
"""

import logging

from buyside.core.config import Config


class TestValidate:
    def test_reports_missing_settings_without_raising(self, monkeypatch, caplog):
        monkeypatch.setattr(Config, "SUPABASE_URL", "")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "")
        monkeypatch.setattr(Config, "GEMINI_API_KEY", "")

        with caplog.at_level(logging.WARNING, logger="buyside.core.config"):
            missing = Config.validate()

        assert missing == ["SUPABASE_URL", "SUPABASE_ANON_KEY", "GEMINI_API_KEY"]
        assert "SUPABASE_URL is not set" in caplog.text

    def test_fully_configured(self, monkeypatch):
        monkeypatch.setattr(Config, "SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "anon-key")
        monkeypatch.setattr(Config, "GEMINI_API_KEY", "gemini-key")

        assert Config.validate() == []
