"""Tests for settings and the credential checks."""

from __future__ import annotations

import pytest

from transcript_analyzer.config import Settings


class TestAnthropicConfigured:
    def test_real_key(self):
        assert Settings(_env_file=None, anthropic_api_key="sk-ant-api03-abc").anthropic_configured

    @pytest.mark.parametrize(
        "value", ["", "  ", "your-api-key", "YOUR_API_KEY_HERE", "changeme", "sk-ant-..."]
    )
    def test_missing_or_placeholder(self, value):
        assert not Settings(_env_file=None, anthropic_api_key=value).anthropic_configured


class TestGongConfigured:
    def test_both_parts_required(self):
        assert Settings(
            _env_file=None, gong_access_key="k", gong_access_key_secret="s"
        ).gong_configured
        assert not Settings(
            _env_file=None, gong_access_key="k", gong_access_key_secret=""
        ).gong_configured
        assert not Settings(
            _env_file=None, gong_access_key="", gong_access_key_secret="s"
        ).gong_configured

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GONG_ACCESS_KEY", "env-key")
        monkeypatch.setenv("GONG_ACCESS_KEY_SECRET", "env-secret")
        s = Settings(_env_file=None)
        assert s.gong_access_key == "env-key"
        assert s.gong_configured

    def test_legacy_api_key_name(self, monkeypatch):
        monkeypatch.delenv("GONG_ACCESS_KEY", raising=False)
        monkeypatch.setenv("GONG_API_KEY", "legacy-key")
        assert Settings(_env_file=None).gong_access_key == "legacy-key"


class TestDefaults:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GONG_API_BASE_URL", raising=False)
        s = Settings(_env_file=None)
        assert s.gong_api_base_url == "https://api.gong.io/v2"
        assert s.analysis_max_turns == 5
        assert s.research_max_turns == 15
        assert s.gong_calls_window_days == 30
