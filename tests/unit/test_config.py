"""Unit tests for meshforge.config."""

from __future__ import annotations

import pytest

from meshforge.config import Settings, parse_flag


class TestParseFlag:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
    def test_truthy(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "", "maybe"])
    def test_falsy(self, value):
        assert parse_flag(value) is False

    def test_missing_uses_default(self):
        assert parse_flag(None) is False
        assert parse_flag(None, default=True) is True


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.mock is False
        assert settings.poll_interval_s == 0.5
        assert settings.history_capacity == 10
        assert settings.work_from_backend is True
        assert settings.storage_secret is None

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "MESHFORGE_MOCK": "1",
                "MESHFORGE_POLL_INTERVAL_MS": "250",
                "MESHFORGE_REQUEST_TIMEOUT_S": "2.5",
                "MESHFORGE_HISTORY_SIZE": "5",
                "MESHFORGE_WORK_FROM_BACKEND": "false",
                "MESHFORGE_STORAGE_SECRET": "s3cret",
            }
        )
        assert settings.mock is True
        assert settings.poll_interval_ms == 250
        assert settings.poll_interval_s == 0.25
        assert settings.request_timeout_s == 2.5
        assert settings.history_capacity == 5
        assert settings.work_from_backend is False
        assert settings.storage_secret == "s3cret"

    def test_blank_number_uses_default(self):
        assert Settings.from_env({"MESHFORGE_POLL_INTERVAL_MS": " "}).poll_interval_ms == 500

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError, match="MESHFORGE_HISTORY_SIZE"):
            Settings.from_env({"MESHFORGE_HISTORY_SIZE": "ten"})

    def test_non_positive_rejected(self):
        with pytest.raises(ValueError, match="MESHFORGE_REQUEST_TIMEOUT_S"):
            Settings.from_env({"MESHFORGE_REQUEST_TIMEOUT_S": "0"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("MESHFORGE_MOCK", "yes")
        assert Settings.from_env().mock is True

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.mock = True
