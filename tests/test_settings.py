"""Tests for encoder configuration."""

import pytest

from kissmetrics.core.analytics.query import QueryEncoder
from kissmetrics.core.analytics.settings import ENV_API_KEY, ENV_CLIENT_TYPE, ENV_USER_AGENT, EncoderSettings


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove configuration environment variables."""
    for var in (ENV_API_KEY, ENV_CLIENT_TYPE, ENV_USER_AGENT):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def runtime_defaults(monkeypatch):
    """Pin the runtime collected defaults."""
    monkeypatch.setattr("kissmetrics.core.analytics.settings.get_client_type", lambda: "py-9.9.9")
    monkeypatch.setattr("kissmetrics.core.analytics.settings.get_user_agent", lambda: "kissmetrics-python%2F9.9.9")


class TestFromEnv:
    """Test resolving settings."""

    def test_missing_key(self, clean_environment):
        with pytest.raises(ValueError, match=ENV_API_KEY):
            EncoderSettings.from_env()

    def test_key_from_environment(self, clean_environment, runtime_defaults, monkeypatch):
        monkeypatch.setenv(ENV_API_KEY, "envkey")
        settings = EncoderSettings.from_env()
        assert settings == EncoderSettings("envkey", "py-9.9.9", "kissmetrics-python%2F9.9.9")

    def test_environment_overrides_defaults(self, clean_environment, runtime_defaults, monkeypatch):
        monkeypatch.setenv(ENV_API_KEY, "envkey")
        monkeypatch.setenv(ENV_CLIENT_TYPE, "and-2.0")
        monkeypatch.setenv(ENV_USER_AGENT, "TestAgent/1.0")
        settings = EncoderSettings.from_env()
        assert settings == EncoderSettings("envkey", "and-2.0", "TestAgent/1.0")

    def test_arguments_override_environment(self, clean_environment, runtime_defaults, monkeypatch):
        monkeypatch.setenv(ENV_API_KEY, "envkey")
        monkeypatch.setenv(ENV_CLIENT_TYPE, "and-2.0")
        settings = EncoderSettings.from_env(key="abc123", client_type="ios-3.0")
        assert settings == EncoderSettings("abc123", "ios-3.0", "kissmetrics-python%2F9.9.9")

    def test_empty_environment_value_falls_back(self, clean_environment, runtime_defaults, monkeypatch):
        monkeypatch.setenv(ENV_API_KEY, "envkey")
        monkeypatch.setenv(ENV_CLIENT_TYPE, "")
        assert EncoderSettings.from_env().client_type == "py-9.9.9"


class TestEncoderConstruction:
    """Test building encoders from settings."""

    def test_from_settings(self):
        settings = EncoderSettings("abc123", "and-2.0", "TestAgent/1.0")
        encoder = QueryEncoder.from_settings(settings)
        assert encoder.settings == settings

    def test_from_env(self, clean_environment, monkeypatch):
        monkeypatch.setenv(ENV_API_KEY, "abc123")
        monkeypatch.setenv(ENV_CLIENT_TYPE, "and-2.0")
        monkeypatch.setenv(ENV_USER_AGENT, "TestAgent/1.0")
        messages = []
        encoder = QueryEncoder.from_env(warn=messages.append)
        assert encoder.create_alias_query("alias1", "user1") == (
            "/a?_k=abc123&_c=and-2.0&_u=TestAgent/1.0&_p=alias1&_n=user1"
        )
        encoder.encode_properties({"": "x"})
        assert len(messages) == 1
