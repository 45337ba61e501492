"""Tests for environment settings and the demo-only startup switches."""

import logging

import pytest
from fastapi.testclient import TestClient

from taskapi.config import DEFAULT_JWT_SECRET, Settings
from taskapi.main import create_app
from taskapi.store import InMemoryTaskStore, seed_tasks
from taskapi.users import demo_user_directory

ENV_VARS = (
    "HOST",
    "PORT",
    "JWT_SECRET",
    "TOKEN_TTL_HOURS",
    "CORS_ORIGINS",
    "DATABASE_URL",
    "DEMO_PLAINTEXT_PASSWORDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.port == 5000
        assert settings.cors_origins == ("*",)
        assert settings.jwt_secret == DEFAULT_JWT_SECRET
        assert settings.uses_default_secret is True
        assert settings.allow_demo_passwords is True
        assert settings.database_url == ""

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, http://127.0.0.1:5173,")
        monkeypatch.setenv("JWT_SECRET", "configured-secret-that-is-long-enough-for-hs256")
        monkeypatch.setenv("TOKEN_TTL_HOURS", "2")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.port == 8080
        assert settings.cors_origins == ("http://localhost:5173", "http://127.0.0.1:5173")
        assert settings.uses_default_secret is False
        assert settings.token_ttl_hours == 2
        assert settings.log_level == "DEBUG"

    def test_empty_secret_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "")
        assert Settings.from_env().uses_default_secret is True

    @pytest.mark.parametrize("raw,expected", [("false", False), ("0", False), ("TRUE", True), ("yes", True)])
    def test_demo_password_switch_parsing(self, monkeypatch, raw, expected):
        monkeypatch.setenv("DEMO_PLAINTEXT_PASSWORDS", raw)
        assert Settings.from_env().allow_demo_passwords is expected


class TestDemoPasswordSwitch:
    def test_disabled_fallback_rejects_demo_password(self, monkeypatch):
        monkeypatch.setenv("DEMO_PLAINTEXT_PASSWORDS", "false")
        monkeypatch.setenv("JWT_SECRET", "configured-secret-that-is-long-enough-for-hs256")
        client = TestClient(create_app(Settings.from_env(), task_store=InMemoryTaskStore(seed_tasks())))
        response = client.post("/api/login", json={"username": "admin", "password": "password123"})
        assert response.status_code == 401
        assert response.json()["error"] == "AUTHENTICATION_FAILED"

    def test_enabled_fallback_accepts_demo_password(self):
        client = TestClient(create_app(Settings.from_env(), task_store=InMemoryTaskStore(seed_tasks())))
        response = client.post("/api/login", json={"username": "admin", "password": "password123"})
        assert response.status_code == 200

    def test_directory_without_fallback(self):
        directory = demo_user_directory(allow_plaintext=False)
        assert directory.verify_password(directory.find_user("admin"), "password123") is False


class TestStartupWarnings:
    def test_demo_settings_are_announced(self, caplog):
        caplog.set_level(logging.INFO, logger="taskapi.main")
        app = create_app(Settings(), task_store=InMemoryTaskStore(seed_tasks()))
        with TestClient(app):
            pass
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("JWT_SECRET is not set" in m for m in warnings)
        assert any("Demo plaintext passwords are enabled" in m for m in warnings)

    def test_configured_app_is_quiet(self, caplog):
        caplog.set_level(logging.INFO, logger="taskapi.main")
        settings = Settings(
            jwt_secret="configured-secret-that-is-long-enough-for-hs256",
            allow_demo_passwords=False,
        )
        with TestClient(create_app(settings, task_store=InMemoryTaskStore(seed_tasks()))):
            pass
        assert not [
            r for r in caplog.records
            if r.name.startswith("taskapi") and r.levelno >= logging.WARNING
        ]
        assert any("/api/login" in r.getMessage() for r in caplog.records)
