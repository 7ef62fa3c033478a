import pytest

from strava_proxy.core.config import (
    DEFAULT_FRONTEND_ORIGIN,
    DEFAULT_SESSION_MAX_AGE,
    ConfigError,
    Settings,
)

BASE_ENV = {
    "STRAVA_CLIENT_ID": "12345",
    "STRAVA_CLIENT_SECRET": "secret",
    "STRAVA_REDIRECT_URI": "http://localhost:3000/auth/strava/callback",
    "SESSION_SECRET": "session-secret",
}


def test_from_env_defaults():
    settings = Settings.from_env(BASE_ENV)

    assert settings.strava_client_id == 12345
    assert settings.frontend_origin == DEFAULT_FRONTEND_ORIGIN
    assert settings.strava_access_token is None
    assert settings.port == 3000
    assert settings.session_cookie == "sid"
    assert settings.session_max_age == DEFAULT_SESSION_MAX_AGE
    assert settings.cookie_secure is False


def test_from_env_reads_optional_values():
    env = dict(
        BASE_ENV,
        FRONTEND_ORIGIN="https://app.example.com, https://www.example.com",
        ADDITIONAL_ALLOWED_ORIGINS="https://app.example.com,https://preview.example.com",
        STRAVA_ACCESS_TOKEN="service-token",
        PORT="8080",
        COOKIE_SECURE="true",
        SESSION_COOKIE="connect.sid",
    )
    settings = Settings.from_env(env)

    assert settings.frontend_origin == "https://app.example.com"
    assert settings.allowed_cors_origins == [
        "https://app.example.com",
        "https://www.example.com",
        "https://preview.example.com",
    ]
    assert settings.strava_access_token == "service-token"
    assert settings.port == 8080
    assert settings.cookie_secure is True
    assert settings.session_cookie == "connect.sid"


def test_from_env_accepts_legacy_names():
    env = {
        "STRAVA_CLIENT_ID": "1",
        "STRAVA_CLIENT_SECRET": "secret",
        "REDIRECT_URI": "http://localhost:3000/auth/strava/callback",
        "SECRET_KEY": "legacy-secret",
    }
    settings = Settings.from_env(env)

    assert settings.strava_redirect_uri == "http://localhost:3000/auth/strava/callback"
    assert settings.session_secret == "legacy-secret"


@pytest.mark.parametrize(
    "missing",
    ["STRAVA_CLIENT_ID", "STRAVA_CLIENT_SECRET", "STRAVA_REDIRECT_URI", "SESSION_SECRET"],
)
def test_from_env_requires_credentials(missing):
    env = {k: v for k, v in BASE_ENV.items() if k != missing}

    with pytest.raises(ConfigError, match=missing):
        Settings.from_env(env)


def test_client_id_must_be_integer():
    with pytest.raises(ConfigError):
        Settings.from_env(dict(BASE_ENV, STRAVA_CLIENT_ID="abc"))


def test_settings_are_immutable():
    settings = Settings.from_env(BASE_ENV)

    with pytest.raises(AttributeError):
        settings.port = 1  # type: ignore[misc]
