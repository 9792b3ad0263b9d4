from __future__ import annotations

import pytest

from meteo_wizard.settings import (
    HOURLY_FLAGS,
    OPEN_METEO_API_URL,
    ForecastSettings,
    ImproperlyConfigured,
    ProviderSettings,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "METEO_WIZARD_FORECAST_URL",
        "METEO_WIZARD_GROUND_LEVEL",
        "METEO_WIZARD_HOURLY",
        "METEO_WIZARD_FORECAST_DAYS",
        "METEO_WIZARD_PAST_DAYS",
        "METEO_WIZARD_HTTP_TIMEOUT",
        "METEO_WIZARD_IP_API_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_forecast_defaults():
    settings = ForecastSettings()

    assert settings.base_url == OPEN_METEO_API_URL
    assert settings.ground_level == "1"
    assert settings.hourly == frozenset(HOURLY_FLAGS)
    assert (settings.forecast_days, settings.past_days) == (2, 2)


def test_forecast_settings_from_environment(monkeypatch):
    monkeypatch.setenv("METEO_WIZARD_HOURLY", "rain, snowfall,")
    monkeypatch.setenv("METEO_WIZARD_FORECAST_DAYS", "7")
    monkeypatch.setenv("METEO_WIZARD_PAST_DAYS", "0")

    settings = ForecastSettings()

    assert settings.hourly == frozenset({"rain", "snowfall"})
    assert (settings.forecast_days, settings.past_days) == (7, 0)


@pytest.mark.parametrize(
    "name, value",
    [
        ("METEO_WIZARD_HOURLY", "rain,hail"),
        ("METEO_WIZARD_FORECAST_DAYS", "two"),
        ("METEO_WIZARD_PAST_DAYS", "-1"),
    ],
)
def test_invalid_forecast_settings(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ImproperlyConfigured):
        ForecastSettings()


def test_provider_settings_from_environment(monkeypatch):
    monkeypatch.setenv("METEO_WIZARD_HTTP_TIMEOUT", "1.5")
    monkeypatch.setenv("METEO_WIZARD_IP_API_URL", "https://ipapi.test/json/{address}")

    settings = ProviderSettings()

    assert settings.timeout == 1.5
    assert settings.ip_api_url == "https://ipapi.test/json/{address}"


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("METEO_WIZARD_HTTP_TIMEOUT", "soon")

    with pytest.raises(ImproperlyConfigured):
        ProviderSettings()
