import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


@pytest.mark.parametrize("command, missing", [
    ("run_exporter", "GAIA_URL"),
    ("run_alerter", "ALERT_SENTRY_DSN"),
    ("export_netinfo", "GAIA_URLS"),
])
def test_missing_configuration_stops_startup(monkeypatch, command, missing):
    for key in ("GAIA_URL", "GAIA_URLS", "LCD_URL", "ALERT_SENTRY_DSN", "PERIOD",
                "DATABASE_URL", "DATABASE_HOST", "DATABASE_NAME", "DATABASE_USER", "DATABASE_PASSWORD"):
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(CommandError, match=missing):
        call_command(command, "--once")
