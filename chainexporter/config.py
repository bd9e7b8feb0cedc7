"""
Process configuration for the exporter, alerter and net info processes.

Every process validates its settings once at startup through
:func:`load_config`; a missing required setting is a startup error listing
every missing name at once.
"""
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

import environ
from django.core.exceptions import ImproperlyConfigured


class Services:
    EXPORTER = "exporter"
    ALERTER = "alerter"
    NETINFO = "netinfo"


# Required unless DATABASE_URL is set
DATABASE_SETTINGS = ("DATABASE_HOST", "DATABASE_NAME", "DATABASE_USER", "DATABASE_PASSWORD")

REQUIRED_SETTINGS: Dict[str, Tuple[str, ...]] = {
    Services.EXPORTER: ("GAIA_URL", "LCD_URL"),
    Services.ALERTER: ("ALERT_SENTRY_DSN",),
    Services.NETINFO: ("GAIA_URLS", "PERIOD"),
}

# The ingestor reads the block below its target height, so nothing under 2
MIN_START_HEIGHT = 2


@dataclass
class ExporterConfig:
    service: str
    node_url: Optional[str] = None
    node_urls: List[str] = field(default_factory=list)
    lcd_url: Optional[str] = None
    alert_sentry_dsn: Optional[str] = None
    alert_address: Optional[str] = None
    start_height: int = MIN_START_HEIGHT
    sync_interval: float = 1.0
    governance_interval: float = 10.0
    alert_interval: float = 1.0
    period: float = 0.0
    rpc_timeout: float = 5.0

    @property
    def node_names(self) -> Dict[str, str]:
        """Map node host names to their RPC URLs."""
        return {urlparse(url).netloc or url: url for url in self.node_urls}


def _read_number(env: environ.Env, key: str, default, cast=float):
    try:
        if cast is int:
            return env.int(key, default=default)
        return env.float(key, default=default)
    except ValueError:
        raise ImproperlyConfigured(f"{key} needs to be a number")


def load_config(service: str, environ_: Optional[Mapping[str, str]] = None) -> ExporterConfig:
    """
    Read and validate the settings a service needs.

    Args:
        service: One of the :class:`Services` names
        environ_: Source mapping, defaults to ``os.environ``

    Returns:
        ExporterConfig: The validated configuration

    Raises:
        ImproperlyConfigured: If required settings are missing or malformed
    """
    if service not in REQUIRED_SETTINGS:
        raise ImproperlyConfigured(f"Unknown service: {service}")

    source = dict(os.environ if environ_ is None else environ_)
    required = REQUIRED_SETTINGS[service]
    if not source.get("DATABASE_URL", "").strip():
        required += DATABASE_SETTINGS
    missing = [key for key in required if not source.get(key, "").strip()]
    if missing:
        raise ImproperlyConfigured(f"Missing required settings: {', '.join(missing)}")

    env = environ.Env()
    env.ENVIRON = source

    config = ExporterConfig(
        service=service,
        node_url=env.str("GAIA_URL", default=None),
        node_urls=[url.strip() for url in env.list("GAIA_URLS", default=[]) if url.strip()],
        lcd_url=env.str("LCD_URL", default=None),
        alert_sentry_dsn=env.str("ALERT_SENTRY_DSN", default=None),
        alert_address=env.str("ALERT_ADDRESS", default=None) or None,
        start_height=_read_number(env, "START_HEIGHT", MIN_START_HEIGHT, cast=int),
        sync_interval=_read_number(env, "SYNC_INTERVAL", 1.0),
        governance_interval=_read_number(env, "GOVERNANCE_INTERVAL", 10.0),
        alert_interval=_read_number(env, "ALERT_INTERVAL", 1.0),
        period=_read_number(env, "PERIOD", 0.0),
        rpc_timeout=_read_number(env, "RPC_TIMEOUT", 5.0),
    )

    if config.start_height < MIN_START_HEIGHT:
        raise ImproperlyConfigured(f"START_HEIGHT needs to be at least {MIN_START_HEIGHT}")
    if service == Services.NETINFO and config.period <= 0:
        raise ImproperlyConfigured("PERIOD needs to be a positive number")
    if service == Services.NETINFO and not config.node_urls:
        raise ImproperlyConfigured("GAIA_URLS needs to list at least one node")

    return config
