"""
ExportTarget - where and how documents are sent.

Resolved once from configuration and read-only afterwards, so a single
target can be shared by concurrent export attempts.

Uso:
    from exporter.target import new_export_target

    target = new_export_target({
        "url": "https://aim.example.org/AIMDataService/",
        "username": "ctp",
        "password": "secret",
        "logResponses": "failed",
    })
"""

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from config.constants import (
    ALLOWED_SCHEMES,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RESPONSE_BYTES,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_STAGE_NAME,
    LogResponses,
)
from exporter.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportTarget:
    """Resolved destination and credentials for the AIM Data Service."""

    url: str
    scheme: str
    username: str = ""
    password: str = field(default="", repr=False)
    auth_header: str = field(default="", repr=False)
    log_responses: LogResponses = LogResponses.NONE
    name: str = DEFAULT_STAGE_NAME
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES

    @property
    def authenticate(self) -> bool:
        return bool(self.username)

    @property
    def display_url(self) -> str:
        """URL without userinfo, for log lines."""
        parts = urlsplit(self.url)
        if "@" not in parts.netloc:
            return self.url
        return urlunsplit(parts._replace(netloc=parts.netloc.rpartition("@")[2]))

    @classmethod
    def from_settings(cls, settings) -> "ExportTarget":
        """
        Build a target from the application settings.

        Args:
            settings: Settings instance (config.settings) or AimExportSettings

        Returns:
            ExportTarget
        """
        aim_settings = getattr(settings, "aim_export", settings)
        return new_export_target(aim_settings.as_stage_config())


def basic_auth_header(username: str, password: str) -> str:
    """Return the Authorization value for HTTP Basic authentication."""
    credentials = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


def new_export_target(config: Mapping[str, Any]) -> ExportTarget:
    """
    Construct an ExportTarget from a stage configuration.

    Args:
        config: Mapping with at least "url". Optional keys: "username",
                "password", "logResponses", "name", "connectTimeout",
                "readTimeout", "maxResponseBytes"

    Returns:
        ExportTarget

    Raises:
        ConfigurationError if the url does not parse, has no host, or its
        scheme is not http/https, or if a numeric limit is not positive
    """
    name = _text(config, "name") or DEFAULT_STAGE_NAME
    url = _text(config, "url")
    if not url:
        raise ConfigurationError(f"{name}: Missing url")

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on an invalid port
        httpx.URL(url)
    except (ValueError, httpx.InvalidURL) as e:
        raise ConfigurationError(f"{name}: Unparsable url ({url}): {e}") from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        logger.error(f"{name}: Illegal protocol ({scheme or 'none'})")
        raise ConfigurationError(f"{name}: Illegal protocol ({scheme or 'none'})")
    if not parts.hostname:
        raise ConfigurationError(f"{name}: Missing host in url ({url})")

    username = _text(config, "username")
    password = _text(config, "password")
    auth_header = basic_auth_header(username, password) if username else ""

    return ExportTarget(
        url=url,
        scheme=scheme,
        username=username,
        password=password,
        auth_header=auth_header,
        log_responses=LogResponses.parse(_text(config, "logResponses")),
        name=name,
        connect_timeout=_positive(config, "connectTimeout", DEFAULT_CONNECT_TIMEOUT, float, name),
        read_timeout=_positive(config, "readTimeout", DEFAULT_READ_TIMEOUT, float, name),
        max_response_bytes=_positive(config, "maxResponseBytes", DEFAULT_MAX_RESPONSE_BYTES, int, name),
    )


def _text(config: Mapping[str, Any], key: str) -> str:
    value: Optional[Any] = config.get(key)
    return "" if value is None else str(value).strip()


def _positive(config: Mapping[str, Any], key: str, default, cast, name: str):
    raw = _text(config, key)
    if not raw:
        return default
    try:
        value = cast(float(raw)) if cast is int else cast(raw)
    except (ValueError, OverflowError) as e:
        raise ConfigurationError(f"{name}: Invalid {key} ({raw})") from e
    if not value > 0:
        raise ConfigurationError(f"{name}: {key} must be positive ({raw})")
    return value
