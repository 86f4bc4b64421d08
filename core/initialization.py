"""
core/initialization.py
----------------------
Loads Settings from a .env file plus ``TP_``-prefixed environment variables
and wires the runtime components together.
"""

from __future__ import annotations

import os
import logging
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from models.settings import Settings

ENV_PREFIX = "TP_"

# env suffix -> Settings field
_ENV_FIELDS: Dict[str, str] = {
    "LISTEN_PORT": "listen_port",
    "LONG_BOT_ID": "long_bot_id",
    "SHORT_BOT_ID": "short_bot_id",
    "EMAIL_TOKEN": "email_token",
    "TRADINGVIEW_API_IPS": "tradingview_api_ips",
    "LOG_PATH": "log_path",
    "REQUEST_SERVER": "request_server",
    "REQUEST_PATH": "request_path",
}


class SettingsError(RuntimeError):
    """Configuration could not be loaded; fatal at startup."""


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``TP_*`` variables; unset keys keep their defaults."""
    log = logging.getLogger(__name__)
    environ = os.environ if environ is None else environ

    raw: Dict[str, object] = {}
    for suffix, field in _ENV_FIELDS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is None or value.strip() == "":
            continue
        if field == "tradingview_api_ips":
            raw[field] = frozenset(ip.strip() for ip in value.split(",") if ip.strip())
        else:
            raw[field] = value.strip()
    log.debug("Settings keys from environment: %s", sorted(raw))

    try:
        return Settings(**raw)
    except ValidationError as ve:
        raise SettingsError(f"Error loading config: {ve}") from ve


def load_settings(env_path: str = "config.env") -> Settings:
    """
    Load ``env_path`` (optional) into the environment, then build Settings.
    Variables already set in the process environment win over the file.
    """
    load_dotenv(dotenv_path=env_path)
    return settings_from_env()
