"""
message_handler.py
==================
Inbound webhook listener.  TradingView posts its alert JSON to ``/trade``; the
body is validated, the signal is handed to :class:`SignalHandler` as a
background task and the caller gets ``200 Success!`` right away.  Anything
else is answered with ``400 Rejected: ...``.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from aiohttp import web
from pydantic import ValidationError

from core.signal_handler import SignalHandler
from models.settings import Settings
from models.signal import IncomingSignal

logger = logging.getLogger(__name__)

TRADE_PATH = "/trade"
UNKNOWN_REMOTE = "[Remote address unknown]"

SETTINGS_KEY = web.AppKey("settings", Settings)
HANDLER_KEY = web.AppKey("signal_handler", SignalHandler)


def get_real_remote_ip(request: web.Request) -> str:
    """Client address as forwarded by the reverse proxy in ``X-Real-IP``."""
    return request.headers.get("X-Real-IP") or UNKNOWN_REMOTE


def is_tradingview_ip(remote_ip: str, settings: Settings) -> bool:
    return remote_ip in settings.tradingview_api_ips


def _rejected(reason: str) -> web.Response:
    text = f"Rejected: {reason}"
    logger.error(text)
    return web.Response(status=400, text=text)


async def handle_trade(request: web.Request) -> web.Response:
    settings = request.app[SETTINGS_KEY]
    remote_ip = get_real_remote_ip(request)
    logger.info(
        "Oho, a %s request from %s to %s: %s",
        request.method,
        remote_ip,
        request.path,
        dict(request.headers),
    )
    if is_tradingview_ip(remote_ip, settings):
        logger.info("REQUEST FROM TRADINGVIEW, FOR REAL!")

    if request.method != "POST":
        return _rejected(f"method {request.method} not allowed")

    raw = await request.read()
    try:
        payload = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        return _rejected(f"body is not UTF-8 ({exc})")
    except json.JSONDecodeError as exc:
        return _rejected(f"malformed JSON ({exc})")

    if not isinstance(payload, dict):
        return _rejected("JSON body must be an object")

    try:
        signal = IncomingSignal.model_validate(payload)
    except ValidationError as ve:
        return _rejected(f"invalid signal ({ve.error_count()} errors): {ve.errors()}")

    logger.info("Handling signal...")
    request.app[HANDLER_KEY].submit(signal)
    return web.Response(status=200, text="Success!")


async def _drain_signals(app: web.Application) -> None:
    await app[HANDLER_KEY].drain()


def create_app(
    settings: Settings, signal_handler: Optional[SignalHandler] = None
) -> web.Application:
    """Build the aiohttp application serving the webhook route."""
    app = web.Application()
    app[SETTINGS_KEY] = settings
    app[HANDLER_KEY] = signal_handler or SignalHandler(settings)
    app.router.add_route("*", TRADE_PATH, handle_trade)
    app.on_shutdown.append(_drain_signals)
    return app
