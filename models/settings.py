from __future__ import annotations
from typing import FrozenSet
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REQUEST_SERVER = "https://3commas.io"
DEFAULT_REQUEST_PATH = "/trade_signal/trading_view"
DEFAULT_TRADINGVIEW_IPS = frozenset({
    "52.89.214.238",
    "34.212.75.30",
    "54.218.53.128",
    "52.32.178.7",
})


class Settings(BaseModel):
    """Process-wide configuration. Built once at startup, never mutated."""

    model_config = ConfigDict(frozen=True)

    listen_port: int = Field(3137, gt=0, lt=65536)
    long_bot_id: int = Field(1234567, gt=0)
    short_bot_id: int = Field(7654321, gt=0)
    email_token: str = Field("89abcdef-789a-bcde-f012-456789abcdef", min_length=1)
    tradingview_api_ips: FrozenSet[str] = DEFAULT_TRADINGVIEW_IPS
    log_path: str = "."
    request_server: str = Field(DEFAULT_REQUEST_SERVER, min_length=1)
    request_path: str = DEFAULT_REQUEST_PATH

    @field_validator("request_server")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("request_path")
    @classmethod
    def path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("request_path must start with '/'")
        return v

    @property
    def request_url(self) -> str:
        return f"{self.request_server}{self.request_path}"
