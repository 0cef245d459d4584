from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

DEFAULT_BASE_URL = "https://api.jwtrevoke.com"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RATE_LIMIT_DELAY_S = 1.0
DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = DEFAULT_MAX_RETRIES
    rate_limit_delay_s: float = DEFAULT_RATE_LIMIT_DELAY_S
    timeout_s: float = DEFAULT_TIMEOUT_S
    client_version: str | None = None

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key is required")
        if not self.base_url:
            raise ValueError("base_url is required")
        if int(self.max_retries) < 0:
            raise ValueError("max_retries must be >= 0")
        if self.rate_limit_delay_s < 0:
            raise ValueError("rate_limit_delay_s must be >= 0")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")


ClientOption = Callable[[ClientConfig], ClientConfig]


def with_max_retries(retries: int) -> ClientOption:
    return lambda cfg: replace(cfg, max_retries=int(retries))


def with_timeout(timeout_s: float) -> ClientOption:
    return lambda cfg: replace(cfg, timeout_s=float(timeout_s))


def with_rate_limit_delay(delay_s: float) -> ClientOption:
    return lambda cfg: replace(cfg, rate_limit_delay_s=float(delay_s))


def with_base_url(base_url: str) -> ClientOption:
    return lambda cfg: replace(cfg, base_url=base_url.rstrip("/"))


def new_config(api_key: str, *options: ClientOption) -> ClientConfig:
    """Build a config from defaults, applying ``options`` in order."""
    cfg = ClientConfig(api_key=api_key)
    for option in options:
        cfg = option(cfg)
    return cfg
