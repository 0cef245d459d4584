from __future__ import annotations

import logging
import threading
import time
from typing import Any

import httpx

from . import __version__
from .config_types import ClientConfig
from .errors import (
    ApiError,
    AuthError,
    CancelledError,
    DecodeError,
    NetworkError,
    RetriesExhaustedError,
)

log = logging.getLogger(__name__)


def backoff_delay(attempt: int) -> float:
    """Seconds to wait before ``attempt`` (0-based); linear, none before the first."""
    return float(max(0, attempt))


class Transport:
    """Sends requests with bounded retries.

    Each call makes up to ``max_retries + 1`` attempts. Transport failures and
    5xx responses are retried after a linear backoff (1s, 2s, 3s, ...); 429
    additionally waits ``rate_limit_delay_s`` before the next attempt. Any
    other 4xx fails immediately with :class:`ApiError`.

    ``timeout_s`` applies per attempt, so a single call can take up to
    ``timeout_s * (max_retries + 1)`` plus the backoff and rate-limit delays.

    Retry decisions are logged at DEBUG on ``jwtrevoke_client.transport``.
    Nothing is emitted unless the application configures logging.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        user_agent = f"jwtrevoke-client/{__version__}"
        if cfg.client_version:
            user_agent = f"{user_agent} {cfg.client_version}"
        headers = {
            "User-Agent": user_agent,
            "X-API-Key": cfg.api_key,
        }

        self._client = httpx.Client(
            base_url=cfg.base_url.rstrip("/"),
            timeout=cfg.timeout_s,
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._client.close()

    def _sleep(self, seconds: float, cancel: threading.Event | None) -> None:
        if seconds <= 0:
            return
        if cancel is None:
            time.sleep(seconds)
            return
        if cancel.wait(seconds):
            raise CancelledError("request cancelled")

    def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            cancel: threading.Event | None = None,
    ) -> httpx.Response:
        max_retries = self._cfg.max_retries
        response: httpx.Response | None = None
        last_error: httpx.TransportError | None = None

        for attempt in range(max_retries + 1):
            if cancel is not None and cancel.is_set():
                raise CancelledError("request cancelled")
            if attempt > 0:
                self._sleep(backoff_delay(attempt), cancel)

            try:
                response = self._client.request(method, path, json=json_body)
            except httpx.TransportError as e:
                log.debug("%s %s attempt %d failed: %s", method, path, attempt + 1, e)
                last_error = e
                response = None
                continue
            except httpx.DecodingError as e:
                raise DecodeError(f"{method} {path}: {e}") from e
            except httpx.RequestError as e:
                raise NetworkError(str(e)) from e
            last_error = None

            status = response.status_code
            if status == 429:
                log.debug("%s %s rate limited, waiting %.1fs", method, path, self._cfg.rate_limit_delay_s)
                self._sleep(self._cfg.rate_limit_delay_s, cancel)
                continue
            if 200 <= status < 300:
                return response
            if status >= 500:
                log.debug("%s %s attempt %d got %d", method, path, attempt + 1, status)
                continue

            raise _client_error(method, path, response)

        if last_error is not None:
            raise NetworkError(str(last_error)) from last_error
        status = response.status_code if response is not None else 0
        raise RetriesExhaustedError(status, response)


def _client_error(method: str, path: str, r: httpx.Response) -> ApiError:
    message = ""
    data: Any = None
    try:
        body = r.json()
    except ValueError:
        body = None
        message = r.text.strip()[:1000]

    if isinstance(body, dict):
        message = str(body.get("message") or "")
        data = body.get("data")
    if not message:
        message = r.reason_phrase or f"{method} {path} failed with {r.status_code}"

    if r.status_code in (401, 403):
        return AuthError(r.status_code, message, data)
    return ApiError(r.status_code, message, data)
