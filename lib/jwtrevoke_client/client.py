from __future__ import annotations

import threading
from datetime import datetime
from typing import Any
from urllib.parse import quote

import httpx

from .config_types import ClientConfig
from .errors import DecodeError, UnexpectedStatusError
from .models import RevokedToken, RevokeRequest
from .transport import Transport


class JwtRevokeClient:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._t = Transport(cfg, transport=transport)

    def __enter__(self) -> "JwtRevokeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._t.config

    def close(self) -> None:
        self._t.close()

    def _request_json(
            self,
            method: str,
            path: str,
            *,
            json_body: dict | None = None,
            cancel: threading.Event | None = None,
    ) -> dict[str, Any]:
        """Internal helper for endpoints that should return a JSON object."""
        r = self._t.request(method, path, json_body=json_body, cancel=cancel)
        try:
            data = r.json()
        except ValueError as e:
            raise DecodeError(f"{method} {path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise DecodeError(f"{method} {path} returned {type(data).__name__}, expected object")
        return data

    # --- API methods ---
    def list_revoked_tokens(self, *, cancel: threading.Event | None = None) -> list[RevokedToken]:
        data = self._request_json("GET", "/api/revocations/list", cancel=cancel)
        items = data.get("data")
        if items is None:
            return []
        if not isinstance(items, list):
            raise DecodeError("list response 'data' must be an array")
        return [RevokedToken.from_dict(item) for item in items]

    def revoke_token(
            self,
            jwt_id: str,
            reason: str,
            expiry_date: datetime,
            *,
            cancel: threading.Event | None = None,
    ) -> RevokedToken:
        body = RevokeRequest(jwt_id=jwt_id, reason=reason, expiry_date=expiry_date).to_dict()
        data = self._request_json("POST", "/api/revocations/revoke", json_body=body, cancel=cancel)
        if "token" not in data:
            raise DecodeError("revoke response has no 'token'")
        return RevokedToken.from_dict(data["token"])

    def delete_revoked_token(self, jwt_id: str, *, cancel: threading.Event | None = None) -> None:
        r = self._t.request("DELETE", f"/api/revocations/{quote(jwt_id, safe='')}", cancel=cancel)
        if r.status_code != 204:
            raise UnexpectedStatusError(r.status_code)
