from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .errors import DecodeError

_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp; naive values are assumed to be UTC."""
    if not isinstance(value, str) or not value.strip():
        raise DecodeError(f"invalid timestamp: {value!r}")
    text = value.strip().replace("Z", "+00:00").replace("z", "+00:00")
    # datetime.fromisoformat takes at most microsecond precision
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodeError(f"invalid timestamp: {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    dt = value.astimezone(timezone.utc)
    if dt.microsecond:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond:06d}".rstrip("0") + "Z"
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def _optional_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"revoked token field {key!r} must be a string")
    return value


@dataclass(frozen=True)
class RevokedToken:
    id: str
    jwt_id: str
    reason: str
    expiry_date: datetime
    revoked_by_email: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "RevokedToken":
        if not isinstance(data, dict):
            raise DecodeError("revoked token must be a JSON object")
        email = data.get("revoked_by_email")
        return cls(
            id=_optional_str(data, "id"),
            jwt_id=_optional_str(data, "jwt_id"),
            reason=_optional_str(data, "reason"),
            expiry_date=parse_timestamp(data.get("expiry_date")),
            revoked_by_email=email if isinstance(email, str) and email else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "jwt_id": self.jwt_id,
            "reason": self.reason,
            "expiry_date": format_timestamp(self.expiry_date),
        }
        if self.revoked_by_email:
            out["revoked_by_email"] = self.revoked_by_email
        return out


@dataclass(frozen=True)
class RevokeRequest:
    jwt_id: str
    reason: str
    expiry_date: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "jwtId": self.jwt_id,
            "reason": self.reason,
            "expiryDate": format_timestamp(self.expiry_date),
        }
