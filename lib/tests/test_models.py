from datetime import datetime, timedelta, timezone

import pytest

from jwtrevoke_client.errors import DecodeError
from jwtrevoke_client.models import RevokedToken, RevokeRequest, format_timestamp, parse_timestamp


def test_parse_timestamp_accepts_nanoseconds_and_offsets() -> None:
    dt = parse_timestamp("2024-03-05T10:11:12.123456789+02:00")
    assert dt == datetime(2024, 3, 5, 8, 11, 12, 123456, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_garbage() -> None:
    with pytest.raises(DecodeError):
        parse_timestamp("yesterday")


def test_format_timestamp_naive_is_utc() -> None:
    assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00Z"


def test_format_timestamp_converts_to_utc() -> None:
    tz = timezone(timedelta(hours=3))
    assert format_timestamp(datetime(2024, 1, 1, 3, 0, 0, 500000, tzinfo=tz)) == "2024-01-01T00:00:00.5Z"


def test_revoke_request_wire_names() -> None:
    body = RevokeRequest(jwt_id="j1", reason="leak", expiry_date=datetime(2024, 1, 1)).to_dict()
    assert body == {"jwtId": "j1", "reason": "leak", "expiryDate": "2024-01-01T00:00:00Z"}


def test_revoked_token_empty_email_is_none() -> None:
    token = RevokedToken.from_dict(
        {"id": "a", "jwt_id": "j", "reason": "r", "expiry_date": "2024-01-01T00:00:00Z", "revoked_by_email": ""}
    )
    assert token.revoked_by_email is None
    assert "revoked_by_email" not in token.to_dict()


def test_revoked_token_rejects_non_string_reason() -> None:
    with pytest.raises(DecodeError):
        RevokedToken.from_dict({"id": "a", "jwt_id": "j", "reason": 7, "expiry_date": "2024-01-01T00:00:00Z"})
