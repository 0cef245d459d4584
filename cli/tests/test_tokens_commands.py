from __future__ import annotations

import json
from datetime import datetime, timezone

import typer
from jwtrevoke_client import ApiError, RevokedToken, UnexpectedStatusError
from typer.testing import CliRunner

from jwtrevoke_cli import main
from jwtrevoke_cli.commands import tokens_cmd
from jwtrevoke_cli.config import default_config

TOKEN = RevokedToken(
    id="rev-1",
    jwt_id="j1",
    reason="leak",
    expiry_date=datetime(2030, 1, 1, tzinfo=timezone.utc),
    revoked_by_email=None,
)


class _FakeClient:
    def __init__(self, *, delete_error: Exception | None = None, list_error: Exception | None = None) -> None:
        self.delete_error = delete_error
        self.list_error = list_error
        self.deleted: list[str] = []
        self.revoked: list[tuple] = []
        self.closed = False

    def list_revoked_tokens(self) -> list[RevokedToken]:
        if self.list_error:
            raise self.list_error
        return [TOKEN]

    def revoke_token(self, jwt_id: str, reason: str, expiry_date: datetime) -> RevokedToken:
        self.revoked.append((jwt_id, reason, expiry_date))
        return TOKEN

    def delete_revoked_token(self, jwt_id: str) -> None:
        if self.delete_error:
            raise self.delete_error
        self.deleted.append(jwt_id)

    def close(self) -> None:
        self.closed = True


def _invoke(monkeypatch, client: _FakeClient, args: list[str]):
    monkeypatch.setattr(tokens_cmd, "load_config", default_config)
    monkeypatch.setattr(tokens_cmd, "make_client", lambda *_args, **_kwargs: client)
    runner = CliRunner()
    return runner.invoke(main._build_app(), args)


def test_list_json_outputs_wire_shape(monkeypatch) -> None:
    client = _FakeClient()
    result = _invoke(monkeypatch, client, ["list", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == [TOKEN.to_dict()]
    assert client.closed is True


def test_list_table_shows_total(monkeypatch) -> None:
    result = _invoke(monkeypatch, _FakeClient(), ["list"])

    assert result.exit_code == 0
    assert "total=1" in result.output


def test_list_unauthorized_exits_2(monkeypatch) -> None:
    client = _FakeClient(list_error=ApiError(401, "invalid api key", None))
    result = _invoke(monkeypatch, client, ["list"])

    assert result.exit_code == 2
    assert "Unauthorized" in result.output
    assert client.closed is True


def test_revoke_parses_expiry(monkeypatch) -> None:
    client = _FakeClient()
    result = _invoke(monkeypatch, client, ["revoke", "j1", "--reason", "leak", "--expires", "2030-01-01T00:00:00Z"])

    assert result.exit_code == 0
    assert client.revoked == [("j1", "leak", datetime(2030, 1, 1, tzinfo=timezone.utc))]
    assert "Token revoked" in result.output


def test_revoke_rejects_bad_expiry(monkeypatch) -> None:
    client = _FakeClient()
    result = _invoke(monkeypatch, client, ["revoke", "j1", "--reason", "leak", "--expires", "soon"])

    assert result.exit_code == 2
    assert client.revoked == []


def test_delete_requires_confirmation(monkeypatch) -> None:
    client = _FakeClient()
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: False)
    result = _invoke(monkeypatch, client, ["delete", "j1"])

    assert result.exit_code == 0
    assert client.deleted == []


def test_delete_with_yes_skips_prompt(monkeypatch) -> None:
    client = _FakeClient()
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: (_ for _ in ()).throw(RuntimeError("prompted")))
    result = _invoke(monkeypatch, client, ["delete", "j1", "--yes"])

    assert result.exit_code == 0
    assert client.deleted == ["j1"]


def test_delete_unexpected_status_exits_2(monkeypatch) -> None:
    client = _FakeClient(delete_error=UnexpectedStatusError(200))
    result = _invoke(monkeypatch, client, ["delete", "j1", "--yes"])

    assert result.exit_code == 2
    assert "unexpected status code: 200" in result.output


def test_delete_not_found_hint(monkeypatch) -> None:
    client = _FakeClient(delete_error=ApiError(404, "not found", {"id": "j1"}))
    result = _invoke(monkeypatch, client, ["delete", "j1", "--yes"])

    assert result.exit_code == 2
    assert "not found" in result.output
