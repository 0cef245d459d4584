from __future__ import annotations

import typer
from jwtrevoke_client import (
    ApiError,
    CancelledError,
    DecodeError,
    JwtRevokeError,
    NetworkError,
    RetriesExhaustedError,
    UnexpectedStatusError,
)
from jwtrevoke_client.errors_utils import api_error_data
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_expires_in, format_list_timestamp, parse_expiry
from ..http import make_client


def _fail(action: str, exc: JwtRevokeError, *, jwt_id: str | None = None) -> None:
    if isinstance(exc, ApiError):
        if exc.status_code in (401, 403):
            console.err("Unauthorized. Check the API key.")
        elif exc.status_code == 404 and jwt_id:
            console.err(f"Revocation for {jwt_id} not found. Use `jwtrevoke list`.")
        else:
            console.err(f"Failed to {action}: {exc.message} (status {exc.status_code})")
        details = api_error_data(exc)
        if details:
            console.print_json(details)
    elif isinstance(exc, NetworkError):
        console.err(f"Failed to {action}: network error: {exc}")
    elif isinstance(exc, RetriesExhaustedError):
        console.err(f"Failed to {action}: server kept failing (last status {exc.status_code}). Try again later.")
    elif isinstance(exc, UnexpectedStatusError):
        console.err(f"Failed to {action}: {exc}")
    elif isinstance(exc, DecodeError):
        console.err(f"Failed to {action}: malformed response: {exc}")
    elif isinstance(exc, CancelledError):
        console.warn("Cancelled.")
    else:
        console.err(f"Failed to {action}: {exc}")
    raise typer.Exit(code=2)


def list_tokens(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """List revoked tokens."""
    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        tokens = client.list_revoked_tokens()
    except JwtRevokeError as e:
        _fail("list revoked tokens", e)
    finally:
        client.close()

    if json_out:
        console.print_json([t.to_dict() for t in tokens])
        return

    table = Table(title="Revoked tokens")
    table.add_column("id", style="bold")
    table.add_column("jwt_id")
    table.add_column("reason")
    table.add_column("expires_at")
    table.add_column("expires_in")
    table.add_column("revoked_by")

    for t in tokens:
        table.add_row(
            t.id,
            t.jwt_id,
            t.reason,
            format_list_timestamp(t.expiry_date),
            format_expires_in(t.expiry_date),
            t.revoked_by_email or "-",
        )

    console.console.print(table)
    console.info(f"total={len(tokens)}")


def revoke_token(
        jwt_id: str = typer.Argument(..., help="JWT identifier (jti) to revoke."),
        reason: str = typer.Option(..., "--reason", help="Why the token is revoked."),
        expires: str = typer.Option(
            ...,
            "--expires",
            help="When the token expires anyway, ISO 8601 (e.g. 2030-01-01T00:00:00Z).",
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Revoke a token by its JWT id."""
    try:
        expiry = parse_expiry(expires)
    except ValueError:
        console.err(f"Invalid --expires value: {expires}")
        raise typer.Exit(code=2)

    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        token = client.revoke_token(jwt_id, reason, expiry)
    except JwtRevokeError as e:
        _fail("revoke token", e)
    finally:
        client.close()

    if json_out:
        console.print_json(token.to_dict())
        return

    console.ok(f"Token revoked: id={token.id} jwt_id={token.jwt_id} expires_at={format_list_timestamp(token.expiry_date)}")


def delete_token(
        jwt_id: str = typer.Argument(..., help="JWT identifier whose revocation is removed."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
):
    """Delete a revocation, making the token valid again."""
    if not yes:
        confirmed = typer.confirm(f"Delete revocation for {jwt_id}?", default=False)
        if not confirmed:
            console.info("Aborted.")
            raise typer.Exit(code=0)

    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        client.delete_revoked_token(jwt_id)
    except JwtRevokeError as e:
        _fail("delete revocation", e, jwt_id=jwt_id)
    finally:
        client.close()

    console.ok(f"Revocation deleted: {jwt_id}")
