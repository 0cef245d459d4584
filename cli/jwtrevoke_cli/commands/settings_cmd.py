from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/jwtrevoke/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        api_key: str = typer.Option(
            ...,
            "--api-key",
            prompt="API key",
            hide_input=True,
            help="API key sent as X-API-Key.",
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="API base URL."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.auth.api_key = api_key.strip()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True) or cfg.base_url
    if not cfg.auth.api_key:
        console.err("API key cannot be empty.")
        raise typer.Exit(code=2)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    key_state = "(set)" if (cfg.auth.api_key or "").strip() else "(empty)"
    console.console.print(
        f"base_url={cfg.base_url} api_key={key_state} max_retries={cfg.retry.max_retries} "
        f"timeout_s={cfg.retry.timeout_s} rate_limit_delay_s={cfg.retry.rate_limit_delay_s}"
    )


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        api_key: str | None = typer.Option(None, "--api-key", help="Set API key."),
        max_retries: int | None = typer.Option(None, "--max-retries", min=0, help="Retries after the first attempt."),
        timeout_s: float | None = typer.Option(None, "--timeout", min=0.1, help="Per-attempt timeout in seconds."),
        rate_limit_delay_s: float | None = typer.Option(
            None, "--rate-limit-delay", min=0, help="Extra wait after HTTP 429, in seconds."
        ),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True) or cfg.base_url
    if api_key is not None:
        cfg.auth.api_key = api_key.strip()
    if max_retries is not None:
        cfg.retry.max_retries = max_retries
    if timeout_s is not None:
        cfg.retry.timeout_s = timeout_s
    if rate_limit_delay_s is not None:
        cfg.retry.rate_limit_delay_s = rate_limit_delay_s
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
