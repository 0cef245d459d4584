from __future__ import annotations

from importlib import metadata

import typer
from jwtrevoke_client import JwtRevokeClient
from jwtrevoke_client.config_types import ClientConfig

from . import console
from .config import AppConfig, apply_profile, normalize_base_url, resolve_api_key


def cli_version() -> str:
    try:
        return metadata.version("jwtrevoke")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    base_url_override: str | None,
) -> JwtRevokeClient:
    effective_cfg = apply_profile(cfg, profile)
    base_url = normalize_base_url(base_url_override or effective_cfg.base_url, warn=True)
    api_key = resolve_api_key(effective_cfg)
    if not api_key:
        console.err("API key is not set. Use `jwtrevoke settings set --api-key KEY` or JWTREVOKE_API_KEY.")
        raise typer.Exit(code=2)

    try:
        client_cfg = ClientConfig(
            api_key=api_key,
            base_url=base_url,
            max_retries=effective_cfg.retry.max_retries,
            timeout_s=effective_cfg.retry.timeout_s,
            rate_limit_delay_s=effective_cfg.retry.rate_limit_delay_s,
            client_version=f"jwtrevoke-cli/{cli_version()}",
        )
    except ValueError as e:
        console.err(f"Invalid settings: {e}")
        raise typer.Exit(code=2)
    return JwtRevokeClient(client_cfg)
