from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from jwtrevoke_client.config_types import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RATE_LIMIT_DELAY_S,
    DEFAULT_TIMEOUT_S,
)
from platformdirs import user_config_dir

from . import console

APP_NAME = "jwtrevoke"
CONFIG_FILENAME = "config.toml"
ENV_API_KEY = "JWTREVOKE_API_KEY"

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AuthConfig:
    api_key: str = ""


@dataclass
class RetryConfig:
    max_retries: int = DEFAULT_MAX_RETRIES
    timeout_s: float = DEFAULT_TIMEOUT_S
    rate_limit_delay_s: float = DEFAULT_RATE_LIMIT_DELAY_S


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig
    retry: RetryConfig = field(default_factory=RetryConfig)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url=DEFAULT_BASE_URL,
        auth=AuthConfig(api_key=""),
        retry=RetryConfig(),
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "auth": {
            "api_key": cfg.auth.api_key,
        },
        "retry": {
            "max_retries": cfg.retry.max_retries,
            "timeout_s": cfg.retry.timeout_s,
            "rate_limit_delay_s": cfg.retry.rate_limit_delay_s,
        },
    }


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _retry_from(raw: Any, base: RetryConfig) -> RetryConfig:
    if not isinstance(raw, dict):
        return RetryConfig(base.max_retries, base.timeout_s, base.rate_limit_delay_s)
    return RetryConfig(
        max_retries=_as_int(raw.get("max_retries", base.max_retries), base.max_retries),
        timeout_s=_as_float(raw.get("timeout_s", base.timeout_s), base.timeout_s),
        rate_limit_delay_s=_as_float(
            raw.get("rate_limit_delay_s", base.rate_limit_delay_s), base.rate_limit_delay_s
        ),
    )


def from_toml(data: dict[str, Any]) -> AppConfig:
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    auth_raw = data.get("auth") or {}
    api_key = ""
    if isinstance(auth_raw, dict):
        api_key = str(auth_raw.get("api_key") or "")
    return AppConfig(
        base_url=base_url or DEFAULT_BASE_URL,
        auth=AuthConfig(api_key=api_key),
        retry=_retry_from(data.get("retry"), RetryConfig()),
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return cfg

    profiles_raw = data.get("profiles") or {}
    if not isinstance(profiles_raw, dict):
        return cfg
    prof = profiles_raw.get(profile)
    if not isinstance(prof, dict):
        return cfg

    base_url = normalize_base_url(str(prof.get("base_url") or cfg.base_url), warn=True)
    auth_raw = prof.get("auth") if isinstance(prof.get("auth"), dict) else {}
    api_key = str(prof.get("api_key") or auth_raw.get("api_key") or cfg.auth.api_key)
    return AppConfig(
        base_url=base_url or cfg.base_url,
        auth=AuthConfig(api_key=api_key),
        retry=_retry_from(prof.get("retry"), cfg.retry),
    )


def resolve_api_key(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_API_KEY, "").strip()
    if env_value:
        return env_value
    return (cfg.auth.api_key or "").strip()


def _existing_profiles(path: str) -> dict[str, Any] | None:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    profiles = data.get("profiles")
    return profiles if isinstance(profiles, dict) else None


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    data = to_toml(cfg)
    # profiles are only edited by hand; keep them across rewrites
    profiles = _existing_profiles(path)
    if profiles:
        data["profiles"] = profiles
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(data).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
