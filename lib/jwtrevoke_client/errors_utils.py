from __future__ import annotations

from typing import Any

from .errors import ApiError


def api_error_data(exc: BaseException) -> dict[str, Any] | None:
    if not isinstance(exc, ApiError):
        return None
    if isinstance(exc.data, dict):
        return exc.data
    return None
