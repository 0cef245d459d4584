import logging

__version__ = "0.1.0"

from .client import JwtRevokeClient
from .config_types import (
    ClientConfig,
    new_config,
    with_base_url,
    with_max_retries,
    with_rate_limit_delay,
    with_timeout,
)
from .errors import (
    ApiError,
    AuthError,
    CancelledError,
    DecodeError,
    JwtRevokeError,
    NetworkError,
    RetriesExhaustedError,
    UnexpectedStatusError,
)
from .models import RevokedToken, RevokeRequest

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "JwtRevokeClient",
    "ClientConfig",
    "new_config",
    "with_base_url",
    "with_max_retries",
    "with_rate_limit_delay",
    "with_timeout",
    "ApiError",
    "AuthError",
    "CancelledError",
    "DecodeError",
    "JwtRevokeError",
    "NetworkError",
    "RetriesExhaustedError",
    "UnexpectedStatusError",
    "RevokedToken",
    "RevokeRequest",
]
