from __future__ import annotations

import logging

# third-party loggers that are chatty at INFO
_QUIET_BY_DEFAULT = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    """Configure stderr logging; ``verbose`` also shows retry decisions of the client."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    for name in _QUIET_BY_DEFAULT:
        logging.getLogger(name).setLevel(level)
    logging.getLogger("jwtrevoke_client").setLevel(level)
