import logging

from jwtrevoke_cli.logging_ import setup_logging


def test_verbose_enables_client_debug_logs() -> None:
    setup_logging(True)
    assert logging.getLogger("jwtrevoke_client").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_quiet_keeps_client_and_httpx_at_warning() -> None:
    setup_logging(False)
    assert logging.getLogger("jwtrevoke_client").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
