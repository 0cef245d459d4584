from __future__ import annotations

import typer

from .commands import settings_cmd, tokens_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="jwtrevoke",
        help="jwtrevoke CLI: manage revoked JWTs.",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.command("list")(tokens_cmd.list_tokens)
    app.command("revoke")(tokens_cmd.revoke_token)
    app.command("delete")(tokens_cmd.delete_token)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
