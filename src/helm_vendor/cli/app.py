"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="hvm",
    help="Helm Vendor - pull upstream charts and keep local customizations across versions.",
    no_args_is_help=True,
)


@app.callback()
def root(
    debug: bool = typer.Option(False, "--debug", help="Log external tool invocations and decisions"),
) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _register_commands() -> None:
    from helm_vendor.cli.commands.pull_cmd import app as pull_app
    from helm_vendor.cli.commands.patch_cmd import app as patch_app
    from helm_vendor.cli.commands.diff_cmd import app as diff_app
    from helm_vendor.cli.commands.list_cmd import app as list_app

    app.add_typer(pull_app, name="pull", help="Pull an upstream chart version")
    app.add_typer(patch_app, name="patch", help="Apply a patch file to a chart")
    app.add_typer(diff_app, name="diff", help="Generate a patch file of local chart changes")
    app.add_typer(list_app, name="list", help="List vendored versions of a chart")


_register_commands()


def main() -> None:
    app()
