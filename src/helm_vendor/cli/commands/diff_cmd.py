"""hvm diff - Capture local chart changes as a patch file."""

from __future__ import annotations

import typer

from helm_vendor.cli.options import ChartOption, DirOption, OutputOption, VersionOption
from helm_vendor.core.errors import VendorError
from helm_vendor.core.patch_generator import generate_patch
from helm_vendor.output.formatters import output_patch_result

app = typer.Typer()


@app.callback(invoke_without_command=True)
def diff(
    chart: str = ChartOption,
    version: str = VersionOption,
    charts_dir: str = DirOption,
    output: str = OutputOption,
) -> None:
    """Diff a chart version against its saved upstream copy."""
    try:
        result = generate_patch(chart, version, charts_dir)
    except VendorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    output_patch_result(result, output)
