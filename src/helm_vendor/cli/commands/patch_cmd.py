"""hvm patch - Apply a patch file to a vendored chart."""

from __future__ import annotations

import typer

from helm_vendor.cli.options import ChartOption, DirOption, OutputOption, VersionOption
from helm_vendor.core.errors import VendorError
from helm_vendor.core.patch_applicator import apply_patch
from helm_vendor.output.formatters import output_apply_outcome

app = typer.Typer()


@app.callback(invoke_without_command=True)
def patch(
    chart: str = ChartOption,
    version: str = VersionOption,
    charts_dir: str = DirOption,
    patch_file: str = typer.Option(..., "--patch-file", "-f", help="Patch file to apply"),
    output: str = OutputOption,
) -> None:
    """Apply the changes in a patch file to a chart version."""
    try:
        outcome = apply_patch(chart, version, charts_dir, patch_file)
    except VendorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    output_apply_outcome(outcome, output)
