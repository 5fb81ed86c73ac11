"""hvm list - List vendored versions of a chart."""

from __future__ import annotations

import typer

from helm_vendor.cli.options import ChartOption, DirOption, OutputOption
from helm_vendor.core.errors import VendorError
from helm_vendor.core.version_ledger import describe_versions
from helm_vendor.output.formatters import output_versions

app = typer.Typer()


@app.callback(invoke_without_command=True)
def list_versions(
    chart: str = ChartOption,
    charts_dir: str = DirOption,
    output: str = OutputOption,
) -> None:
    """Show each vendored version with its upstream provenance."""
    try:
        rows = describe_versions(charts_dir, chart)
    except VendorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    output_versions(chart, rows, output)
