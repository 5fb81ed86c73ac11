"""hvm pull - Pull an upstream chart and carry local changes forward."""

from __future__ import annotations

import typer
from rich.console import Console

from helm_vendor.cli.options import ChartOption, DirOption, OutputOption, VersionOption
from helm_vendor.core.errors import VendorError
from helm_vendor.core.helm_client import HelmClient
from helm_vendor.core.pull_orchestrator import PullRequest, pull_chart
from helm_vendor.core.tool_runner import SubprocessToolRunner
from helm_vendor.output.formatters import output_pull_result

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def pull(
    chart: str = ChartOption,
    version: str = VersionOption,
    repo: str = typer.Option(..., "--repo", "-r", help="Chart repository URL"),
    charts_dir: str = DirOption,
    target_version: str = typer.Option(
        "", "--target-version", "-t", help="Directory version to store the chart under (default: --version)",
    ),
    upstream_provenance: bool = typer.Option(
        True, "--upstream-provenance/--no-upstream-provenance", "-u",
        help="Keep a pristine upstream copy and a provenance file",
    ),
    patch: bool = typer.Option(
        True, "--patch/--no-patch", "-p", help="Re-apply local changes from an older vendored version",
    ),
    patch_version: str = typer.Option(
        "", "--patch-version", "-s", help="Version to take local changes from (default: closest older)",
    ),
    output: str = OutputOption,
) -> None:
    """Pull a chart version from an upstream repository into the charts directory."""
    request = PullRequest(
        chart=chart,
        version=version,
        repo_url=repo,
        charts_dir=charts_dir,
        target_version=target_version,
        save_upstream=upstream_provenance,
        patch=patch,
        patch_version=patch_version,
    )
    runner = SubprocessToolRunner()

    try:
        with console.status("[bold cyan]Pulling chart…") as status:
            def on_progress(message: str) -> None:
                status.update(f"[bold cyan]{message}…")

            result = pull_chart(request, HelmClient(runner), runner=runner, on_progress=on_progress)
    except VendorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output_pull_result(result, output)
