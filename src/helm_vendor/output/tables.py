"""Rich table builders for each command."""

from __future__ import annotations

from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from helm_vendor.core.pull_orchestrator import PullResult
from helm_vendor.models.chart import VendoredVersion
from helm_vendor.models.patch import ApplyOutcome, Diff, PartialApply, PatchResult
from helm_vendor.output.themes import styled_apply_status, styled_flag


def _key_value_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    return table


def pull_summary_panel(result: PullResult) -> Panel:
    table = _key_value_table()
    table.add_row("Chart", result.chart)
    table.add_row("Upstream Version", result.version)
    table.add_row("Target Version", result.target_version)
    table.add_row("Repository", result.repo_name)
    table.add_row("Chart Dir", str(result.chart_dir))
    if result.upstream_dir:
        table.add_row("Upstream Copy", str(result.upstream_dir))
    if result.provenance_file:
        table.add_row("Provenance", str(result.provenance_file))
    table.add_row("Patch Base", result.patch_base or "-")
    if result.patch_result is not None:
        table.add_row("Patch File", patch_result_text(result.patch_result))
    if result.apply_outcome is not None:
        table.add_row("Patch Result", styled_apply_status(result.apply_outcome.status))
    return Panel(table, title=f"[bold]Pulled {result.chart} {result.target_version}[/bold]", border_style="blue")


def patch_result_text(result: PatchResult) -> str:
    if isinstance(result, Diff):
        return str(result.path)
    return "[dim]none (no local changes)[/dim]"


def apply_outcome_panel(outcome: ApplyOutcome) -> Panel:
    table = _key_value_table()
    table.add_row("Result", styled_apply_status(outcome.status))
    table.add_row("Output File", str(outcome.output_path) if outcome.output_path else "-")
    if isinstance(outcome, PartialApply):
        table.add_row("Rejects File", str(outcome.rejects_path))
    border = "yellow" if isinstance(outcome, PartialApply) else "green"
    return Panel(table, title="[bold]Patch Applied[/bold]", border_style=border)


def patch_output_panel(output: str) -> Panel:
    return Panel(Text(output.rstrip()), title="[bold]Patching Output[/bold]", border_style="dim")


def rejects_panel(outcome: PartialApply) -> Panel:
    syntax = Syntax(outcome.rejects, "diff", theme="monokai", line_numbers=False)
    return Panel(
        syntax,
        title=f"[bold yellow]Rejected hunks ({outcome.rejects_path.name})[/bold yellow]",
        border_style="yellow",
    )


def versions_table(chart: str, rows: list[VendoredVersion]) -> Table:
    table = Table(title=f"Vendored Versions: {chart}", expand=True)
    table.add_column("Version", style="bold magenta", no_wrap=True)
    table.add_column("Upstream", style="magenta")
    table.add_column("Upstream Copy", no_wrap=True)
    table.add_column("Patch File", style="dim")

    for row in rows:
        table.add_row(
            row.version,
            row.upstream_version or "-",
            styled_flag(row.snapshot_present),
            str(row.patch_file) if row.patch_file else "-",
        )
    return table
