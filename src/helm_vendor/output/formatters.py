"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from helm_vendor.core.pull_orchestrator import PullResult
from helm_vendor.models.chart import VendoredVersion
from helm_vendor.models.patch import ApplyOutcome, Diff, PartialApply, PatchResult

console = Console()


def _path(p) -> str | None:
    return str(p) if p else None


def _patch_result_to_dict(result: PatchResult | None) -> dict[str, Any] | None:
    if result is None:
        return None
    if isinstance(result, Diff):
        return {"has_changes": True, "patch_file": str(result.path)}
    return {"has_changes": False, "patch_file": None}


def _apply_outcome_to_dict(outcome: ApplyOutcome | None) -> dict[str, Any] | None:
    if outcome is None:
        return None
    data: dict[str, Any] = {
        "status": outcome.status.value,
        "output_file": _path(outcome.output_path),
        "rejects_file": None,
    }
    if isinstance(outcome, PartialApply):
        data["rejects_file"] = str(outcome.rejects_path)
        data["rejects"] = outcome.rejects
    return data


def _pull_result_to_dict(result: PullResult) -> dict[str, Any]:
    return {
        "chart": result.chart,
        "version": result.version,
        "target_version": result.target_version,
        "repo": result.repo_name,
        "chart_dir": str(result.chart_dir),
        "upstream_dir": _path(result.upstream_dir),
        "provenance_file": _path(result.provenance_file),
        "patch_base": result.patch_base,
        "patch": _patch_result_to_dict(result.patch_result),
        "apply": _apply_outcome_to_dict(result.apply_outcome),
    }


def _version_to_dict(row: VendoredVersion) -> dict[str, Any]:
    return {
        "version": row.version,
        "upstream_version": row.upstream_version or None,
        "upstream_copy": row.snapshot_present,
        "patch_file": _path(row.patch_file),
    }


def _dump(data: Any, fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
    else:
        # printed verbatim so rejected hunks and long paths survive intact
        console.print(
            yaml.dump(data, default_flow_style=False, sort_keys=False),
            markup=False,
            emoji=False,
            soft_wrap=True,
        )


def output_pull_result(result: PullResult, fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump(_pull_result_to_dict(result), fmt)
        return

    from helm_vendor.output.tables import pull_summary_panel
    console.print(pull_summary_panel(result))
    if result.patch_base and result.patch_result is not None and not isinstance(result.patch_result, Diff):
        console.print(f"[dim]Nothing to patch from version {result.patch_base}[/dim]")
    if result.apply_outcome is not None:
        _print_apply_details(result.apply_outcome)
        console.print(f"\nAny diffs from version {result.patch_base} have been applied")


def output_apply_outcome(outcome: ApplyOutcome, fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump(_apply_outcome_to_dict(outcome), fmt)
        return

    from helm_vendor.output.tables import apply_outcome_panel
    console.print(apply_outcome_panel(outcome))
    _print_apply_details(outcome)


def output_patch_result(result: PatchResult, fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump(_patch_result_to_dict(result), fmt)
        return

    if isinstance(result, Diff):
        console.print(f"Patch file written to [bold]{result.path}[/bold]")
    else:
        console.print("[green]No local changes, no patch file written.[/green]")


def output_versions(chart: str, rows: list[VendoredVersion], fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump([_version_to_dict(r) for r in rows], fmt)
        return

    from helm_vendor.output.tables import versions_table
    console.print(versions_table(chart, rows))


def _print_apply_details(outcome: ApplyOutcome) -> None:
    from helm_vendor.output.tables import patch_output_panel, rejects_panel
    if outcome.output:
        console.print(patch_output_panel(outcome.output))
    if isinstance(outcome, PartialApply):
        console.print(rejects_panel(outcome))
        console.print(
            f"[yellow]Some hunks could not be applied. Review {outcome.rejects_path} "
            "and apply them by hand.[/yellow]"
        )
    else:
        console.print("[green]No rejects from patching[/green]")
