"""Pull an upstream chart and carry local customizations forward onto it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from helm_vendor.core.chart_layout import rearrange_chart_directory
from helm_vendor.core.errors import InvalidInputError
from helm_vendor.core.package_client import PackageClient
from helm_vendor.core.patch_applicator import apply_patch
from helm_vendor.core.patch_generator import generate_patch
from helm_vendor.core.provenance_store import ProvenanceStore
from helm_vendor.core.tool_runner import ToolRunner, default_runner
from helm_vendor.core.version_ledger import select_patch_base
from helm_vendor.models.chart import ChartPaths
from helm_vendor.models.patch import ApplyOutcome, Diff, PatchResult
from helm_vendor.models.provenance import ProvenanceRecord
from helm_vendor.utils.version_compare import parse_version

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass
class PullRequest:
    chart: str
    version: str
    repo_url: str
    charts_dir: str | Path
    target_version: str = ""
    save_upstream: bool = True
    patch: bool = True
    patch_version: str = ""


@dataclass
class PullResult:
    chart: str
    version: str
    target_version: str
    repo_name: str
    chart_dir: Path
    upstream_dir: Path | None = None
    provenance_file: Path | None = None
    patch_base: str | None = None
    patch_result: PatchResult | None = None
    apply_outcome: ApplyOutcome | None = None


def validate_request(request: PullRequest) -> PullRequest:
    """Check every input up front so a bad request has no side effects."""
    for flag, value in (
        ("chart", request.chart),
        ("version", request.version),
        ("repo", request.repo_url),
        ("dir", str(request.charts_dir)),
    ):
        if not value or not value.strip():
            raise InvalidInputError(f"{flag} can not be empty")

    target_version = request.target_version or request.version
    if not target_version.strip():
        raise InvalidInputError("target-version can not be empty")
    if parse_version(target_version) is None:
        raise InvalidInputError(f"invalid target version {target_version}")

    patch_version = request.patch_version if request.patch else ""
    if patch_version and parse_version(patch_version) is None:
        raise InvalidInputError(f"invalid patch version {patch_version}")

    return PullRequest(
        chart=request.chart.strip(),
        version=request.version.strip(),
        repo_url=request.repo_url.strip(),
        charts_dir=Path(request.charts_dir),
        target_version=target_version.strip(),
        save_upstream=request.save_upstream,
        patch=request.patch,
        patch_version=patch_version.strip(),
    )


def pull_chart(
    request: PullRequest,
    client: PackageClient,
    runner: ToolRunner | None = None,
    on_progress: ProgressCallback | None = None,
) -> PullResult:
    """Download, normalize, snapshot and patch one chart version.

    Steps run in order and the first failure propagates; completed steps
    (e.g. the download) are kept.
    """
    req = validate_request(request)
    runner = runner or default_runner()
    paths = ChartPaths.of(req.charts_dir)
    chart, version, target = req.chart, req.version, req.target_version

    def progress(message: str) -> None:
        logger.info(message)
        if on_progress:
            on_progress(message)

    progress(f"Adding/updating {chart} chart repo {req.repo_url}")
    repo_name = client.add_and_update_repo(chart, req.repo_url)

    progress(f"Pulling {chart} chart version {version} to target version {target}")
    chart_dir = paths.chart_dir(chart, target)
    client.download_chart(chart, repo_name, version, chart_dir)

    progress("Rearranging chart directory")
    rearrange_chart_directory(chart, paths.charts_dir, target)

    result = PullResult(
        chart=chart,
        version=version,
        target_version=target,
        repo_name=repo_name,
        chart_dir=chart_dir,
    )

    if req.save_upstream:
        store = ProvenanceStore(paths.charts_dir)
        progress("Saving upstream chart")
        result.upstream_dir = store.save_upstream_chart(chart, version, target)

        progress("Saving chart provenance file")
        index_entry = client.fetch_upstream_metadata(chart, req.repo_url, version)
        record = ProvenanceRecord.for_upstream(version, index_entry)
        result.provenance_file = store.save(record, chart, target)

    if not req.patch:
        return result

    base = req.patch_version or select_patch_base(paths.charts_dir, chart, target)
    result.patch_base = base
    if base is None:
        progress(f"No version of {chart} older than {target}, nothing to patch")
        return result

    progress(f"Generating patch from version {base}")
    result.patch_result = generate_patch(chart, base, paths.charts_dir, runner=runner)
    if isinstance(result.patch_result, Diff):
        progress(f"Applying {result.patch_result.path.name} to version {target}")
        result.apply_outcome = apply_patch(
            chart, target, paths.charts_dir, result.patch_result.path, runner=runner,
        )
    return result
