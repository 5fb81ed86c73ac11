"""Diff a vendored chart against its pristine upstream snapshot."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from helm_vendor.config.settings import settings
from helm_vendor.core.errors import RepositoryCorruptionError, ToolError
from helm_vendor.core.provenance_store import ProvenanceStore
from helm_vendor.core.tool_runner import ToolRunner, default_runner
from helm_vendor.models.chart import ChartPaths
from helm_vendor.models.patch import Diff, NoDiff, PatchResult

logger = logging.getLogger(__name__)

# diff(1) exit statuses: 0 = identical, 1 = differences found, >1 = trouble
DIFF_IDENTICAL = 0
DIFF_DIFFERENCES_FOUND = 1

# Tree roots as they appear in the patch headers, so apply always uses -p1
UPSTREAM_LABEL = "a"
LOCAL_LABEL = "b"


def generate_patch(
    chart: str,
    version: str,
    charts_dir: str | Path,
    runner: ToolRunner | None = None,
) -> PatchResult:
    """Produce ``<chart>_patch_<version>.patch`` holding the local customizations of ``version``.

    The diff runs from the upstream snapshot recorded in the version's
    provenance file to the current chart directory. An empty diff leaves no
    artifact behind and yields NoDiff.
    """
    runner = runner or default_runner()
    paths = ChartPaths.of(charts_dir)
    store = ProvenanceStore(paths.charts_dir)

    record = store.load(chart, version)

    chart_dir = paths.chart_dir(chart, version)
    if not chart_dir.is_dir():
        raise RepositoryCorruptionError(f"chart directory {chart_dir} not found", path=chart_dir)

    upstream_dir = store.upstream_dir(chart, record)
    if not upstream_dir.is_dir():
        raise RepositoryCorruptionError(
            f"upstream chart directory {upstream_dir} not found", path=upstream_dir,
        )

    with tempfile.TemporaryDirectory(prefix="hvm-diff-") as workdir:
        work = Path(workdir)
        (work / UPSTREAM_LABEL).symlink_to(upstream_dir, target_is_directory=True)
        (work / LOCAL_LABEL).symlink_to(chart_dir, target_is_directory=True)
        cmd = [settings.diff_binary, "-Naurw", UPSTREAM_LABEL, LOCAL_LABEL]
        result = runner.run(cmd, cwd=work)

    if result.returncode not in (DIFF_IDENTICAL, DIFF_DIFFERENCES_FOUND):
        raise ToolError(
            f"diff exited with status {result.returncode}",
            command=cmd,
            returncode=result.returncode,
            stderr=result.stderr_text,
        )

    patch_file = paths.patch_file(chart, version)
    if not result.stdout:
        patch_file.unlink(missing_ok=True)
        logger.debug("No differences between %s and %s", upstream_dir, chart_dir)
        return NoDiff()

    patch_file.write_bytes(result.stdout)
    logger.debug("Wrote %d bytes of diff to %s", len(result.stdout), patch_file)
    return Diff(path=patch_file)
