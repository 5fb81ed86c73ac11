"""Vendored chart versions and patch-base selection."""

from __future__ import annotations

import logging
from pathlib import Path

from helm_vendor.core.errors import InvalidInputError, RepositoryCorruptionError
from helm_vendor.core.provenance_store import ProvenanceStore
from helm_vendor.models.chart import ChartPaths, VendoredVersion
from helm_vendor.utils.version_compare import ChartVersion

logger = logging.getLogger(__name__)


def list_versions(charts_dir: str | Path, chart: str) -> list[ChartVersion]:
    """Return every version directory under ``<charts>/<chart>``, ascending.

    A directory whose name is not a semantic version means the repository
    has been tampered with; it raises instead of being skipped.
    """
    chart_root = ChartPaths.of(charts_dir).chart_root(chart)
    try:
        entries = list(chart_root.iterdir())
    except OSError as e:
        raise RepositoryCorruptionError(
            f"unable to read chart directory {chart_root}: {e}", path=chart_root,
        ) from e

    versions: list[ChartVersion] = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            versions.append(ChartVersion.parse(entry.name))
        except ValueError as e:
            raise RepositoryCorruptionError(
                f"invalid chart version directory {entry}: {e}", path=entry,
            ) from e

    versions.sort()
    return versions


def select_patch_base(charts_dir: str | Path, chart: str, target_version: str) -> str | None:
    """Pick the vendored version whose customizations carry over to ``target_version``.

    Returns the directory name of the highest version strictly below the
    target, or None when the target is the first vendored version.
    """
    try:
        target = ChartVersion.parse(target_version)
    except ValueError as e:
        raise InvalidInputError(f"invalid chart version {target_version}: {e}") from e

    older = [v for v in list_versions(charts_dir, chart) if v.precedes(target)]
    if not older:
        logger.debug("No version of %s below %s, nothing to carry forward", chart, target_version)
        return None

    base = max(older)
    logger.debug("Selected %s as patch base for %s %s", base, chart, target_version)
    return base.raw


def describe_versions(charts_dir: str | Path, chart: str) -> list[VendoredVersion]:
    """Summarize each vendored version with its provenance and patch artifact state."""
    paths = ChartPaths.of(charts_dir)
    store = ProvenanceStore(paths.charts_dir)
    rows: list[VendoredVersion] = []
    for version in list_versions(paths.charts_dir, chart):
        row = VendoredVersion(version=version.raw)
        record = store.find(chart, version.raw)
        if record is not None:
            row.upstream_version = record.upstream_version
            row.snapshot_present = store.upstream_dir(chart, record).is_dir()
        patch_file = paths.patch_file(chart, version.raw)
        if patch_file.is_file():
            row.patch_file = patch_file
        rows.append(row)
    return rows
