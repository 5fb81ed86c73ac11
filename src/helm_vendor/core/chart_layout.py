"""Normalize a pulled chart into ``<charts>/<chart>/<version>/``."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from helm_vendor.core.errors import RepositoryCorruptionError
from helm_vendor.models.chart import ChartPaths

logger = logging.getLogger(__name__)


def rearrange_chart_directory(chart: str, charts_dir: str | Path, target_version: str) -> Path:
    """Flatten the ``<chart>/`` level that ``helm pull --untar`` nests under the untar dir."""
    chart_dir = ChartPaths.of(charts_dir).chart_dir(chart, target_version)
    if not chart_dir.is_dir():
        raise RepositoryCorruptionError(f"chart directory {chart_dir} not found", path=chart_dir)

    nested = chart_dir / chart
    if not nested.is_dir():
        return chart_dir

    # Rename first: the chart may itself contain an entry named after the chart
    staging = chart_dir / f".{chart}.untar"
    if staging.exists():
        shutil.rmtree(staging)
    nested.rename(staging)
    shutil.copytree(staging, chart_dir, symlinks=True, dirs_exist_ok=True)
    shutil.rmtree(staging)
    logger.debug("Flattened %s into %s", nested, chart_dir)
    return chart_dir
