"""Persist provenance records and pristine upstream snapshots."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import yaml

from helm_vendor.core.errors import (
    ProvenanceNotFoundError,
    ProvenanceParseError,
    RepositoryCorruptionError,
)
from helm_vendor.models.chart import ChartPaths
from helm_vendor.models.provenance import ProvenanceRecord

logger = logging.getLogger(__name__)


class ProvenanceStore:
    """Reads and writes the ``provenance/`` area next to a charts directory."""

    def __init__(self, charts_dir: str | Path):
        self.paths = ChartPaths.of(charts_dir)

    def save_upstream_chart(self, chart: str, upstream_version: str, target_version: str) -> Path:
        """Copy the freshly pulled tree to ``upstreams/<upstream_version>``.

        Must run before anything edits the chart directory; later diffs are
        taken against this copy.
        """
        chart_dir = self.paths.chart_dir(chart, target_version)
        if not chart_dir.is_dir():
            raise RepositoryCorruptionError(f"chart directory {chart_dir} not found", path=chart_dir)

        upstream_dir = self.paths.upstream_dir(chart, upstream_version)
        if upstream_dir.exists():
            shutil.rmtree(upstream_dir)
        upstream_dir.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(chart_dir, upstream_dir, symlinks=True)
        logger.debug("Saved upstream %s %s to %s", chart, upstream_version, upstream_dir)
        return upstream_dir

    def save(self, record: ProvenanceRecord, chart: str, version: str) -> Path:
        """Write ``record`` as ``provenance/<chart>/<version>.yaml``, replacing any previous one."""
        path = self.paths.provenance_file(chart, version)
        path.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(record.to_dict(), default_flow_style=False, sort_keys=False)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote provenance record %s", path)
        return path

    def load(self, chart: str, version: str) -> ProvenanceRecord:
        path = self.paths.provenance_file(chart, version)
        if not path.is_file():
            raise ProvenanceNotFoundError(f"provenance file {path} not found", path=path)

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ProvenanceParseError(f"unable to read provenance file {path}: {e}", path=path) from e
        except yaml.YAMLError as e:
            raise ProvenanceParseError(f"unable to parse provenance file {path}: {e}", path=path) from e

        if not isinstance(data, dict):
            raise ProvenanceParseError(f"provenance file {path} is not a mapping", path=path)
        try:
            return ProvenanceRecord.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ProvenanceParseError(f"invalid provenance file {path}: {e}", path=path) from e

    def find(self, chart: str, version: str) -> ProvenanceRecord | None:
        """Like load(), but None when no record was ever saved for this version."""
        try:
            return self.load(chart, version)
        except ProvenanceNotFoundError:
            return None

    def upstream_dir(self, chart: str, record: ProvenanceRecord) -> Path:
        return Path(os.path.abspath(self.paths.provenance_dir(chart) / record.upstream_chart_local_path))
