"""Chart repository layout models."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ChartPaths:
    """Deterministic locations of everything vendored under a charts directory.

    The repository root is the lexical parent of the absolute charts
    directory, so ``charts/../provenance`` never depends on symlink targets.
    """

    charts_dir: Path

    @classmethod
    def of(cls, charts_dir: str | Path) -> ChartPaths:
        return cls(charts_dir=Path(os.path.abspath(charts_dir)))

    @property
    def repo_root(self) -> Path:
        return self.charts_dir.parent

    @property
    def provenance_root(self) -> Path:
        return self.repo_root / "provenance"

    def chart_root(self, chart: str) -> Path:
        return self.charts_dir / chart

    def chart_dir(self, chart: str, version: str) -> Path:
        return self.charts_dir / chart / version

    def provenance_dir(self, chart: str) -> Path:
        return self.provenance_root / chart

    def provenance_file(self, chart: str, version: str) -> Path:
        return self.provenance_dir(chart) / f"{version}.yaml"

    def upstream_dir(self, chart: str, upstream_version: str) -> Path:
        return self.provenance_dir(chart) / "upstreams" / upstream_version

    def patch_file(self, chart: str, version: str) -> Path:
        return self.repo_root / f"{chart}_patch_{version}.patch"

    def patch_output_file(self, chart: str, version: str) -> Path:
        return self.repo_root / f"{chart}_patch_{version}_out"

    def patch_rejects_file(self, chart: str, version: str) -> Path:
        return self.repo_root / f"{chart}_patch_{version}_rejects"


@dataclass
class VendoredVersion:
    version: str
    upstream_version: str = ""
    snapshot_present: bool = False
    patch_file: Path | None = None
