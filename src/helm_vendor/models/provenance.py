"""Provenance record linking a vendored chart to its upstream snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProvenanceRecord:
    upstream_version: str
    upstream_chart_local_path: str
    upstream_index_entry: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_upstream(cls, upstream_version: str, index_entry: dict[str, Any]) -> ProvenanceRecord:
        return cls(
            upstream_version=upstream_version,
            upstream_chart_local_path=f"upstreams/{upstream_version}",
            upstream_index_entry=index_entry,
        )

    @classmethod
    def from_dict(cls, d: dict) -> ProvenanceRecord:
        """Build a record from its YAML mapping. Raises KeyError/TypeError on bad shape."""
        upstream_version = d["upstreamVersion"]
        local_path = d["upstreamChartLocalPath"]
        if not isinstance(upstream_version, str) or not isinstance(local_path, str):
            raise TypeError("upstreamVersion and upstreamChartLocalPath must be strings")
        entry = d.get("upstreamIndexEntry") or {}
        if not isinstance(entry, dict):
            raise TypeError("upstreamIndexEntry must be a mapping")
        return cls(
            upstream_version=upstream_version,
            upstream_chart_local_path=local_path,
            upstream_index_entry=entry,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "upstreamVersion": self.upstream_version,
            "upstreamChartLocalPath": self.upstream_chart_local_path,
            "upstreamIndexEntry": self.upstream_index_entry,
        }
