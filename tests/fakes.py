"""In-memory stand-ins for the external tool runner and the chart repository client."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence, Union

import pytest

from helm_vendor.core.package_client import PackageClient
from helm_vendor.core.provenance_store import ProvenanceStore
from helm_vendor.core.tool_runner import ToolResult, ToolRunner
from helm_vendor.models.provenance import ProvenanceRecord

ScriptedResponse = Union[ToolResult, Callable[[list[str], Path | None], ToolResult]]

requires_gnu_tools = pytest.mark.skipif(
    shutil.which("diff") is None or shutil.which("patch") is None,
    reason="GNU diff and patch are required",
)


@dataclass(frozen=True)
class RunCall:
    args: list[str]
    cwd: Path | None


class FakeToolRunner(ToolRunner):
    """Returns scripted results in order; a callable response may touch the filesystem."""

    def __init__(self, responses: Sequence[ScriptedResponse] = ()):
        self._responses = list(responses)
        self._calls: list[RunCall] = []

    def run(self, args: Sequence[str], cwd: Path | None = None) -> ToolResult:
        call = RunCall(args=[str(a) for a in args], cwd=cwd)
        self._calls.append(call)
        if not self._responses:
            return ToolResult(returncode=0)
        response = self._responses.pop(0)
        if callable(response):
            return response(call.args, cwd)
        return response

    @property
    def calls(self) -> list[RunCall]:
        return list(self._calls)


@dataclass
class FakePackageClient(PackageClient):
    """Serves chart trees from a {version: {relative_path: content}} mapping.

    Downloads nest the chart one level deep, the way ``helm pull --untar`` does.
    """

    charts: dict[str, dict[str, str]] = field(default_factory=dict)
    repo_name: str = "fake-provider"
    added_repos: list[str] = field(default_factory=list)
    downloads: list[tuple[str, str, Path]] = field(default_factory=list)

    def add_and_update_repo(self, chart: str, repo_url: str) -> str:
        self.added_repos.append(repo_url)
        return self.repo_name

    def download_chart(self, chart: str, repo_name: str, version: str, dest: Path) -> None:
        self.downloads.append((chart, version, dest))
        files = self.charts[version]
        root = dest / chart
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

    def fetch_upstream_metadata(self, chart: str, repo_url: str, version: str) -> dict[str, Any]:
        return {
            "name": chart,
            "version": version,
            "urls": [f"{repo_url.rstrip('/')}/{chart}-{version}.tgz"],
        }


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``root`` with the given relative files."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    root.mkdir(parents=True, exist_ok=True)
    return root


def read_tree(root: Path) -> dict[str, str]:
    return {
        str(p.relative_to(root)): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def vendor_chart(
    charts_dir: Path,
    chart: str,
    version: str,
    upstream: dict[str, str],
    local: dict[str, str] | None = None,
) -> Path:
    """Lay out a vendored chart the way a pull with provenance would leave it.

    ``upstream`` becomes the pristine snapshot; ``local`` (default: the same
    files) becomes the possibly hand-edited chart directory.
    """
    store = ProvenanceStore(charts_dir)
    write_tree(store.paths.upstream_dir(chart, version), upstream)
    store.save(ProvenanceRecord.for_upstream(version, {"name": chart, "version": version}), chart, version)
    return write_tree(store.paths.chart_dir(chart, version), upstream if local is None else local)
