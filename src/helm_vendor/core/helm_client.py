"""Chart repository client backed by the helm binary and its local index cache."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

import yaml

from helm_vendor.config.settings import settings
from helm_vendor.core.errors import PackageClientError, ToolError
from helm_vendor.core.package_client import PackageClient
from helm_vendor.core.tool_runner import ToolRunner, default_runner

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)


def repo_name_for(chart: str) -> str:
    return f"{chart}{settings.repo_name_suffix}"


class HelmClient(PackageClient):
    """Thin wrapper around ``helm repo`` / ``helm pull``."""

    def __init__(self, runner: ToolRunner | None = None):
        self.runner = runner or default_runner()

    def add_and_update_repo(self, chart: str, repo_url: str) -> str:
        name = self.find_repo_name(repo_url)
        if name is None:
            name = repo_name_for(chart)
            logger.info("Adding helm repo %s (%s)", name, repo_url)
            self._helm("repo", "add", "--force-update", name, repo_url)
        else:
            logger.info("Using helm repo %s", name)
        self._helm("repo", "update", name)
        return name

    def download_chart(self, chart: str, repo_name: str, version: str, dest: Path) -> None:
        if dest.exists():
            shutil.rmtree(dest)
        dest.mkdir(parents=True)
        out = self._helm(
            "pull", f"{repo_name}/{chart}",
            "--version", version,
            "--untar",
            "--untardir", str(dest),
        )
        if out.strip():
            logger.info("%s", out.strip())

    def fetch_upstream_metadata(self, chart: str, repo_url: str, version: str) -> dict[str, Any]:
        name = self.find_repo_name(repo_url)
        if name is None:
            raise PackageClientError(f"could not find repo entry for {repo_url}")

        index_path = settings.index_cache_dir / f"{name}-index.yaml"
        if not index_path.is_file():
            raise PackageClientError(f"index file {index_path} for repo {name} not found")

        try:
            data = yaml.load(index_path.read_text(encoding="utf-8"), Loader=_YamlLoader)
        except (OSError, yaml.YAMLError) as e:
            raise PackageClientError(f"unable to parse index file {index_path}: {e}") from e

        entries = (data or {}).get("entries") or {}
        for entry in entries.get(chart) or []:
            if str(entry.get("version", "")) == version:
                return entry
        raise PackageClientError(f"chart {chart} version {version} not found in {index_path}")

    def find_repo_name(self, repo_url: str) -> str | None:
        """Return the name under which ``repo_url`` is registered in repositories.yaml."""
        wanted = repo_url.rstrip("/")
        for name, url in _load_repositories().items():
            if url.rstrip("/") == wanted:
                return name
        return None

    def _helm(self, *args: str) -> str:
        cmd = [settings.helm_binary, *args]
        result = self.runner.run(cmd)
        if result.returncode != 0:
            raise ToolError(
                f"helm exited with status {result.returncode}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr_text,
            )
        return result.stdout_text


def _load_repositories() -> dict[str, str]:
    """Load repo name -> URL mapping from repositories.yaml."""
    repos_file = settings.repositories_file
    if not repos_file.exists():
        return {}
    try:
        data = yaml.safe_load(repos_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        logger.debug("Failed to parse %s", repos_file, exc_info=True)
        return {}
    if not data or "repositories" not in data:
        return {}
    return {r["name"]: r["url"] for r in data["repositories"] or [] if "name" in r and "url" in r}
