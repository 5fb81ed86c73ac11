"""Interface to the chart package repository."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class PackageClient(ABC):
    """What the pull pipeline needs from a chart repository client."""

    @abstractmethod
    def add_and_update_repo(self, chart: str, repo_url: str) -> str:
        """Register ``repo_url`` unless already known, refresh its index, return the repo name."""

    @abstractmethod
    def download_chart(self, chart: str, repo_name: str, version: str, dest: Path) -> None:
        """Fetch and unpack ``chart`` at ``version`` into ``dest``, replacing its contents."""

    @abstractmethod
    def fetch_upstream_metadata(self, chart: str, repo_url: str, version: str) -> dict[str, Any]:
        """Return the repository index entry describing ``chart`` at ``version``."""
