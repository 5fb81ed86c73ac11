"""Tests for flattening a pulled chart directory."""

from pathlib import Path

import pytest

from fakes import read_tree, write_tree
from helm_vendor.core.chart_layout import rearrange_chart_directory
from helm_vendor.core.errors import RepositoryCorruptionError


def test_nested_chart_is_flattened(charts_dir: Path) -> None:
    chart_dir = write_tree(charts_dir / "nginx" / "1.0.0" / "nginx", {
        "Chart.yaml": "name: nginx\n",
        "templates/deploy.yaml": "kind: Deployment\n",
    }).parent

    rearrange_chart_directory("nginx", charts_dir, "1.0.0")

    assert read_tree(chart_dir) == {
        "Chart.yaml": "name: nginx\n",
        "templates/deploy.yaml": "kind: Deployment\n",
    }
    assert [p.name for p in chart_dir.iterdir() if p.name.startswith(".")] == []


def test_chart_containing_its_own_name(charts_dir: Path) -> None:
    chart_dir = write_tree(charts_dir / "nginx" / "1.0.0" / "nginx", {
        "Chart.yaml": "name: nginx\n",
        "nginx/conf.yaml": "worker: 1\n",
    }).parent

    rearrange_chart_directory("nginx", charts_dir, "1.0.0")

    assert read_tree(chart_dir) == {"Chart.yaml": "name: nginx\n", "nginx/conf.yaml": "worker: 1\n"}


def test_already_flat_is_a_no_op(charts_dir: Path) -> None:
    chart_dir = write_tree(charts_dir / "nginx" / "1.0.0", {"Chart.yaml": "name: nginx\n"})

    rearrange_chart_directory("nginx", charts_dir, "1.0.0")

    assert read_tree(chart_dir) == {"Chart.yaml": "name: nginx\n"}


def test_missing_chart_dir(charts_dir: Path) -> None:
    with pytest.raises(RepositoryCorruptionError):
        rearrange_chart_directory("nginx", charts_dir, "1.0.0")
