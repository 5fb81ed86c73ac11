"""Tests for vendored version listing and patch-base selection."""

from pathlib import Path

import pytest

from fakes import write_tree
from helm_vendor.core.errors import InvalidInputError, RepositoryCorruptionError
from helm_vendor.core.provenance_store import ProvenanceStore
from helm_vendor.core.version_ledger import describe_versions, list_versions, select_patch_base
from helm_vendor.models.provenance import ProvenanceRecord


def _vendor(charts_dir: Path, chart: str, *versions: str) -> None:
    for version in versions:
        (charts_dir / chart / version).mkdir(parents=True)


class TestSelectPatchBase:
    def test_selects_immediate_predecessor(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "1.1.0", "2.0.0")

        assert select_patch_base(charts_dir, "keycloak", "2.0.0") == "1.1.0"

    def test_ignores_versions_above_target(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "1.5.0", "3.0.0")

        assert select_patch_base(charts_dir, "keycloak", "2.0.0") == "1.5.0"

    def test_none_when_target_is_oldest(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "2.0.0")

        assert select_patch_base(charts_dir, "keycloak", "1.0.0") is None

    def test_none_when_only_target_present(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0")

        assert select_patch_base(charts_dir, "keycloak", "1.0.0") is None

    def test_numeric_not_lexical_order(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.9.0", "1.10.0")

        assert select_patch_base(charts_dir, "keycloak", "1.11.0") == "1.10.0"

    def test_release_outranks_its_prerelease(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "2.0.0-rc.1", "1.9.0")

        assert select_patch_base(charts_dir, "keycloak", "2.0.0") == "2.0.0-rc.1"

    def test_returns_directory_name_verbatim(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "v1.0.0")

        assert select_patch_base(charts_dir, "keycloak", "1.1.0") == "v1.0.0"

    def test_malformed_sibling_is_corruption(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "backup-old", "2.0.0")

        with pytest.raises(RepositoryCorruptionError) as exc_info:
            select_patch_base(charts_dir, "keycloak", "2.0.0")

        assert exc_info.value.path == charts_dir / "keycloak" / "backup-old"

    def test_regular_files_are_ignored(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "2.0.0")
        (charts_dir / "keycloak" / "README.md").write_text("notes", encoding="utf-8")

        assert select_patch_base(charts_dir, "keycloak", "2.0.0") == "1.0.0"

    def test_invalid_target_is_invalid_input(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0")

        with pytest.raises(InvalidInputError):
            select_patch_base(charts_dir, "keycloak", "latest")

    def test_missing_chart_root_is_corruption(self, charts_dir: Path) -> None:
        with pytest.raises(RepositoryCorruptionError):
            select_patch_base(charts_dir, "keycloak", "1.0.0")


class TestListVersions:
    def test_sorted_ascending(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "nginx", "1.2.0", "1.0.0", "1.10.0")

        assert [v.raw for v in list_versions(charts_dir, "nginx")] == ["1.0.0", "1.2.0", "1.10.0"]


class TestDescribeVersions:
    def test_reports_provenance_and_patch_files(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "nginx", "1.0.0", "1.1.0")
        store = ProvenanceStore(charts_dir)
        write_tree(store.paths.upstream_dir("nginx", "1.0.0"), {"Chart.yaml": "name: nginx\n"})
        store.save(ProvenanceRecord.for_upstream("1.0.0", {}), "nginx", "1.0.0")
        patch_file = store.paths.patch_file("nginx", "1.0.0")
        patch_file.write_text("--- a/x\n+++ b/x\n", encoding="utf-8")

        rows = describe_versions(charts_dir, "nginx")

        assert [r.version for r in rows] == ["1.0.0", "1.1.0"]
        assert rows[0].upstream_version == "1.0.0"
        assert rows[0].snapshot_present is True
        assert rows[0].patch_file == patch_file
        assert rows[1].upstream_version == ""
        assert rows[1].snapshot_present is False
        assert rows[1].patch_file is None


class TestSelectPatchBaseSpellings:
    def test_prefixed_and_plain_siblings_pick_deterministically(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "v1.0.0", "1.0.0", "2.0.0")

        assert select_patch_base(charts_dir, "keycloak", "2.0.0") == "v1.0.0"
        assert [v.raw for v in list_versions(charts_dir, "keycloak")] == ["1.0.0", "v1.0.0", "2.0.0"]

    def test_other_spelling_of_target_is_not_a_base(self, charts_dir: Path) -> None:
        _vendor(charts_dir, "keycloak", "1.0.0", "v2.0.0", "2.0.0")

        assert select_patch_base(charts_dir, "keycloak", "v2.0.0") == "1.0.0"
