"""Replay a generated patch onto a freshly pulled chart."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from helm_vendor.config.settings import settings
from helm_vendor.core.errors import InvalidInputError, RepositoryCorruptionError, ToolError
from helm_vendor.core.tool_runner import ToolRunner, default_runner
from helm_vendor.models.chart import ChartPaths
from helm_vendor.models.patch import ApplyOutcome, CleanApply, PartialApply

logger = logging.getLogger(__name__)

# patch(1) exit statuses: 0 = all hunks applied, 1 = some hunks rejected, 2 = trouble
PATCH_APPLIED = 0
PATCH_HUNKS_REJECTED = 1

_HUNK_RE = re.compile(r"^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@")


def apply_patch(
    chart: str,
    version: str,
    charts_dir: str | Path,
    patch_file: str | Path,
    runner: ToolRunner | None = None,
) -> ApplyOutcome:
    """Apply ``patch_file`` to ``<charts>/<chart>/<version>``.

    Hunks that do not match go to ``<chart>_patch_<version>_rejects`` and the
    tool's narrative to ``..._out``; either file is left only when non-empty.
    Hunks for files the target no longer has are added to the rejects too.
    """
    runner = runner or default_runner()
    paths = ChartPaths.of(charts_dir)

    chart_dir = paths.chart_dir(chart, version)
    if not chart_dir.is_dir():
        raise RepositoryCorruptionError(f"chart directory {chart_dir} not found", path=chart_dir)

    patch_path = Path(os.path.abspath(patch_file))
    if not patch_path.is_file():
        raise InvalidInputError(f"patch file {patch_path} not found")

    out_file = paths.patch_output_file(chart, version)
    rejects_file = paths.patch_rejects_file(chart, version)
    out_file.unlink(missing_ok=True)
    rejects_file.unlink(missing_ok=True)

    cmd = [
        settings.patch_binary,
        "--force",
        "--no-backup-if-mismatch",
        "-p1",
        "--reject-file", str(rejects_file),
        "--directory", str(chart_dir),
        "--input", str(patch_path),
    ]
    skipped = [
        s for s in _file_sections(patch_path.read_text(encoding="utf-8", errors="replace"))
        if not s.creates and not (chart_dir / s.path).is_file()
    ]
    result = runner.run(cmd)

    output = result.stdout_text
    output_path = None
    if output:
        out_file.write_text(output, encoding="utf-8")
        output_path = out_file

    rejects = _read_nonempty(rejects_file)
    if result.returncode == PATCH_HUNKS_REJECTED and skipped:
        # patch ignores hunks for files the target no longer has and never writes them to the reject file
        rejects += "".join(s.text for s in skipped)
        rejects_file.write_text(rejects, encoding="utf-8")
        logger.debug("Kept hunks for missing files %s", ", ".join(s.path for s in skipped))

    rejected_only = result.returncode == PATCH_HUNKS_REJECTED and bool(rejects)
    if result.returncode != PATCH_APPLIED and not rejected_only:
        rejects_file.unlink(missing_ok=True)
        raise ToolError(
            f"patch exited with status {result.returncode}",
            command=cmd,
            returncode=result.returncode,
            stderr=result.stderr_text or result.stdout_text,
        )

    if not rejects:
        rejects_file.unlink(missing_ok=True)
        logger.debug("Applied %s to %s cleanly", patch_path, chart_dir)
        return CleanApply(output=output, output_path=output_path)

    logger.debug("Applying %s to %s left rejects in %s", patch_path, chart_dir, rejects_file)
    return PartialApply(
        rejects=rejects,
        rejects_path=rejects_file,
        output=output,
        output_path=output_path,
    )


def _read_nonempty(path: Path) -> str:
    if not path.is_file() or path.stat().st_size == 0:
        return ""
    return path.read_text(encoding="utf-8", errors="replace")


@dataclass(frozen=True)
class _FileSection:
    path: str
    text: str
    creates: bool


def _file_sections(patch_text: str) -> list[_FileSection]:
    """Split a unified diff into one section per patched file.

    ``path`` is relative to the chart directory (one leading component
    stripped, as ``-p1`` does). Hunk bodies are consumed by their line
    counts so removed lines starting with ``-- `` are not taken for headers.
    """
    sections: list[_FileSection] = []
    current: list[str] = []
    old_name = new_name = ""
    creates = True
    old_left = new_left = 0

    for line in patch_text.splitlines(keepends=True):
        if old_left > 0 or new_left > 0:
            current.append(line)
            if line.startswith("-"):
                old_left -= 1
            elif line.startswith("+"):
                new_left -= 1
            elif not line.startswith("\\"):
                old_left -= 1
                new_left -= 1
            continue

        hunk = _HUNK_RE.match(line)
        if hunk and new_name:
            old_len, new_len = hunk.groups()
            old_left = 1 if old_len is None else int(old_len)
            new_left = 1 if new_len is None else int(new_len)
            creates = creates and old_left == 0
            current.append(line)
            continue

        if new_name and (line.startswith("diff ") or line.startswith("--- ")):
            sections.append(_section(old_name, new_name, current, creates))
            current = []
            old_name = new_name = ""
            creates = True
        if line.startswith("--- "):
            old_name = _header_name(line)
        elif line.startswith("+++ "):
            new_name = _header_name(line)
        current.append(line)

    if new_name:
        sections.append(_section(old_name, new_name, current, creates))
    return sections


def _section(old_name: str, new_name: str, lines: list[str], creates: bool) -> _FileSection:
    name = old_name if new_name == "/dev/null" else new_name
    path = name.split("/", 1)[1] if "/" in name else name
    return _FileSection(path=path, text="".join(lines), creates=creates and new_name != "/dev/null")


def _header_name(line: str) -> str:
    return line[4:].split("\t", 1)[0].strip()
