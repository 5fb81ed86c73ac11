"""Patch generation and application results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from helm_vendor.models import ApplyStatus


@dataclass(frozen=True)
class NoDiff:
    """The local tree matches its upstream snapshot; nothing to carry forward."""


@dataclass(frozen=True)
class Diff:
    path: Path


PatchResult = Union[NoDiff, Diff]


@dataclass(frozen=True)
class CleanApply:
    output: str = ""
    output_path: Path | None = None

    @property
    def status(self) -> ApplyStatus:
        return ApplyStatus.CLEAN


@dataclass(frozen=True)
class PartialApply:
    """Some hunks did not match the target tree and were written to ``rejects_path``."""

    rejects: str
    rejects_path: Path
    output: str = ""
    output_path: Path | None = None

    @property
    def status(self) -> ApplyStatus:
        return ApplyStatus.PARTIAL


ApplyOutcome = Union[CleanApply, PartialApply]
