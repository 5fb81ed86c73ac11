"""Data models for Helm Vendor."""

from __future__ import annotations

import enum


class ApplyStatus(enum.Enum):
    CLEAN = "clean"
    PARTIAL = "partial"
