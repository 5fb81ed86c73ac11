"""Error taxonomy shared by the vendoring core and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class VendorError(Exception):
    """Base class for every failure the CLI reports and exits non-zero on."""


class InvalidInputError(VendorError):
    """A caller-supplied value was unusable (bad version string, empty flag, missing file)."""


class RepositoryCorruptionError(VendorError):
    """The on-disk chart repository is not in the shape the layout requires."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ProvenanceNotFoundError(RepositoryCorruptionError):
    pass


class ProvenanceParseError(RepositoryCorruptionError):
    pass


class PackageClientError(VendorError):
    """The chart repository index did not contain what was asked for."""


class ToolError(VendorError):
    """An external tool could not run, or exited with a status the caller does not accept."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        detail = message
        if self.command:
            detail += f" (command: {' '.join(self.command)})"
        if stderr.strip():
            detail += f": {stderr.strip()}"
        super().__init__(detail)
