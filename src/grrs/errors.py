"""Error taxonomy shared by the ignore engine, walker and search driver."""

from __future__ import annotations

from pathlib import Path


class GrrsError(Exception):
    """Base class for all grrs errors."""


class PatternSyntaxError(GrrsError):
    def __init__(
        self,
        line: str,
        reason: str,
        *,
        source: Path | None = None,
        lineno: int | None = None,
    ) -> None:
        self.line = line
        self.reason = reason
        self.source = source
        self.lineno = lineno
        location = ""
        if source is not None:
            location = f"{source}:{lineno}: " if lineno is not None else f"{source}: "
        super().__init__(f"{location}invalid pattern {line!r}: {reason}")


class DirectoryReadError(GrrsError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read directory {path}: {reason}")


class FileReadError(GrrsError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read file {path}: {reason}")


class InvalidRootError(GrrsError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"path does not exist: {path}")
