"""Compiled rules of one ignore file, scoped to the directory that holds it."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from grrs.errors import PatternSyntaxError
from grrs.ignore.pattern import Pattern, compile_lines
from grrs.runtime_logging import get_runtime_logger

DEFAULT_IGNORE_FILE = ".gitignore"


@dataclass(slots=True)
class RuleSet:
    root: Path
    patterns: list[Pattern]
    source: Path | None = None
    warnings: list[PatternSyntaxError] = field(default_factory=list)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        root: Path,
        *,
        source: Path | None = None,
    ) -> RuleSet:
        patterns, errors = compile_lines(lines, source=source)
        logger = get_runtime_logger()
        for error in errors:
            logger.warning(
                "ignore.pattern.invalid",
                source=str(source) if source is not None else None,
                lineno=error.lineno,
                line=error.line,
                reason=error.reason,
            )
        return cls(root=root, patterns=patterns, source=source, warnings=errors)

    @classmethod
    def load(cls, directory: Path, filename: str = DEFAULT_IGNORE_FILE) -> RuleSet | None:
        path = directory / filename
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as exc:
            get_runtime_logger().warning("ignore.file.unreadable", path=str(path), error=str(exc))
            return None

        ruleset = cls.from_lines(text.splitlines(), directory, source=path)
        get_runtime_logger().debug(
            "ignore.file.loaded",
            path=str(path),
            patterns=len(ruleset.patterns),
            invalid=len(ruleset.warnings),
        )
        return ruleset

    def matches(self, path: Path, is_directory: bool) -> bool | None:
        """Return True (ignored), False (re-included) or None (no pattern applies)."""

        try:
            rel = path.relative_to(self.root)
        except ValueError:
            return None

        parts = rel.parts
        if not parts:
            return None

        verdict: bool | None = None
        for pattern in self.patterns:
            if pattern.matches(parts, is_directory):
                verdict = not pattern.negated
        return verdict
