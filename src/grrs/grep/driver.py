"""Walk a root and search every eligible file, collecting one report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from grrs.config.models import AppSettings
from grrs.errors import FileReadError
from grrs.fs.probe import is_text_file
from grrs.fs.walker import Walker
from grrs.grep.matcher import LineMatcher, SearchMatch
from grrs.runtime_logging import get_runtime_logger


@dataclass(slots=True)
class FileError:
    path: Path
    error: str


@dataclass(slots=True)
class SearchReport:
    root: Path
    pattern: str
    matches: list[SearchMatch] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    files_searched: int = 0
    skipped_binary: list[Path] = field(default_factory=list)

    def by_file(self) -> list[tuple[Path, list[SearchMatch]]]:
        """Group matches per file, keeping traversal order."""

        grouped: dict[Path, list[SearchMatch]] = {}
        for match in self.matches:
            grouped.setdefault(match.path, []).append(match)
        return list(grouped.items())


class SearchDriver:
    def __init__(self, settings: AppSettings | None = None) -> None:
        self.settings = settings or AppSettings()
        self._logger = get_runtime_logger()

    def run(self, root: str | Path, pattern: str, max_depth: int | None = None) -> SearchReport:
        if max_depth is None:
            max_depth = self.settings.walk.max_depth

        walker = Walker(self.settings.walk)
        files = walker.walk(root, max_depth)

        match_settings = self.settings.match
        matcher = LineMatcher(
            pattern,
            ignore_case=match_settings.ignore_case,
            encoding=match_settings.encoding,
        )
        report = SearchReport(root=Path(root).expanduser().resolve(), pattern=pattern)
        report.warnings.extend(str(error) for error in walker.warnings)
        report.warnings.extend(str(error) for error in walker.errors)

        for path in files:
            try:
                if match_settings.skip_binary and not is_text_file(path, encoding=match_settings.encoding):
                    report.skipped_binary.append(path)
                    continue
                found = list(matcher.search(path))
            except OSError as exc:
                self._record_failure(report, FileReadError(path, str(exc)))
                continue
            except FileReadError as exc:
                self._record_failure(report, exc)
                continue
            report.files_searched += 1
            report.matches.extend(found)

        self._logger.info(
            "search.finished",
            root=str(report.root),
            files_searched=report.files_searched,
            matches=len(report.matches),
            errors=len(report.errors),
            skipped_binary=len(report.skipped_binary),
        )
        return report

    def _record_failure(self, report: SearchReport, error: FileReadError) -> None:
        report.errors.append(FileError(path=error.path, error=error.reason))
        self._logger.warning("search.file.unreadable", path=str(error.path), error=error.reason)
