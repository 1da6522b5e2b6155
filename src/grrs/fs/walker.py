"""Gitignore-aware depth-first filesystem walk."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from grrs.config.models import WalkSettings
from grrs.errors import DirectoryReadError, InvalidRootError, PatternSyntaxError
from grrs.fs.filtering import PathFilter
from grrs.ignore.ruleset import RuleSet
from grrs.ignore.stack import IgnoreStack
from grrs.runtime_logging import get_runtime_logger


@dataclass(slots=True)
class _Frame:
    directory: Path
    depth: int
    children: Iterator[Path]
    pushed: int
    resolved: Path


class Walker:
    """Collect the non-ignored files under a root.

    Each directory gets a frame on an explicit stack; the ignore files found in
    it stay pushed on the :class:`IgnoreStack` exactly as long as its frame is
    live, so only rules from ancestor-or-self directories are ever consulted.
    """

    def __init__(self, settings: WalkSettings | None = None) -> None:
        self.settings = settings or WalkSettings()
        self.errors: list[DirectoryReadError] = []
        self.warnings: list[PatternSyntaxError] = []
        self._logger = get_runtime_logger()

    def walk(self, root: str | Path, max_depth: int | None = None) -> list[Path]:
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise InvalidRootError(root_path)
        root_path = root_path.resolve()

        self.errors = []
        self.warnings = []
        limit = math.inf if max_depth is None else max_depth
        self._logger.info("walk.started", root=str(root_path), max_depth=max_depth)

        if root_path.is_dir():
            files = self._walk_tree(root_path, limit)
        else:
            files = self._walk_single(root_path)

        self._logger.info(
            "walk.finished",
            root=str(root_path),
            files=len(files),
            unreadable_dirs=len(self.errors),
            invalid_patterns=len(self.warnings),
        )
        return files

    def _walk_single(self, path: Path) -> list[Path]:
        if not path.is_file():
            return []

        # Only the file's own directory is consulted, not its ancestors.
        directory = path.parent
        if not PathFilter(directory, self.settings.exclude).include(path, False):
            return []

        stack = IgnoreStack()
        for ruleset in self._load_rulesets(directory):
            stack.push(ruleset)
        if stack.is_ignored(path, False):
            self._logger.debug("walk.ignored", path=str(path), is_dir=False)
            return []
        return [path]

    def _walk_tree(self, root: Path, limit: float) -> list[Path]:
        files: list[Path] = []
        if limit <= 0:
            return files

        path_filter = PathFilter(root, self.settings.exclude)
        stack = IgnoreStack()
        frames = [self._enter(root, 0, stack, root)]

        while frames:
            frame = frames[-1]
            child = next(frame.children, None)
            if child is None:
                frames.pop()
                for _ in range(frame.pushed):
                    stack.pop()
                continue

            try:
                is_link = child.is_symlink()
                is_dir = child.is_dir()
                is_file = not is_dir and child.is_file()
            except OSError as exc:
                self._logger.warning("walk.entry.unreadable", path=str(child), error=str(exc))
                continue

            if is_dir and is_link and not self.settings.follow_symlinks:
                self._logger.debug("walk.symlink.skipped", path=str(child))
                continue
            if not is_dir and not is_file:
                continue
            if not path_filter.include(child, is_dir) or stack.is_ignored(child, is_dir):
                self._logger.debug("walk.ignored", path=str(child), is_dir=is_dir)
                continue

            if is_file:
                files.append(child)
                continue

            depth = frame.depth + 1
            if depth >= limit:
                continue
            target = child.resolve() if self.settings.follow_symlinks else child
            if is_link and any(active.resolved == target for active in frames):
                self._logger.debug("walk.symlink.cycle", path=str(child), target=str(target))
                continue
            frames.append(self._enter(child, depth, stack, target))

        return files

    def _enter(self, directory: Path, depth: int, stack: IgnoreStack, resolved: Path) -> _Frame:
        pushed = 0
        for ruleset in self._load_rulesets(directory):
            stack.push(ruleset)
            pushed += 1
        return _Frame(
            directory=directory,
            depth=depth,
            children=iter(self._list_dir(directory)),
            pushed=pushed,
            resolved=resolved,
        )

    def _load_rulesets(self, directory: Path) -> list[RuleSet]:
        rulesets: list[RuleSet] = []
        for name in self.settings.ignore_files:
            ruleset = RuleSet.load(directory, name)
            if ruleset is None:
                continue
            self.warnings.extend(ruleset.warnings)
            rulesets.append(ruleset)
        return rulesets

    def _list_dir(self, directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir(), key=lambda item: item.name)
        except OSError as exc:
            error = DirectoryReadError(directory, exc.strerror or str(exc))
            self.errors.append(error)
            self._logger.warning("walk.dir.unreadable", path=str(directory), error=error.reason)
            return []
