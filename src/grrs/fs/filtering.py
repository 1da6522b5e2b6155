"""Always-on path exclusions, independent of any ignore file."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pathspec


class PathFilter:
    def __init__(self, base: Path, patterns: Iterable[str] = (".git/",)) -> None:
        self.base = base
        self.patterns = [line for line in patterns if line.strip()]
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def include(self, path: Path, is_directory: bool) -> bool:
        try:
            rel = path.relative_to(self.base)
        except ValueError:
            rel = Path(path.name)

        rel_text = rel.as_posix()
        if rel_text in ("", "."):
            return True
        if is_directory:
            # pathspec only applies "dir/" patterns to paths ending in a slash
            rel_text += "/"
        return not self._spec.match_file(rel_text)
