"""Line-oriented literal substring search within one file."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from grrs.errors import FileReadError


@dataclass(frozen=True, slots=True)
class SearchMatch:
    path: Path
    line_number: int
    line: str


class LineMatcher:
    def __init__(self, pattern: str, *, ignore_case: bool = False, encoding: str = "utf-8") -> None:
        self.pattern = pattern
        self.ignore_case = ignore_case
        self.encoding = encoding
        self._needle = pattern.casefold() if ignore_case else pattern

    def matches(self, line: str) -> bool:
        haystack = line.casefold() if self.ignore_case else line
        return self._needle in haystack

    def search(self, path: Path) -> Iterator[SearchMatch]:
        """Yield one match per matching line; raises FileReadError on I/O or decode failure."""

        try:
            # Only "\n" ends a line; a bare "\r" stays part of the text.
            with path.open("r", encoding=self.encoding, newline="\n") as handle:
                for line_number, line in enumerate(handle, start=1):
                    text = line.removesuffix("\n").removesuffix("\r")
                    if self.matches(text):
                        yield SearchMatch(path=path, line_number=line_number, line=text)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise FileReadError(path, str(exc)) from exc
