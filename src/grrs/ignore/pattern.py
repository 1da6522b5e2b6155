"""Compile gitignore lines into structured, segment-based match rules."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from grrs.errors import PatternSyntaxError

SegmentKind = Literal["literal", "glob", "double_star"]

_ESCAPE = "\\"
_TRAILING_BLANKS = " \t"


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    kind: SegmentKind
    regex: re.Pattern[str] | None = None
    min_span: int = 0

    @property
    def is_double_star(self) -> bool:
        return self.kind == "double_star"

    def matches(self, name: str) -> bool:
        if self.kind == "literal":
            return name == self.text
        if self.regex is None:
            return False
        return self.regex.fullmatch(name) is not None


@dataclass(frozen=True, slots=True)
class Pattern:
    raw: str
    negated: bool
    anchored: bool
    directory_only: bool
    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError(f"pattern {self.raw!r} has no segments")

    def matches(self, parts: tuple[str, ...], is_directory: bool) -> bool:
        """Match a path given as segments relative to the owning ignore file."""

        if self.directory_only and not is_directory:
            return False
        if not parts:
            return False
        if self.anchored:
            return _match_segments(self.segments, parts)
        return any(_match_segments(self.segments, parts[start:]) for start in range(len(parts)))


def _match_segments(segments: tuple[Segment, ...], parts: tuple[str, ...]) -> bool:
    if not segments:
        return not parts

    head, rest = segments[0], segments[1:]
    if head.is_double_star:
        for taken in range(head.min_span, len(parts) + 1):
            if _match_segments(rest, parts[taken:]):
                return True
        return False

    return bool(parts) and head.matches(parts[0]) and _match_segments(rest, parts[1:])


def _trim_trailing_blanks(text: str) -> str:
    end = len(text)
    while end > 0 and text[end - 1] in _TRAILING_BLANKS:
        backslashes = 0
        cursor = end - 1
        while cursor > 0 and text[cursor - 1] == _ESCAPE:
            backslashes += 1
            cursor -= 1
        if backslashes % 2:
            break
        end -= 1
    return text[:end]


def _split_unescaped(text: str, separator: str = "/") -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    escaped = False
    for char in text:
        if escaped:
            current.append(char)
            escaped = False
        elif char == _ESCAPE:
            current.append(char)
            escaped = True
        elif char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _translate_class(text: str, start: int, line: str) -> tuple[str, int]:
    """Translate the ``[...]`` class opening at ``start``; return regex and end index."""

    cursor = start + 1
    negate = cursor < len(text) and text[cursor] in "!^"
    if negate:
        cursor += 1

    members: list[str] = []
    first = True
    while True:
        if cursor >= len(text):
            raise PatternSyntaxError(line, "unterminated character class")
        char = text[cursor]
        if char == "]" and not first:
            break
        if char == _ESCAPE and cursor + 1 < len(text):
            cursor += 1
            members.append(re.escape(text[cursor]))
        elif char in "\\^[]":
            members.append(_ESCAPE + char)
        else:
            members.append(char)
        first = False
        cursor += 1

    body = "".join(members)
    if negate:
        return f"[^/{body}]", cursor
    return f"[{body}]", cursor


def _compile_segment(text: str, line: str, index: int) -> Segment:
    if text == "**":
        return Segment(text=text, kind="double_star", min_span=0 if index == 0 else 1)

    pieces: list[str] = []
    literal: list[str] = []
    is_glob = False
    cursor = 0
    while cursor < len(text):
        char = text[cursor]
        if char == _ESCAPE:
            cursor += 1
            if cursor >= len(text):
                raise PatternSyntaxError(line, "trailing escape character")
            pieces.append(re.escape(text[cursor]))
            literal.append(text[cursor])
        elif char == "*":
            is_glob = True
            pieces.append("[^/]*")
        elif char == "?":
            is_glob = True
            pieces.append("[^/]")
        elif char == "[":
            is_glob = True
            translated, cursor = _translate_class(text, cursor, line)
            pieces.append(translated)
        else:
            pieces.append(re.escape(char))
            literal.append(char)
        cursor += 1

    if not is_glob:
        return Segment(text="".join(literal), kind="literal")
    try:
        regex = re.compile("".join(pieces), re.DOTALL)
    except re.error as exc:
        raise PatternSyntaxError(line, str(exc)) from exc
    return Segment(text=text, kind="glob", regex=regex)


def compile_pattern(line: str) -> Pattern | None:
    """Compile one ``.gitignore`` line.

    Returns ``None`` for blank lines and comments. Raises
    :class:`PatternSyntaxError` when the line cannot be turned into a rule.
    """

    text = line.rstrip("\r\n")
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return None

    text = _trim_trailing_blanks(text.lstrip())
    raw = text

    negated = text.startswith("!")
    if negated:
        text = text[1:]

    anchored = text.startswith("/")
    raw_segments = _split_unescaped(text)
    directory_only = len(raw_segments) > 1 and raw_segments[-1] == ""

    names: list[str] = []
    for name in raw_segments:
        if not name:
            continue
        if name == "**" and names and names[-1] == "**":
            continue
        names.append(name)

    if not names:
        raise PatternSyntaxError(raw, "pattern has no path segments")

    segments = tuple(_compile_segment(name, raw, index) for index, name in enumerate(names))
    return Pattern(
        raw=raw,
        negated=negated,
        anchored=anchored,
        directory_only=directory_only,
        segments=segments,
    )


def compile_lines(
    lines: Iterable[str],
    *,
    source: Path | None = None,
) -> tuple[list[Pattern], list[PatternSyntaxError]]:
    """Compile every line of an ignore file, collecting errors instead of aborting."""

    patterns: list[Pattern] = []
    errors: list[PatternSyntaxError] = []
    for lineno, line in enumerate(lines, start=1):
        try:
            pattern = compile_pattern(line)
        except PatternSyntaxError as exc:
            errors.append(PatternSyntaxError(exc.line, exc.reason, source=source, lineno=lineno))
            continue
        if pattern is not None:
            patterns.append(pattern)
    return patterns, errors
