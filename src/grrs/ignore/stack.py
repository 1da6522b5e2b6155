"""Directory-scoped stack of active ignore rule-sets."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from grrs.ignore.ruleset import RuleSet


class IgnoreStack:
    """RuleSets ordered from the outermost ancestor directory to the innermost."""

    def __init__(self) -> None:
        self._rulesets: list[RuleSet] = []

    def push(self, ruleset: RuleSet) -> None:
        self._rulesets.append(ruleset)

    def pop(self) -> RuleSet:
        return self._rulesets.pop()

    def chain(self) -> tuple[RuleSet, ...]:
        return tuple(self._rulesets)

    def is_ignored(self, path: Path, is_directory: bool) -> bool:
        # Nearest ignore file first; its verdict overrides any ancestor's.
        for ruleset in reversed(self._rulesets):
            verdict = ruleset.matches(path, is_directory)
            if verdict is not None:
                return verdict
        return False

    def __len__(self) -> int:
        return len(self._rulesets)

    def __iter__(self) -> Iterator[RuleSet]:
        return iter(self._rulesets)
