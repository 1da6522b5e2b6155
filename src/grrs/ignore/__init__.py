"""Gitignore pattern engine."""

from grrs.ignore.pattern import Pattern, Segment, compile_lines, compile_pattern
from grrs.ignore.ruleset import RuleSet
from grrs.ignore.stack import IgnoreStack

__all__ = [
    "IgnoreStack",
    "Pattern",
    "RuleSet",
    "Segment",
    "compile_lines",
    "compile_pattern",
]
