"""Settings schema for grrs."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from grrs.ignore.ruleset import DEFAULT_IGNORE_FILE


class WalkSettings(BaseModel):
    max_depth: int | None = Field(default=None, ge=0, description="Unset means unlimited")
    ignore_files: list[str] = Field(default_factory=lambda: [DEFAULT_IGNORE_FILE, ".ignore"])
    exclude: list[str] = Field(default_factory=lambda: [".git/"])
    follow_symlinks: bool = Field(default=False)

    @field_validator("ignore_files")
    @classmethod
    def validate_ignore_files(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name or "/" in name or "\\" in name:
                raise ValueError(f"ignore file must be a plain file name: {name!r}")
        return value


class MatchSettings(BaseModel):
    ignore_case: bool = Field(default=False)
    line_numbers: bool = Field(default=True)
    skip_binary: bool = Field(default=True, description="Skip files that do not look like text")
    encoding: str = Field(default="utf-8")


class AppSettings(BaseModel):
    schema_version: int = Field(default=1)
    walk: WalkSettings = Field(default_factory=WalkSettings)
    match: MatchSettings = Field(default_factory=MatchSettings)
