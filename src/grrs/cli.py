"""CLI entrypoint for grrs."""

from __future__ import annotations

import json
from pathlib import Path

import click

from grrs.config.store import SettingsStore
from grrs.errors import InvalidRootError
from grrs.grep.driver import SearchDriver, SearchReport
from grrs.paths import settings_path
from grrs.runtime_logging import configure_runtime_logging, get_runtime_logger
from grrs.version import __version__


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log debug events to stderr")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Runtime JSONL log destination")
def main(verbose: bool, log_file: str | None) -> None:
    """grrs: recursive, gitignore-aware line search."""
    configure_runtime_logging(log_file=log_file, verbose=verbose)


@main.command()
@click.argument("pattern")
@click.argument("path", required=False, default=".")
@click.option(
    "-d",
    "--max-depth",
    type=click.IntRange(min=-1),
    default=None,
    help="Limit directory recursion. -1 disables the limit, 0 disables recursion.",
)
@click.option("-N", "--no-line-number", "no_line_numbers", is_flag=True, help="Omit line numbers")
@click.option("-i", "--ignore-case", is_flag=True, help="Case-insensitive matching")
@click.option("--exclude", "excludes", multiple=True, help="Extra gitignore-style glob to skip")
@click.option("--follow", is_flag=True, help="Follow directory symlinks")
@click.option("--binary", is_flag=True, help="Also search files that look binary")
def grep(
    pattern: str,
    path: str,
    max_depth: int | None,
    no_line_numbers: bool,
    ignore_case: bool,
    excludes: tuple[str, ...],
    follow: bool,
    binary: bool,
) -> None:
    """Print lines containing PATTERN in files under PATH."""
    settings = SettingsStore().load()
    if max_depth is not None:
        settings.walk.max_depth = None if max_depth < 0 else max_depth
    if excludes:
        settings.walk.exclude = [*settings.walk.exclude, *excludes]
    if follow:
        settings.walk.follow_symlinks = True
    if ignore_case:
        settings.match.ignore_case = True
    if no_line_numbers:
        settings.match.line_numbers = False
    if binary:
        settings.match.skip_binary = False

    try:
        report = SearchDriver(settings).run(path, pattern)
    except InvalidRootError as exc:
        raise click.ClickException(str(exc)) from exc

    _print_report(report, Path(path), show_line_numbers=settings.match.line_numbers)

    logger = get_runtime_logger()
    warning_count = logger.counts["warning"]
    if warning_count:
        click.echo(f"grrs: {warning_count} warning(s) logged to {logger.sink_path}", err=True)


@main.command("settings-path")
def settings_path_command() -> None:
    """Print settings file path."""
    click.echo(str(settings_path()))


@main.command("config")
@click.argument("key")
@click.argument("value")
def config_command(key: str, value: str) -> None:
    """Set a dotted setting, e.g. `grrs config match.ignore_case true`."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        updated = SettingsStore().update(key, parsed)
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc
    except ValueError as exc:
        raise click.ClickException(f"Invalid value for {key}: {exc}") from exc

    click.echo(json.dumps(updated.model_dump(mode="json"), indent=2, sort_keys=True))


@main.command()
def about() -> None:
    """Show version and project summary."""
    payload = {
        "name": "grrs",
        "version": __version__,
        "description": "Recursive, gitignore-aware line search",
    }
    click.echo(json.dumps(payload, indent=2))


def _display_path(report: SearchReport, file_path: Path, given: Path) -> str:
    if not report.root.is_dir():
        return str(given)
    try:
        return str(given / file_path.relative_to(report.root))
    except ValueError:
        return str(file_path)


def _print_report(report: SearchReport, given: Path, *, show_line_numbers: bool) -> None:
    for file_path, matches in report.by_file():
        click.echo(f"{_display_path(report, file_path, given)}:")
        for match in matches:
            if show_line_numbers:
                click.echo(f"{match.line_number}:{match.line}")
            else:
                click.echo(match.line)

    for failure in report.errors:
        click.echo(
            f"grrs: could not read {_display_path(report, failure.path, given)}: {failure.error}",
            err=True,
        )


if __name__ == "__main__":
    main()
