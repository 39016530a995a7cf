"""CLI entry point for compiletest."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

import click
from colorama import just_fix_windows_console

from compiletest import __version__, bootstrap
from compiletest.config import load_config
from compiletest.core import DEFAULT_CONFIG, DEFAULT_TEST_FILE
from compiletest.core.runner import run_suite
from compiletest.core.selection import (
    INVALID,
    VALID,
    AllFrom,
    Selection,
    SkipGroup,
    resolve_selection,
    select_invalid,
    select_valid,
)
from compiletest.registry import registry, resolve_compiler
from compiletest.suite import format_datum, load_test_set


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"compiletest {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the compiletest version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Run a compiler against the valid and invalid programs of a test suite."""

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    just_fix_windows_console()
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("suite", type=click.Path(exists=True, dir_okay=False), default=DEFAULT_TEST_FILE)
@click.option("--compiler", "compiler_spec", type=str, help="Registered name, module:attr or file.py:func. Required unless --list.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML register configuration.")
@click.option("--valid", "valid_indices", type=str, help="Comma-separated valid case indices to run.")
@click.option("--invalid", "invalid_indices", type=str, help="Comma-separated invalid case indices to run.")
@click.option("--skip-valid", is_flag=True, help="Do not run the valid group.")
@click.option("--skip-invalid", is_flag=True, help="Do not run the invalid group.")
@click.option("--list", "list_only", is_flag=True, help="List selected cases without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    suite: str,
    compiler_spec: Optional[str],
    config_path: Optional[str],
    valid_indices: Optional[str],
    invalid_indices: Optional[str],
    skip_valid: bool,
    skip_invalid: bool,
    list_only: bool,
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Compile every selected case and report expected/unexpected outcomes."""

    selection = _build_selection(
        suite,
        valid=_parse_indices(valid_indices, "--valid"),
        invalid=_parse_indices(invalid_indices, "--invalid"),
        skip_valid=skip_valid,
        skip_invalid=skip_invalid,
    )
    if not list_only and not compiler_spec:
        raise click.UsageError("Missing option '--compiler'.")
    try:
        if list_only:
            _list_cases(selection)
            return
        compiler = resolve_compiler(compiler_spec)
        config = load_config(config_path) if config_path else DEFAULT_CONFIG
        outcome = run_suite(
            selection,
            config,
            compiler,
            use_color=not no_color,
            report_format=report_format,
            report_path=report_path,
        )
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(0 if outcome.summary.ok else 1)


@cli.command()
def compilers() -> None:
    """List registered compiler names."""

    for name in registry.names():
        click.echo(name)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="compiletest", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _build_selection(
    suite: str,
    *,
    valid: Optional[Tuple[int, ...]],
    invalid: Optional[Tuple[int, ...]],
    skip_valid: bool,
    skip_invalid: bool,
) -> Selection:
    selection: Selection = AllFrom(suite)
    if valid is not None:
        selection = select_valid(valid, selection)
    if invalid is not None:
        selection = select_invalid(invalid, selection)
    if skip_valid:
        selection = SkipGroup(VALID, selection)
    if skip_invalid:
        selection = SkipGroup(INVALID, selection)
    return selection


def _list_cases(selection: Selection) -> None:
    tests = resolve_selection(selection, load_test_set)
    for label, cases in (("Valid", tests.valid), ("Invalid", tests.invalid)):
        if not cases:
            continue
        click.echo(f"{label} ({len(cases)})")
        for index, case in enumerate(cases):
            click.echo(f"{index:4d}    {format_datum(case)}")


def _parse_indices(value: Optional[str], option: str) -> Optional[Tuple[int, ...]]:
    if value is None:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    try:
        return tuple(int(part) for part in parts)
    except ValueError as exc:
        raise click.BadParameter(f"Non-integer index in '{value}'", param_hint=option) from exc


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
