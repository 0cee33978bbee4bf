#!/usr/bin/env python3
"""Winglib CLI - Main Entry Point.

Usage:
    winglib <command> [options]

Commands:
    generate    Generate libraries and their workflows
    list        List libraries configured in winglibs.yaml
    help        Show this help message
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from winglib_generator.core.errors import WinglibGeneratorError
from winglib_generator.core.materializer import MaterializeOutcome
from winglib_generator.core.orchestrator import GenerationReport, generate_workspace
from winglib_generator.core.workspace import Workspace
from winglib_generator.helpers.helpers_logging import (
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from winglib_generator.helpers.workspace_config import CONFIG_FILE_NAME

_EXIT_OK = 0
_EXIT_FAILED = 1
_EXIT_ABORTED = 130

_ROOT_OPTION_HELP = f"Workspace root (default: nearest directory with {CONFIG_FILE_NAME})"


def print_help() -> None:
    """Print top-level usage."""
    print_header("Winglib Generator")
    print("\nUsage: winglib <command> [options]\n")
    print("Commands:")
    print("  generate [NAMES...]   Generate libraries (default: all in winglibs.yaml)")
    print("      --root DIR        Workspace root")
    print("      --keep-going      Continue with the next library after a failure")
    print("      --dry-run         Show what would change without writing")
    print("  list                  List libraries configured in winglibs.yaml")
    print("  help                  Show this help message")


def _print_summary(report: GenerationReport, dry_run: bool) -> None:
    created = sum(len(r.paths_with(MaterializeOutcome.CREATED)) for r in report.libraries)
    updated = sum(len(r.paths_with(MaterializeOutcome.OVERWRITTEN)) for r in report.libraries)
    skipped = sum(len(r.paths_with(MaterializeOutcome.SKIPPED)) for r in report.libraries)
    prefix = "Dry run: " if dry_run else ""
    print_info(
        f"\n{prefix}{len(report.libraries)} library(ies), "
        + f"{created} created, {updated} updated, {skipped} skipped, "
        + f"{len(report.workflows)} workflow(s)"
    )
    for name, exc in report.failures:
        print_error(f"{name or '<empty>'}: {exc}")


@click.group(invoke_without_command=True)
@click.pass_context
def _click_cli(ctx: click.Context) -> int:
    """Top-level winglib command group."""
    if ctx.invoked_subcommand is None:
        print_help()
    return _EXIT_OK


@_click_cli.command(name="generate", help="Generate libraries and their workflows")
@click.argument("names", nargs=-1)
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), help=_ROOT_OPTION_HELP)
@click.option("--keep-going", is_flag=True, help="Continue after a failing library")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
def generate_cmd(
    names: tuple[str, ...],
    root: Path | None,
    keep_going: bool,
    dry_run: bool,
) -> int:
    try:
        report = generate_workspace(
            root,
            names or None,
            keep_going=keep_going,
            dry_run=dry_run,
        )
    except WinglibGeneratorError as exc:
        print_error(str(exc))
        return _EXIT_FAILED

    _print_summary(report, dry_run)
    if not report.ok:
        return _EXIT_FAILED
    if report.libraries:
        print_success("Generation complete")
    return _EXIT_OK


@_click_cli.command(name="list", help="List libraries configured in winglibs.yaml")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), help=_ROOT_OPTION_HELP)
def list_cmd(root: Path | None) -> int:
    try:
        workspace = Workspace.load(root)
    except WinglibGeneratorError as exc:
        print_error(str(exc))
        return _EXIT_FAILED

    libraries = workspace.config.libraries
    if not libraries:
        print_warning(f"No libraries listed in {workspace.root / CONFIG_FILE_NAME}")
        return _EXIT_OK
    for name in libraries:
        print(name)
    return _EXIT_OK


@_click_cli.command(name="help", help="Show help message")
def help_cmd() -> int:
    print_help()
    return _EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    try:
        result = _click_cli.main(
            args=args,
            prog_name="winglib",
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return _EXIT_ABORTED
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return _EXIT_OK if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
