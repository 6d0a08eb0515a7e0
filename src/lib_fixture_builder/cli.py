"""CLI adapter for ``lib_fixture_builder`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the builder engine on the command line so fixture data files can be
varied from shell scripts, CI jobs, or when eyeballing what an override path
resolves to, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_build` – loads one or more bases, merges them, applies ``--set``
  overrides, and prints the built result as JSON.
* :func:`cli_paths` – lists every settable dotted path of a base.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It calls the composition root (``create_builder`` /
``merge_builders``), the file/override adapters, and the path enumerator.
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from datetime import date, time
from functools import reduce
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.file_loaders.structured import load_base
from .adapters.overrides import parse_assignment
from .application.ports import FixtureFactory
from .core import create_builder, merge_builders
from .domain.paths import iter_paths

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_BASE_PATH = click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_fixture_builder")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Derive fixture variants from a canonical base value",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_fixture_builder",
    message="lib_fixture_builder version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_fixture_builder")
    except metadata.PackageNotFoundError:
        click.echo("lib_fixture_builder (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_fixture_builder')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("build", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--base",
    "bases",
    type=_BASE_PATH,
    multiple=True,
    required=True,
    help="TOML/JSON/YAML file holding a base mapping (repeatable; later files win on top-level keys)",
)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="PATH=VALUE",
    help="Override applied in order, e.g. address.city=\"San Jose\" or orders.0.id=2 (repeatable)",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_build(bases: Sequence[Path], assignments: Sequence[str], indent: Optional[int]) -> None:
    """Build one fixture variant and print it as JSON.

    Several ``--base`` files are merged left to right exactly like
    :func:`lib_fixture_builder.merge_builders`. Values given to ``--set`` are
    parsed as JSON when they look like JSON, otherwise booleans, ``null`` and
    numbers are coerced and everything else stays a string.
    """

    builder = _compose_factory(bases)()
    for assignment in assignments:
        try:
            path, value = parse_assignment(assignment)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--set") from exc
        builder.set(path, value)
    click.echo(_to_json(builder.build(), indent=indent))


@cli.command("paths", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--base", "base", type=_BASE_PATH, required=True, help="TOML/JSON/YAML file holding a base mapping")
def cli_paths(base: Path) -> None:
    """List every dotted path that ``build --set`` accepts for *base*.

    Dots inside keys are printed as ``\\.`` so each line can be pasted back
    into ``--set`` unchanged.
    """

    for path in iter_paths(load_base(base)):
        click.echo(str(path))


def _compose_factory(bases: Sequence[Path]) -> FixtureFactory[Any]:
    """Create one factory per base file and merge them in order."""

    factories: list[FixtureFactory[Any]] = [create_builder(load_base(path)) for path in bases]
    return reduce(merge_builders, factories)


def _to_json(value: Any, *, indent: Optional[int]) -> str:
    """Serialise a built fixture; temporal values become ISO 8601 strings."""

    return json.dumps(value, indent=indent, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_fixture_builder",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
