# SPDX-License-Identifier: MIT
"""CLI entry point for the pkgdoc-versions command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .compare import for_sorting
from .config import VersionsConfig
from .details import versions_details
from .errors import VersionsError
from .formatting import format_version_string
from .grouping import v1_path
from .models import VersionList, VersionsDetails
from .sources import JSONVersionSource, VulnFile


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[VersionsConfig] = None
        self.config_path: Optional[Path] = None
        self.verbose: bool = False

    def load_config(self) -> VersionsConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            if self.config_path is not None:
                self.config = VersionsConfig.from_pyproject(self.config_path)
            else:
                self.config = VersionsConfig.from_env()
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


@click.group()
@click.version_option(package_name="pkgdoc-versions")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="pyproject.toml with a [tool.pkgdoc] table (defaults to PKGDOC_* variables).",
)
@pass_context
def cli(ctx: Context, verbose: bool, config_path: Optional[Path]) -> None:
    """Build the versions tab of a module documentation page.

    \b
    Examples:
        pkgdoc-versions details records.json -m example.com/foo -p example.com/foo/bar
        pkgdoc-versions format v1.0.0-20190311183353-d8887717615a
        pkgdoc-versions sort-key v1.2.3 v1.2.3-rc.1
    """
    ctx.verbose = verbose
    ctx.config_path = config_path
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("records", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-m", "--module", "module_path", required=True, help="Module path being viewed.")
@click.option("-p", "--path", "unit_path", help="Package or directory path (defaults to the module).")
@click.option(
    "--vulns",
    "vulns_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file of vulnerability entries keyed by module path.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    show_default=True,
)
@pass_context
def details(
    ctx: Context,
    records: Path,
    module_path: str,
    unit_path: Optional[str],
    vulns_path: Optional[Path],
    output_format: str,
) -> None:
    """Build VersionsDetails from a JSON file of version records."""
    unit_path = unit_path or module_path
    try:
        config = ctx.load_config()
        source = JSONVersionSource.from_file(records)
        versions = source.versions_for_unit(v1_path(unit_path, module_path))
        vuln_lookup = VulnFile.from_file(vulns_path) if vulns_path else None
        result = versions_details(
            module_path, unit_path, versions, vuln_lookup=vuln_lookup, config=config
        )
    except (VersionsError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    if ctx.verbose:
        click.echo(f"{len(versions)} version record(s) for {unit_path}", err=True)

    if output_format == "json":
        click.echo(result.model_dump_json(indent=2))
    else:
        click.echo(render_text(result), nl=False)


@cli.command("format")
@click.argument("versions", nargs=-1, required=True)
@pass_context
def format_command(ctx: Context, versions: tuple[str, ...]) -> None:
    """Print the display text of each version."""
    try:
        config = ctx.load_config()
    except (VersionsError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)
    for version in versions:
        click.echo(f"{version}\t{format_version_string(version, config)}")


@cli.command("sort-key")
@click.argument("versions", nargs=-1, required=True)
def sort_key(versions: tuple[str, ...]) -> None:
    """Print the string sort key of each version."""
    for version in versions:
        try:
            key = for_sorting(version)
        except VersionsError as e:
            echo_error(str(e))
            raise SystemExit(1)
        click.echo(f"{version}\t{key}")


def _render_lists(title: str, lists: list[VersionList], lines: list[str]) -> None:
    if not lists:
        return
    lines.append(title)
    for vl in lists:
        label = vl.key.major + (" (incompatible)" if vl.key.incompatible else "")
        lines.append(f"  {vl.key.module_path} {label}")
        for series in vl.minor_series():
            for entry in series:
                vulns = ", ".join(v.id for v in entry.vulnerabilities)
                line = f"    {entry.display_text:<28} {entry.commit_time_text}"
                if vulns:
                    line += f"  [{vulns}]"
                lines.append(line.rstrip())


def render_text(result: VersionsDetails) -> str:
    """Render VersionsDetails as an indented text tree."""
    if result.is_empty():
        return "No versions.\n"
    lines: list[str] = []
    _render_lists("This module:", result.this_module, lines)
    _render_lists("Incompatible versions:", result.incompatible_modules, lines)
    if result.other_modules:
        lines.append("Other modules:")
        lines.extend(f"  {path}" for path in result.other_modules)
    return "\n".join(lines) + "\n"


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except VersionsError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
