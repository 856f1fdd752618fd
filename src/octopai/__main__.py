"""CLI entry point for Octopai."""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

import click

from octopai.preflight import check_dependencies
from octopai.process import ProcessCommandRunner
from octopai.version import get_octopai_version

if TYPE_CHECKING:
    from octopai.preflight import PreflightResult


def _display_tools(result: PreflightResult) -> None:
    click.echo()
    click.secho("  External tools:", bold=True)
    for status in result.tools:
        tool = status.tool
        if status.available:
            icon = click.style("✓", fg="green")
            label = click.style(tool.name, fg="green")
            click.echo(f"    {icon} {label} {status.version or ''}".rstrip())
            continue
        color = "red" if tool.required else "yellow"
        kind = "required" if tool.required else "recommended"
        click.echo(
            f"    {click.style('○', fg=color)} "
            f"{click.style(f'{tool.name} (not installed, {kind})', fg=color)}"
        )
        click.echo(f"      {tool.description}")
        if status.install_hint:
            click.echo(f"      $ {click.style(status.install_hint, fg='cyan')}")
    click.echo()


@click.command()
@click.version_option(
    get_octopai_version(), "--version", prog_name="octopai", message="%(prog)s %(version)s"
)
@click.option("--check", "check_only", is_flag=True, help="Report external tools and exit")
@click.option("--skip-preflight", is_flag=True, help="Skip the external tool check on startup")
def cli(check_only: bool, skip_preflight: bool) -> None:
    """Terminal dashboard for GitHub issues, git worktrees and tmux sessions."""
    preflight = None
    if check_only or not skip_preflight:
        preflight = asyncio.run(check_dependencies(ProcessCommandRunner()))
    if check_only:
        _display_tools(preflight)
        sys.exit(1 if preflight.has_blocking_issues else 0)

    from octopai.app import OctopaiApp

    app = OctopaiApp(preflight=preflight)
    try:
        app.run()
    except Exception as exc:
        click.secho(f"Failed to start the terminal interface: {exc}", fg="red", err=True)
        sys.exit(1)
    if app.return_code:
        sys.exit(app.return_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
