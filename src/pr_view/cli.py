"""CLI entry point for pr-view."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from pr_view import __version__
from pr_view.aggregator import run_list_all
from pr_view.config import load_settings
from pr_view.exceptions import PRViewError
from pr_view.render import render_table
from pr_view.store import RepoStore

USAGE_HINT = "pr-view add owner/repo[#number]"


def _store(ctx: click.Context) -> RepoStore:
    settings = load_settings(config_dir=ctx.obj.get("config_dir"))
    return RepoStore(settings.repo_file)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pr-view")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding repos.json (default: ~/.config/pr-view).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_dir: Optional[Path], verbose: bool) -> None:
    """Track GitHub repos and list their open pull requests."""
    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(2)


@main.command()
@click.argument("ref")
@click.pass_context
def add(ctx: click.Context, ref: str) -> None:
    """Track REF (owner/repo, owner/repo#number or a GitHub URL)."""
    try:
        stored = _store(ctx).add(ref)
    except PRViewError as e:
        click.echo(f"error adding repo: {e}", err=True)
        sys.exit(1)
    click.echo(f"added {stored}")


@main.command()
@click.argument("ref")
@click.pass_context
def remove(ctx: click.Context, ref: str) -> None:
    """Stop tracking REF."""
    try:
        removed = _store(ctx).remove(ref)
    except PRViewError as e:
        click.echo(f"error removing repo: {e}", err=True)
        sys.exit(1)
    click.echo(f"removed {removed}")


@main.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show open pull requests across all tracked repos."""
    settings = load_settings(config_dir=ctx.obj.get("config_dir"))
    try:
        refs = RepoStore(settings.repo_file).load()
    except PRViewError as e:
        click.echo(f"error loading repos: {e}", err=True)
        sys.exit(1)

    if not refs:
        click.echo(f"no repos configured. add one with: {USAGE_HINT}")
        return

    outcomes = run_list_all(refs, token=settings.token)
    click.echo(render_table(outcomes), nl=False)


if __name__ == "__main__":
    main()
