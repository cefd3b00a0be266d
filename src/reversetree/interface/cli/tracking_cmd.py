"""Tracking commands - inspect reverse tree records in a local repository.

Provides commands to:
- Show why an artifact was resolved (one chain per request root)
- List artifacts that carry reverse tree records
"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from reversetree.foundation.config import ReverseTreeConfig
from reversetree.foundation.errors import ErrorCode, io_error
from reversetree.interface.cli.error_handler import handle_error
from reversetree.resolution.models import Artifact, LocalRepository
from reversetree.tracking.reader import TrackingRecord, iter_tracked_artifacts, read_tracking

console = Console()


def _repository(ctx: click.Context, repo: str | None) -> LocalRepository:
    if repo:
        basedir = Path(repo).expanduser().absolute()
    else:
        config: ReverseTreeConfig = ctx.obj or ReverseTreeConfig()
        basedir = config.local_repository_path()
    if not basedir.is_dir():
        handle_error(io_error(ErrorCode.REPOSITORY_NOT_FOUND, basedir))
    return LocalRepository(basedir)


def _parse_coords(value: str) -> Artifact:
    try:
        return Artifact.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COORDS") from e


@click.command("show")
@click.argument("coords")
@click.option("--repo", "-r", type=click.Path(file_okay=False), default=None,
              help="Local repository (defaults to configured local_repository)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, coords: str, repo: str | None, json_output: bool) -> None:
    """Show why an artifact was resolved.

    COORDS is group:artifact:version. Prints one chain per request root,
    starting at the artifact and ending at the root project.

    \b
    Examples:
        reversetree show org.slf4j:slf4j-api:2.0.9
        reversetree show com.x:lib:2.0 --repo /tmp/repo --json
    """
    artifact = _parse_coords(coords)
    repository = _repository(ctx, repo)
    tracking_dir = repository.tracking_dir_of(artifact)
    records = read_tracking(tracking_dir)

    if json_output:
        data = {
            "artifact": str(artifact),
            "tracking_dir": str(tracking_dir),
            "records": [r.to_dict() for r in records],
        }
        print(json.dumps(data, indent=2))
        return

    if not records:
        console.print(f"[yellow]No reverse tree recorded for {artifact}[/yellow]")
        console.print("[dim]Enable record_reverse_tree and resolve the project again.[/dim]")
        return

    console.print(Panel(f"{artifact} ({len(records)} roots)", border_style="blue"))
    for record in records:
        console.print(_record_tree(record))


def _record_tree(record: TrackingRecord) -> Tree:
    """Nest the record's lines, leaf at the top, root at the bottom."""
    tree = Tree(Text(record.root_key, style="bold"))
    branch = tree
    for _level, text in record.entries():
        branch = branch.add(Text(text))
    return tree


@click.command("list")
@click.option("--repo", "-r", type=click.Path(file_okay=False), default=None,
              help="Local repository (defaults to configured local_repository)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def list_tracked(ctx: click.Context, repo: str | None, json_output: bool) -> None:
    """List artifacts that carry reverse tree records."""
    repository = _repository(ctx, repo)

    rows = []
    for tracking_dir in iter_tracked_artifacts(repository.basedir):
        coords = _coords_for(repository, tracking_dir.parent)
        roots = [r.root_key for r in read_tracking(tracking_dir)]
        rows.append((coords, roots))

    if json_output:
        print(json.dumps([{"artifact": c, "roots": r} for c, r in rows], indent=2))
        return

    if not rows:
        console.print(f"[yellow]No reverse tree records under {repository.basedir}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Artifact")
    table.add_column("Roots", justify="right")
    for coords, roots in rows:
        table.add_row(coords, str(len(roots)))
    console.print(table)


def _coords_for(repository: LocalRepository, artifact_dir: Path) -> str:
    """Rebuild ``group:artifact:version`` from a layout directory."""
    parts = artifact_dir.relative_to(repository.basedir).parts
    if len(parts) < 3:
        return "/".join(parts)
    return f"{'.'.join(parts[:-2])}:{parts[-2]}:{parts[-1]}"
