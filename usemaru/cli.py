"""
usemaru CLI - Command-line interface for resource scaffolding

Usage:
    usemaru generate [--dry-run] [--conventions usemaru.yaml]
    usemaru scan <directory>
    usemaru init
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from usemaru.generator import GenerationPlan, MaterializeResult, ResourceGenerator
from usemaru.models import ArtifactKind, ClientMode, Conventions
from usemaru.prompts import PromptSession
from usemaru.resolver import resolve_import_path
from usemaru.scanner import scan as scan_instances

app = typer.Typer(
    name="usemaru",
    help="Generate Next.js CRUD route handlers, hooks and actions for a resource",
    add_completion=False,
)
console = Console()

CONVENTIONS_FILE = "usemaru.yaml"


def _load_conventions(path: Optional[Path]) -> Conventions:
    if path is None:
        return Conventions()
    return Conventions.from_file(path)


@app.command()
def generate(
    conventions_file: Optional[Path] = typer.Option(
        None,
        "--conventions", "-c",
        help="Project conventions file (usemaru.yaml)",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
) -> None:
    """Interactively generate CRUD artifacts for a resource."""
    rprint("[bold]🚀 usemaru[/bold] - CRUD generator for Next.js\n")
    try:
        conventions = _load_conventions(conventions_file)
        inputs = PromptSession(conventions, console=console).run()

        generator = ResourceGenerator(conventions)
        plan = generator.plan(inputs.resource, inputs.dest_dir, inputs.client)
        rprint(f"\nGenerating CRUD for resource: [bold]{inputs.resource.capitalized}[/bold]")

        if dry_run:
            rprint("\n[yellow]Dry run - nothing written[/yellow]\n")
            _show_preview(plan)
            return

        result = generator.materialize(plan)
        _show_report(result)

    except typer.Abort:
        raise
    except Exception as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def scan(
    directory: Path = typer.Argument(
        Path("./src"),
        help="Directory to search for configured client instances",
    ),
    conventions_file: Optional[Path] = typer.Option(
        None,
        "--conventions", "-c",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """List configured client instances and their import paths."""
    try:
        conventions = _load_conventions(conventions_file)
        candidates = scan_instances(directory, conventions)
    except Exception as e:
        rprint(f"[red]✗[/red] {e}")
        raise typer.Exit(1)

    if not candidates:
        rprint(f"[yellow]No client instances found under {directory}[/yellow]")
        return

    table = Table()
    table.add_column("#", style="cyan")
    table.add_column("File")
    table.add_column("Import", no_wrap=True)

    for i, candidate in enumerate(candidates, 1):
        table.add_row(
            str(i),
            escape(os.path.relpath(candidate.absolute_path, os.path.abspath(directory))),
            resolve_import_path(candidate.absolute_path, directory, conventions),
        )

    rprint(table)


@app.command()
def init(
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", resolve_path=True),
    source_root: str = typer.Option("src", "--source-root"),
    alias: str = typer.Option("@", "--alias"),
) -> None:
    """Create a usemaru.yaml conventions file."""
    if output_dir is None:
        output_dir = Path.cwd()

    output_file = output_dir / CONVENTIONS_FILE

    if output_file.exists():
        if not typer.confirm(f"{output_file} exists. Overwrite?"):
            raise typer.Exit(0)

    conventions = Conventions(source_root=source_root, alias=alias)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(conventions.to_yaml())

    rprint(f"[green]✓[/green] Created {output_file}")
    rprint(f"\nNext: [cyan]usemaru generate --conventions {output_file}[/cyan]")


@app.command()
def version() -> None:
    """Show version."""
    from usemaru import __version__
    rprint(f"usemaru {__version__}")


def _show_preview(plan: GenerationPlan) -> None:
    """Show what would be generated."""
    tree = Tree(f"[bold]{plan.resource.capitalized}[/bold]")

    dirs = tree.add("[blue]Directories[/blue]")
    for directory in plan.directories:
        dirs.add(escape(str(directory)))

    files = tree.add("[blue]Files[/blue]")
    for planned in plan.files:
        files.add(f"[cyan]{escape(str(planned.path))}[/cyan] ({planned.kind.value})")

    rprint(tree)


def _show_report(result: MaterializeResult) -> None:
    """Print the action log and the wiring summary."""
    for directory in result.created_dirs:
        rprint(f"[green]✓[/green] Directory created: {escape(str(directory))}")
    for directory in result.existing_dirs:
        rprint(f"[dim]- Directory exists: {escape(str(directory))}[/dim]")
    for path in result.written_files:
        rprint(f"[green]✓[/green] File written: {escape(str(path))}")

    plan = result.plan
    if result.client_mode == ClientMode.NEW:
        client_file = plan.file_for(ArtifactKind.CLIENT_CONFIG).path
        wiring = (
            f"Axios instance configured in {escape(str(client_file))}\n"
            f"Actions import it from [cyan]{plan.client.import_specifier}[/cyan]"
        )
    elif result.client_mode == ClientMode.EXISTING:
        wiring = f"Actions use the existing instance at [cyan]{plan.client.import_specifier}[/cyan]"
    else:
        wiring = "Actions call axios directly with headers passed on each request"

    rprint(Panel(
        f"CRUD for [bold]{plan.resource.capitalized}[/bold] generated\n\n{wiring}",
        title="Done",
    ))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
