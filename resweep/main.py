"""resweep CLI - find and remove resource files no source code refers to."""
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional, Tuple

import click
import typer
from rich.markup import escape
from rich.table import Table

from resweep.analyzer.detector import UnusedResourceDetector
from resweep.analyzer.finder import create_finder
from resweep.analyzer.unused_resolver import FileInfo, readable_size, total_size
from resweep.config import ConfigurationError, __version__, get_config, split_extensions, split_list
from resweep.reaper.reference_stripper import find_project_files, strip_references
from resweep.reaper.safe_delete import SafeDeleter
from resweep.utils.safe_console import SafeConsole

app = typer.Typer(
    name="resweep",
    help="Find unused resources (images, asset sets, plists) in a project",
    add_completion=False
)
console = SafeConsole()


def _resolve_project(project_path: str) -> Path:
    path = Path(project_path).resolve()
    if not path.is_dir():
        console.print(f"[bold red]Error:[/bold red] Project path does not exist: {escape(str(path))}")
        raise typer.Exit(1)
    return path


def analyze_project(
    project_path: Path,
    exclude: Optional[str],
    resource_extensions: Optional[str],
    file_extensions: Optional[str],
    finder: Optional[str],
    show_progress: bool = True,
) -> Tuple[List[FileInfo], List[str]]:
    """Shared analysis logic for the audit and clean commands.

    Command-line values override the project's configuration. The trash
    directory is always left out so trashed resources never show up again.

    Returns:
        (unused resources, failure messages)
    """
    try:
        config = get_config(project_path)
        finder_name = finder.strip().lower() if finder else config.finder
        detector = UnusedResourceDetector(
            project_path,
            excluded_paths=_excluded_paths(config, exclude),
            resource_extensions=(
                split_extensions(resource_extensions)
                if resource_extensions is not None else config.resource_extensions
            ),
            search_in_extensions=(
                split_extensions(file_extensions)
                if file_extensions is not None else config.file_extensions
            ),
            finder=create_finder(finder_name),
        )

        status = console.status("Searching unused resources…") if show_progress else nullcontext()
        with status:
            unused = detector.unused_files()
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    return unused, detector.failures


def _excluded_paths(config, exclude: Optional[str]) -> List[str]:
    excluded = split_list(exclude) if exclude is not None else config.excluded_paths
    trash = config.trash_path
    if trash.is_relative_to(config.project_root):
        excluded.append(str(trash))
    return excluded


def _render_unused(project_path: Path, files: List[FileInfo]):
    table = Table(title="Unused Resources")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("File Path", style="cyan", no_wrap=False)

    for info in files:
        try:
            display_path = info.path.relative_to(project_path)
        except ValueError:
            display_path = info.path
        table.add_row(info.readable_size, escape(str(display_path)))

    console.print(table)


def _print_summary(files: List[FileInfo]):
    size = readable_size(total_size(files))
    console.print(f"[bold yellow]{len(files)} unused files are found. Total Size: {size}[/bold yellow]")


def _print_failures(failures: List[str]):
    if not failures:
        return
    console.print(f"\n[bold yellow]⚠ {len(failures)} path(s) could not be analyzed:[/bold yellow]")
    for message in failures:
        console.print(f"  [dim]• {escape(message)}[/dim]")


@app.command()
def audit(
    project_path: str = typer.Argument(".", help="Project root path to analyze"),
    exclude: str = typer.Option(None, "--exclude", "-e", help="Paths to exclude, relative to the project (space or comma separated)"),
    resource_extensions: str = typer.Option(None, "--resource-extensions", "-r", help="Resource extensions to look for (default: imageset jpg png gif pdf)"),
    file_extensions: str = typer.Option(None, "--file-extensions", "-f", help="Source extensions to search in (default: h m mm swift xib storyboard plist)"),
    finder: str = typer.Option(None, "--finder", help="Resource discovery backend: native or find"),
):
    """List unused resources without touching anything."""
    project = _resolve_project(project_path)
    console.print(f"[bold blue]Analyzing project:[/bold blue] {escape(str(project))}\n")

    unused, failures = analyze_project(project, exclude, resource_extensions, file_extensions, finder)

    if not unused:
        console.print("[bold green]No unused resources found![/bold green]")
    else:
        _render_unused(project, unused)
        _print_summary(unused)
        console.print("[dim]Use 'resweep clean' to move them to the trash[/dim]")

    _print_failures(failures)


@app.command()
def clean(
    project_path: str = typer.Argument(".", help="Project root path to clean"),
    exclude: str = typer.Option(None, "--exclude", "-e", help="Paths to exclude, relative to the project (space or comma separated)"),
    resource_extensions: str = typer.Option(None, "--resource-extensions", "-r", help="Resource extensions to look for"),
    file_extensions: str = typer.Option(None, "--file-extensions", "-f", help="Source extensions to search in"),
    finder: str = typer.Option(None, "--finder", help="Resource discovery backend: native or find"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without asking"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be deleted without deleting"),
    skip_proj_reference: bool = typer.Option(False, "--skip-proj-reference", help="Keep references in project.pbxproj files"),
):
    """Move unused resources to the trash and drop their project references."""
    project = _resolve_project(project_path)
    console.print(f"[bold blue]Analyzing project:[/bold blue] {escape(str(project))}\n")

    unused, failures = analyze_project(project, exclude, resource_extensions, file_extensions, finder)
    _print_failures(failures)

    if not unused:
        console.print("[bold green]No unused resources found![/bold green]")
        return

    _print_summary(unused)

    if dry_run:
        _render_unused(project, unused)
        console.print("\n[bold blue]DRY RUN - No changes were made[/bold blue]")
        return

    if not yes:
        while True:
            action = typer.prompt(
                "What do you want to do with them? (l)ist | (d)elete | (i)gnore",
                type=click.Choice(["l", "d", "i"], case_sensitive=False),
            ).lower()
            if action == "l":
                _render_unused(project, unused)
                continue
            if action == "i":
                console.print("[dim]Ignored[/dim]")
                return
            break

    deleter = SafeDeleter(get_config(project).trash_path)
    report = deleter.delete_unused(unused)

    console.print(
        f"[bold green]✓ {len(report.deleted)} unused files are deleted "
        f"({readable_size(total_size(report.deleted))}).[/bold green]"
    )

    if report.failed:
        table = Table(title="✗ Failed to Delete")
        table.add_column("File Path", style="cyan", no_wrap=False)
        table.add_column("Error", style="red")
        for info, error in report.failed:
            table.add_row(escape(str(info.path)), escape(str(error)))
        console.print(table)

    if skip_proj_reference or not report.deleted:
        return

    console.print("[bold blue]Removing references from project files...[/bold blue]")
    for project_file in find_project_files(project):
        if strip_references(project_file, report.deleted):
            console.print(f"  [green]✓ Updated[/green] → {escape(str(project_file.relative_to(project)))}")


@app.command()
def restore(
    project_path: str = typer.Argument(".", help="Project root path"),
):
    """Move every trashed resource back to where it came from."""
    project = _resolve_project(project_path)
    try:
        trash_path = get_config(project).trash_path
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not trash_path.exists():
        console.print("[dim]Trash is empty, nothing to restore[/dim]")
        return

    deleter = SafeDeleter(trash_path)
    info = deleter.get_trash_info()
    if not info["unrestored_count"]:
        console.print("[dim]Trash is empty, nothing to restore[/dim]")
        return

    try:
        restored = deleter.restore_all(info["unrestored_ids"])
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓ Restored {restored} resource(s)[/bold green]")


def _version_callback(value: bool):
    if value:
        console.print(f"resweep {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
):
    """resweep - find and remove unused resources."""


if __name__ == "__main__":
    app()
