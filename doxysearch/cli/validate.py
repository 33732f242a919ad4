"""
Validate command for the doxysearch CLI.

Checks search data files for format errors and table invariant violations.
"""

from pathlib import Path

import typer
from loguru import logger
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from doxysearch import codec
from doxysearch.catalog import SECTION_FILE_PATTERN
from doxysearch.cli.common import console
from doxysearch.keys import is_valid_key

__all__ = ["validate_command", "check_file"]


def check_file(file_path):
    # type: (Path) -> tuple[int, list[str], list[str]]
    """
    Validate one search data file.

    :param file_path: Table file to check
    :return: Tuple of (entry count, errors, warnings)
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        table = codec.loads(text, source=file_path.name)
    except ValueError as e:
        return 0, [str(e)], []

    warnings = []
    for entry in table:
        if not is_valid_key(entry.key):
            warnings.append(f"Key '{entry.key}' is not in normalized form")
    if codec.dumps(table) != text:
        warnings.append("Writing the table back does not reproduce the file byte for byte")
    return len(table), [], warnings


def validate_command(
    path: str = typer.Argument(..., help="Doxygen search directory or table file"),
):
    # type: (...) -> None
    """
    Validate search data files.

    Reports malformed files, empty or duplicate keys, entries without links,
    keys that are not normalized and files that do not round-trip exactly.
    Exits with code 1 if any file has errors.

    Example:
        doxysearch validate html/search
        doxysearch validate html/search/all_b.js
    """
    target = Path(path)
    if not target.exists():
        console.print(f"[red]Error: {target} not found[/red]")
        raise typer.Exit(code=1)

    if target.is_file():
        files = [target]
    else:
        files = sorted(p for p in target.glob("*.js") if SECTION_FILE_PATTERN.match(p.name))
        descriptor = target / "searchdata.js"
        if descriptor.exists():
            try:
                codec.load_sections(descriptor)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(code=1)

    if not files:
        console.print(f"[yellow]No search data files found in {target}[/yellow]")
        raise typer.Exit(code=1)

    report = Table(title=f"Validation of {target}")
    report.add_column("File", style="cyan")
    report.add_column("Entries", justify="right")
    report.add_column("Status")

    failed = 0
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Validating...", total=len(files))
        for file_path in files:
            count, errors, warnings = check_file(file_path)
            for warning in warnings:
                logger.warning(f"{file_path.name}: {warning}")
            if errors:
                failed += 1
                report.add_row(file_path.name, "-", "[red]" + "; ".join(errors) + "[/red]")
            elif warnings:
                report.add_row(file_path.name, str(count), f"[yellow]{len(warnings)} warning(s)[/yellow]")
            else:
                report.add_row(file_path.name, str(count), "[green]ok[/green]")
            progress.advance(task)

    console.print(report)
    if failed:
        console.print(f"[red]{failed} of {len(files)} file(s) failed validation[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]{len(files)} file(s) valid[/green]")
