from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from annogen.config import get_settings
from annogen.core.generate import generate as _generate
from annogen.handlers.loader import HandlerLoadError, load_handlers
from annogen.project.vcxproj import ProjectError, discover_inputs

console = Console()


def generate(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="A .vcxproj project, a directory of headers, or a single C/C++ file.",
            exists=True,
        ),
    ],
    output_directory: Annotated[
        Path,
        typer.Argument(help="Directory that receives the generated files.", exists=True, file_okay=False),
    ],
    handlers: Annotated[
        list[str] | None,
        typer.Option(
            "--handlers",
            "-H",
            help="Handler set as 'package.module:attribute' or a builtin alias (lua). Repeatable.",
        ),
    ] = None,
) -> None:
    """Generate files from the annotated declarations of the input units."""
    try:
        handler_set = load_handlers(handlers or get_settings().handlers)
        inputs = discover_inputs(input_path)
    except (HandlerLoadError, ProjectError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from None

    console.print(f"Parsing {len(inputs)} file(s) with {handler_set!r}")
    report = _generate(inputs, output_directory, handler_set)

    console.print(
        f"[green]Parsed[/green] {len(report.units)} unit(s), "
        f"dispatched {report.dispatched}, "
        f"skipped {report.skipped_parameters} parameter(s), "
        f"{report.unattributed} unattributed declaration(s)"
    )
    for path, reason in report.failed:
        console.print(f"[yellow]Skipped[/yellow] {path}: {reason}")

    assert report.write is not None
    for path in report.write.written:
        console.print(f"[green]Wrote[/green] {path}")
    for path, reason in report.write.failed:
        console.print(f"[red]Could not write[/red] {path}: {reason}")
    if not report.write.ok:
        raise typer.Exit(1)
