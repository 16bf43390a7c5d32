from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from annogen.core.generate import parse_unit
from annogen.core.scope import ScopeError
from annogen.models import Property, TranslationUnit

console = Console()


def _format_properties(properties: Sequence[Property]) -> str:
    parts: list[str] = []
    # The first property is the directive keyword itself.
    for prop in properties[1:]:
        if isinstance(prop.value, list):
            parts.append(f"{prop.name}={{{_format_properties([Property(name=''), *prop.value])}}}")
        elif prop.value:
            parts.append(f"{prop.name}={prop.value}")
        else:
            parts.append(prop.name)
    return ", ".join(parts)


def unit_rows(unit: TranslationUnit) -> list[tuple[str, str, str, str]]:
    rows: list[tuple[str, str, str, str]] = []
    for function in unit.functions:
        properties = _format_properties(function.properties)
        rows.append(("function", function.full_namespace, function.return_type, properties))
    for variable in unit.variables:
        rows.append(("variable", variable.full_namespace, variable.type, _format_properties(variable.properties)))
    for class_ in unit.classes:
        rows.append(("class", class_.full_namespace, "", _format_properties(class_.properties)))
        for method in class_.functions:
            kind = "constructor" if method.is_constructor else "method"
            params = ", ".join(f"{p.type} {p.name}" for p in method.parameters)
            signature = f"{method.full_namespace}({params})"
            rows.append((kind, signature, method.return_type, _format_properties(method.properties)))
        for member in class_.variables:
            rows.append(("member", member.full_namespace, member.type, _format_properties(member.properties)))
    return rows


def inspect(
    path: Annotated[Path, typer.Argument(help="C/C++ file to inspect.", exists=True, dir_okay=False)],
) -> None:
    """Show the annotated entities found in one file."""
    try:
        unit = parse_unit(path)
    except (OSError, ValueError, ScopeError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from None

    table = Table(show_lines=False)
    for header in ("kind", "name", "type", "properties"):
        table.add_column(header)
    rows = unit_rows(unit)
    for row in rows:
        table.add_row(*(escape(value) for value in row))
    console.print(table)
    console.print(f"({len(rows)} entities, {unit.skipped_parameters} skipped parameters)")
