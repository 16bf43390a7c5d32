import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from annogen.cli.generate import generate
from annogen.cli.inspect import inspect
from annogen.config import get_settings

app = typer.Typer(
    name="annogen",
    help="Generate code from annotated C++ declarations.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("generate")(generate)
app.command("inspect")(inspect)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress at INFO level.")] = False,
) -> None:
    """Configure logging for all commands."""
    level = "INFO" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def main() -> None:
    app()
