import logging
from dataclasses import dataclass, field
from pathlib import Path

from annogen.codegen.registry import GenerationContext
from annogen.models import FullFunction, GeneratedFile

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    written: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def include_line(path: Path | str) -> str:
    return f'#include "{Path(path).as_posix()}"'


def _signature(name: str, function: FullFunction) -> str:
    header = function.header
    parameters = ", ".join(f"{parameter.type} {parameter.name}" for parameter in header.parameters)
    return f"{header.return_type} {name}({parameters})"


def render_file(generated: GeneratedFile) -> str:
    """Render a generated file to text.

    Includes are made absolute and sorted by path text. Functions keep the
    order in which they were first requested and are named after their
    registry key.
    """
    includes = sorted({Path(path).absolute() for path in generated.includes}, key=Path.as_posix)
    lines: list[str] = [include_line(path) for path in includes]
    lines.append("")
    lines.extend(generated.header)
    lines.append("")

    text = "\n".join(lines) + "\n"
    for name, function in generated.functions.items():
        function_lines = [_signature(name, function), "{", *function.body, "}", ""]
        # The prefix is emitted as-is, without a line break of its own.
        text += function.prefix + "\n".join(function_lines) + "\n"
    return text


def write_files(context: GenerationContext, output_directory: Path | str) -> WriteReport:
    report = WriteReport()
    root = Path(output_directory)
    for name in sorted(context.files):
        output_file = root / name
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(render_file(context.files[name]), encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write %s: %s", output_file, exc)
            report.failed.append((output_file, str(exc)))
            continue
        logger.info("Wrote %s", output_file)
        report.written.append(output_file)
    return report
