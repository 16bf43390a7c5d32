import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from annogen.codegen.registry import GenerationContext
from annogen.codegen.writer import WriteReport, write_files
from annogen.core.ast import extract_declarations_from_file
from annogen.core.dispatch import HandlerSet, dispatch
from annogen.core.ports.declarations import DeclarationSource
from annogen.core.scope import ScopeError, track_declarations
from annogen.models import TranslationUnit

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    units: list[TranslationUnit] = field(default_factory=list)
    dispatched: int = 0
    failed: list[tuple[Path, str]] = field(default_factory=list)
    write: WriteReport | None = None

    @property
    def skipped_parameters(self) -> int:
        return sum(unit.skipped_parameters for unit in self.units)

    @property
    def unattributed(self) -> int:
        return sum(unit.unattributed for unit in self.units)


def parse_unit(path: str | Path, source: DeclarationSource = extract_declarations_from_file) -> TranslationUnit:
    unit_path = Path(path)
    logger.info("Parsing %s", unit_path)
    unit = track_declarations(source(unit_path), unit_path)
    if unit.skipped_parameters:
        logger.info(
            "Skipped %d parameter(s) in %s, likely function pointers", unit.skipped_parameters, unit_path
        )
    return unit


def run_generation(
    inputs: Iterable[str | Path],
    handlers: HandlerSet,
    context: GenerationContext | None = None,
    source: DeclarationSource = extract_declarations_from_file,
) -> tuple[GenerationContext, GenerationReport]:
    """Parse every input unit and dispatch its entities to ``handlers``.

    A unit that cannot be read or yields a broken declaration stream is
    reported and skipped; the remaining units are still processed.
    """
    context = context if context is not None else GenerationContext()
    report = GenerationReport()

    for path in inputs:
        unit_path = Path(path)
        try:
            unit = parse_unit(unit_path, source)
        except (OSError, ValueError, ScopeError) as exc:
            logger.error("Failed to parse %s: %s", unit_path, exc)
            report.failed.append((unit_path, str(exc)))
            continue

        report.units.append(unit)
        if unit.is_empty:
            logger.debug("No annotated declarations in %s", unit_path)
            continue
        dispatch(unit, context, handlers)
        report.dispatched += 1

    return context, report


def generate(
    inputs: Iterable[str | Path],
    output_directory: str | Path,
    handlers: HandlerSet,
    source: DeclarationSource = extract_declarations_from_file,
) -> GenerationReport:
    context, report = run_generation(inputs, handlers, source=source)
    report.write = write_files(context, output_directory)
    return report
