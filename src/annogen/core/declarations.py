import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DeclKind(str, Enum):
    RECORD = "record"
    FIELD = "field"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    PARAMETER = "parameter"
    VARIABLE = "variable"
    FUNCTION = "function"


class Phase(str, Enum):
    ENTER = "enter"
    EXIT = "exit"


@dataclass(frozen=True)
class Declaration:
    kind: DeclKind
    qualified_name: str
    name: str
    line_above: str
    file: Path
    # Raw source text used for type spelling; empty for records.
    source_text: str = ""


@dataclass(frozen=True)
class DeclarationEvent:
    phase: Phase
    declaration: Declaration


def enter(declaration: Declaration) -> DeclarationEvent:
    return DeclarationEvent(Phase.ENTER, declaration)


def exit_(declaration: Declaration) -> DeclarationEvent:
    return DeclarationEvent(Phase.EXIT, declaration)


_STATIC_RE = re.compile(r"static\s+")


def type_spelling(source_text: str, name: str) -> str:
    """Return the type text written before ``name`` in ``source_text``.

    Cuts at the last space at or before the first occurrence of ``name`` and
    drops ``static``. This is a text heuristic: ``int *p`` yields ``int``.
    """
    name_at = source_text.find(name)
    if name_at == -1:
        cut = source_text.rfind(" ")
    else:
        cut = source_text.rfind(" ", 0, name_at + 1)
    spelling = source_text if cut == -1 else source_text[:cut]
    return _STATIC_RE.sub("", spelling)
