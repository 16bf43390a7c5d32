"""Parsing of one-line annotation directives such as ``CGMEMBER(a=1, b)``."""

from annogen.models import Property

CGCLASS = "CGCLASS"
CGMEMBER = "CGMEMBER"
CGMETHOD = "CGMETHOD"
CGCONSTRUCTOR = "CGCONSTRUCTOR"
CGVARIABLE = "CGVARIABLE"
CGFUNCTION = "CGFUNCTION"

KEYWORDS: tuple[str, ...] = (CGCLASS, CGMEMBER, CGMETHOD, CGCONSTRUCTOR, CGVARIABLE, CGFUNCTION)


def _strip_whitespace(text: str) -> str:
    return "".join(text.split())


def _split_top_level(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split ``text`` on ``separator`` outside of ``{...}`` groups."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0 and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return parts


def _is_group(value: str) -> bool:
    if not (value.startswith("{") and value.endswith("}")):
        return False
    depth = 0
    for index, char in enumerate(value):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            # The opening brace must close on the last character.
            if depth == 0 and index != len(value) - 1:
                return False
    return depth == 0


def _parse_entries(text: str) -> list[Property]:
    entries: list[Property] = []
    for entry in _split_top_level(text, ","):
        name, *rest = _split_top_level(entry, "=", maxsplit=1)
        raw_value = _strip_whitespace(rest[0]) if rest else ""
        value: str | list[Property]
        if _is_group(raw_value):
            value = _parse_entries(raw_value[1:-1])
        else:
            value = raw_value
        entries.append(Property(name=_strip_whitespace(name), value=value))
    return entries


def parse_properties(line: str, keyword: str) -> list[Property]:
    """Parse a directive line into its property list.

    The first property is always named after ``keyword`` with an empty value.
    Returns an empty list when the line does not start with ``keyword`` or the
    argument list is not closed. The argument list ends at the first ``)``, so
    values cannot contain parentheses. Empty ``()`` adds no entry, since it is
    how a directive without arguments is written; a trailing comma still adds
    an empty-named entry.
    """
    stripped = line.lstrip()
    if not stripped.startswith(keyword):
        return []

    open_at = stripped.find("(", len(keyword))
    if open_at == -1:
        return []
    close_at = stripped.find(")", open_at)
    if close_at == -1:
        return []

    properties = [Property(name=keyword)]
    arguments = stripped[open_at + 1 : close_at]
    if arguments.strip():
        properties.extend(_parse_entries(arguments))
    return properties


def find_property(properties: list[Property], name: str) -> Property | None:
    for prop in properties:
        if prop.name == name:
            return prop
    return None


def is_directive_line(line: str) -> bool:
    stripped = line.lstrip()
    for keyword in KEYWORDS:
        if stripped.startswith(keyword) and stripped[len(keyword) :].lstrip().startswith("("):
            return True
    return False
