"""Unit tests for the type spelling heuristic."""

import pytest

from annogen.core.declarations import type_spelling


@pytest.mark.parametrize(
    ("source_text", "name", "expected"),
    [
        ("int bar", "bar", "int"),
        ("static int count", "count", "int"),
        ("static const std::string name", "name", "const std::string"),
        ("const std::string& label", "label", "const std::string&"),
        ("unsigned long long total = 0", "total", "unsigned long long"),
        ("virtual void update(float dt)", "update", "virtual void"),
        ("std::vector<int>   values", "values", "std::vector<int>  "),
        ("int *ptr", "ptr", "int"),
        ("float", "", "float"),
    ],
    ids=[
        "plain",
        "static",
        "static-const",
        "reference",
        "initializer",
        "method",
        "odd-spacing",
        "pointer-star-on-name",
        "unnamed",
    ],
)
def test_type_spelling(source_text: str, name: str, expected: str) -> None:
    assert type_spelling(source_text, name) == expected


def test_missing_name_cuts_at_last_space() -> None:
    assert type_spelling("const char* text", "other") == "const char*"


def test_name_found_inside_type_keeps_whole_text() -> None:
    # The first occurrence of "i" is inside "int"; no space precedes it.
    assert type_spelling("int i", "i") == "int i"
