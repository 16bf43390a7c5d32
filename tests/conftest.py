"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from annogen.core.declarations import Declaration, DeclarationEvent, DeclKind, enter, exit_

_REPO_ROOT = Path(__file__).parent.parent

UNIT_PATH = Path("/src/game/Foo.h")


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Synthetic declaration streams
# ---------------------------------------------------------------------------

DeclTree = Callable[..., list[DeclarationEvent]]


def _decl_tree(
    kind: DeclKind,
    name: str,
    line_above: str = "",
    children: Sequence[list[DeclarationEvent]] = (),
    source_text: str | None = None,
    qualified_name: str | None = None,
    file: Path = UNIT_PATH,
) -> list[DeclarationEvent]:
    decl = Declaration(
        kind=kind,
        qualified_name=qualified_name if qualified_name is not None else name,
        name=name,
        line_above=line_above,
        file=file,
        source_text=source_text if source_text is not None else f"int {name}",
    )
    events = [enter(decl)]
    for child in children:
        events.extend(child)
    events.append(exit_(decl))
    return events


@pytest.fixture
def unit_path() -> Path:
    return UNIT_PATH


@pytest.fixture
def decl_tree() -> DeclTree:
    """Build the ENTER/EXIT events of one declaration and its children."""
    return _decl_tree


# ---------------------------------------------------------------------------
# C++ sources on disk
# ---------------------------------------------------------------------------

LUA_HEADER = """\
#pragma once

CGCLASS(LuaClass)
class Foo {
public:
    CGMEMBER(LuaInspect)
    int bar;
};
"""


@pytest.fixture
def lua_header(tmp_path: Path) -> Path:
    path = tmp_path / "include" / "Foo.h"
    path.parent.mkdir()
    path.write_text(LUA_HEADER, encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "generated"
    path.mkdir()
    return path
