"""Declaration stream extraction from C/C++ sources using tree-sitter."""

from collections.abc import Iterator
from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from annogen.core.declarations import Declaration, DeclarationEvent, DeclKind, enter, exit_
from annogen.core.languages import detect_language_from_path
from annogen.core.properties import is_directive_line

_RECORD_TYPES = frozenset({"class_specifier", "struct_specifier", "union_specifier"})
_PREPROCESSOR_BLOCKS = frozenset(
    {"preproc_if", "preproc_ifdef", "preproc_else", "preproc_elif", "preproc_elifdef"}
)
_DECLARATOR_TYPES = frozenset(
    {
        "attributed_declarator",
        "array_declarator",
        "function_declarator",
        "init_declarator",
        "parenthesized_declarator",
        "pointer_declarator",
        "reference_declarator",
    }
)
_NAME_TYPES = frozenset(
    {
        "destructor_name",
        "field_identifier",
        "identifier",
        "operator_cast",
        "operator_name",
        "qualified_identifier",
        "template_function",
        "template_method",
        "type_identifier",
    }
)
_PARAMETER_TYPES = frozenset({"parameter_declaration", "optional_parameter_declaration"})


def mask_directives(source_bytes: bytes) -> bytes:
    """Blank out annotation directive lines, keeping byte offsets and rows intact."""
    lines = source_bytes.split(b"\n")
    for index, line in enumerate(lines):
        if is_directive_line(line.decode("utf-8", errors="replace")):
            lines[index] = b" " * len(line)
    return b"\n".join(lines)


def _inner_declarator(node: Node) -> Node | None:
    inner = node.child_by_field_name("declarator")
    if inner is None and node.named_children:
        inner = node.named_children[-1]
    return inner


def _name_node(declarator: Node | None) -> Node | None:
    node = declarator
    while node is not None and node.type not in _NAME_TYPES:
        if node.type not in _DECLARATOR_TYPES:
            return None
        node = _inner_declarator(node)
    return node


def _function_declarator(declarator: Node) -> Node | None:
    """Return the declarator of a function declaration, ignoring function pointers."""
    node: Node | None = declarator
    while node is not None:
        if node.type == "function_declarator":
            target = node.child_by_field_name("declarator")
            if target is not None and target.type == "parenthesized_declarator":
                return None
            return node
        if node.type not in ("attributed_declarator", "pointer_declarator", "reference_declarator"):
            return None
        node = _inner_declarator(node)
    return None


def _pointer_function_declarator(declarator: Node) -> Node | None:
    node: Node | None = declarator
    while node is not None and node.type in _DECLARATOR_TYPES:
        if node.type == "function_declarator":
            return node
        node = _inner_declarator(node)
    return None


class _DeclarationWalker:
    def __init__(self, source_bytes: bytes, path: Path) -> None:
        self._source = mask_directives(source_bytes)
        self._lines = source_bytes.decode("utf-8", errors="replace").split("\n")
        self._path = path

    def events(self) -> Iterator[DeclarationEvent]:
        parser = get_parser(cast(SupportedLanguage, "cpp"))
        tree = parser.parse(self._source)
        yield from self._walk(tree.root_node, [], None)

    # -- helpers --------------------------------------------------------

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _text_between(self, start_byte: int, end_byte: int) -> str:
        return self._source[start_byte:end_byte].decode("utf-8", errors="replace")

    def _line_above(self, node: Node) -> str:
        row = node.start_point[0]
        if row == 0 or row > len(self._lines):
            return ""
        return self._lines[row - 1]

    def _simple_name(self, node: Node) -> str:
        if node.type in ("qualified_identifier", "template_function", "template_method", "template_type"):
            name = node.child_by_field_name("name")
            if name is not None:
                return self._simple_name(name)
        return self._text(node)

    # -- traversal ------------------------------------------------------

    def _walk(self, node: Node, scope: list[str], owner: str | None) -> Iterator[DeclarationEvent]:
        for child in node.named_children:
            yield from self._visit(child, scope, owner)

    def _visit(self, node: Node, scope: list[str], owner: str | None) -> Iterator[DeclarationEvent]:
        kind = node.type
        if kind == "namespace_definition":
            body = node.child_by_field_name("body")
            if body is None:
                return
            name = node.child_by_field_name("name")
            inner = [*scope, *self._text(name).split("::")] if name is not None else scope
            yield from self._walk(body, inner, None)
        elif kind == "linkage_specification":
            body = node.child_by_field_name("body")
            if body is None:
                return
            if body.type == "declaration_list":
                yield from self._walk(body, scope, owner)
            else:
                yield from self._visit(body, scope, owner)
        elif kind == "template_declaration" or kind in _PREPROCESSOR_BLOCKS:
            yield from self._walk(node, scope, owner)
        elif kind in _RECORD_TYPES:
            yield from self._record(node, scope)
        elif kind in ("declaration", "field_declaration"):
            yield from self._declaration(node, scope, owner)
        elif kind == "function_definition":
            declarator = node.child_by_field_name("declarator")
            function = _function_declarator(declarator) if declarator is not None else None
            if function is not None:
                has_type = node.child_by_field_name("type") is not None
                yield from self._function(node, function, scope, owner, has_type)
        elif kind == "type_definition":
            type_node = node.child_by_field_name("type")
            if type_node is not None and type_node.type in _RECORD_TYPES:
                yield from self._record(type_node, scope)

    def _record(self, node: Node, scope: list[str]) -> Iterator[DeclarationEvent]:
        body = node.child_by_field_name("body")
        if body is None:
            # Forward declaration.
            return
        name_node = node.child_by_field_name("name")
        name = self._simple_name(name_node) if name_node is not None else ""
        inner = [*scope, name] if name else scope
        decl = Declaration(
            kind=DeclKind.RECORD,
            qualified_name="::".join(inner),
            name=name,
            line_above=self._line_above(name_node if name_node is not None else node),
            file=self._path,
        )
        yield enter(decl)
        yield from self._walk(body, inner, name)
        yield exit_(decl)

    def _declaration(self, node: Node, scope: list[str], owner: str | None) -> Iterator[DeclarationEvent]:
        type_node = node.child_by_field_name("type")
        if type_node is not None and type_node.type in _RECORD_TYPES:
            yield from self._record(type_node, scope)

        for declarator in node.children_by_field_name("declarator"):
            function = _function_declarator(declarator)
            if function is not None:
                yield from self._function(node, function, scope, owner, type_node is not None)
            else:
                yield from self._variable(node, declarator, scope, owner)

    def _function(
        self,
        outer: Node,
        function: Node,
        scope: list[str],
        owner: str | None,
        has_type: bool,
    ) -> Iterator[DeclarationEvent]:
        name_node = _name_node(function.child_by_field_name("declarator"))
        if name_node is None or name_node.type == "destructor_name":
            return
        name = self._simple_name(name_node)
        if name.startswith("~"):
            return

        if name_node.type == "qualified_identifier":
            # Out-of-line member definition such as Foo::bar.
            qualifier = name_node.child_by_field_name("scope")
            owner = self._simple_name(qualifier) if qualifier is not None else ""

        if owner is None:
            kind = DeclKind.FUNCTION
        elif not has_type and name == owner:
            kind = DeclKind.CONSTRUCTOR
        else:
            kind = DeclKind.METHOD

        decl = Declaration(
            kind=kind,
            qualified_name="::".join([*scope, self._text(name_node)]),
            name=name,
            line_above=self._line_above(name_node),
            file=self._path,
            source_text=self._text_between(outer.start_byte, function.end_byte),
        )
        yield enter(decl)
        yield from self._parameters(function)
        yield exit_(decl)

    def _variable(
        self, outer: Node, declarator: Node, scope: list[str], owner: str | None
    ) -> Iterator[DeclarationEvent]:
        name_node = _name_node(declarator)
        if name_node is None:
            return
        decl = Declaration(
            kind=DeclKind.FIELD if owner is not None else DeclKind.VARIABLE,
            qualified_name="::".join([*scope, self._text(name_node)]),
            name=self._simple_name(name_node),
            line_above=self._line_above(name_node),
            file=self._path,
            source_text=self._text_between(outer.start_byte, declarator.end_byte),
        )
        yield enter(decl)
        pointer_function = _pointer_function_declarator(declarator)
        if pointer_function is not None:
            yield from self._parameters(pointer_function)
        yield exit_(decl)

    def _parameters(self, function: Node) -> Iterator[DeclarationEvent]:
        parameters = function.child_by_field_name("parameters")
        if parameters is None:
            return
        for parameter in parameters.named_children:
            if parameter.type not in _PARAMETER_TYPES:
                continue
            declarator = parameter.child_by_field_name("declarator")
            name_node = _name_node(declarator)
            name = self._simple_name(name_node) if name_node is not None else ""
            end_byte = declarator.end_byte if declarator is not None else parameter.end_byte
            decl = Declaration(
                kind=DeclKind.PARAMETER,
                qualified_name=name,
                name=name,
                line_above=self._line_above(name_node if name_node is not None else parameter),
                file=self._path,
                source_text=self._text_between(parameter.start_byte, end_byte),
            )
            yield enter(decl)
            yield exit_(decl)


def extract_declarations_from_source(source_bytes: bytes, path: str | Path) -> Iterator[DeclarationEvent]:
    return _DeclarationWalker(source_bytes, Path(path)).events()


def extract_declarations_from_file(path: str | Path) -> Iterator[DeclarationEvent]:
    file_path = Path(path)
    detect_language_from_path(file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return extract_declarations_from_source(source_bytes, file_path)
