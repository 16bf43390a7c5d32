"""Assembly of the annotated-entity model from a declaration event stream."""

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from annogen.core.declarations import Declaration, DeclarationEvent, DeclKind, Phase, type_spelling
from annogen.core.properties import (
    CGCLASS,
    CGCONSTRUCTOR,
    CGFUNCTION,
    CGMEMBER,
    CGMETHOD,
    CGVARIABLE,
    parse_properties,
)
from annogen.models import Class, Function, Property, TranslationUnit, Variable

logger = logging.getLogger(__name__)


class ScopeError(RuntimeError):
    """The declaration stream is not properly nested."""


class _Frame(Enum):
    NONE = "none"
    CLASS = "class"
    METHOD = "method"
    FUNCTION = "function"


class ScopeTracker:
    """Consume ENTER/EXIT declaration events and build a ``TranslationUnit``.

    Classes live in ``unit.classes`` and are addressed by index while open.
    An unannotated class occupies a ``None`` slot on the class stack so that
    its members are not attributed to an enclosing class.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.unit = TranslationUnit(path=self.path)
        self.class_stack: list[int | None] = []
        self.function_stack: list[Function] = []
        self._frames: list[_Frame] = []
        self._skip_depth = 0

    def feed(self, event: DeclarationEvent) -> None:
        if event.phase is Phase.ENTER:
            self._enter(event.declaration)
        else:
            self._exit(event.declaration)

    def finish(self) -> TranslationUnit:
        if self._frames or self._skip_depth:
            raise ScopeError(
                f"Declaration stream for {self.path} ended with {len(self._frames) + self._skip_depth} open scope(s)"
            )
        return self.unit

    # ------------------------------------------------------------------

    def _enter(self, decl: Declaration) -> None:
        if self._skip_depth:
            self._skip_depth += 1
            return
        if Path(decl.file) != self.path:
            self._skip_depth = 1
            return

        kind = decl.kind
        if kind is DeclKind.RECORD:
            self._enter_record(decl)
        elif kind is DeclKind.FIELD:
            self._enter_field(decl)
            self._frames.append(_Frame.NONE)
        elif kind in (DeclKind.METHOD, DeclKind.CONSTRUCTOR, DeclKind.FUNCTION):
            self._enter_function(decl)
        elif kind is DeclKind.PARAMETER:
            self._enter_parameter(decl)
            self._frames.append(_Frame.NONE)
        elif kind is DeclKind.VARIABLE:
            properties = parse_properties(decl.line_above, CGVARIABLE)
            if properties:
                self.unit.variables.append(self._variable(decl, properties))
            self._frames.append(_Frame.NONE)
        else:
            raise ScopeError(f"Unknown declaration kind {kind!r}")

    def _exit(self, decl: Declaration) -> None:
        if self._skip_depth:
            self._skip_depth -= 1
            return
        if not self._frames:
            raise ScopeError(f"Unmatched end of {decl.qualified_name} in {self.path}")

        frame = self._frames.pop()
        if frame is _Frame.CLASS:
            self.class_stack.pop()
        elif frame is _Frame.METHOD:
            function = self.function_stack.pop()
            owner = self._open_class()
            if owner is None:
                self._unattributed(decl, "method")
            else:
                owner.functions.append(function)
        elif frame is _Frame.FUNCTION:
            self.unit.functions.append(self.function_stack.pop())

    def _enter_record(self, decl: Declaration) -> None:
        properties = parse_properties(decl.line_above, CGCLASS)
        if properties:
            self.unit.classes.append(
                Class(
                    name=decl.name,
                    full_namespace=decl.qualified_name,
                    path=self.path,
                    properties=properties,
                )
            )
            self.class_stack.append(len(self.unit.classes) - 1)
        else:
            self.class_stack.append(None)
        self._frames.append(_Frame.CLASS)

    def _enter_field(self, decl: Declaration) -> None:
        properties = parse_properties(decl.line_above, CGMEMBER)
        if not properties:
            return
        owner = self._open_class()
        if owner is None:
            self._unattributed(decl, "member")
            return
        owner.variables.append(self._variable(decl, properties))

    def _enter_function(self, decl: Declaration) -> None:
        if self.function_stack:
            raise ScopeError(
                f"{decl.qualified_name} in {self.path} opened inside function "
                f"{self.function_stack[-1].full_namespace}"
            )

        is_constructor = decl.kind is DeclKind.CONSTRUCTOR
        keyword = {DeclKind.METHOD: CGMETHOD, DeclKind.CONSTRUCTOR: CGCONSTRUCTOR}.get(decl.kind, CGFUNCTION)
        properties = parse_properties(decl.line_above, keyword)
        if not properties:
            # Parameters of unannotated functions are of no interest.
            self._skip_depth = 1
            return

        self.function_stack.append(
            Function(
                name=decl.name,
                full_namespace=decl.qualified_name,
                path=self.path,
                properties=properties,
                return_type="void" if is_constructor else type_spelling(decl.source_text, decl.name),
                is_constructor=is_constructor,
            )
        )
        self._frames.append(_Frame.FUNCTION if decl.kind is DeclKind.FUNCTION else _Frame.METHOD)

    def _enter_parameter(self, decl: Declaration) -> None:
        if not self.function_stack:
            # Usually a parameter of a function-pointer type.
            self.unit.skipped_parameters += 1
            return
        self.function_stack[-1].add_parameter(
            Variable(
                name=decl.name,
                full_namespace=decl.qualified_name,
                path=self.path,
                type=type_spelling(decl.source_text, decl.name),
            )
        )

    def _open_class(self) -> Class | None:
        if not self.class_stack or self.class_stack[-1] is None:
            return None
        return self.unit.classes[self.class_stack[-1]]

    def _variable(self, decl: Declaration, properties: list[Property]) -> Variable:
        return Variable(
            name=decl.name,
            full_namespace=decl.qualified_name,
            path=self.path,
            properties=properties,
            type=type_spelling(decl.source_text, decl.name),
        )

    def _unattributed(self, decl: Declaration, what: str) -> None:
        self.unit.unattributed += 1
        logger.warning(
            "Annotated %s %s in %s has no annotated enclosing class, skipping",
            what,
            decl.qualified_name,
            self.path,
        )


def track_declarations(events: Iterable[DeclarationEvent], path: Path) -> TranslationUnit:
    tracker = ScopeTracker(path)
    for event in events:
        tracker.feed(event)
    return tracker.finish()
