"""Handler registration and per-unit event dispatch."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from annogen.models import Class, Function, TranslationUnit, Variable

if TYPE_CHECKING:
    from annogen.codegen.registry import GenerationContext


class HandlerKind(str, Enum):
    UNIT = "unit"
    FUNCTION = "function"
    VARIABLE = "variable"
    CLASS = "class"
    METHOD = "method"
    MEMBER = "member"


class UnitHandler(Protocol):
    def __call__(self, context: GenerationContext, unit: TranslationUnit) -> None: ...


class FunctionHandler(Protocol):
    def __call__(self, context: GenerationContext, function: Function) -> None: ...


class VariableHandler(Protocol):
    def __call__(self, context: GenerationContext, variable: Variable) -> None: ...


class ClassHandler(Protocol):
    def __call__(self, context: GenerationContext, class_: Class) -> None: ...


class MethodHandler(Protocol):
    def __call__(self, context: GenerationContext, method: Function, owner: Class) -> None: ...


class MemberHandler(Protocol):
    def __call__(self, context: GenerationContext, member: Variable, owner: Class) -> None: ...


class HandlerSet:
    """Named handler capabilities, one list per entity kind.

    Handlers of the same kind run in registration order. The ``on_*`` methods
    work as decorators::

        handlers = HandlerSet("bindings")

        @handlers.on_class
        def register_type(context, class_): ...
    """

    def __init__(self, name: str = "handlers") -> None:
        self.name = name
        self._handlers: dict[HandlerKind, list[Callable[..., None]]] = {kind: [] for kind in HandlerKind}

    def register(self, kind: HandlerKind, handler: Callable[..., Any]) -> Callable[..., Any]:
        self._handlers[HandlerKind(kind)].append(handler)
        return handler

    def on_unit(self, handler: UnitHandler) -> UnitHandler:
        self.register(HandlerKind.UNIT, handler)
        return handler

    def on_function(self, handler: FunctionHandler) -> FunctionHandler:
        self.register(HandlerKind.FUNCTION, handler)
        return handler

    def on_variable(self, handler: VariableHandler) -> VariableHandler:
        self.register(HandlerKind.VARIABLE, handler)
        return handler

    def on_class(self, handler: ClassHandler) -> ClassHandler:
        self.register(HandlerKind.CLASS, handler)
        return handler

    def on_method(self, handler: MethodHandler) -> MethodHandler:
        self.register(HandlerKind.METHOD, handler)
        return handler

    def on_member(self, handler: MemberHandler) -> MemberHandler:
        self.register(HandlerKind.MEMBER, handler)
        return handler

    def handlers_for(self, kind: HandlerKind) -> tuple[Callable[..., None], ...]:
        return tuple(self._handlers[kind])

    def kinds(self) -> list[HandlerKind]:
        """Return the kinds that have at least one handler, in dispatch order."""
        return [kind for kind in HandlerKind if self._handlers[kind]]

    def merge(self, other: HandlerSet) -> HandlerSet:
        merged = HandlerSet(f"{self.name}+{other.name}")
        for source in (self, other):
            for kind in HandlerKind:
                merged._handlers[kind].extend(source._handlers[kind])
        return merged

    def __len__(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind.value}={len(self._handlers[kind])}" for kind in self.kinds())
        return f"HandlerSet({self.name!r}, {counts})"


def dispatch(unit: TranslationUnit, context: GenerationContext, handlers: HandlerSet) -> None:
    """Invoke ``handlers`` for every entity of ``unit``.

    Order: unit, top-level functions, top-level variables, then for each class
    the class itself, its methods and its members.
    """
    active = set(handlers.kinds())
    if not active:
        return

    for handler in handlers.handlers_for(HandlerKind.UNIT):
        handler(context, unit)

    if HandlerKind.FUNCTION in active:
        for function in unit.functions:
            for handler in handlers.handlers_for(HandlerKind.FUNCTION):
                handler(context, function)

    if HandlerKind.VARIABLE in active:
        for variable in unit.variables:
            for handler in handlers.handlers_for(HandlerKind.VARIABLE):
                handler(context, variable)

    for class_ in unit.classes:
        for handler in handlers.handlers_for(HandlerKind.CLASS):
            handler(context, class_)
        for method in class_.functions:
            for handler in handlers.handlers_for(HandlerKind.METHOD):
                handler(context, method, class_)
        for member in class_.variables:
            for handler in handlers.handlers_for(HandlerKind.MEMBER):
                handler(context, member, class_)
