"""sol2 Lua binding generation.

Classes annotated ``CGCLASS(LuaClass)`` become usertypes; members and methods
annotated ``LuaInspect`` are registered on the usertype table. Everything is
collected into ``CreateBindings(sol::state& lua_state)`` in
``LuaBindings.cpp.gen``.
"""

from pathlib import Path

from annogen.codegen.registry import GenerationContext
from annogen.core.dispatch import HandlerSet
from annogen.core.properties import find_property
from annogen.models import Class, FullFunction, Function, Variable

BINDINGS_FILE = "LuaBindings.cpp.gen"
BINDINGS_FUNCTION = "CreateBindings"

handlers = HandlerSet("lua")


def _bindings(context: GenerationContext, include: Path) -> FullFunction:
    generated = context.file(BINDINGS_FILE)
    generated.add_include(include)
    function = generated.function(BINDINGS_FUNCTION)
    function.header.add_parameter(Variable(type="sol::state&", name="lua_state"))
    return function


@handlers.on_class
def bind_class(context: GenerationContext, class_: Class) -> None:
    if find_property(class_.properties, "LuaClass") is None:
        return
    ns = class_.full_namespace
    _bindings(context, class_.path).body.append(
        f"sol::usertype<{ns}> {class_.name}_table = lua_state.new_usertype<{ns}>"
        f'("{class_.name}", sol::constructors<{ns}()>{{}});'
    )


@handlers.on_member
def bind_member(context: GenerationContext, member: Variable, owner: Class) -> None:
    if find_property(member.properties, "LuaInspect") is None:
        return
    _bindings(context, member.path).body.append(f'{owner.name}_table["{member.name}"] = &{member.full_namespace};')


@handlers.on_method
def bind_method(context: GenerationContext, method: Function, owner: Class) -> None:
    if method.is_constructor or find_property(method.properties, "LuaInspect") is None:
        return
    _bindings(context, method.path).body.append(f'{owner.name}_table["{method.name}"] = &{method.full_namespace};')
