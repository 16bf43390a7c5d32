from pathlib import Path

from pydantic import BaseModel, Field


class Property(BaseModel):
    name: str
    value: str | list["Property"] = ""


Property.model_rebuild()


class Entity(BaseModel):
    name: str = ""
    full_namespace: str = ""
    path: Path = Path()
    properties: list[Property] = Field(default_factory=list)


class Variable(Entity):
    type: str = "int"


class Function(Entity):
    return_type: str = "void"
    parameters: list[Variable] = Field(default_factory=list)
    is_constructor: bool = False

    def add_parameter(self, variable: Variable) -> bool:
        """Append ``variable`` unless a parameter with the same name exists.

        Returns whether the parameter was added.
        """
        if any(parameter.name == variable.name for parameter in self.parameters):
            return False
        self.parameters.append(variable)
        return True


class Class(Entity):
    variables: list[Variable] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)


class TranslationUnit(BaseModel):
    path: Path
    classes: list[Class] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)
    variables: list[Variable] = Field(default_factory=list)
    skipped_parameters: int = 0
    unattributed: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.classes or self.functions or self.variables)


class FullFunction(BaseModel):
    # Emitted verbatim before the signature, e.g. a template<...> line.
    prefix: str = ""
    header: Function = Field(default_factory=Function)
    body: list[str] = Field(default_factory=list)


class GeneratedFile(BaseModel):
    includes: set[Path] = Field(default_factory=set)
    header: list[str] = Field(default_factory=list)
    functions: dict[str, FullFunction] = Field(default_factory=dict)

    def add_include(self, path: Path | str) -> None:
        self.includes.add(Path(path).absolute())

    def function(self, name: str) -> FullFunction:
        """Return the function stored under ``name``, creating it on first use."""
        if name not in self.functions:
            self.functions[name] = FullFunction(header=Function(name=name))
        return self.functions[name]
