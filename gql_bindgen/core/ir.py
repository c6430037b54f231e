"""Intermediate Representation (IR) for GraphQL schemas.

This module defines the immutable dataclasses that the registry builder
extracts from a GraphQL document and that the bindings generator consumes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True, order=True)
class Position:
    """1-based source location of a definition, for diagnostics only."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class NamedType:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListType:
    of_type: "TypeExpr"

    def __str__(self) -> str:
        return f"[{self.of_type}]"


@dataclass(frozen=True)
class NonNullType:
    of_type: "TypeExpr"

    def __str__(self) -> str:
        return f"{self.of_type}!"


TypeExpr = Union[NamedType, ListType, NonNullType]


@dataclass(frozen=True)
class FieldDef:
    """A field of an object type. Field arguments are not modeled."""
    name: str
    type: TypeExpr


@dataclass(frozen=True)
class EnumTypeDef:
    """Represents a GraphQL enum type."""
    name: str
    values: tuple[str, ...]
    position: Position


@dataclass(frozen=True)
class ObjectTypeDef:
    """Represents a GraphQL object type; fields keep declaration order."""
    name: str
    fields: tuple[FieldDef, ...]
    position: Position


@dataclass(frozen=True)
class SchemaRootDef:
    """The `schema { ... }` definition naming the root operation types."""
    position: Position
    query: str | None = None
    mutation: str | None = None
    subscription: str | None = None


@dataclass(frozen=True)
class TypeRegistry:
    """Validated, de-duplicated collection of the definitions of one document.

    The registry keeps its own copy of the source text it was built from so
    that nothing derived from it refers to a buffer owned elsewhere.
    """
    source: str
    schema_def: SchemaRootDef
    enum_types: Mapping[str, EnumTypeDef] = field(default_factory=dict)
    obj_types: Mapping[str, ObjectTypeDef] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the maps; dataclass(frozen=True) needs object.__setattr__
        object.__setattr__(self, "enum_types", MappingProxyType(dict(self.enum_types)))
        object.__setattr__(self, "obj_types", MappingProxyType(dict(self.obj_types)))

    def is_defined(self, name: str) -> bool:
        """Check if a name is an enum or object type of this schema."""
        return name in self.enum_types or name in self.obj_types

    def type_names(self) -> list[str]:
        """Return enum names then object names, each in source order."""
        return list(self.enum_types) + list(self.obj_types)
