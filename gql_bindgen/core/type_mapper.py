"""Maps GraphQL type expressions onto Python type hints.

Nullability belongs to a position in the type expression, not to the named
type: every position is Optional[...] unless a NonNull wrapper sits directly
on it.

    >>> mapper = TypeMapper()
    >>> mapper.map(ListType(NonNullType(NamedType("String"))))
    'Optional[List[str]]'
    >>> mapper.map(NonNullType(ListType(NamedType("String"))))
    'List[Optional[str]]'
"""

from typing import Mapping

from .errors import MissingTypeMapping
from .ir import ListType, NamedType, NonNullType, TypeExpr

# GraphQL builtin scalars. ID comes from gql_bindgen.runtime in generated code.
BUILTIN_SCALARS = {
    "Int": "int",
    "Float": "float",
    "String": "str",
    "Boolean": "bool",
    "ID": "ID",
}


class TypeMapper:
    """Translates TypeExpr trees into Python type hint strings.

    Args:
        overrides: GraphQL type name -> Python type name
        strict: When True, a non-builtin name without an override raises
                MissingTypeMapping instead of passing through unchanged.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None, strict: bool = False):
        self.overrides = dict(overrides or {})
        self.strict = strict

    def resolve_name(self, name: str) -> str:
        """Resolve a named type to its Python name."""
        if name in BUILTIN_SCALARS:
            return BUILTIN_SCALARS[name]
        if name in self.overrides:
            return self.overrides[name]
        if self.strict:
            raise MissingTypeMapping(name)
        return name

    def map(self, type_expr: TypeExpr, nullable: bool = True) -> str:
        """Map a type expression; `nullable=False` drops one Optional layer here only."""
        if isinstance(type_expr, NonNullType):
            return self.map(type_expr.of_type, nullable=False)

        if isinstance(type_expr, ListType):
            # List items are always a fresh, nullable position
            hint = f"List[{self.map(type_expr.of_type, nullable=True)}]"
        else:
            hint = self.resolve_name(type_expr.name)

        if nullable:
            return f"Optional[{hint}]"
        return hint


def named_type(type_expr: TypeExpr) -> NamedType:
    """Strip every list and non-null wrapper."""
    while not isinstance(type_expr, NamedType):
        type_expr = type_expr.of_type
    return type_expr
