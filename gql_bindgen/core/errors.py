"""Errors raised while generating bindings from a GraphQL schema.

Every error is terminal for the current generation: the first one raised
aborts the pipeline and no partial output is produced.
"""

from .ir import Position


class CodegenError(Exception):
    """Base class for all code generation errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class IoError(CodegenError):
    """The schema source could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read schema file `{path}`: {reason}")


class SchemaParseError(CodegenError):
    """The schema source is not syntactically valid GraphQL SDL."""

    def __init__(self, detail: str, position: Position | None = None):
        self.detail = detail
        self.position = position
        where = f" at {position}" if position else ""
        super().__init__(f"Error parsing GraphQL schema{where}: {detail}")


class UnsupportedDefinitionKind(CodegenError):
    """A definition kind that cannot be translated to bindings yet."""

    def __init__(self, kind: str, position: Position | None):
        self.kind = kind
        self.position = position
        where = f" at {position}" if position else ""
        super().__init__(f"Unsupported GraphQL definition `{kind}`{where}")


class _DuplicateDefinition(CodegenError):
    """Shared shape of the duplicate-definition errors."""

    what = "definition"

    def __init__(self, first: Position, second: Position, name: str | None = None):
        self.name = name
        self.first = first
        self.second = second
        label = f"{self.what} `{name}`" if name else self.what
        super().__init__(
            f"Multiple definitions of {label}: first at {first}, second at {second}"
        )


class MultipleSchemaDefinitions(_DuplicateDefinition):
    what = "schema"


class MultipleEnumTypeDefinitions(_DuplicateDefinition):
    what = "enum type"


class MultipleObjectTypeDefinitions(_DuplicateDefinition):
    what = "object type"


class NoSchemaDefinitionFound(CodegenError):
    def __init__(self):
        super().__init__("No `schema { ... }` definition found in GraphQL schema")


class NoQueryDefinitionFound(CodegenError):
    """The schema root names no query type, or one that is not an object type."""

    def __init__(self, query_name: str | None = None):
        self.query_name = query_name
        if query_name is None:
            message = "The `schema { ... }` definition does not declare a query type"
        else:
            message = (
                f"Query type `{query_name}` named in the `schema {{ ... }}` "
                f"definition is not an object type defined in the schema"
            )
        super().__init__(message)


class UndefinedGraphQLType(CodegenError):
    """A type mapping references a GraphQL type that the schema does not define."""

    def __init__(self, graphql_name: str, host_name: str):
        self.graphql_name = graphql_name
        self.host_name = host_name
        super().__init__(
            f"Error mapping GraphQLType(`{graphql_name}`) -> PythonType(`{host_name}`): "
            f"`{graphql_name}` is not a type defined in your GraphQL schema."
        )


class MissingTypeMapping(CodegenError):
    """Strict mode: a GraphQL type has no mapped Python type."""

    def __init__(self, graphql_name: str):
        self.graphql_name = graphql_name
        super().__init__(
            f"No GraphQLType(`{graphql_name}`) -> PythonType entry in the type mappings"
        )


class OptionsError(CodegenError):
    """The code generation options are malformed."""


class GenerationError(CodegenError):
    """The bindings module could not be rendered."""
