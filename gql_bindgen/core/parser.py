"""GraphQL schema parser using graphql-core.

Parses SDL source text and builds the TypeRegistry the bindings generator
works from.
"""

import logging
from typing import Any

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    OperationType,
    SchemaDefinitionNode,
    Source,
    TypeNode,
    parse,
)

from .errors import (
    IoError,
    MultipleEnumTypeDefinitions,
    MultipleObjectTypeDefinitions,
    MultipleSchemaDefinitions,
    NoSchemaDefinitionFound,
    SchemaParseError,
    UnsupportedDefinitionKind,
)
from .ir import (
    EnumTypeDef,
    FieldDef,
    ListType,
    NamedType,
    NonNullType,
    ObjectTypeDef,
    Position,
    SchemaRootDef,
    TypeExpr,
    TypeRegistry,
)

logger = logging.getLogger(__name__)


def load_schema(path: str) -> str:
    """Read a schema file, turning I/O failures into IoError."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise IoError(str(path), e.strerror or str(e)) from e


def parse_document(source: str, source_name: str = "GraphQL request") -> DocumentNode:
    """Parse SDL text into a graphql-core document.

    Only syntax is checked here; what the definitions mean is left to
    build_registry().
    """
    try:
        return parse(Source(source, source_name))
    except GraphQLSyntaxError as e:
        position = None
        if e.locations:
            position = Position(e.locations[0].line, e.locations[0].column)
        raise SchemaParseError(e.message, position) from e


def node_position(node: Any) -> Position | None:
    """Position of the token that starts a node, if locations were kept."""
    loc = getattr(node, "loc", None)
    if loc is None:
        return None
    return Position(loc.start_token.line, loc.start_token.column)


def convert_type(type_node: TypeNode) -> TypeExpr:
    """Convert a graphql-core type node into a TypeExpr, keeping every wrapper."""
    if isinstance(type_node, NonNullTypeNode):
        return NonNullType(convert_type(type_node.type))
    if isinstance(type_node, ListTypeNode):
        return ListType(convert_type(type_node.type))
    assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
    return NamedType(type_node.name.value)


class RegistryBuilder:
    """Walks the definitions of one document once and classifies them.

    Enum and object definitions are inserted-or-rejected by name; a second
    `schema { ... }` definition is rejected. Any other definition kind fails
    loudly instead of being skipped.
    """

    def __init__(self, source: str):
        self.source = source
        self.enum_types: dict[str, EnumTypeDef] = {}
        self.obj_types: dict[str, ObjectTypeDef] = {}
        self.schema_def: SchemaRootDef | None = None

    def build(self, document: DocumentNode) -> TypeRegistry:
        for definition in document.definitions:
            if isinstance(definition, SchemaDefinitionNode):
                self._process_schema(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            else:
                raise UnsupportedDefinitionKind(definition.kind, node_position(definition))

        if self.schema_def is None:
            raise NoSchemaDefinitionFound()

        logger.debug(
            "Built registry: %d enum types, %d object types",
            len(self.enum_types),
            len(self.obj_types),
        )
        return TypeRegistry(
            source=self.source,
            schema_def=self.schema_def,
            enum_types=self.enum_types,
            obj_types=self.obj_types,
        )

    def _process_schema(self, node: SchemaDefinitionNode):
        position = node_position(node)
        if self.schema_def is not None:
            raise MultipleSchemaDefinitions(first=self.schema_def.position, second=position)

        roots = {}
        for op_type in node.operation_types:
            roots[op_type.operation] = op_type.type.name.value
        self.schema_def = SchemaRootDef(
            position=position,
            query=roots.get(OperationType.QUERY),
            mutation=roots.get(OperationType.MUTATION),
            subscription=roots.get(OperationType.SUBSCRIPTION),
        )

    def _process_enum(self, node: EnumTypeDefinitionNode):
        name = node.name.value
        position = node_position(node)
        if name in self.enum_types:
            raise MultipleEnumTypeDefinitions(
                first=self.enum_types[name].position, second=position, name=name
            )
        self.enum_types[name] = EnumTypeDef(
            name=name,
            values=tuple(v.name.value for v in node.values or ()),
            position=position,
        )
        logger.debug("Registered enum type %s at %s", name, position)

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        name = node.name.value
        position = node_position(node)
        if name in self.obj_types:
            raise MultipleObjectTypeDefinitions(
                first=self.obj_types[name].position, second=position, name=name
            )
        fields = tuple(
            FieldDef(name=f.name.value, type=convert_type(f.type))
            for f in node.fields or ()
        )
        self.obj_types[name] = ObjectTypeDef(name=name, fields=fields, position=position)
        logger.debug("Registered object type %s at %s", name, position)


def build_registry(source: str, source_name: str = "GraphQL request") -> TypeRegistry:
    """Parse schema source text and build its TypeRegistry."""
    document = parse_document(source, source_name)
    return RegistryBuilder(source).build(document)
