"""Core modules for GraphQL bindings generation."""

from .errors import (
    CodegenError,
    GenerationError,
    IoError,
    MissingTypeMapping,
    MultipleEnumTypeDefinitions,
    MultipleObjectTypeDefinitions,
    MultipleSchemaDefinitions,
    NoQueryDefinitionFound,
    NoSchemaDefinitionFound,
    OptionsError,
    SchemaParseError,
    UndefinedGraphQLType,
    UnsupportedDefinitionKind,
)
from .generator import Bindings, BindingsGenerator, generate
from .hooks import AddHeaderHook, HookRunner, PostGenerateHook
from .ir import (
    EnumTypeDef,
    FieldDef,
    ListType,
    NamedType,
    NonNullType,
    ObjectTypeDef,
    Position,
    SchemaRootDef,
    TypeRegistry,
)
from .options import (
    CodegenOptions,
    parse_options_block,
    parse_type_mappings,
    resolve_query_type,
    validate,
)
from .parser import RegistryBuilder, build_registry, load_schema, parse_document
from .type_mapper import BUILTIN_SCALARS, TypeMapper

__all__ = [
    # Errors
    "CodegenError",
    "GenerationError",
    "IoError",
    "MissingTypeMapping",
    "MultipleEnumTypeDefinitions",
    "MultipleObjectTypeDefinitions",
    "MultipleSchemaDefinitions",
    "NoQueryDefinitionFound",
    "NoSchemaDefinitionFound",
    "OptionsError",
    "SchemaParseError",
    "UndefinedGraphQLType",
    "UnsupportedDefinitionKind",
    # IR types
    "EnumTypeDef",
    "FieldDef",
    "ListType",
    "NamedType",
    "NonNullType",
    "ObjectTypeDef",
    "Position",
    "SchemaRootDef",
    "TypeRegistry",
    # Parser
    "RegistryBuilder",
    "build_registry",
    "load_schema",
    "parse_document",
    # Type mapping
    "BUILTIN_SCALARS",
    "TypeMapper",
    # Options
    "CodegenOptions",
    "parse_options_block",
    "parse_type_mappings",
    "resolve_query_type",
    "validate",
    # Hooks
    "AddHeaderHook",
    "HookRunner",
    "PostGenerateHook",
    # Generator
    "Bindings",
    "BindingsGenerator",
    "generate",
]
