"""Tests for code generation options and their validation."""

import pytest

from gql_bindgen.core.errors import (
    IoError,
    MissingTypeMapping,
    NoQueryDefinitionFound,
    OptionsError,
    UndefinedGraphQLType,
)
from gql_bindgen.core.options import (
    CodegenOptions,
    parse_options_block,
    parse_type_mappings,
    resolve_query_type,
    validate,
)
from gql_bindgen.core.parser import build_registry


@pytest.fixture
def registry():
    return build_registry(
        """
schema { query: Query }
enum Role { ADMIN }
type Query { me: User }
type User { id: ID, role: Role }
"""
    )


class TestParseTypeMappings:
    """Tests for `Idl -> Host` mapping strings."""

    def test_skinny_arrow(self):
        assert parse_type_mappings(["User -> MyUser"]) == {"User": "MyUser"}

    def test_fat_arrow(self):
        assert parse_type_mappings(["User => MyUser", "Query=>QueryImpl"]) == {
            "User": "MyUser",
            "Query": "QueryImpl",
        }

    def test_comma_separated_pairs(self):
        assert parse_type_mappings(["User -> MyUser, Query -> QueryImpl,"]) == {
            "User": "MyUser",
            "Query": "QueryImpl",
        }

    def test_mixed_arrows_rejected(self):
        with pytest.raises(OptionsError, match="mixes mapping arrows"):
            parse_type_mappings(["User -> MyUser", "Query => QueryImpl"])

    def test_missing_arrow(self):
        with pytest.raises(OptionsError):
            parse_type_mappings(["User MyUser"])

    def test_missing_name(self):
        with pytest.raises(OptionsError):
            parse_type_mappings(["User ->"])

    def test_duplicate_key(self):
        with pytest.raises(OptionsError, match="more than once"):
            parse_type_mappings(["User -> A", "User -> B"])


class TestParseOptionsBlock:
    """Tests for the options block syntax."""

    def test_full_block(self):
        values = parse_options_block(
            """
            # Bindings for the playground schema
            context_type: Context,
            types: {
                Query -> QueryImpl,
                User -> models.User,
            },
            root_name: MyRootNode,
            strict: true
            """
        )
        assert values == {
            "context_type": "Context",
            "types": {"Query": "QueryImpl", "User": "models.User"},
            "root_name": "MyRootNode",
            "strict": True,
        }

    def test_empty_types(self):
        assert parse_options_block("types: {}") == {"types": {}}

    def test_mixed_arrows(self):
        with pytest.raises(OptionsError, match="Line 3"):
            parse_options_block("types: {\n  Query -> QueryImpl,\n  User => MyUser,\n}")

    def test_repeated_key(self):
        with pytest.raises(OptionsError, match="specified more than once"):
            parse_options_block("context_type: A, context_type: B")

    def test_unexpected_option(self):
        with pytest.raises(OptionsError, match="Unexpected option: `colour`"):
            parse_options_block("colour: blue")

    def test_bad_strict_value(self):
        with pytest.raises(OptionsError):
            parse_options_block("strict: maybe")

    def test_unterminated_types(self):
        with pytest.raises(OptionsError, match="Unexpected end"):
            parse_options_block("types: { Query -> QueryImpl")

    def test_unexpected_character(self):
        with pytest.raises(OptionsError, match="unexpected character"):
            parse_options_block("context_type: Context;")

    def test_from_file(self, tmp_path):
        path = tmp_path / "codegen.opts"
        path.write_text("context_type: Context, types: { User => MyUser }")
        options = CodegenOptions.from_file(str(path))
        assert options.context_type == "Context"
        assert options.types == {"User": "MyUser"}

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(IoError):
            CodegenOptions.from_file(str(tmp_path / "nope.opts"))


class TestCodegenOptions:
    """Tests for the options model."""

    def test_defaults(self):
        options = CodegenOptions()
        assert options.context_type is None
        assert options.types == {}
        assert options.root_name == "RootNode"
        assert options.strict is False

    def test_invalid_host_name(self):
        with pytest.raises(OptionsError, match="types"):
            CodegenOptions.from_values(types={"User": "not a type"})

    def test_keyword_root_name(self):
        with pytest.raises(OptionsError, match="root_name"):
            CodegenOptions.from_values(root_name="class")

    def test_unknown_field(self):
        with pytest.raises(OptionsError):
            CodegenOptions.from_values(colour="blue")

    def test_merged_overrides(self):
        options = CodegenOptions(context_type="Context", types={"User": "MyUser"})
        merged = options.merged(types={"Query": "QueryImpl"}, context_type=None, strict=True)
        assert merged.context_type == "Context"
        assert merged.types == {"User": "MyUser", "Query": "QueryImpl"}
        assert merged.strict is True
        assert options.strict is False


class TestValidate:
    """Tests for validating options against a registry."""

    def test_valid_mappings(self, registry):
        validate(CodegenOptions(types={"User": "MyUser", "Role": "MyRole"}), registry)

    def test_undefined_type(self, registry):
        with pytest.raises(UndefinedGraphQLType) as exc_info:
            validate(CodegenOptions(types={"Missing": "X"}), registry)
        error = exc_info.value
        assert error.graphql_name == "Missing"
        assert error.host_name == "X"
        assert "`Missing`" in error.message and "`X`" in error.message

    def test_builtin_scalar_is_not_mappable(self, registry):
        with pytest.raises(UndefinedGraphQLType):
            validate(CodegenOptions(types={"String": "MyStr"}), registry)

    def test_context_type_is_not_checked(self, registry):
        validate(CodegenOptions(context_type="NotInSchema"), registry)

    def test_strict_requires_every_type(self, registry):
        options = CodegenOptions(types={"Query": "Q", "User": "U"}, strict=True)
        with pytest.raises(MissingTypeMapping) as exc_info:
            validate(options, registry)
        assert exc_info.value.graphql_name == "Role"

    def test_strict_complete(self, registry):
        options = CodegenOptions(types={"Query": "Q", "User": "U", "Role": "R"}, strict=True)
        validate(options, registry)

    def test_strict_checks_field_types(self):
        registry = build_registry("schema { query: Query }\ntype Query { events: [Date!]! }")
        options = CodegenOptions(types={"Query": "Q"}, strict=True)
        with pytest.raises(MissingTypeMapping) as exc_info:
            validate(options, registry)
        assert exc_info.value.graphql_name == "Date"


class TestResolveQueryType:
    """Tests for resolving the schema's query type."""

    def test_resolves(self, registry):
        assert resolve_query_type(registry).name == "Query"

    def test_query_type_not_defined(self):
        registry = build_registry("schema { query: Nope }\ntype Query { a: Int }")
        with pytest.raises(NoQueryDefinitionFound) as exc_info:
            resolve_query_type(registry)
        assert exc_info.value.query_name == "Nope"

    def test_query_type_is_an_enum(self):
        registry = build_registry("schema { query: Query }\nenum Query { A }")
        with pytest.raises(NoQueryDefinitionFound):
            resolve_query_type(registry)

    def test_no_query_declared(self):
        registry = build_registry("schema { mutation: M }\ntype M { a: Int }")
        with pytest.raises(NoQueryDefinitionFound) as exc_info:
            resolve_query_type(registry)
        assert exc_info.value.query_name is None
