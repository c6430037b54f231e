"""Code generation options and their validation against a schema.

Options can be built directly, from `"Idl -> Host"` mapping strings (as the
CLI's `--map` flag provides them), or from an options block:

    context_type: Context,
    types: {
        Query -> QueryImpl,
        User -> MyUser,
    },

Either arrow (`->` or `=>`) may be used for type mappings, but one block
must use the same arrow throughout.
"""

import keyword
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import (
    MissingTypeMapping,
    NoQueryDefinitionFound,
    OptionsError,
    UndefinedGraphQLType,
)
from .ir import ObjectTypeDef, TypeRegistry
from .parser import load_schema
from .type_mapper import BUILTIN_SCALARS, named_type

logger = logging.getLogger(__name__)

GRAPHQL_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
ARROWS = ("->", "=>")


def is_python_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def is_dotted_identifier(name: str) -> bool:
    """Check for `Name` or `module.Name` style references."""
    return all(is_python_identifier(part) for part in name.split("."))


class CodegenOptions(BaseModel):
    """Options for one bindings generation.

    Attributes:
        context_type: Python type threaded as `ctx` into every resolver, or None
        types: GraphQL type name -> Python type name overrides
        root_name: Name of the generated root-entry class
        strict: Require an override for every enum and object type
        imports: Import lines placed at the top of the generated module
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    context_type: Optional[str] = None
    types: dict[str, str] = Field(default_factory=dict)
    root_name: str = "RootNode"
    strict: bool = False
    imports: list[str] = Field(default_factory=list)

    @field_validator("context_type")
    @classmethod
    def _check_context_type(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_dotted_identifier(value):
            raise ValueError(f"`{value}` is not a Python type name")
        return value

    @field_validator("root_name")
    @classmethod
    def _check_root_name(cls, value: str) -> str:
        if not is_python_identifier(value):
            raise ValueError(f"`{value}` is not a valid class name")
        return value

    @field_validator("types")
    @classmethod
    def _check_types(cls, value: dict[str, str]) -> dict[str, str]:
        for graphql_name, host_name in value.items():
            if not GRAPHQL_NAME_RE.match(graphql_name):
                raise ValueError(f"`{graphql_name}` is not a GraphQL type name")
            if not is_dotted_identifier(host_name):
                raise ValueError(f"`{host_name}` is not a Python type name")
        return value

    @classmethod
    def from_values(cls, **values) -> "CodegenOptions":
        """Build options, reporting bad values as OptionsError."""
        try:
            return cls(**values)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
                for err in e.errors()
            )
            raise OptionsError(f"Invalid code generation options: {details}") from e

    @classmethod
    def from_block(cls, text: str) -> "CodegenOptions":
        return cls.from_values(**parse_options_block(text))

    @classmethod
    def from_file(cls, path: str) -> "CodegenOptions":
        return cls.from_block(load_schema(path))

    def merged(self, **overrides) -> "CodegenOptions":
        """Return a copy with the non-None overrides applied.

        `types` entries are merged into the existing mapping.
        """
        values = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "types":
                values["types"] = {**values["types"], **value}
            elif key == "imports":
                values["imports"] = values["imports"] + list(value)
            else:
                values[key] = value
        return self.from_values(**values)


def validate(options: CodegenOptions, registry: TypeRegistry):
    """Check the type mappings against the schema.

    Every mapped GraphQL name must be an enum or object type of the schema.
    In strict mode every enum and object type must also be mapped, as must
    every non-builtin type a field refers to. The context type is opaque
    and is not checked.
    """
    for graphql_name, host_name in options.types.items():
        if not registry.is_defined(graphql_name):
            raise UndefinedGraphQLType(graphql_name, host_name)

    if options.strict:
        for graphql_name in registry.type_names():
            if graphql_name not in options.types:
                raise MissingTypeMapping(graphql_name)
        for obj_type in registry.obj_types.values():
            for field_def in obj_type.fields:
                name = named_type(field_def.type).name
                if name not in BUILTIN_SCALARS and name not in options.types:
                    raise MissingTypeMapping(name)

    logger.debug("Validated %d type mappings", len(options.types))


def resolve_query_type(registry: TypeRegistry) -> ObjectTypeDef:
    """Find the object type the schema root declares as its query type."""
    query_name = registry.schema_def.query
    if query_name is None:
        raise NoQueryDefinitionFound()
    query_type = registry.obj_types.get(query_name)
    if query_type is None:
        raise NoQueryDefinitionFound(query_name)
    return query_type


def _split_mapping(text: str, arrow: str | None) -> tuple[str, str, str]:
    """Split `Idl -> Host` and return (idl, host, arrow used)."""
    found = [a for a in ARROWS if a in text]
    if not found:
        raise OptionsError(f"Type mapping `{text}` needs `->` or `=>` between the names")
    if len(found) > 1 or (arrow is not None and found[0] != arrow):
        raise OptionsError(
            f"Type mapping `{text}` mixes mapping arrows; use `{arrow or found[0]}` consistently"
        )
    idl_name, _, host_name = text.partition(found[0])
    idl_name, host_name = idl_name.strip(), host_name.strip()
    if not idl_name or not host_name:
        raise OptionsError(f"Type mapping `{text}` is missing a type name")
    return idl_name, host_name, found[0]


def parse_type_mappings(pairs: Iterable[str]) -> dict[str, str]:
    """Parse `"Idl -> Host"` strings into a mapping.

    Each string may hold several comma-separated pairs. The arrow of the first
    pair is the one every later pair must use.
    """
    mappings: dict[str, str] = {}
    arrow = None
    for chunk in pairs:
        for text in chunk.split(","):
            text = text.strip()
            if not text:
                continue
            idl_name, host_name, arrow = _split_mapping(text, arrow)
            if idl_name in mappings:
                raise OptionsError(f"GraphQL type `{idl_name}` is mapped more than once")
            mappings[idl_name] = host_name
    return mappings


# Options block tokenizer

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>[ \t\r]+)
    |(?P<newline>\n)
    |(?P<comment>\#[^\n]*)
    |(?P<arrow>->|=>)
    |(?P<punct>[:,{}])
    |(?P<name>[_A-Za-z][_0-9A-Za-z]*(?:\.[_A-Za-z][_0-9A-Za-z]*)*)
    """,
    re.VERBOSE,
)


@dataclass
class _Token:
    kind: str
    value: str
    line: int


def _tokenize(text: str) -> list[_Token]:
    tokens = []
    line = 1
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise OptionsError(f"Line {line}: unexpected character `{text[pos]}` in options")
        kind = match.lastgroup
        if kind == "newline":
            line += 1
        elif kind not in ("ws", "comment"):
            tokens.append(_Token(kind, match.group(), line))
        pos = match.end()
    return tokens


class _BlockParser:
    """Recursive descent over the options block tokens."""

    def __init__(self, text: str):
        self.tokens = _tokenize(text)
        self.pos = 0
        self.arrow: str | None = None

    def _peek(self) -> _Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self, kind: str, value: str | None = None) -> _Token:
        token = self._peek()
        if token is None:
            raise OptionsError(f"Unexpected end of options, expected `{value or kind}`")
        if token.kind != kind or (value is not None and token.value != value):
            raise OptionsError(
                f"Line {token.line}: expected `{value or kind}`, found `{token.value}`"
            )
        self.pos += 1
        return token

    def _skip_comma(self):
        token = self._peek()
        if token is not None and token.value == ",":
            self.pos += 1

    def parse(self) -> dict:
        values: dict = {}
        while self._peek() is not None:
            key = self._next("name")
            if key.value in values:
                raise OptionsError(f"Line {key.line}: `{key.value}` specified more than once!")
            self._next("punct", ":")
            if key.value == "context_type":
                values["context_type"] = self._next("name").value
            elif key.value == "root_name":
                values["root_name"] = self._next("name").value
            elif key.value == "strict":
                flag = self._next("name")
                if flag.value not in ("true", "false"):
                    raise OptionsError(
                        f"Line {flag.line}: `strict` must be `true` or `false`, found `{flag.value}`"
                    )
                values["strict"] = flag.value == "true"
            elif key.value == "types":
                values["types"] = self._parse_types()
            else:
                raise OptionsError(f"Line {key.line}: Unexpected option: `{key.value}`")
            self._skip_comma()
        return values

    def _parse_types(self) -> dict[str, str]:
        self._next("punct", "{")
        mappings: dict[str, str] = {}
        while True:
            token = self._peek()
            if token is not None and token.value == "}":
                self.pos += 1
                return mappings
            graphql_name = self._next("name")
            arrow = self._next("arrow")
            if self.arrow is None:
                self.arrow = arrow.value
            elif arrow.value != self.arrow:
                raise OptionsError(
                    f"Line {arrow.line}: mixed mapping arrows; this block uses `{self.arrow}`"
                )
            host_name = self._next("name")
            if graphql_name.value in mappings:
                raise OptionsError(
                    f"Line {graphql_name.line}: GraphQL type `{graphql_name.value}` "
                    f"is mapped more than once"
                )
            mappings[graphql_name.value] = host_name.value
            self._skip_comma()


def parse_options_block(text: str) -> dict:
    """Parse an options block into keyword arguments for CodegenOptions."""
    return _BlockParser(text).parse()
