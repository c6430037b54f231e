"""Bindings generator for GraphQL schemas.

Renders a Jinja2 template to produce a Python module of delegating wrappers
from a TypeRegistry.

For each object type the module gets a `<Type>Wrapper` class that owns one
user-supplied implementation object and exposes one async resolver per
schema field; the resolver awaits the implementation's method of the same
name and returns its result unchanged. A root-entry class ties the query
type's wrapper together with empty mutation and subscription roots.

Supports custom templates via the template_dir parameter:
    generator = BindingsGenerator(registry, options, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import keyword
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateError,
    select_autoescape,
)

from .errors import GenerationError
from .hooks import HookRunner, PostGenerateHook
from .ir import ObjectTypeDef, TypeRegistry
from .options import CodegenOptions, resolve_query_type, validate
from .parser import build_registry
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "bindings.py.j2"
MODULE_FILENAME = "bindings.py"

# Attribute names the wrapper classes use themselves
RESERVED_WRAPPER_NAMES = {"impl_", "graphql_name", "context_type"}

# Module-level names the bindings template imports
RESERVED_MODULE_NAMES = {
    "List",
    "Optional",
    "BindingWrapper",
    "EmptyMutation",
    "EmptySubscription",
    "ID",
}


def safe_method_name(name: str) -> str:
    """Make a field name usable as a method name by suffixing keywords with underscore."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def wrapper_class_name(graphql_name: str) -> str:
    return f"{graphql_name}Wrapper"


@dataclass
class ResolverMethod:
    name: str
    field_name: str
    return_type: str


@dataclass
class WrapperClass:
    class_name: str
    graphql_name: str
    host_type: str
    methods: list[ResolverMethod] = field(default_factory=list)


@dataclass(frozen=True)
class Bindings:
    """Result of one generation: the module source and what it defines."""
    source: str
    wrappers: tuple[str, ...]
    root_name: str

    def __str__(self) -> str:
        return self.source

    def write(self, path: str):
        """Write the module to a file, creating parent directories."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.source, encoding="utf-8")


class BindingsGenerator:
    """Generates a Python bindings module from a TypeRegistry.

    The registry and options are validated on construction, so a generator
    that was built successfully always has a resolvable query type.

    Example:
        generator = BindingsGenerator(
            registry=build_registry(schema_text),
            options=CodegenOptions(context_type="Context", types={"User": "MyUser"}),
        )
        bindings = generator.generate()
    """

    def __init__(
        self,
        registry: TypeRegistry,
        options: CodegenOptions | None = None,
        template_dir: Optional[str] = None,
        hooks: list[PostGenerateHook] | None = None,
    ):
        """Initialize the bindings generator.

        Args:
            registry: The type registry built from the GraphQL schema
            options: Code generation options (defaults to CodegenOptions())
            template_dir: Optional directory with a custom bindings.py.j2.
                          Templates here override the built-in template.
            hooks: Post-generation hooks applied to the rendered module
        """
        self.registry = registry
        self.options = options or CodegenOptions()
        validate(self.options, registry)
        self.query_type = resolve_query_type(registry)
        self.mapper = TypeMapper(self.options.types, strict=self.options.strict)
        self.hooks = HookRunner(hooks)

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_bindgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["repr"] = repr

    def _build_wrapper(self, obj_type: ObjectTypeDef) -> WrapperClass:
        wrapper = WrapperClass(
            class_name=wrapper_class_name(obj_type.name),
            graphql_name=obj_type.name,
            host_type=self.mapper.resolve_name(obj_type.name),
        )
        if wrapper.class_name in RESERVED_MODULE_NAMES:
            raise GenerationError(
                f"Wrapper class `{wrapper.class_name}` for type `{obj_type.name}` clashes "
                f"with a name imported by the bindings module"
            )
        seen = set()
        for field_def in obj_type.fields:
            # Names starting with __ are reserved for introspection and would be mangled
            if field_def.name.startswith("__"):
                raise GenerationError(
                    f"Field `{obj_type.name}.{field_def.name}` uses the reserved `__` prefix"
                )
            method_name = safe_method_name(field_def.name)
            if method_name in RESERVED_WRAPPER_NAMES:
                raise GenerationError(
                    f"Field `{obj_type.name}.{field_def.name}` clashes with the "
                    f"wrapper attribute `{method_name}`"
                )
            if method_name in seen:
                raise GenerationError(
                    f"Field `{obj_type.name}.{field_def.name}` is defined more than once"
                )
            seen.add(method_name)
            wrapper.methods.append(
                ResolverMethod(
                    name=method_name,
                    field_name=field_def.name,
                    # Schema fields are nullable unless the field type is NonNull
                    return_type=self.mapper.map(field_def.type, nullable=True),
                )
            )
        return wrapper

    def build_context(self) -> dict:
        """Build the template context for the bindings module."""
        wrappers = [self._build_wrapper(t) for t in self.registry.obj_types.values()]
        by_name = {w.graphql_name: w for w in wrappers}

        root_name = self.options.root_name
        if root_name in {w.class_name for w in wrappers}:
            raise GenerationError(
                f"Root class name `{root_name}` clashes with a generated wrapper class"
            )
        if root_name in RESERVED_MODULE_NAMES:
            raise GenerationError(
                f"Root class name `{root_name}` clashes with a name imported by the bindings module"
            )

        context_type = self.options.context_type
        if context_type:
            params, args = f"self, ctx: {context_type}", "ctx"
        else:
            params, args = "self", ""

        return {
            "imports": self.options.imports,
            "wrappers": wrappers,
            "query": by_name[self.query_type.name],
            "root_name": root_name,
            "context_type": context_type,
            "params": params,
            "args": args,
        }

    def render(self) -> str:
        context = self.build_context()
        try:
            template = self.env.get_template(TEMPLATE_NAME)
            return template.render(context)
        except TemplateError as e:
            raise GenerationError(f"Error rendering {TEMPLATE_NAME}: {e}") from e

    def generate(self) -> Bindings:
        """Generate the bindings module; nothing is returned on failure."""
        content = self.hooks.run_post_hooks(MODULE_FILENAME, self.render())

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GenerationError(
                f"Generated invalid Python for {MODULE_FILENAME}: {e}\n"
                f"Template: {TEMPLATE_NAME}"
            ) from e

        wrappers = tuple(wrapper_class_name(name) for name in self.registry.obj_types)
        logger.debug("Generated %d wrapper classes and root %s", len(wrappers), self.options.root_name)
        return Bindings(source=content, wrappers=wrappers, root_name=self.options.root_name)


def generate(
    schema_source: str,
    options: CodegenOptions | None = None,
    *,
    template_dir: Optional[str] = None,
    hooks: list[PostGenerateHook] | None = None,
) -> Bindings:
    """Run the whole pipeline: parse, build the registry, validate, generate."""
    registry = build_registry(schema_source)
    generator = BindingsGenerator(registry, options, template_dir=template_dir, hooks=hooks)
    return generator.generate()
