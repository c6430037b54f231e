"""Command-line interface for gql-bindgen."""

from pathlib import Path

import click

from .core.errors import CodegenError
from .core.generator import BindingsGenerator
from .core.hooks import AddHeaderHook
from .core.options import CodegenOptions, parse_type_mappings
from .core.parser import build_registry, load_schema


def schema_option(func):
    return click.option(
        "--schema",
        "-s",
        required=True,
        type=click.Path(exists=True, dir_okay=False),
        help="Path to the GraphQL schema file.",
    )(func)


def mapping_options(func):
    """Options shared by every command that needs type mappings."""
    func = click.option(
        "--options-file",
        type=click.Path(exists=True, dir_okay=False),
        help="File with an options block (context_type, types, root_name, strict).",
    )(func)
    func = click.option(
        "--map",
        "-m",
        "mappings",
        multiple=True,
        help='Type mapping such as "User -> MyUser". Repeatable; use one arrow style.',
    )(func)
    func = click.option(
        "--context-type",
        "-c",
        help="Python type passed as `ctx` to every resolver.",
    )(func)
    func = click.option(
        "--strict/--no-strict",
        default=None,
        help="Require a type mapping for every enum and object type.",
    )(func)
    return func


def resolve_options(
    options_file: str | None,
    mappings: tuple[str, ...],
    context_type: str | None,
    strict: bool | None,
    **extra,
) -> CodegenOptions:
    """Combine the options file with command-line flags; flags win."""
    if options_file:
        options = CodegenOptions.from_file(options_file)
    else:
        options = CodegenOptions()
    return options.merged(
        types=parse_type_mappings(mappings) if mappings else None,
        context_type=context_type,
        strict=strict,
        **extra,
    )


@click.group()
@click.version_option(package_name="gql-bindgen")
def main():
    """Delegating Python bindings generator for GraphQL schemas.

    Generate wrapper classes that forward every schema field to your own
    implementation objects.
    """
    pass


@main.command()
@schema_option
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated bindings module (e.g., bindings.py).",
)
@mapping_options
@click.option(
    "--root-name",
    "-r",
    help="Name of the generated root-entry class (default: RootNode).",
)
@click.option(
    "--import",
    "-i",
    "imports",
    multiple=True,
    help='Import line for the generated module, e.g. "from .impl import Query".',
)
@click.option("--header", help="Text placed at the top of the generated module.")
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with a custom bindings.py.j2 template.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    options_file: str | None,
    mappings: tuple[str, ...],
    context_type: str | None,
    strict: bool | None,
    root_name: str | None,
    imports: tuple[str, ...],
    header: str | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate a bindings module from a GraphQL schema.

    Examples:

        gql-bindgen generate -s ./schema.graphql -o ./bindings.py

        gql-bindgen generate -s schema.graphql -o bindings.py -c Context -m "User -> MyUser"

        gql-bindgen generate -s schema.graphql -o bindings.py --options-file codegen.opts
    """
    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()

    try:
        options = resolve_options(
            options_file,
            mappings,
            context_type,
            strict,
            root_name=root_name,
            imports=list(imports) or None,
        )

        if verbose:
            click.echo(f"Schema: {schema_path}")
            click.echo(f"Output: {output_path}")

        click.echo("Parsing schema...")
        registry = build_registry(load_schema(str(schema_path)), source_name=schema_path.name)

        if verbose:
            click.echo(f"  Enums: {len(registry.enum_types)}")
            click.echo(f"  Object types: {len(registry.obj_types)}")
            click.echo(f"  Query type: {registry.schema_def.query}")
            click.echo(f"  Type mappings: {len(options.types)}")

        click.echo("Generating bindings...")
        hooks = [AddHeaderHook(header)] if header else []
        generator = BindingsGenerator(registry, options, template_dir=template_dir, hooks=hooks)
        bindings = generator.generate()
        bindings.write(str(output_path))
    except CodegenError as e:
        raise click.ClickException(e.message) from e
    except OSError as e:
        raise click.ClickException(f"Unable to write `{output_path}`: {e.strerror or e}") from e

    click.echo(
        f"Done! Generated {len(bindings.wrappers)} wrapper classes and "
        f"{bindings.root_name} in {output_path}"
    )


@main.command()
@schema_option
@mapping_options
def check(
    schema: str,
    options_file: str | None,
    mappings: tuple[str, ...],
    context_type: str | None,
    strict: bool | None,
):
    """Validate a schema and its type mappings without writing anything.

    Example:

        gql-bindgen check -s ./schema.graphql -m "User -> MyUser"
    """
    try:
        options = resolve_options(options_file, mappings, context_type, strict)
        registry = build_registry(load_schema(schema), source_name=Path(schema).name)
        BindingsGenerator(registry, options)
    except CodegenError as e:
        raise click.ClickException(e.message) from e

    click.echo(
        f"OK: {len(registry.obj_types)} object types, {len(registry.enum_types)} enums, "
        f"query type {registry.schema_def.query}"
    )


if __name__ == "__main__":
    main()
