"""Tests for the gql-bindgen command-line interface."""

import ast

import pytest
from click.testing import CliRunner

from gql_bindgen.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(
        """
schema { query: Query }
type Query { me: User }
type User { id: ID! }
"""
    )
    return path


class TestGenerateCommand:
    """Tests for `gql-bindgen generate`."""

    def test_writes_bindings(self, runner, schema_file, tmp_path):
        output = tmp_path / "out" / "bindings.py"
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Generated 2 wrapper classes" in result.output
        source = output.read_text()
        ast.parse(source)
        assert "class RootNode:" in source

    def test_mapping_and_context_flags(self, runner, schema_file, tmp_path):
        output = tmp_path / "bindings.py"
        result = runner.invoke(
            main,
            [
                "generate", "-s", str(schema_file), "-o", str(output),
                "-c", "Context", "-m", "User -> MyUser", "-m", "Query -> QueryImpl",
                "-r", "MyRootNode", "-i", "from .impl import MyUser, QueryImpl",
                "--header", "# Generated - do not edit",
            ],
        )

        assert result.exit_code == 0, result.output
        source = output.read_text()
        assert source.startswith("# Generated - do not edit\n")
        assert "async def me(self, ctx: Context) -> Optional[MyUser]:" in source
        assert "class MyRootNode:" in source
        assert "from .impl import MyUser, QueryImpl" in source

    def test_options_file(self, runner, schema_file, tmp_path):
        opts = tmp_path / "codegen.opts"
        opts.write_text("context_type: Ctx,\ntypes: { User => MyUser }\n")
        output = tmp_path / "bindings.py"
        result = runner.invoke(
            main,
            ["generate", "-s", str(schema_file), "-o", str(output), "--options-file", str(opts)],
        )

        assert result.exit_code == 0, result.output
        assert "async def me(self, ctx: Ctx) -> Optional[MyUser]:" in output.read_text()

    def test_verbose(self, runner, schema_file, tmp_path):
        output = tmp_path / "bindings.py"
        result = runner.invoke(
            main, ["generate", "-s", str(schema_file), "-o", str(output), "-v"]
        )
        assert result.exit_code == 0, result.output
        assert "Object types: 2" in result.output
        assert "Query type: Query" in result.output

    def test_error_writes_nothing(self, runner, schema_file, tmp_path):
        output = tmp_path / "bindings.py"
        result = runner.invoke(
            main,
            ["generate", "-s", str(schema_file), "-o", str(output), "-m", "Missing -> X"],
        )

        assert result.exit_code == 1
        assert "`Missing` is not a type defined in your GraphQL schema" in result.output
        assert not output.exists()

    def test_unwritable_output(self, runner, schema_file, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        result = runner.invoke(
            main,
            ["generate", "-s", str(schema_file), "-o", str(blocker / "bindings.py")],
        )

        assert result.exit_code == 1
        assert "Unable to write" in result.output
        assert not isinstance(result.exception, OSError)

    def test_mixed_arrows(self, runner, schema_file, tmp_path):
        result = runner.invoke(
            main,
            [
                "generate", "-s", str(schema_file), "-o", str(tmp_path / "b.py"),
                "-m", "User -> MyUser", "-m", "Query => QueryImpl",
            ],
        )
        assert result.exit_code == 1
        assert "mixes mapping arrows" in result.output


class TestCheckCommand:
    """Tests for `gql-bindgen check`."""

    def test_ok(self, runner, schema_file):
        result = runner.invoke(main, ["check", "-s", str(schema_file)])
        assert result.exit_code == 0, result.output
        assert "OK: 2 object types, 0 enums, query type Query" in result.output

    def test_strict_failure(self, runner, schema_file):
        result = runner.invoke(
            main, ["check", "-s", str(schema_file), "--strict", "-m", "Query -> Q"]
        )
        assert result.exit_code == 1
        assert "User" in result.output

    def test_missing_schema_block(self, runner, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text("type Query { a: Int }")
        result = runner.invoke(main, ["check", "-s", str(path)])
        assert result.exit_code == 1
        assert "No `schema { ... }` definition found" in result.output
