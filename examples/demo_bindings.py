#!/usr/bin/env python3
"""Demonstration of generated GraphQL bindings.

This script shows how to:
1. Generate a bindings module from a schema
2. Load it next to hand-written resolver implementations
3. Resolve a field through the generated root node
"""

import asyncio
from pathlib import Path

from gql_bindgen.core import CodegenOptions, generate, load_schema


class Context:
    viewer = "jeffmo"


class User:
    async def id(self, ctx):
        return f"user:{ctx.viewer}"


class Query:
    async def me(self, ctx):
        return User()


def main():
    schema_path = Path(__file__).parent / "schema.graphqls"

    print("1. Generating bindings...")
    options = CodegenOptions(context_type="Context", root_name="MyRootNode")
    bindings = generate(load_schema(str(schema_path)), options)
    print(bindings.source)

    print("2. Loading the generated module...")
    namespace = {"Context": Context, "Query": Query, "User": User}
    exec(compile(bindings.source, "bindings.py", "exec"), namespace)

    print("3. Resolving Query.me...")
    root = namespace["MyRootNode"](Query())
    ctx = Context()
    user = asyncio.run(root.query.me(ctx))
    user_wrapper = namespace["UserWrapper"](user)
    print(f"   me.id = {asyncio.run(user_wrapper.id(ctx))}")


if __name__ == "__main__":
    main()
