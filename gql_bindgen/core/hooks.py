"""Post-generation hooks for customizing generated bindings.

Hooks receive the rendered bindings module before it is validated and
returned, and can transform it.

Example usage:
    from gql_bindgen.core.hooks import PostGenerateHook

    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            header = "# Copyright 2024 My Company\\n\\n"
            return header + content
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Example:
        class FormatWithBlack(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after the bindings module is rendered.

        Args:
            filename: The name of the generated module (e.g., "bindings.py")
            content: The generated code

        Returns:
            The (possibly transformed) code
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to the generated module.

    Example:
        hook = AddHeaderHook("# Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the module."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self, hooks: list[PostGenerateHook] | None = None):
        self.post_hooks: list[PostGenerateHook] = list(hooks or [])

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
