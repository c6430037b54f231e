"""Generate delegating Python bindings from GraphQL schemas."""

from .core import CodegenError, CodegenOptions, generate

__version__ = "0.1.0"

__all__ = ["CodegenError", "CodegenOptions", "generate", "__version__"]
