"""JavaScript code generation for the Psykick runtimes."""

from .generator import CodeGenerator, factory_function_name, require_block
from .naming import derive_filename
from .values import format_value, string_literal

__all__ = [
    "CodeGenerator",
    "derive_filename",
    "factory_function_name",
    "format_value",
    "require_block",
    "string_literal",
]
