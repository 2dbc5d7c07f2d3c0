"""Smile Directive - compiles cosmetic dental options into image-edit instructions."""

__version__ = "1.0.0"

from smiledirective.core.compiler import CompiledDirectives, compile_directives
from smiledirective.core.config import SmileDirectiveConfig, config
from smiledirective.core.validation import ValidationResult, validate_options

__all__ = [
    "CompiledDirectives",
    "SmileDirectiveConfig",
    "ValidationResult",
    "compile_directives",
    "config",
    "validate_options",
]
