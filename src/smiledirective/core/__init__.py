"""Core directive compilation.

This package turns a flat set of cosmetic-treatment options into the
instruction document consumed by the image-generation service:

- **options.py**: Option keys, enumerations and normalization defaults
- **validation.py**: All-rules-run validation returning a ValidationResult
- **directives.py**: One builder per treatment feature, in precedence order
- **compiler.py**: Runs the builders and assembles the document
- **config.py**: Service configuration using Pydantic Settings

Usage Example
-------------
    from smiledirective.core import compile_directives, validate_options

    options = {"arch": "upper", "brighten": "natural"}
    result = validate_options(options)
    if result.is_valid:
        document = compile_directives(options).document
"""

from smiledirective.core.compiler import (
    CompiledDirectives,
    build_directive_prompt,
    compile_directives,
)
from smiledirective.core.config import SmileDirectiveConfig, config
from smiledirective.core.directives import Directive
from smiledirective.core.options import NormalizedContext, normalize, snapshot_options
from smiledirective.core.validation import ValidationResult, validate_options

__all__ = [
    "CompiledDirectives",
    "Directive",
    "NormalizedContext",
    "SmileDirectiveConfig",
    "ValidationResult",
    "build_directive_prompt",
    "compile_directives",
    "config",
    "normalize",
    "snapshot_options",
    "validate_options",
]
