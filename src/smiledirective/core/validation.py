"""Validation of treatment option sets.

Validation reports every problem in one pass instead of stopping at the
first: each rule that fails appends one user-facing message, and the
messages are returned in rule order.  Nothing here raises for bad option
values; the HTTP layer decides how to present an invalid result.

The compiler is deliberately more forgiving than this module (it defaults
whatever it cannot use), so callers are expected to validate first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from smiledirective.core.options import (
    ARCH,
    ARCHES,
    BOOLEAN_FLAGS,
    BRIGHTEN,
    BRIGHTEN_LEVELS,
    CORRECT_CROWDING,
    FULL_ARCH_KEYWORDS,
    GUMMY_SMILE_SEVERITY,
    INCISOR_IMPROVEMENT_MODE,
    INCISOR_MODES,
    LEGACY_IMPROVE_INCISAL_EDGES,
    MAX_TEETH,
    MIN_TEETH,
    PRESERVATION_MODES,
    SEVERITIES,
    TOOTH_PRESERVATION_MODE,
    TOOTH_SHAPE,
    TOOTH_SHAPES,
    OptionSet,
    flag_value,
    is_present,
    parse_teeth_number,
    raw_teeth_count,
    text_value,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one option set.

    Attributes:
        is_valid: ``True`` when no rule failed.
        errors: One message per failed rule, in rule order.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


# (option key, accepted values, error message), checked in this order after
# arch and teeth count.
_ENUM_RULES: tuple[tuple[str, tuple[str, ...], str], ...] = (
    (
        BRIGHTEN,
        BRIGHTEN_LEVELS,
        "Invalid brighten value. Must be: subtle, natural, or super_natural",
    ),
    (
        TOOTH_SHAPE,
        TOOTH_SHAPES,
        "Invalid tooth_shape value. Must be: maintain, square, oval, or squoval",
    ),
    (
        TOOTH_PRESERVATION_MODE,
        PRESERVATION_MODES,
        "Invalid tooth_preservation_mode value. Must be: complete, edges_only, or custom",
    ),
    (
        GUMMY_SMILE_SEVERITY,
        SEVERITIES,
        "Invalid gummy_smile_severity value. Must be: mild, moderate, or severe",
    ),
    (
        INCISOR_IMPROVEMENT_MODE,
        INCISOR_MODES,
        "Invalid incisor_improvement_mode value. Must be: contouring or reshape",
    ),
    (
        CORRECT_CROWDING,
        SEVERITIES,
        "Invalid crowding value. Must be: mild, moderate, or severe",
    ),
)

# The legacy alias is checked last so its error follows the current flags.
_VALIDATED_FLAGS: tuple[str, ...] = BOOLEAN_FLAGS + (LEGACY_IMPROVE_INCISAL_EDGES,)


def _check_arch(options: OptionSet) -> str | None:
    if is_present(options, ARCH) and text_value(options, ARCH) not in ARCHES:
        return "Invalid arch value. Must be: upper, lower, or both"
    return None


def _check_teeth_count(options: OptionSet) -> str | None:
    count = raw_teeth_count(options)
    if count is None or count in FULL_ARCH_KEYWORDS:
        return None

    number = parse_teeth_number(count)
    if number is None or not MIN_TEETH <= number <= MAX_TEETH:
        return 'Invalid teeth count. Must be between 2-10 or "full"'
    return None


def _check_flag(options: OptionSet, key: str) -> str | None:
    value = flag_value(options, key)
    if value is not None and value not in ("true", "false"):
        return f"Invalid {key} value. Must be: true or false"
    return None


def validate_options(options: OptionSet) -> ValidationResult:
    """Validate an option set without touching any compiler state.

    Rules run in a fixed order and every rule runs, so the returned errors
    cover all problems at once:

    1. ``arch`` is upper, lower or both.
    2. ``teeth_count`` / ``number_of_teeth`` (first non-empty) is ``full``,
       ``full_arch`` or an integer from 2 to 10.
    3. ``brighten``, ``tooth_shape``, ``tooth_preservation_mode``,
       ``gummy_smile_severity``, ``incisor_improvement_mode`` and
       ``correct_crowding_with_alignment`` are in their enumerations.
    4. Every boolean flag, including the legacy
       ``improve_shape_of_incisal_edges`` alias, is ``"true"`` or
       ``"false"`` (case-insensitive).

    Unknown keys are ignored.

    Args:
        options: Raw option bag from the request layer.

    Returns:
        A :class:`ValidationResult`.
    """
    errors: list[str] = []

    for check in (_check_arch, _check_teeth_count):
        error = check(options)
        if error:
            errors.append(error)

    for key, accepted, message in _ENUM_RULES:
        if is_present(options, key) and text_value(options, key) not in accepted:
            errors.append(message)

    for key in _VALIDATED_FLAGS:
        error = _check_flag(options, key)
        if error:
            errors.append(error)

    if errors:
        logger.debug(f"Option validation failed with {len(errors)} error(s): {errors}")

    return ValidationResult(is_valid=not errors, errors=tuple(errors))
