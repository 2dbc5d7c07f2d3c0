"""Option keys, enumerations and normalization for the directive compiler.

The request layer hands over a flat option bag: string keys mapped to raw
form values.  Booleans arrive as the strings ``"true"`` / ``"false"``, never
as native booleans, although native booleans are tolerated.  This module
owns the fixed key set, the enumerations each option may take, and the
helpers that turn raw values into a :class:`NormalizedContext`.

Normalization never fails.  Anything unparseable or outside its enumeration
falls back to the documented default; rejecting bad input is the job of
:mod:`smiledirective.core.validation`.

Defaults
--------
======================  ==============
Field                   Default
======================  ==============
arch                    ``"upper"``
teeth count             ``"6"``
preservation mode       ``"complete"``
======================  ==============
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

OptionValue = str | bool | None
OptionSet = Mapping[str, OptionValue]

# ---------------------------------------------------------------------------
# Option keys.
# ---------------------------------------------------------------------------

ARCH = "arch"
TEETH_COUNT = "teeth_count"
NUMBER_OF_TEETH = "number_of_teeth"
BRIGHTEN = "brighten"
TOOTH_SHAPE = "tooth_shape"
TOOTH_PRESERVATION_MODE = "tooth_preservation_mode"
GUMMY_SMILE_SEVERITY = "gummy_smile_severity"
INCISOR_IMPROVEMENT_MODE = "incisor_improvement_mode"
CORRECT_CROWDING = "correct_crowding_with_alignment"

WIDEN_UPPER_TEETH = "widen_upper_teeth"
WIDEN_LOWER_TEETH = "widen_lower_teeth"
CLOSE_SPACES_EVENLY = "close_spaces_evenly"
REPLACE_MISSING_TEETH = "replace_missing_teeth"
REDUCE_GUMMY_SMILE = "reduce_gummy_smile"
IMPROVE_INCISOR_SHAPE = "improve_incisor_shape"
IMPROVE_GUM_RECESSION = "improve_gum_recession"
CORRECT_UNDERBITE = "correct_underbite"
CORRECT_OVERBITE = "correct_overbite"
ADD_CHARACTERISATION = "add_characterisation"

# Renamed to ``improve_incisor_shape``; still accepted by the validator so
# older front ends keep working, but it has no effect on compilation.
LEGACY_IMPROVE_INCISAL_EDGES = "improve_shape_of_incisal_edges"

STRING_OPTIONS: tuple[str, ...] = (
    ARCH,
    TEETH_COUNT,
    NUMBER_OF_TEETH,
    BRIGHTEN,
    TOOTH_SHAPE,
    TOOTH_PRESERVATION_MODE,
    GUMMY_SMILE_SEVERITY,
    INCISOR_IMPROVEMENT_MODE,
    CORRECT_CROWDING,
)

BOOLEAN_FLAGS: tuple[str, ...] = (
    WIDEN_UPPER_TEETH,
    WIDEN_LOWER_TEETH,
    CLOSE_SPACES_EVENLY,
    REPLACE_MISSING_TEETH,
    REDUCE_GUMMY_SMILE,
    IMPROVE_INCISOR_SHAPE,
    IMPROVE_GUM_RECESSION,
    CORRECT_UNDERBITE,
    CORRECT_OVERBITE,
    ADD_CHARACTERISATION,
)

ALL_OPTION_KEYS: frozenset[str] = frozenset(
    STRING_OPTIONS + BOOLEAN_FLAGS + (LEGACY_IMPROVE_INCISAL_EDGES,)
)

# ---------------------------------------------------------------------------
# Enumerations.
# ---------------------------------------------------------------------------

ARCHES: tuple[str, ...] = ("upper", "lower", "both")
BRIGHTEN_LEVELS: tuple[str, ...] = ("subtle", "natural", "super_natural")
TOOTH_SHAPES: tuple[str, ...] = ("maintain_existing", "maintain", "square", "oval", "squoval")
PRESERVATION_MODES: tuple[str, ...] = ("complete", "edges_only", "custom")
SEVERITIES: tuple[str, ...] = ("mild", "moderate", "severe")
INCISOR_MODES: tuple[str, ...] = ("contouring", "reshape")
FULL_ARCH_KEYWORDS: tuple[str, ...] = ("full", "full_arch")

DEFAULT_ARCH = "upper"
DEFAULT_TEETH_COUNT = "6"
DEFAULT_PRESERVATION_MODE = "complete"
FULL_ARCH = "full arch"
MIN_TEETH = 2
MAX_TEETH = 10

# Mirrors a lenient integer parse: leading sign and digits, rest ignored.
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class NormalizedContext:
    """Validated, defaulted values that frame one compilation.

    Attributes:
        arch: ``"upper"``, ``"lower"`` or ``"both"``.
        teeth_count: ``"2"`` to ``"10"``, or ``"full arch"``.
        preservation_mode: ``"complete"``, ``"edges_only"`` or ``"custom"``.
    """

    arch: str = DEFAULT_ARCH
    teeth_count: str = DEFAULT_TEETH_COUNT
    preservation_mode: str = DEFAULT_PRESERVATION_MODE

    @property
    def is_full_arch(self) -> bool:
        return self.teeth_count == FULL_ARCH


# ---------------------------------------------------------------------------
# Raw value helpers.
# ---------------------------------------------------------------------------


def snapshot_options(raw: Mapping[str, object]) -> dict[str, OptionValue]:
    """Copy the known option keys out of *raw* into a fresh dict.

    Unknown keys are dropped.  Values other than ``str``, ``bool`` or
    ``None`` (for example an integer teeth count from a JSON body) are
    converted with ``str()`` so downstream code only sees option values.

    Args:
        raw: Any mapping of request parameters.

    Returns:
        A new dictionary owned by the caller.
    """
    snapshot: dict[str, OptionValue] = {}
    for key, value in raw.items():
        if key not in ALL_OPTION_KEYS:
            continue
        if value is None or isinstance(value, (str, bool)):
            snapshot[key] = value
        else:
            snapshot[key] = str(value)
    return snapshot


def text_value(options: OptionSet, key: str) -> str:
    """Return the lower-cased, stripped string value of *key*, or ``""``."""
    value = options.get(key)
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip().lower()


def is_present(options: OptionSet, key: str) -> bool:
    """A string option is present when it holds a non-empty value."""
    value = options.get(key)
    if value is None or isinstance(value, bool):
        return False
    return str(value) != ""


def flag_value(options: OptionSet, key: str) -> str | None:
    """Return a boolean flag as ``"true"``/``"false"``/raw text, or ``None``."""
    value = options.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip().lower()


def is_enabled(options: OptionSet, key: str) -> bool:
    """Whether a boolean flag is switched on."""
    return flag_value(options, key) == "true"


def raw_teeth_count(options: OptionSet) -> str | None:
    """Return the first non-empty of ``teeth_count`` / ``number_of_teeth``.

    The chosen value is stripped and lower-cased, so a whitespace-only count
    comes back as ``""`` (present but unparseable).  ``None`` means neither
    key was sent.
    """
    for key in (TEETH_COUNT, NUMBER_OF_TEETH):
        if is_present(options, key):
            return text_value(options, key)
    return None


def parse_teeth_number(text: str) -> int | None:
    """Parse the leading integer of *text*; ``None`` when there is none."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


# ---------------------------------------------------------------------------
# Normalization.
# ---------------------------------------------------------------------------


def resolve_arch(options: OptionSet) -> str:
    arch = text_value(options, ARCH)
    return arch if arch in ARCHES else DEFAULT_ARCH


def resolve_teeth_count(options: OptionSet) -> str:
    """Resolve the number of teeth in scope.

    ``full`` and ``full_arch`` become ``"full arch"``.  Missing, unparseable
    or out-of-range values fall back to ``"6"``.
    """
    count = raw_teeth_count(options)
    if count in FULL_ARCH_KEYWORDS:
        return FULL_ARCH

    number = parse_teeth_number(count) if count else None
    if number is None or not MIN_TEETH <= number <= MAX_TEETH:
        return DEFAULT_TEETH_COUNT
    return str(number)


def resolve_preservation_mode(options: OptionSet) -> str:
    mode = text_value(options, TOOTH_PRESERVATION_MODE)
    return mode if mode in PRESERVATION_MODES else DEFAULT_PRESERVATION_MODE


def normalize(options: OptionSet) -> NormalizedContext:
    """Build the :class:`NormalizedContext` for an option set."""
    return NormalizedContext(
        arch=resolve_arch(options),
        teeth_count=resolve_teeth_count(options),
        preservation_mode=resolve_preservation_mode(options),
    )
