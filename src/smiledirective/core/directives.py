"""Per-feature directive builders.

Each builder looks at one treatment feature of the option set and returns
the directives it contributes, usually zero or one.  Builders never raise:
an unknown or missing value simply produces no directive, or the feature's
documented default where one exists.

:data:`DIRECTIVE_BUILDERS` lists the builders in precedence order.  That
order becomes the numbered instruction list in the compiled document, so it
must not depend on the order of keys in the incoming options.  The closing
preservation constraint is always last and is rendered as a standing rule
under the list rather than as a numbered step.

Feature order
-------------
1. brighten
2. widen (upper, then lower)
3. spacing
4. crowding
5. missing teeth
6. gummy smile
7. incisor shape
8. tooth shape (gated by preservation mode)
9. characterisation
10. gum recession
11. bite (underbite, then overbite)
12. preservation constraint
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType

from smiledirective.core.options import (
    ADD_CHARACTERISATION,
    BRIGHTEN,
    CLOSE_SPACES_EVENLY,
    CORRECT_CROWDING,
    CORRECT_OVERBITE,
    CORRECT_UNDERBITE,
    GUMMY_SMILE_SEVERITY,
    IMPROVE_GUM_RECESSION,
    IMPROVE_INCISOR_SHAPE,
    INCISOR_IMPROVEMENT_MODE,
    REDUCE_GUMMY_SMILE,
    REPLACE_MISSING_TEETH,
    TOOTH_SHAPE,
    WIDEN_LOWER_TEETH,
    WIDEN_UPPER_TEETH,
    NormalizedContext,
    OptionSet,
    is_enabled,
    text_value,
)


@dataclass(frozen=True)
class Directive:
    """One atomic instruction in the compiled document.

    Attributes:
        feature: Name of the feature that produced the directive.
        text: The instruction sentence.
    """

    feature: str
    text: str

    @property
    def is_constraint(self) -> bool:
        """Closing constraints are rendered after the numbered list."""
        return self.feature == CONSTRAINT_FEATURE


CONSTRAINT_FEATURE = "preservation_constraint"

DirectiveSet = tuple[Directive, ...]
DirectiveBuilder = Callable[[OptionSet, NormalizedContext], DirectiveSet]

# ---------------------------------------------------------------------------
# Directive text.
# ---------------------------------------------------------------------------

BRIGHTEN_TEXT = MappingProxyType(
    {
        "subtle": "Apply subtle brightening to achieve a natural white shade (1-2 shades lighter)",
        "natural": "Brighten to a healthy natural white shade (2-3 shades lighter)",
        "super_natural": (
            "Preserve the patient's current tooth shade exactly; do NOT alter natural hue "
            "or lightness; maintain existing variations"
        ),
    }
)

WIDEN_UPPER_TEXT = "Increase the width of upper teeth by 10-15% to create fuller appearance"
WIDEN_LOWER_TEXT = "Increase the width of lower teeth by 10-15% proportionally"

SPACING_TEXT = (
    "Eliminate gaps by redistributing teeth spacing evenly while maintaining natural "
    "contact points"
)

CROWDING_TEXT = MappingProxyType(
    {
        "mild": "Straighten mildly crowded teeth by adjusting rotation up to 5-10 degrees",
        "moderate": (
            "Correct moderate crowding by aligning teeth with adjustments up to 15-20 degrees"
        ),
        "severe": (
            "Significantly correct severe crowding with alignment adjustments up to "
            "25-30 degrees"
        ),
    }
)

MISSING_TEETH_TEXT = (
    "Fill any visible gaps from missing teeth with anatomically correct replacement teeth "
    "matching adjacent tooth morphology"
)

GUM_LIFT_TEXT = MappingProxyType(
    {
        "mild": "Reduce visible gum tissue by 2-3mm",
        "moderate": "Reduce visible gum tissue by 4-5mm",
        "severe": "Reduce visible gum tissue by 6mm or more",
    }
)
DEFAULT_GUM_SEVERITY = "mild"
GUMMY_SMILE_SUFFIX = (
    " to achieve ideal 1-3mm gum display when smiling. IMPORTANT: Preserve all tooth "
    "shapes and facial aspects while adjusting gums only."
)

INCISOR_TEXT = MappingProxyType(
    {
        "contouring": (
            "ONLY perform edge contouring on incisors: smooth and refine incisal edges to "
            "create natural contours. DO NOT reshape the overall tooth form."
        ),
        "reshape": (
            "Redesign incisor shapes completely: create optimal proportions and contours "
            "while maintaining natural aesthetics"
        ),
    }
)
DEFAULT_INCISOR_MODE = "contouring"

EDGE_CONTOURING_TEXT = (
    "ONLY perform edge contouring: smooth and refine incisal edges while maintaining the "
    "original facial aspects and overall tooth shapes"
)

_MAINTAIN_SHAPE_TEXT = "Maintain baseline tooth form without reshaping"
TOOTH_SHAPE_TEXT = MappingProxyType(
    {
        "maintain": _MAINTAIN_SHAPE_TEXT,
        "maintain_existing": _MAINTAIN_SHAPE_TEXT,
        "square": (
            "Modify baseline tooth forms toward square contours (more masculine): emphasize "
            "flat incisal edges and slightly broader proximal contacts"
        ),
        "oval": (
            "Modify baseline tooth forms toward oval contours (more feminine): soften "
            "incisal edges and round contours"
        ),
        "squoval": (
            "Modify baseline tooth forms to 'squoval' - balanced combination of square and "
            "oval features for a natural, modern look"
        ),
    }
)
DEFAULT_TOOTH_SHAPE = "maintain"

CHARACTERISATION_TEXT = (
    "Add subtle characterization effects: natural specular reflections, enamel "
    "opalescence, and controlled chroma variation to enhance realism"
)

GUM_RECESSION_TEXT = (
    "Restore gum tissue coverage to the cemento-enamel junction, eliminating exposed roots"
)

UNDERBITE_TEXT = (
    "Reposition lower jaw posteriorly to achieve proper overbite relationship "
    "(upper teeth 2-3mm in front of lower)"
)
OVERBITE_TEXT = (
    "Reduce excessive overbite by adjusting upper anterior teeth vertical overlap to "
    "ideal 2-3mm"
)

PRESERVATION_CONSTRAINT_TEXT = MappingProxyType(
    {
        "complete": (
            "CRITICAL CONSTRAINT: DO NOT modify any tooth shapes, facial aspects, or contours. "
            "Only perform gum modifications if specified. Preserve all existing tooth "
            "characteristics."
        ),
        "edges_only": (
            "CRITICAL CONSTRAINT: ONLY perform edge contouring. Maintain all facial aspects "
            "and overall tooth shapes. Do not reshape or alter the facial surfaces of teeth."
        ),
    }
)

# ---------------------------------------------------------------------------
# Builders.
# ---------------------------------------------------------------------------


def _lookup(feature: str, table: MappingProxyType, key: str) -> DirectiveSet:
    text = table.get(key)
    return (Directive(feature, text),) if text else ()


def _flag(feature: str, options: OptionSet, key: str, text: str) -> DirectiveSet:
    return (Directive(feature, text),) if is_enabled(options, key) else ()


def build_brighten(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _lookup("brighten", BRIGHTEN_TEXT, text_value(options, BRIGHTEN))


def build_widen(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    """Upper and lower widening are independent; both may fire."""
    return _flag("widen_upper", options, WIDEN_UPPER_TEETH, WIDEN_UPPER_TEXT) + _flag(
        "widen_lower", options, WIDEN_LOWER_TEETH, WIDEN_LOWER_TEXT
    )


def build_spacing(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _flag("spacing", options, CLOSE_SPACES_EVENLY, SPACING_TEXT)


def build_crowding(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _lookup("crowding", CROWDING_TEXT, text_value(options, CORRECT_CROWDING))


def build_missing_teeth(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _flag("missing_teeth", options, REPLACE_MISSING_TEETH, MISSING_TEETH_TEXT)


def build_gummy_smile(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    """Gum reduction sized by severity.

    Gum work is independent of tooth-shape preservation, so the directive
    always carries its own shape-preservation caveat whatever the mode.
    An absent or unknown severity means ``mild``.
    """
    if not is_enabled(options, REDUCE_GUMMY_SMILE):
        return ()

    severity = text_value(options, GUMMY_SMILE_SEVERITY)
    lift = GUM_LIFT_TEXT.get(severity, GUM_LIFT_TEXT[DEFAULT_GUM_SEVERITY])
    return (Directive("gummy_smile", lift + GUMMY_SMILE_SUFFIX),)


def build_incisor_shape(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    """Incisor edge contouring or full reshape, not governed by preservation mode."""
    if not is_enabled(options, IMPROVE_INCISOR_SHAPE):
        return ()

    mode = text_value(options, INCISOR_IMPROVEMENT_MODE) or DEFAULT_INCISOR_MODE
    return _lookup("incisor_shape", INCISOR_TEXT, mode)


def build_tooth_shape(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    """Tooth silhouette changes, gated by the preservation mode.

    ``complete`` freezes tooth shape and yields nothing.  ``edges_only``
    yields the fixed edge-contouring directive.  ``custom`` yields the
    sentence for the chosen ``tooth_shape`` (``maintain`` when absent).
    """
    if context.preservation_mode == "complete":
        return ()
    if context.preservation_mode == "edges_only":
        return (Directive("tooth_shape", EDGE_CONTOURING_TEXT),)

    shape = text_value(options, TOOTH_SHAPE) or DEFAULT_TOOTH_SHAPE
    return _lookup("tooth_shape", TOOTH_SHAPE_TEXT, shape)


def build_characterisation(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _flag("characterisation", options, ADD_CHARACTERISATION, CHARACTERISATION_TEXT)


def build_gum_recession(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _flag("gum_recession", options, IMPROVE_GUM_RECESSION, GUM_RECESSION_TEXT)


def build_bite(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    return _flag("underbite", options, CORRECT_UNDERBITE, UNDERBITE_TEXT) + _flag(
        "overbite", options, CORRECT_OVERBITE, OVERBITE_TEXT
    )


def build_preservation_constraint(
    options: OptionSet, context: NormalizedContext
) -> DirectiveSet:
    """Closing constraint for ``complete`` and ``edges_only``; none for ``custom``."""
    return _lookup(CONSTRAINT_FEATURE, PRESERVATION_CONSTRAINT_TEXT, context.preservation_mode)


DIRECTIVE_BUILDERS: tuple[DirectiveBuilder, ...] = (
    build_brighten,
    build_widen,
    build_spacing,
    build_crowding,
    build_missing_teeth,
    build_gummy_smile,
    build_incisor_shape,
    build_tooth_shape,
    build_characterisation,
    build_gum_recession,
    build_bite,
    build_preservation_constraint,
)
