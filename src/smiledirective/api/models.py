"""Pydantic request and response models for the Smile Directive API.

These models define the JSON schema for the API endpoints.  FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.

Option values are kept loosely typed on purpose: the front end sends form
style strings (``"true"``, ``"8"``, ``"natural"``) and range checking is
done by :func:`~smiledirective.core.validation.validate_options`, which
reports every problem at once instead of failing on the first.

Models
------
TreatmentOptionsRequest
    Payload for ``POST /api/directives/validate`` and
    ``POST /api/directives/compile``.
ValidationResponse
    Body returned by the validate endpoint.
CompileResponse
    Body returned by the compile endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

# Strict so a JSON number is refused instead of being coerced to a bool.
FlagValue = StrictStr | StrictBool | None


class TreatmentOptionsRequest(BaseModel):
    """Flat treatment option bag.

    Unknown fields are ignored.  Every field is optional; absent fields take
    the compiler defaults (upper arch, 6 teeth, complete preservation).

    Attributes:
        arch: ``upper``, ``lower`` or ``both``.
        teeth_count: ``2``-``10``, ``full`` or ``full_arch``.
        number_of_teeth: Alternate name for ``teeth_count``; used only when
            ``teeth_count`` is empty.
        brighten: ``subtle``, ``natural`` or ``super_natural``.
        tooth_shape: ``maintain``, ``square``, ``oval`` or ``squoval``.
        tooth_preservation_mode: ``complete``, ``edges_only`` or ``custom``.
        gummy_smile_severity: ``mild``, ``moderate`` or ``severe``.
        incisor_improvement_mode: ``contouring`` or ``reshape``.
        correct_crowding_with_alignment: ``mild``, ``moderate`` or ``severe``.
        improve_shape_of_incisal_edges: Legacy flag, validated only.
    """

    model_config = ConfigDict(extra="ignore")

    arch: str | None = Field(default=None, description="Dental arch in scope.")
    teeth_count: str | int | None = Field(
        default=None,
        description="Number of teeth to modify (2-10) or 'full'.",
    )
    number_of_teeth: str | int | None = Field(
        default=None,
        description="Alias of teeth_count.",
    )
    brighten: str | None = Field(default=None, description="Brightening level.")
    tooth_shape: str | None = Field(default=None, description="Target tooth shape (custom mode).")
    tooth_preservation_mode: str | None = Field(
        default=None,
        description="How much tooth shape may change: complete, edges_only or custom.",
    )
    gummy_smile_severity: str | None = Field(default=None, description="Gum reduction tier.")
    incisor_improvement_mode: str | None = Field(
        default=None,
        description="Incisor work: contouring or reshape.",
    )
    correct_crowding_with_alignment: str | None = Field(
        default=None,
        description="Crowding correction tier.",
    )

    widen_upper_teeth: FlagValue = None
    widen_lower_teeth: FlagValue = None
    close_spaces_evenly: FlagValue = None
    replace_missing_teeth: FlagValue = None
    reduce_gummy_smile: FlagValue = None
    improve_incisor_shape: FlagValue = None
    improve_gum_recession: FlagValue = None
    correct_underbite: FlagValue = None
    correct_overbite: FlagValue = None
    add_characterisation: FlagValue = None
    improve_shape_of_incisal_edges: FlagValue = Field(
        default=None,
        description="[LEGACY] Renamed to improve_incisor_shape; accepted but ignored.",
    )

    def to_options(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_none=True)


class ValidationResponse(BaseModel):
    """Response body for ``POST /api/directives/validate``."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class CompileResponse(BaseModel):
    """Response body for ``POST /api/directives/compile``.

    Attributes:
        arch: Resolved arch.
        teeth_count: Resolved teeth count (``"2"``-``"10"`` or ``"full arch"``).
        preservation_mode: Resolved preservation mode.
        directives: Modification sentences in numbered order.
        constraints: Closing preservation constraint, if the mode has one.
        directive_count: Number of numbered modifications.
        document: The full instruction document.
    """

    arch: str
    teeth_count: str
    preservation_mode: str
    directives: list[str]
    constraints: list[str] = Field(default_factory=list)
    directive_count: int
    document: str
