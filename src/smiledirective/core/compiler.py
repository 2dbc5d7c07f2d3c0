"""Compilation of treatment options into a directive document.

The compiler turns one option set into the instruction document handed to
the image-generation service.  It runs in three steps:

1. **Normalize** the option set into a
   :class:`~smiledirective.core.options.NormalizedContext` (arch, teeth
   count, preservation mode), defaulting anything it cannot use.
2. **Build directives** by running every builder in
   :data:`~smiledirective.core.directives.DIRECTIVE_BUILDERS` in
   precedence order.
3. **Assemble** the fixed document template around the numbered directives.

Document Structure
------------------
::

    ROLE: ...

    STRICT MODIFICATION ZONE:
    - Target area: [arch text] ONLY
    - [non-target protection line]
    - Number of teeth to modify: [count] [(counting from the central midline outward)]
    - Leave all other teeth completely unchanged

    REQUIRED MODIFICATIONS (apply in this exact order):
    1. [modification]
    ...

    [CRITICAL CONSTRAINT: ... (complete / edges_only modes)]

    QUALITY CONSTRAINTS:
    ...

    VERIFICATION CHECKLIST:
    ...

    OUTPUT: ...

Only modifications are numbered.  The closing preservation constraint is a
standing rule and follows the list unnumbered.  When no modification is
produced, the numbered list is replaced by a single "conservative
improvements" sentence.

The compiler holds no state between calls and never raises for an option
set of any shape, so it is safe to call concurrently.  Validation is a
separate step (:func:`~smiledirective.core.validation.validate_options`)
that callers run first.

Usage
-----
::

    result = compile_directives({"arch": "upper", "brighten": "natural"})
    print(result.document)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType

from smiledirective.core.directives import DIRECTIVE_BUILDERS, Directive, DirectiveSet
from smiledirective.core.options import NormalizedContext, OptionSet, normalize

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fixed template sections.
# ---------------------------------------------------------------------------

_ROLE_PREAMBLE = (
    "ROLE: You are an expert dental image manipulation AI specialized in cosmetic "
    "dentistry visualization."
)

_ARCH_PROTECTION = MappingProxyType(
    {
        "upper": "DO NOT modify the lower arch in any way",
        "lower": "DO NOT modify the upper arch in any way",
        "both": "Modify both upper and lower arches as specified",
    }
)

# Side named in the checklist as left untouched.
_NON_TARGET_SIDE = MappingProxyType(
    {
        "upper": "lower",
        "lower": "upper",
        "both": "non-target",
    }
)

_MIDLINE_QUALIFIER = "(counting from the central midline outward)"

_FALLBACK_DIRECTIVE = "Apply conservative cosmetic improvements for a natural, healthy smile."

_QUALITY_CONSTRAINTS = """QUALITY CONSTRAINTS:
- Maintain photorealistic quality with natural lighting and texture
- Preserve original tooth anatomy and proportions within normal variation
- Ensure modifications are clinically achievable with modern dentistry
- Keep gum tissue, lips, and facial features completely unchanged unless specified for gum work
- Blend all edits seamlessly with no visible artifacts or discontinuities
- Result must look like a professional before/after from an actual dental practice"""

_OUTPUT_LINE = "OUTPUT: Return the modified image maintaining original resolution and quality."


@dataclass(frozen=True)
class CompiledDirectives:
    """Result of one compilation pass.

    Attributes:
        context: The normalized arch, teeth count and preservation mode.
        directives: Every directive in precedence order, closing constraint
            included.
        document: The full instruction document.
    """

    context: NormalizedContext
    directives: DirectiveSet
    document: str

    @property
    def arch(self) -> str:
        return self.context.arch

    @property
    def teeth_count(self) -> str:
        return self.context.teeth_count

    @property
    def modifications(self) -> DirectiveSet:
        """The numbered directives."""
        return tuple(d for d in self.directives if not d.is_constraint)

    @property
    def constraints(self) -> DirectiveSet:
        return tuple(d for d in self.directives if d.is_constraint)

    @property
    def directive_count(self) -> int:
        """Number of numbered entries in the document."""
        return len(self.modifications)

    def to_dict(self) -> dict:
        """Serialise for the API and audit logs."""
        return {
            "arch": self.arch,
            "teeth_count": self.teeth_count,
            "preservation_mode": self.context.preservation_mode,
            "directives": [d.text for d in self.modifications],
            "constraints": [d.text for d in self.constraints],
            "directive_count": self.directive_count,
            "document": self.document,
        }


def arch_text(arch: str) -> str:
    return "both upper and lower arches" if arch == "both" else f"{arch} arch"


def collect_directives(options: OptionSet, context: NormalizedContext) -> DirectiveSet:
    """Run every builder in precedence order and concatenate the results."""
    directives: list[Directive] = []
    for builder in DIRECTIVE_BUILDERS:
        directives.extend(builder(options, context))
    return tuple(directives)


def assemble_document(context: NormalizedContext, directives: DirectiveSet) -> str:
    """Wrap the directives in the fixed instruction template.

    Args:
        context: Normalized context naming the arch and teeth count.
        directives: Directives in precedence order.  Modifications are
            numbered in this order; constraints follow the list.

    Returns:
        The document text.  Identical inputs give identical text.
    """
    target = arch_text(context.arch)
    modifications = [d for d in directives if not d.is_constraint]
    constraints = [d for d in directives if d.is_constraint]

    teeth_line = f"- Number of teeth to modify: {context.teeth_count}"
    if not context.is_full_arch:
        teeth_line += f" {_MIDLINE_QUALIFIER}"

    zone = "\n".join(
        [
            "STRICT MODIFICATION ZONE:",
            f"- Target area: {target} ONLY",
            f"- {_ARCH_PROTECTION[context.arch]}",
            teeth_line,
            "- Leave all other teeth completely unchanged",
        ]
    )

    sections = [_ROLE_PREAMBLE, zone]

    if modifications:
        numbered = [
            f"{index}. {directive.text}" for index, directive in enumerate(modifications, start=1)
        ]
        sections.append(
            "\n".join(["REQUIRED MODIFICATIONS (apply in this exact order):", *numbered])
        )
    else:
        sections.append(_FALLBACK_DIRECTIVE)

    sections.extend(d.text for d in constraints)

    sections.append(_QUALITY_CONSTRAINTS)
    sections.append(
        "\n".join(
            [
                "VERIFICATION CHECKLIST:",
                f"✓ Modified ONLY the {target} as specified",
                f"✓ Left the {_NON_TARGET_SIDE[context.arch]} teeth unmodified",
                f"✓ Applied all {len(modifications)} modifications correctly",
                "✓ Maintained natural dental aesthetics throughout",
                "✓ Result appears professionally achievable",
            ]
        )
    )
    sections.append(_OUTPUT_LINE)

    # Sections are separated by blank lines.
    return "\n\n".join(sections)


def compile_directives(options: OptionSet) -> CompiledDirectives:
    """Compile an option set into directives and the rendered document.

    The options are expected to have passed validation.  Invalid values are
    not rejected here: each feature falls back to its default or is skipped.

    Args:
        options: Flat option bag (string keys, ``"true"``/``"false"`` flags).

    Returns:
        A :class:`CompiledDirectives` value.
    """
    context = normalize(options)
    directives = collect_directives(options, context)
    document = assemble_document(context, directives)

    logger.debug(
        f"Compiled {len(directives)} directive(s) for arch={context.arch} "
        f"teeth={context.teeth_count} mode={context.preservation_mode}: "
        f"{[d.feature for d in directives]}"
    )
    return CompiledDirectives(context=context, directives=directives, document=document)


def build_directive_prompt(options: OptionSet) -> str:
    """Return only the compiled document for *options*."""
    return compile_directives(options).document
