"""Smile Directive - FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes that
expose the option validator and directive compiler, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The API is a thin, stateless shell:

- **Validation** runs :func:`~smiledirective.core.validation.validate_options`
  and returns every error in one response.
- **Compilation** validates first, then runs
  :func:`~smiledirective.core.compiler.compile_directives` on a private
  snapshot of the request's options.
- Nothing is persisted and no model is called; the compiled document is
  handed to the generation-service client by the caller.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/health``                   Liveness and version
GET       ``/api/options``              Accepted option values
POST      ``/api/directives/validate``  Validate an option set
POST      ``/api/directives/compile``   Validate and compile an option set
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    smiledirective

Direct invocation::

    python -m smiledirective.api.main
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from smiledirective import __version__
from smiledirective.api.models import (
    CompileResponse,
    TreatmentOptionsRequest,
    ValidationResponse,
)
from smiledirective.core import options as opts
from smiledirective.core.compiler import compile_directives
from smiledirective.core.config import config
from smiledirective.core.validation import validate_options

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Smile Directive Compiler",
    description="Compiles cosmetic dental treatment options into image-edit instructions.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/health")
async def health() -> dict:
    """Report that the service is up."""
    return {
        "status": "healthy",
        "service": config.service_name,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/options")
async def get_options() -> dict:
    """Return the accepted values for every enumerated option.

    The front end uses this to build its selectors, so the lists here are
    always the ones the validator checks against.
    """
    return {
        "arch": list(opts.ARCHES),
        "teeth_count": {
            "min": opts.MIN_TEETH,
            "max": opts.MAX_TEETH,
            "keywords": list(opts.FULL_ARCH_KEYWORDS),
        },
        "brighten": list(opts.BRIGHTEN_LEVELS),
        "tooth_shape": list(opts.TOOTH_SHAPES),
        "tooth_preservation_mode": list(opts.PRESERVATION_MODES),
        "gummy_smile_severity": list(opts.SEVERITIES),
        "incisor_improvement_mode": list(opts.INCISOR_MODES),
        "correct_crowding_with_alignment": list(opts.SEVERITIES),
        "flags": list(opts.BOOLEAN_FLAGS),
        "defaults": {
            "arch": opts.DEFAULT_ARCH,
            "teeth_count": opts.DEFAULT_TEETH_COUNT,
            "tooth_preservation_mode": opts.DEFAULT_PRESERVATION_MODE,
        },
    }


@app.post("/api/directives/validate", response_model=ValidationResponse)
async def validate_request(req: TreatmentOptionsRequest) -> dict:
    """Validate an option set and report every problem found.

    Args:
        req: Treatment options.

    Returns:
        Dictionary with ``is_valid`` and the ordered ``errors`` list.
    """
    result = validate_options(opts.snapshot_options(req.to_options()))
    if not result.is_valid:
        logger.warning(f"Invalid treatment options: {list(result.errors)}")
    return result.to_dict()


@app.post("/api/directives/compile", response_model=CompileResponse)
async def compile_request(req: TreatmentOptionsRequest) -> dict:
    """Validate the options, then compile them into the directive document.

    Args:
        req: Treatment options.

    Returns:
        The resolved arch, teeth count and preservation mode, the ordered
        directives, and the full document.

    Raises:
        HTTPException: 400 with ``message`` and ``errors`` when validation
            fails.
    """
    # Each request compiles its own copy of the options.
    options = opts.snapshot_options(req.to_options())

    result = validate_options(options)
    if not result.is_valid:
        logger.warning(f"Rejected treatment options: {list(result.errors)}")
        raise HTTPException(
            status_code=400,
            detail={"message": "Invalid treatment options", "errors": list(result.errors)},
        )

    compiled = compile_directives(options)
    logger.info(
        f"Compiled {compiled.directive_count} directive(s) "
        f"(arch={compiled.arch}, teeth={compiled.teeth_count})"
    )
    return compiled.to_dict()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Host, port and log level come from :data:`~smiledirective.core.config.config`
    (``SMILEDIRECTIVE_SERVER_HOST``, ``SMILEDIRECTIVE_SERVER_PORT`` and
    ``SMILEDIRECTIVE_LOG_LEVEL``).

    This function is registered as the ``smiledirective`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "smiledirective.api.main:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
