"""Shared pytest fixtures for Smile Directive tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from smiledirective.api.main import app


@pytest.fixture
def example_options() -> dict[str, str]:
    """The reference upper-arch request used across compiler tests.

    Returns:
        Option bag with brightening, upper widening, moderate gum reduction
        and complete preservation.
    """
    return {
        "arch": "upper",
        "teeth_count": "8",
        "brighten": "natural",
        "widen_upper_teeth": "true",
        "reduce_gummy_smile": "true",
        "gummy_smile_severity": "moderate",
        "tooth_preservation_mode": "complete",
    }


@pytest.fixture
def every_feature_options() -> dict[str, str]:
    """Option bag that switches on every feature in custom mode.

    Returns:
        Option bag producing every modification directive and no
        closing constraint.
    """
    return {
        "arch": "both",
        "teeth_count": "full",
        "brighten": "subtle",
        "widen_upper_teeth": "true",
        "widen_lower_teeth": "true",
        "close_spaces_evenly": "true",
        "correct_crowding_with_alignment": "severe",
        "replace_missing_teeth": "true",
        "reduce_gummy_smile": "true",
        "gummy_smile_severity": "severe",
        "improve_incisor_shape": "true",
        "incisor_improvement_mode": "reshape",
        "tooth_preservation_mode": "custom",
        "tooth_shape": "oval",
        "add_characterisation": "true",
        "improve_gum_recession": "true",
        "correct_underbite": "true",
        "correct_overbite": "true",
    }


@pytest.fixture
def test_client() -> TestClient:
    """FastAPI TestClient for the API app.

    Returns:
        TestClient bound to :data:`smiledirective.api.main.app`
    """
    return TestClient(app)
