"""Integration tests for smiledirective.api.main - FastAPI REST API endpoints.

All tests use the FastAPI TestClient.  Tests cover every endpoint:

- ``GET /health`` - Liveness.
- ``GET /api/options`` - Accepted option values.
- ``POST /api/directives/validate`` - Option validation.
- ``POST /api/directives/compile`` - Validation plus compilation.
"""

from __future__ import annotations

import logging

from smiledirective import __version__
from smiledirective.core.directives import PRESERVATION_CONSTRAINT_TEXT

# ---------------------------------------------------------------------------
# Health and options.
# ---------------------------------------------------------------------------


class TestHealth:
    """Test GET /health."""

    def test_health_ok(self, test_client):
        resp = test_client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__


class TestOptions:
    """Test GET /api/options."""

    def test_lists_enumerations(self, test_client):
        data = test_client.get("/api/options").json()
        assert data["arch"] == ["upper", "lower", "both"]
        assert data["tooth_preservation_mode"] == ["complete", "edges_only", "custom"]
        assert data["teeth_count"] == {"min": 2, "max": 10, "keywords": ["full", "full_arch"]}

    def test_lists_flags(self, test_client):
        data = test_client.get("/api/options").json()
        assert "widen_upper_teeth" in data["flags"]
        assert "improve_shape_of_incisal_edges" not in data["flags"]

    def test_defaults(self, test_client):
        data = test_client.get("/api/options").json()
        assert data["defaults"] == {
            "arch": "upper",
            "teeth_count": "6",
            "tooth_preservation_mode": "complete",
        }


# ---------------------------------------------------------------------------
# Validation endpoint.
# ---------------------------------------------------------------------------


class TestValidate:
    """Test POST /api/directives/validate."""

    def test_valid_options(self, test_client, example_options):
        resp = test_client.post("/api/directives/validate", json=example_options)
        assert resp.status_code == 200
        assert resp.json() == {"is_valid": True, "errors": []}

    def test_reports_all_errors(self, test_client):
        resp = test_client.post(
            "/api/directives/validate", json={"arch": "sideways", "brighten": "ultra"}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is False
        assert data["errors"] == [
            "Invalid arch value. Must be: upper, lower, or both",
            "Invalid brighten value. Must be: subtle, natural, or super_natural",
        ]

    def test_legacy_alias(self, test_client):
        resp = test_client.post(
            "/api/directives/validate", json={"improve_shape_of_incisal_edges": "true"}
        )
        assert resp.json()["is_valid"] is True

    def test_numeric_flag_refused(self, test_client):
        resp = test_client.post("/api/directives/validate", json={"widen_upper_teeth": 1})
        assert resp.status_code == 422

    def test_blank_teeth_count(self, test_client):
        resp = test_client.post("/api/directives/validate", json={"teeth_count": "  "})
        assert resp.json() == {
            "is_valid": False,
            "errors": ['Invalid teeth count. Must be between 2-10 or "full"'],
        }

    def test_invalid_options_logged(self, test_client, caplog):
        with caplog.at_level(logging.WARNING, logger="smiledirective.api.main"):
            test_client.post("/api/directives/validate", json={"arch": "sideways"})
        assert "Invalid arch value" in caplog.text

    def test_non_object_body(self, test_client):
        """A JSON array is not an option bag."""
        resp = test_client.post("/api/directives/validate", json=["arch", "upper"])
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Compile endpoint.
# ---------------------------------------------------------------------------


class TestCompile:
    """Test POST /api/directives/compile."""

    def test_compile_reference_request(self, test_client, example_options):
        resp = test_client.post("/api/directives/compile", json=example_options)
        assert resp.status_code == 200
        data = resp.json()

        assert data["arch"] == "upper"
        assert data["teeth_count"] == "8"
        assert data["preservation_mode"] == "complete"
        assert data["directive_count"] == 3
        assert data["constraints"] == [PRESERVATION_CONSTRAINT_TEXT["complete"]]
        assert "3. Reduce visible gum tissue by 4-5mm" in data["document"]

    def test_invalid_options_rejected(self, test_client):
        resp = test_client.post("/api/directives/compile", json={"widen_upper_teeth": "yes"})
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["message"] == "Invalid treatment options"
        assert detail["errors"] == ["Invalid widen_upper_teeth value. Must be: true or false"]

    def test_numeric_flag_not_compiled(self, test_client):
        resp = test_client.post("/api/directives/compile", json={"widen_upper_teeth": 1})
        assert resp.status_code == 422

    def test_empty_body_uses_defaults(self, test_client):
        resp = test_client.post("/api/directives/compile", json={})
        assert resp.status_code == 200
        data = resp.json()
        assert data["arch"] == "upper"
        assert data["teeth_count"] == "6"
        assert data["directives"] == []
        assert "Apply conservative cosmetic improvements" in data["document"]

    def test_full_arch_both(self, test_client):
        resp = test_client.post(
            "/api/directives/compile",
            json={"arch": "both", "number_of_teeth": "full_arch", "correct_overbite": True},
        )
        data = resp.json()
        assert data["teeth_count"] == "full arch"
        assert "both upper and lower arches ONLY" in data["document"]
        assert data["directive_count"] == 1

    def test_integer_teeth_count(self, test_client):
        resp = test_client.post("/api/directives/compile", json={"teeth_count": 4})
        assert resp.status_code == 200
        assert resp.json()["teeth_count"] == "4"

    def test_custom_mode_has_no_constraint(self, test_client):
        resp = test_client.post(
            "/api/directives/compile",
            json={"tooth_preservation_mode": "custom", "tooth_shape": "squoval"},
        )
        data = resp.json()
        assert data["constraints"] == []
        assert data["directive_count"] == 1
        assert "squoval" in data["directives"][0]

    def test_repeatable(self, test_client, every_feature_options):
        first = test_client.post("/api/directives/compile", json=every_feature_options).json()
        second = test_client.post("/api/directives/compile", json=every_feature_options).json()
        assert first == second
