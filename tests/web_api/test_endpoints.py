"""
API Endpoint Tests
==================
Tests for the FastAPI application.
"""
import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient  # noqa: E402

from c_audit import __version__  # noqa: E402
from c_audit.web_api.config import settings  # noqa: E402
from c_audit.web_api.main import app  # noqa: E402


@pytest.fixture
def client():
    """Create test client"""
    return TestClient(app)


# ============================================================================
# Root & Health Endpoints
# ============================================================================


class TestRootEndpoints:
    """Tests for root and health endpoints"""

    def test_root(self, client):
        """Test root endpoint returns API info"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "c-audit API"
        assert data["version"] == __version__

    def test_health(self, client):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_ready(self, client):
        """Test readiness endpoint"""
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"


# ============================================================================
# Lint Endpoints
# ============================================================================


class TestLintEndpoints:
    """Tests for the lint endpoint"""

    def test_clean_source(self, client):
        """Clean C89 source yields no diagnostics"""
        response = client.post(
            "/lint/",
            json={"source": "int main(void)\n{\n    return 0;\n}\n"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "complete"
        assert data["summary"]["lines"] == 4
        assert data["summary"]["diagnostics"] == 0
        assert data["summary"]["modes"] == ["c89"]
        assert data["diagnostics"] == []

    def test_amiga_mode(self, client):
        """Modes are resolved and diagnostics carry the filename"""
        response = client.post(
            "/lint/",
            json={
                "source": "void Demo(void)\n{\n    long total;\n}\n",
                "filename": "demo.c",
                "modes": ["amiga"],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["modes"] == ["amiga", "ndk", "c89"]
        (diag,) = data["diagnostics"]
        assert diag["path"] == "demo.c"
        assert diag["line"] == 3
        assert diag["kind"] == "warning"
        assert diag["rule_id"] == "AMI_C_TYPE_001"
        assert diag["excerpt"] == "    long total;"

    def test_unterminated_comment(self, client):
        """End-of-file state is reported in the summary"""
        response = client.post("/lint/", json={"source": "/* open\n{\n"})
        data = response.json()
        assert data["summary"]["ended_in_comment"] is True
        assert data["summary"]["final_depth"] == 0
        assert data["diagnostics"][-1]["rule_id"] == "LEX_UNTERMINATED_COMMENT_001"

    def test_line_length_override(self, client):
        """line_length_limit applies to this request only"""
        response = client.post(
            "/lint/",
            json={"source": "int value;\n", "line_length_limit": 5},
        )
        rules = [d["rule_id"] for d in response.json()["diagnostics"]]
        assert rules == ["STY_LINE_LENGTH_001"]

    def test_unknown_mode(self, client):
        """Unknown modes are rejected"""
        response = client.post("/lint/", json={"source": "int x;\n", "modes": ["c11"]})
        assert response.status_code == 422

    def test_invalid_line_length(self, client):
        """line_length_limit must be positive"""
        response = client.post(
            "/lint/", json={"source": "int x;\n", "line_length_limit": 0}
        )
        assert response.status_code == 422

    def test_missing_source(self, client):
        """source is required"""
        response = client.post("/lint/", json={"filename": "a.c"})
        assert response.status_code == 422

    def test_source_too_large(self, client, monkeypatch):
        """Oversized payloads are refused"""
        monkeypatch.setattr(settings, "MAX_SOURCE_BYTES", 10)
        response = client.post("/lint/", json={"source": "int x;\n" * 10})
        assert response.status_code == 413


# ============================================================================
# Settings
# ============================================================================


class TestSettings:
    """Tests for environment-driven settings"""

    def test_fields(self):
        """Only settings the app reads are declared"""
        from c_audit.web_api.config import Settings

        assert set(Settings.__dataclass_fields__) == {
            "HOST", "PORT", "DEBUG", "CORS_ORIGINS",
            "MAX_SOURCE_BYTES", "MAX_DIAGNOSTICS",
        }

    def test_env_override(self, monkeypatch):
        """C_AUDIT_ prefixed variables override defaults"""
        from c_audit.web_api.config import Settings

        monkeypatch.setenv("C_AUDIT_MAX_SOURCE_BYTES", "42")
        monkeypatch.setenv("C_AUDIT_CORS_ORIGINS", "http://a,http://b")
        s = Settings()
        assert s.MAX_SOURCE_BYTES == 42
        assert s.CORS_ORIGINS == ["http://a", "http://b"]
