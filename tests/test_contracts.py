"""Tests for c_audit.contracts.load — bundled schema loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from c_audit.contracts.load import load_schema, validate_file, validate_instance
from c_audit.core.runner import run_lint

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class TestSchema:
    def test_load(self) -> None:
        schema = load_schema("lint_result.schema.json")
        assert schema["properties"]["schema_version"]["const"] == "lint_result_v1"

    def test_unknown(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_schema("missing.schema.json")

    def test_real_result_is_valid(self) -> None:
        result = run_lint([FIXTURES / "c99.c"], validate=False)
        validate_instance(result.to_dict(), "lint_result.schema.json")

    def test_bad_rule_id_rejected(self) -> None:
        data = run_lint([FIXTURES / "c99.c"], validate=False).to_dict()
        data["diagnostics"][0]["rule_id"] = "bad-id"
        with pytest.raises(jsonschema.ValidationError):
            validate_instance(data, "lint_result.schema.json")

    def test_long_excerpt_rejected(self) -> None:
        data = run_lint([FIXTURES / "c99.c"], validate=False).to_dict()
        assert data["diagnostics"]
        data["diagnostics"][0]["excerpt"] = "x" * 121
        with pytest.raises(jsonschema.ValidationError):
            validate_instance(data, "lint_result.schema.json")


class TestValidateFile:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "result.json"
        path.write_text(json.dumps(run_lint([FIXTURES / "clean.c"]).to_dict()), encoding="utf-8")
        validate_file(path, "lint_result.schema.json")

    def test_wrong_schema_version(self, tmp_path: Path) -> None:
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"schema_version": "lint_result_v0"}), encoding="utf-8")
        with pytest.raises(ValueError, match="lint_result_v1"):
            validate_file(path, "lint_result.schema.json")
