"""Tests for c_audit.core.config — modes, limits and YAML loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from c_audit.core.config import (
    DEFAULT_LINE_LENGTH_LIMIT,
    LintConfig,
    ValidationModes,
    resolve_modes,
)
from c_audit.model import ValidationMode


def _resolve(*names: str) -> tuple[ValidationModes, list[str]]:
    modes, notices = resolve_modes(ValidationModes.from_names(names))
    return modes, [n.message for n in notices]


# ── ValidationModes ─────────────────────────────────────────────────


class TestValidationModes:
    def test_from_names_case_insensitive(self) -> None:
        modes = ValidationModes.from_names(["AMIGA", "c99"])
        assert modes.amiga and modes.c99
        assert not modes.c89

    def test_from_names_accepts_enum_and_generator(self) -> None:
        modes = ValidationModes.from_names(m for m in (ValidationMode.DICE,))
        assert modes.enabled() == [ValidationMode.DICE]

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown validation mode"):
            ValidationModes.from_names(["c11"])

    def test_describe(self) -> None:
        assert ValidationModes().describe() == "None (basic style checking only)"
        modes = ValidationModes.from_names(["sasc", "amiga"])
        assert modes.describe() == "Amiga, SAS/C"


# ── resolve_modes ───────────────────────────────────────────────────


class TestResolveModes:
    """Dependencies between modes are applied in a fixed order."""

    def test_default_is_c89(self) -> None:
        modes, notices = _resolve()
        assert modes.enabled() == [ValidationMode.C89]
        assert notices == []

    def test_c99_alone_disables_default(self) -> None:
        modes, _ = _resolve("c99")
        assert modes.enabled() == [ValidationMode.C99]

    def test_sasc_overrides_c99(self) -> None:
        modes, notices = _resolve("sasc", "c99")
        assert modes.c89 and not modes.c99
        assert notices == ["SAS/C mode overrides C99 mode (SAS/C is C89-only)"]

    def test_vbcc_overrides_c89(self) -> None:
        modes, notices = _resolve("vbcc", "c89")
        assert modes.c99 and not modes.c89
        assert notices == ["VBCC mode overrides C89 mode (VBCC supports C99)"]

    def test_vbcc_alone_is_c99_without_notice(self) -> None:
        modes, notices = _resolve("vbcc")
        assert modes.c99 and not modes.c89
        assert notices == []

    def test_vbcc_wins_over_sasc_standard(self) -> None:
        modes, notices = _resolve("sasc", "vbcc")
        assert modes.c99 and not modes.c89
        assert "VBCC mode overrides C89 mode (VBCC supports C99)" in notices

    def test_amiga_implies_ndk(self) -> None:
        modes, notices = _resolve("amiga")
        assert modes.ndk and modes.c89
        assert notices == ["Amiga mode enables NDK validation"]

    def test_dice_implies_c89_and_ndk(self) -> None:
        modes, notices = _resolve("dice")
        assert modes.c89 and modes.ndk
        assert notices == [
            "DICE mode enables C89 validation",
            "DICE mode enables NDK validation",
        ]

    def test_memsafe_implies_c89(self) -> None:
        modes, notices = _resolve("memsafe")
        assert modes.c89
        assert notices == ["MEMSAFE mode enables C89 validation"]

    def test_notices_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="c_audit.core.config"):
            _resolve("sasc", "c99")
        assert any("SAS/C mode overrides" in r.getMessage() for r in caplog.records)

    def test_quiet_suppresses_notice_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="c_audit.core.config"):
            _, notices = resolve_modes(
                ValidationModes.from_names(["sasc", "c99"]), quiet=True
            )
        assert [n.message for n in notices] == [
            "SAS/C mode overrides C99 mode (SAS/C is C89-only)"
        ]
        assert not [r for r in caplog.records if "SAS/C mode" in r.getMessage()]


# ── LintConfig ──────────────────────────────────────────────────────


class TestLintConfig:
    def test_defaults(self) -> None:
        cfg = LintConfig()
        assert cfg.line_length_limit == DEFAULT_LINE_LENGTH_LIMIT
        assert cfg.max_diagnostics == 1000
        assert (cfg.enter_call, cfg.leave_call) == ("Forbid", "Permit")

    @pytest.mark.parametrize(
        "field, value",
        [
            ("line_length_limit", 0),
            ("max_diagnostics", -1),
            ("max_block_depth", 0),
            ("max_pair_distance", -1),
            ("enter_call", ""),
        ],
    )
    def test_invalid_values_rejected(self, field: str, value) -> None:
        with pytest.raises(ValueError):
            LintConfig(**{field: value})

    def test_with_modes_merges(self) -> None:
        cfg = LintConfig(modes=ValidationModes(amiga=True))
        merged = cfg.with_modes(ValidationModes(memsafe=True))
        assert merged.modes.amiga and merged.modes.memsafe

    def test_to_dict(self) -> None:
        data = LintConfig(modes=ValidationModes(c99=True)).to_dict()
        assert data["modes"] == ["c99"]
        assert data["line_length_limit"] == DEFAULT_LINE_LENGTH_LIMIT
        assert "quiet" not in data


class TestFromMapping:
    def test_basic(self) -> None:
        cfg = LintConfig.from_mapping(
            {"modes": ["amiga", "memsafe"], "line_length_limit": 100, "quiet": 1}
        )
        assert cfg.modes.amiga and cfg.modes.memsafe
        assert cfg.line_length_limit == 100
        assert cfg.quiet is True

    def test_single_mode_string(self) -> None:
        assert LintConfig.from_mapping({"modes": "c99"}).modes.c99

    def test_unknown_key_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="c_audit.core.config"):
            cfg = LintConfig.from_mapping({"colour": "blue"})
        assert cfg == LintConfig()
        assert any("colour" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize(
        "data",
        [
            {"line_length_limit": "80"},
            {"max_diagnostics": True},
            {"enter_call": 5},
            {"modes": 3},
            {"modes": ["bogus"]},
        ],
    )
    def test_bad_types_rejected(self, data: dict) -> None:
        with pytest.raises(ValueError):
            LintConfig.from_mapping(data)


class TestYamlLoading:
    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text(
            "modes: [vbcc]\nline_length_limit: 120\nenter_call: Disable\n"
            "leave_call: Enable\n",
            encoding="utf-8",
        )
        cfg = LintConfig.from_yaml(path)
        assert cfg.modes.vbcc
        assert cfg.line_length_limit == 120
        assert (cfg.enter_call, cfg.leave_call) == ("Disable", "Enable")

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("", encoding="utf-8")
        assert LintConfig.from_yaml(path) == LintConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("modes: [amiga\n", encoding="utf-8")
        with pytest.raises(ValueError, match="invalid YAML"):
            LintConfig.from_yaml(path)

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("- amiga\n- c99\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            LintConfig.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            LintConfig.from_yaml(tmp_path / "absent.yaml")

    def test_discover(self, tmp_path: Path) -> None:
        (tmp_path / ".c_audit.yaml").write_text("modes: [memsafe]\n", encoding="utf-8")
        assert LintConfig.discover(tmp_path).modes.memsafe

    def test_discover_without_file(self, tmp_path: Path) -> None:
        assert LintConfig.discover(tmp_path) == LintConfig()
