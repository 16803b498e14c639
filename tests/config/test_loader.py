"""
Tests for jurisdiction configuration loading.

The shipped ``ph.yaml`` must describe exactly the built-in defaults, and
malformed files must be refused with ``InvalidJurisdictionConfigError``.
"""

import logging
from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from payroll_config import (
    CONFIG_PATH_ENV,
    JURISDICTIONS_DIR,
    JurisdictionConfig,
    get_active_config,
    reset_config_cache,
)
from payroll_config.loader import (
    compute_checksum,
    load_jurisdiction_config,
    load_yaml_file,
    parse_jurisdiction_config,
)
from payroll_kernel.exceptions import ConfigurationError, InvalidJurisdictionConfigError

PH_YAML = JURISDICTIONS_DIR / "ph.yaml"


def _write_yaml(tmp_path: Path, data: dict, name: str = "custom.yaml") -> Path:
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data))
    return path


def _ph_data() -> dict:
    return load_yaml_file(PH_YAML)


class TestShippedJurisdiction:

    def test_ph_yaml_matches_builtin_defaults(self):
        assert load_jurisdiction_config(PH_YAML) == JurisdictionConfig()

    def test_ph_yaml_checksum_matches_defaults(self):
        loaded = load_jurisdiction_config(PH_YAML)
        assert compute_checksum(loaded.to_dict()) == compute_checksum(JurisdictionConfig().to_dict())

    def test_six_brackets(self):
        config = load_jurisdiction_config(PH_YAML)
        brackets = config.statutory.withholding_brackets
        assert len(brackets) == 6
        assert brackets[-1].upper_bound is None
        assert brackets[-1].rate == Decimal("0.35")


class TestParseJurisdictionConfig:

    def test_empty_dict_gives_defaults(self):
        assert parse_jurisdiction_config({}) == JurisdictionConfig()

    def test_partial_override(self):
        config = parse_jurisdiction_config(
            {"statutory": {"minimum_daily_wage": "645"}, "attendance": {"late_grace_minutes": 5}}
        )
        assert config.statutory.minimum_daily_wage == Decimal("645")
        assert config.attendance.late_grace_minutes == 5
        assert config.statutory.sss_cap == Decimal("1350")

    def test_workflow_policy(self):
        config = parse_jurisdiction_config({"workflow": {"forward_only": True}})
        assert config.workflow.forward_only is True

    @pytest.mark.parametrize("raw", ["false", "true", "no", 0, 1, None])
    def test_workflow_flag_must_be_boolean(self, raw):
        with pytest.raises(InvalidJurisdictionConfigError) as exc_info:
            parse_jurisdiction_config({"workflow": {"forward_only": raw}})
        assert "forward_only" in exc_info.value.errors[0]

    def test_quoted_false_in_yaml_file_rejected(self, tmp_path):
        path = tmp_path / "quoted.yaml"
        path.write_text('workflow:\n  forward_only: "false"\n')
        with pytest.raises(InvalidJurisdictionConfigError):
            load_jurisdiction_config(path)

    def test_unquoted_false_in_yaml_file_accepted(self, tmp_path):
        path = tmp_path / "plain.yaml"
        path.write_text("workflow:\n  forward_only: false\n")
        assert load_jurisdiction_config(path).workflow.forward_only is False

    def test_non_numeric_rate_rejected(self):
        with pytest.raises(InvalidJurisdictionConfigError) as exc_info:
            parse_jurisdiction_config({"statutory": {"sss_rate": "five percent"}})
        assert "sss_rate" in exc_info.value.errors[0]

    def test_rate_above_one_rejected(self):
        with pytest.raises(InvalidJurisdictionConfigError):
            parse_jurisdiction_config({"statutory": {"philhealth_rate": "2.5"}})

    def test_unknown_rounding_mode_rejected(self):
        with pytest.raises(InvalidJurisdictionConfigError):
            parse_jurisdiction_config({"rounding_mode": "ROUND_SOMETIMES"})

    def test_bracket_missing_lower_bound_rejected(self):
        data = _ph_data()
        del data["statutory"]["withholding_brackets"][1]["lower_bound"]
        with pytest.raises(InvalidJurisdictionConfigError):
            parse_jurisdiction_config(data)

    def test_non_contiguous_brackets_rejected(self):
        data = _ph_data()
        data["statutory"]["withholding_brackets"][2]["lower_bound"] = "40000"
        with pytest.raises(InvalidJurisdictionConfigError) as exc_info:
            parse_jurisdiction_config(data, source="broken.yaml")
        error = exc_info.value
        assert error.code == "INVALID_JURISDICTION_CONFIG"
        assert error.source == "broken.yaml"
        assert isinstance(error, ConfigurationError)

    def test_rejection_logged(self, caplog):
        with pytest.raises(InvalidJurisdictionConfigError):
            parse_jurisdiction_config({"statutory": {"sss_cap": "-1"}})
        assert any(r.getMessage() == "jurisdiction_config_parse_failed" for r in caplog.records)


class TestGetActiveConfig:

    def test_builtin_by_default(self):
        assert get_active_config() == JurisdictionConfig()

    def test_explicit_path(self, tmp_path):
        path = _write_yaml(tmp_path, {"code": "PH-NCR", "statutory": {"minimum_daily_wage": "645"}})
        config = get_active_config(path)
        assert config.code == "PH-NCR"
        assert config.statutory.minimum_daily_wage == Decimal("645")

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = _write_yaml(tmp_path, {"workflow": {"forward_only": True}})
        monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
        assert get_active_config().workflow.forward_only is True

    def test_loaded_files_are_cached(self, tmp_path):
        path = _write_yaml(tmp_path, {"code": "A"})
        first = get_active_config(path)
        path.write_text(yaml.safe_dump({"code": "B"}))
        assert get_active_config(path) is first
        reset_config_cache()
        assert get_active_config(path).code == "B"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")

    def test_config_trace_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="payroll_kernel.config")
        get_active_config()
        trace = next(r for r in caplog.records if r.getMessage() == "PAYROLL_CONFIG_TRACE")
        assert trace.jurisdiction == "PH"
        assert trace.source == "builtin"
        assert len(trace.checksum) == 64

    def test_no_trace_above_debug(self, caplog):
        caplog.set_level(logging.INFO, logger="payroll_kernel.config")
        get_active_config()
        assert not any(r.getMessage() == "PAYROLL_CONFIG_TRACE" for r in caplog.records)
