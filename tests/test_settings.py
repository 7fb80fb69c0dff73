"""
Tests for settings tables and the YAML settings loader.
"""

import pytest
from pydantic import ValidationError

from cockpit.config import SettingsError, load_settings, load_workload_settings
from cockpit.contracts import GradeCapacity, RoleWeight, Snapshot, StageMultiplier, WorkloadSettings
from cockpit.contracts.settings import RoleCategory
from cockpit.paths import APP_ENV_SETTINGS


class TestLookupTables:
    def test_first_row_wins_on_duplicate_keys(self):
        settings = WorkloadSettings(
            role_weights=[
                RoleWeight(role="EA", weight=1.2, category=RoleCategory.EXECUTION),
                RoleWeight(role="EA", weight=9.9, category=RoleCategory.OVERSIGHT),
            ]
        )
        assert settings.role_for("EA").weight == 1.2

    def test_unknown_grade_uses_zero_capacity_sentinel(self):
        settings = WorkloadSettings(
            grade_capacities=[GradeCapacity(grade="Partner", weekly_points=9.0, max_current=4, max_total=12)]
        )
        fallback = settings.grade_for("Intern")

        assert not settings.has_grade("Intern")
        assert fallback.grade == "Unassigned"
        assert fallback.weekly_points == 0.0
        # never borrows the first configured row
        assert fallback.grade != "Partner"

    def test_custom_fallback_grade(self):
        settings = WorkloadSettings(
            fallback_grade=GradeCapacity(grade="Default", weekly_points=5.0, max_current=3, max_total=5)
        )
        assert settings.grade_for("Anything").weekly_points == 5.0

    def test_camel_case_rows_accepted(self):
        settings = WorkloadSettings.model_validate(
            {"stageMultipliers": [{"lifecycleId": "L-CUR", "multiplier": 1.0, "isCommitted": True}]}
        )
        stage = settings.stage_for("L-CUR")
        assert stage.multiplier == 1.0
        assert stage.is_committed is True

    def test_burnout_rows_become_named_constants(self):
        settings = WorkloadSettings.model_validate(
            {
                "burnoutConfig": [
                    {"key": "amber_threshold", "value": 100, "unit": "score", "notes": ""},
                    {"key": "red_threshold", "value": 120, "unit": "score", "notes": ""},
                ]
            }
        )
        assert settings.burnout_config.amber_threshold == 100
        assert settings.burnout_config.red_threshold == 120
        # untouched constants keep their defaults
        assert settings.burnout_config.penalty_per_extra_current_item == 0.80
        assert settings.burnout_config.fairness_band == 25

    def test_stage_multiplier_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            StageMultiplier(lifecycle_id="L-CUR", multiplier=1.5)


class TestLoadSettings:
    def test_packaged_defaults(self):
        settings = load_settings()
        workload = settings.workload

        assert workload.grade_for("Analyst").weekly_points == 9.0
        assert workload.role_for("EA").weight == 1.2
        assert workload.default_allocation("EA") == 70
        assert workload.stage_for("L-DIS").is_committed is False
        assert workload.complexity_factor(5) == 1.30
        assert workload.burnout_config.amber_threshold == 50
        assert workload.burnout_config.red_threshold == 70
        assert settings.weights.health.impact_weight["High"] == 15
        assert settings.weights.reporting.expected_days("L-CUR") == 7
        assert settings.weights.governance.critical_stages == ["L-CUR", "L-PRO"]

    def test_empty_file_yields_model_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        settings = load_settings(path)

        assert settings.workload.grade_capacities == []
        assert settings.weights.governance.stale_report_days_critical == 7

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("workload:\n  burnoutConfig:\n    redThreshold: 95\n")
        monkeypatch.setenv(APP_ENV_SETTINGS, str(path))

        assert load_workload_settings().burnout_config.red_threshold == 95

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="Cannot read"):
            load_settings(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("workload: [unclosed\n")

        with pytest.raises(SettingsError, match="Malformed"):
            load_settings(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(SettingsError, match="mapping"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("workload:\n  roleWeights:\n    - {role: EA, weight: -1}\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)


class TestStoredRowShapes:
    def test_burnout_row_without_value_rejected(self):
        with pytest.raises(ValidationError):
            WorkloadSettings.model_validate({"burnoutConfig": [{"key": "amber_threshold"}]})

    def test_burnout_row_not_a_mapping_rejected(self):
        with pytest.raises(ValidationError, match="burnout config row"):
            WorkloadSettings.model_validate({"burnoutConfig": ["amber_threshold"]})

    def test_burnout_row_without_value_raises_settings_error(self, tmp_path):
        path = tmp_path / "rows.yaml"
        path.write_text("workload:\n  burnoutConfig:\n    - {key: amber_threshold}\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)

    def test_legacy_stage_rows(self):
        snapshot = Snapshot.model_validate(
            {
                "settings": {
                    "workload": {
                        "stageMultipliers": [
                            {"stage": "Current Engagements", "multiplier": 1.0, "isCommitted": True},
                            {"stage": "Engagements in Discussion", "multiplier": 0.3, "isCommitted": False},
                        ]
                    }
                }
            }
        )
        workload = snapshot.settings.workload

        assert workload.stage_for("Current Engagements").multiplier == 1.0
        assert workload.stage_for("Current Engagements").is_committed is True
        assert workload.stage_for("Engagements in Discussion").is_committed is False

    def test_stage_rows_serialize_with_lifecycle_id(self):
        row = StageMultiplier.model_validate({"stage": "L-CUR", "multiplier": 1.0})
        assert row.model_dump(by_alias=True)["lifecycleId"] == "L-CUR"
