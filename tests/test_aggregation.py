"""Tests for per-asset compliance lookups and repartition."""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from cbom_compliance import aggregation
from cbom_compliance.errors import ConsistencyWarning
from cbom_compliance.models import (
    AssessmentLevel,
    ComplianceCheckResult,
    ComplianceIcon,
    ComplianceLevel,
    Finding,
)
from cbom_compliance.validation import parse_result


def _level(level_id, label, color="#000", icon=ComplianceIcon.WARNING, description=None):
    return ComplianceLevel(
        id=level_id, label=label, color_hex=color, icon=icon, description=description
    )


class TestStateQueries:
    def test_loading_without_snapshot(self):
        assert aggregation.is_result_loading(None) is True
        assert aggregation.has_valid_result(None) is False

    def test_loaded_snapshot(self, result):
        assert aggregation.is_result_loading(result) is False
        assert aggregation.has_valid_result(result) is True

    def test_error_snapshot_is_not_valid(self, result):
        failed = replace(result, error=True)
        assert aggregation.is_result_loading(failed) is False
        assert aggregation.has_valid_result(failed) is False
        assert aggregation.available_levels(failed) == ()
        assert aggregation.compliance_service_name(failed) == ""

    def test_non_mapping_assessment_level_is_not_valid(self, result, asset_a):
        broken = replace(result, assessment_level=None)
        assert aggregation.is_result_loading(broken) is False
        assert aggregation.has_valid_result(broken) is False
        assert aggregation.available_levels(broken) == ()
        assert aggregation.level_for_asset(broken, asset_a) is False
        assert aggregation.repartition(broken, [asset_a]) == {}

    def test_available_levels(self, result):
        assert [level.id for level in aggregation.available_levels(result)] == [1, 2]
        assert aggregation.available_levels(None) == ()

    def test_available_assessment_levels(self, result):
        assert aggregation.available_assessment_levels(result) == ()
        with_levels = replace(result, assessment_levels=(AssessmentLevel(1, "Low"),))
        assert aggregation.available_assessment_levels(with_levels) == (AssessmentLevel(1, "Low"),)

    def test_local_service(self, result):
        assert aggregation.is_using_local_compliance_service(result, "S") is True
        assert aggregation.is_using_local_compliance_service(result, "Remote") is False


class TestFindingsForAsset:
    def test_matches_by_bom_ref(self, result, asset_a, asset_b):
        assert aggregation.findings_for_asset(result, asset_a) == [Finding("a", 1)]
        assert aggregation.findings_for_asset(result, asset_b) == []

    @pytest.mark.parametrize("asset", [None, {}, {"bom-ref": 5}])
    def test_missing_asset_or_ref(self, result, asset):
        assert aggregation.findings_for_asset(result, asset) == []

    def test_missing_result(self, asset_a):
        assert aggregation.findings_for_asset(None, asset_a) == []

    def test_findings_with_message(self, document, asset_a):
        document["findings"] = [
            {"bomRef": "a", "levelId": 1, "message": "weak key"},
            {"bomRef": "a", "levelId": 2, "message": ""},
            {"bomRef": "a", "levelId": 2},
        ]
        result = parse_result(document)
        assert aggregation.findings_with_message(result, asset_a) == [
            Finding("a", 1, "weak key")
        ]
        assert aggregation.findings_with_message(result, None) == []


class TestLevelForAsset:
    def test_single_finding(self, result, asset_a):
        assert aggregation.level_for_asset(result, asset_a) == 1

    def test_default_without_findings(self, result, asset_b):
        assert aggregation.level_for_asset(result, asset_b) == 2

    def test_minimum_of_matching_levels(self, document, asset_a):
        document["findings"].append({"bomRef": "a", "levelId": 2})
        result = parse_result(document)
        assert aggregation.level_for_asset(result, asset_a) == 1

    def test_minimum_independent_of_order(self, document, asset_a):
        document["findings"] = [
            {"bomRef": "a", "levelId": 2},
            {"bomRef": "a", "levelId": 1},
        ]
        result = parse_result(document)
        assert aggregation.level_for_asset(result, asset_a) == 1

    def test_minimum_beats_lower_default(self, document, asset_a):
        document["defaultComplianceLevel"] = 1
        document["findings"] = [{"bomRef": "a", "levelId": 2}]
        result = parse_result(document)
        assert aggregation.level_for_asset(result, asset_a) == 2

    def test_false_without_valid_result(self, result, asset_a):
        assert aggregation.level_for_asset(None, asset_a) is False
        assert aggregation.level_for_asset(replace(result, error=True), asset_a) is False


class TestLevelObject:
    def test_single_match(self, result):
        assert aggregation.level_object(result, 2).label == "Bad"

    def test_no_match_logs(self, result, caplog):
        with caplog.at_level(logging.ERROR, logger="cbom_compliance.aggregation"):
            assert aggregation.level_object(result, 99) is None
        assert "99" in caplog.text

    def test_false_never_matches(self, document):
        document["complianceLevels"][0]["id"] = 0
        document["findings"] = []
        result = parse_result(document)
        assert aggregation.level_object(result, False) is None

    def test_duplicate_ids_return_none(self, result):
        corrupted = replace(
            result,
            compliance_levels=(_level(1, "First"), _level(1, "Second")),
        )
        with pytest.warns(ConsistencyWarning):
            assert aggregation.level_object(corrupted, 1) is None


class TestDisplayLookups:
    def test_color_label_icon(self, result, asset_a, asset_b):
        assert aggregation.color_for_asset(result, asset_a) == "#0f0"
        assert aggregation.label_for_asset(result, asset_b) == "Bad"
        assert aggregation.icon_for_asset(result, asset_a) == "Checkmark24"
        assert aggregation.icon_for_asset(result, asset_b) == "MisuseOutline24"

    def test_fallbacks_without_result(self, asset_a):
        assert aggregation.color_for_asset(None, asset_a) == "#999"
        assert aggregation.label_for_asset(None, asset_a) == "Unknown"
        assert aggregation.icon_for_asset(None, asset_a) == aggregation.DEFAULT_GLYPH
        assert aggregation.description_for_asset(None, asset_a) == "No description"

    def test_fallbacks_for_unknown_default(self, document, asset_b):
        document["defaultComplianceLevel"] = 7
        result = parse_result(document)
        assert aggregation.color_for_asset(result, asset_b) == "#999"
        assert aggregation.label_for_asset(result, asset_b) == "Unknown"

    def test_description_falls_back_to_label(self, document, asset_a, asset_b):
        document["complianceLevels"][0]["description"] = "Quantum safe"
        result = parse_result(document)
        assert aggregation.description_for_asset(result, asset_a) == "Quantum safe"
        assert aggregation.description_for_asset(result, asset_b) == "Bad"

    def test_empty_color_falls_back(self, document, asset_a):
        document["complianceLevels"][0]["colorHex"] = ""
        result = parse_result(document)
        assert aggregation.color_for_asset(result, asset_a) == "#999"


class TestRepartition:
    def test_counts_per_level(self, result, asset_a, asset_b):
        assert aggregation.repartition(result, [asset_a, asset_b]) == {1: 1, 2: 1}

    def test_every_level_initialised(self, result):
        assert aggregation.repartition(result, []) == {1: 0, 2: 0}

    def test_unknown_levels_dropped(self, document, asset_a, asset_b):
        document["defaultComplianceLevel"] = 99
        result = parse_result(document)
        counts = aggregation.repartition(result, [asset_a, asset_b, {"bom-ref": "c"}])
        assert counts == {1: 1, 2: 0}
        assert 99 not in counts
        assert sum(counts.values()) == 1

    def test_no_result(self, asset_a):
        assert aggregation.repartition(None, [asset_a]) == {}

    def test_repeatable(self, result, asset_a, asset_b):
        assets = [asset_a, asset_b, asset_b]
        first = aggregation.repartition(result, assets)
        assert aggregation.repartition(result, assets) == first
        assert aggregation.color_scale(result, assets) == aggregation.color_scale(result, assets)

    def test_accepts_generators(self, result, asset_a, asset_b):
        assets = (asset for asset in [asset_a, asset_b])
        assert aggregation.repartition(result, assets) == {1: 1, 2: 1}


class TestColorScale:
    def test_labels_to_colors(self, result, asset_a):
        assert aggregation.color_scale(result, [asset_a]) == {"OK": "#0f0", "Bad": "#f00"}

    def test_shared_label_last_write_wins(self):
        result = ComplianceCheckResult(
            policy_name="P",
            compliance_service_name="S",
            findings=(),
            compliance_levels=(
                _level(1, "Same", color="#111"),
                _level(2, "Same", color="#222"),
            ),
            default_compliance_level=1,
        )
        assert aggregation.color_scale(result, []) == {"Same": "#222"}

    def test_shared_label_highest_id_wins(self):
        result = ComplianceCheckResult(
            policy_name="P",
            compliance_service_name="S",
            findings=(),
            compliance_levels=(
                _level(2, "Same", color="#222"),
                _level(1, "Same", color="#111"),
            ),
            default_compliance_level=1,
        )
        assert aggregation.color_scale(result, []) == {"Same": "#222"}
