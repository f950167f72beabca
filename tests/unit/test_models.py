"""
Unit tests for DelayGuard data models.

Covers the lenient metrics validation policy (clamping and coercion), the
hard rejection of unknown production items, and the output models.
"""

import math

import pytest
from pydantic import ValidationError

from delayguard.models.enums import EfficiencyBand, RiskLevel
from delayguard.models.metrics import (
    InvalidSelectionError,
    ProductionMetrics,
    efficiency_band,
    validate_metrics,
)
from delayguard.models.risk import PREDICTION_TEMPLATES, AnalysisNotification, DelayRisk
from delayguard.models.stats import DEFAULT_STATS, StatsSnapshot
from tests.conftest import make_metrics


# ============================================================================
# validate_metrics
# ============================================================================


class TestValidateMetricsClamping:
    """Out-of-range numbers are clamped, never rejected."""

    def test_validate_clamps_percentage_above_100(self):
        metrics = validate_metrics({"raw_material_availability": 140})
        assert metrics.raw_material_availability == 100.0

    def test_validate_clamps_percentage_below_0(self):
        metrics = validate_metrics({"supplier_reliability": -12.5})
        assert metrics.supplier_reliability == 0.0

    @pytest.mark.parametrize(
        "raw_value,expected",
        [(0, 1), (-3, 1), (1, 1), (7, 7), (10, 10), (11, 10), (250, 10)],
    )
    def test_validate_clamps_complexity(self, raw_value, expected):
        metrics = validate_metrics({"order_complexity": raw_value})
        assert metrics.order_complexity == expected

    def test_validate_rounds_fractional_complexity(self):
        assert validate_metrics({"order_complexity": 6.5}).order_complexity == 7
        assert validate_metrics({"order_complexity": 6.4}).order_complexity == 6

    def test_validate_accepts_numeric_strings(self):
        metrics = validate_metrics({"machine_availability": " 42.5 "})
        assert metrics.machine_availability == 42.5

    def test_validate_non_numeric_percentage_falls_back_to_default(self):
        metrics = validate_metrics({"workstation_efficiency": "fast"})
        assert metrics.workstation_efficiency == 80.0

    def test_validate_nan_percentage_falls_back_to_default(self):
        metrics = validate_metrics({"machine_availability": math.nan})
        assert metrics.machine_availability == 90.0

    def test_validate_infinite_percentage_is_clamped(self):
        metrics = validate_metrics({"machine_availability": math.inf})
        assert metrics.machine_availability == 100.0

    def test_validate_percentage_beyond_float_range_is_clamped(self):
        assert validate_metrics({"machineAvailability": 10**400}).machine_availability == 100.0
        assert validate_metrics({"supplier_reliability": -(10**400)}).supplier_reliability == 0.0

    def test_validate_complexity_beyond_float_range_is_clamped(self):
        assert validate_metrics({"order_complexity": 10**400}).order_complexity == 10

    def test_validate_missing_fields_take_defaults(self):
        metrics = validate_metrics({})
        assert metrics == make_metrics()


class TestValidateMetricsQuantity:
    """Quantity is coerced to a non-negative integer, 0 when invalid."""

    @pytest.mark.parametrize(
        "raw_value,expected",
        [
            (250, 250),
            ("42", 42),
            (12.9, 12),
            ("abc", 0),
            ("", 0),
            (None, 0),
            (-5, 0),
            (math.nan, 0),
            (math.inf, 0),
            (True, 0),
        ],
    )
    def test_validate_coerces_quantity(self, raw_value, expected):
        assert validate_metrics({"quantity": raw_value}).quantity == expected

    def test_validate_keeps_integer_beyond_float_range(self):
        assert validate_metrics({"quantity": 10**400}).quantity == 10**400

    def test_validate_negative_integer_beyond_float_range_is_zero(self):
        assert validate_metrics({"quantity": -(10**400)}).quantity == 0


class TestValidateMetricsSelection:
    """Unknown production items are a hard error."""

    @pytest.mark.parametrize(
        "item",
        ["Standard Widget", "Premium Gadget", "Smart Device", "Industrial Component", "Custom Assembly"],
    )
    def test_validate_accepts_catalog_items(self, item):
        assert validate_metrics({"production_item": item}).production_item == item

    def test_validate_rejects_unknown_item(self):
        with pytest.raises(InvalidSelectionError) as exc_info:
            validate_metrics({"production_item": "Flux Capacitor"})
        assert exc_info.value.production_item == "Flux Capacitor"
        assert "Standard Widget" in exc_info.value.catalog

    def test_validate_item_match_is_exact(self):
        with pytest.raises(InvalidSelectionError):
            validate_metrics({"production_item": "standard widget"})

    def test_validate_conflicting_item_keys_store_the_checked_item(self):
        metrics = validate_metrics({"production_item": "Bogus", "productionItem": "Smart Device"})
        assert metrics.production_item == "Smart Device"
        assert validate_metrics(metrics) == metrics

    def test_validate_conflicting_item_keys_alias_wins(self):
        with pytest.raises(InvalidSelectionError) as exc_info:
            validate_metrics({"production_item": "Smart Device", "productionItem": "Bogus"})
        assert exc_info.value.production_item == "Bogus"

    @pytest.mark.parametrize("item", [None, 3, ["Smart Device"]])
    def test_validate_rejects_non_string_item(self, item):
        with pytest.raises(InvalidSelectionError):
            validate_metrics({"productionItem": item})

    def test_validate_uses_explicit_catalog(self):
        metrics = validate_metrics({"production_item": "Gearbox"}, catalog=["Gearbox"])
        assert metrics.production_item == "Gearbox"

    def test_validate_uses_configured_catalog(self, monkeypatch):
        from delayguard.config import get_settings

        monkeypatch.setenv("PRODUCTION_ITEM_CATALOG", "Gearbox, Axle")
        get_settings.cache_clear()
        assert validate_metrics({"production_item": "Axle"}).production_item == "Axle"
        with pytest.raises(InvalidSelectionError):
            validate_metrics({"production_item": "Smart Device"})


class TestValidateMetricsInputShapes:
    def test_validate_accepts_camel_case_aliases(self):
        metrics = validate_metrics(
            {
                "rawMaterialAvailability": 60,
                "machineAvailability": 70,
                "shiftCapacityUtilization": 80,
                "workstationEfficiency": 90,
                "orderComplexity": 3,
                "supplierReliability": 50,
                "quantity": 10,
                "productionItem": "Smart Device",
            }
        )
        assert metrics.raw_material_availability == 60
        assert metrics.order_complexity == 3
        assert metrics.production_item == "Smart Device"

    def test_validate_accepts_existing_metrics(self):
        metrics = make_metrics(machine_availability=55)
        assert validate_metrics(metrics) == metrics

    def test_validate_is_idempotent(self):
        once = validate_metrics({"raw_material_availability": 300, "quantity": "x", "order_complexity": 0})
        assert validate_metrics(once) == once


# ============================================================================
# ProductionMetrics
# ============================================================================


class TestProductionMetrics:
    def test_metrics_are_frozen(self):
        metrics = make_metrics()
        with pytest.raises(ValidationError):
            metrics.machine_availability = 10

    def test_metrics_direct_construction_also_clamps(self):
        metrics = ProductionMetrics(raw_material_availability=105, order_complexity=42)
        assert metrics.raw_material_availability == 100.0
        assert metrics.order_complexity == 10

    def test_readiness_bands_cover_percentage_fields(self):
        bands = make_metrics(machine_availability=65, supplier_reliability=20).readiness_bands()
        assert set(bands) == {
            "raw_material_availability",
            "machine_availability",
            "shift_capacity_utilization",
            "workstation_efficiency",
            "supplier_reliability",
        }
        assert bands["raw_material_availability"] == EfficiencyBand.HIGH
        assert bands["machine_availability"] == EfficiencyBand.MEDIUM
        assert bands["supplier_reliability"] == EfficiencyBand.LOW

    @pytest.mark.parametrize(
        "value,expected",
        [
            (100, EfficiencyBand.HIGH),
            (80, EfficiencyBand.HIGH),
            (79.99, EfficiencyBand.MEDIUM),
            (60, EfficiencyBand.MEDIUM),
            (59.99, EfficiencyBand.LOW),
            (0, EfficiencyBand.LOW),
        ],
    )
    def test_efficiency_band_thresholds(self, value, expected):
        assert efficiency_band(value) == expected


# ============================================================================
# Output models
# ============================================================================


class TestDelayRisk:
    def test_delay_risk_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            DelayRisk(risk=101, level=RiskLevel.HIGH, prediction="x")

    def test_prediction_templates_cover_every_level(self):
        assert set(PREDICTION_TEMPLATES) == set(RiskLevel)


class TestAnalysisNotification:
    def test_notification_for_high_risk_is_urgent(self):
        result = DelayRisk(risk=72, level=RiskLevel.HIGH, prediction=PREDICTION_TEMPLATES[RiskLevel.HIGH])
        notification = AnalysisNotification.for_result(3, result)
        assert notification.urgent is True
        assert notification.title == "Analysis Complete"
        assert notification.description == "Delay risk: 72% (high)"
        assert notification.request_id == 3

    @pytest.mark.parametrize("level", [RiskLevel.LOW, RiskLevel.MEDIUM])
    def test_notification_below_high_is_not_urgent(self, level):
        result = DelayRisk(risk=30, level=level, prediction=PREDICTION_TEMPLATES[level])
        assert AnalysisNotification.for_result(1, result).urgent is False


class TestStatsSnapshot:
    def test_default_stats_values(self):
        assert DEFAULT_STATS.model_accuracy == 89
        assert DEFAULT_STATS.predictions_made == 1547
        assert DEFAULT_STATS.delays_prevented == 234
        assert DEFAULT_STATS.efficiency_gain == 15.8

    def test_record_prediction_returns_new_snapshot(self):
        updated = DEFAULT_STATS.record_prediction()
        assert updated.predictions_made == 1548
        assert updated.delays_prevented == 234
        assert DEFAULT_STATS.predictions_made == 1547

    def test_record_prediction_leaves_other_counters_unchanged(self):
        updated = StatsSnapshot().record_prediction().record_prediction()
        assert updated.predictions_made == 1549
        assert updated.delays_prevented == 234
        assert updated.model_accuracy == 89
        assert updated.efficiency_gain == 15.8
