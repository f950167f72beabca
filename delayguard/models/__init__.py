"""
Pydantic v2 data models for the delay-risk engine.

Model Organization:
    - enums: Enumeration types for bands and controller state
    - metrics: Production metrics input and its validation policy
    - risk: Delay-risk estimate and completion notification
    - stats: Static reporting counters

Usage:
    >>> from delayguard.models import validate_metrics
    >>> metrics = validate_metrics({"rawMaterialAvailability": 120, "productionItem": "Smart Device"})
    >>> metrics.raw_material_availability
    100.0
"""

from .enums import AnalysisState, EfficiencyBand, RiskLevel
from .metrics import (
    InvalidSelectionError,
    ProductionMetrics,
    efficiency_band,
    validate_metrics,
)
from .risk import PREDICTION_TEMPLATES, AnalysisNotification, DelayRisk
from .stats import DEFAULT_STATS, StatsSnapshot

__all__ = [
    # Enumerations
    "AnalysisState",
    "EfficiencyBand",
    "RiskLevel",
    # Metrics
    "InvalidSelectionError",
    "ProductionMetrics",
    "efficiency_band",
    "validate_metrics",
    # Risk
    "PREDICTION_TEMPLATES",
    "AnalysisNotification",
    "DelayRisk",
    # Stats
    "DEFAULT_STATS",
    "StatsSnapshot",
]
