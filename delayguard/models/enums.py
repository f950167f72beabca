"""
Enumeration types for the delay-risk engine.

All enums inherit from str to ensure JSON serialization compatibility.
"""

from enum import Enum


class RiskLevel(str, Enum):
    """
    Qualitative delay-risk band derived from the adjusted risk percentage.

    Determines the prediction template and whether a completed analysis is
    surfaced as urgent.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EfficiencyBand(str, Enum):
    """Readiness band of a single percentage metric."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnalysisState(str, Enum):
    """
    Lifecycle state of the analysis controller.

    The controller starts IDLE, moves to ANALYZING while a request is pending
    and returns to IDLE on completion or cancellation.
    """

    IDLE = "idle"
    ANALYZING = "analyzing"
