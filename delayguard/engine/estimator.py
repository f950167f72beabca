"""
Delay Risk Estimator for production orders.

This module turns validated production metrics into a delay-risk percentage
and a qualitative band.

The delay-risk formula:
    factors = [100 - raw_material_availability,
               100 - machine_availability,
               100 - shift_capacity_utilization,
               100 - workstation_efficiency,
               order_complexity * 10,
               100 - supplier_reliability]
    base_risk = mean(factors)
    adjusted  = clamp(base_risk + jitter, 0, 100)
    risk      = round_half_up(adjusted)

Jitter is drawn uniformly from [jitter_min, jitter_max) using an injected
random source, so a pinned source yields an exact, reproducible result.

Bands are assigned on the unrounded adjusted risk:
    adjusted <  low_threshold   -> low
    adjusted <  high_threshold  -> medium
    otherwise                   -> high

Version: delay_risk_v1
"""

from typing import Callable, Optional

import numpy as np
import structlog

from delayguard.config import Settings, get_settings
from delayguard.models.enums import RiskLevel
from delayguard.models.metrics import ProductionMetrics
from delayguard.models.risk import PREDICTION_TEMPLATES, DelayRisk
from delayguard.utils.numeric import clamp, round_half_up

logger = structlog.get_logger()

RandomSource = Callable[[], float]

COMPLEXITY_WEIGHT = 10


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """Seedable uniform [0, 1) source backed by a numpy Generator."""
    return np.random.default_rng(seed).random


def compute_risk_factors(metrics: ProductionMetrics) -> list[float]:
    """Six per-metric risk factors, each in [0, 100], higher meaning riskier."""
    return [
        100.0 - metrics.raw_material_availability,
        100.0 - metrics.machine_availability,
        100.0 - metrics.shift_capacity_utilization,
        100.0 - metrics.workstation_efficiency,
        float(metrics.order_complexity * COMPLEXITY_WEIGHT),
        100.0 - metrics.supplier_reliability,
    ]


def classify_risk(
    adjusted_risk: float,
    low_threshold: float = 25.0,
    high_threshold: float = 60.0,
) -> RiskLevel:
    """Band an unrounded adjusted risk with closed-open thresholds."""
    if adjusted_risk < low_threshold:
        return RiskLevel.LOW
    if adjusted_risk < high_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


class RiskEstimator:
    """
    Maps production metrics to a DelayRisk estimate.

    Stateless apart from its configuration; every call is a pure function of
    the metrics and the random source passed in.

    Attributes:
        jitter_min: Lower bound of the uniform jitter
        jitter_max: Upper bound of the uniform jitter
        low_threshold: Adjusted risk below this is low
        high_threshold: Adjusted risk at or above this is high

    Example:
        >>> estimator = RiskEstimator()
        >>> risk = estimator.estimate(metrics, rng=lambda: 0.5)
        >>> print(risk.risk, risk.level)
    """

    def __init__(
        self,
        jitter_min: float = -5.0,
        jitter_max: float = 5.0,
        low_threshold: float = 25.0,
        high_threshold: float = 60.0,
    ):
        """
        Initialize the estimator.

        Raises:
            ValueError: If the jitter range or thresholds are inverted
        """
        if jitter_min > jitter_max:
            raise ValueError(
                f"jitter_min ({jitter_min}) must not exceed jitter_max ({jitter_max})"
            )
        if low_threshold > high_threshold:
            raise ValueError(
                f"low_threshold ({low_threshold}) must not exceed high_threshold ({high_threshold})"
            )

        self.jitter_min = jitter_min
        self.jitter_max = jitter_max
        self.low_threshold = low_threshold
        self.high_threshold = high_threshold

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RiskEstimator":
        settings = settings or get_settings()
        return cls(
            jitter_min=settings.jitter_min,
            jitter_max=settings.jitter_max,
            low_threshold=settings.low_threshold,
            high_threshold=settings.high_threshold,
        )

    def jitter(self, rng: RandomSource) -> float:
        """Map one draw from [0, 1) onto [jitter_min, jitter_max)."""
        return self.jitter_min + rng() * (self.jitter_max - self.jitter_min)

    def adjusted_risk(self, metrics: ProductionMetrics, rng: RandomSource) -> float:
        """Mean risk factor plus jitter, clamped into [0, 100]."""
        base_risk = float(np.mean(compute_risk_factors(metrics)))
        return clamp(base_risk + self.jitter(rng), 0.0, 100.0)

    def estimate(self, metrics: ProductionMetrics, rng: RandomSource) -> DelayRisk:
        """
        Estimate delay risk for one production order.

        Args:
            metrics: Validated production metrics
            rng: Zero-argument callable returning a float in [0, 1)

        Returns:
            DelayRisk with rounded percentage, band and prediction text
        """
        adjusted = self.adjusted_risk(metrics, rng)
        level = classify_risk(adjusted, self.low_threshold, self.high_threshold)
        result = DelayRisk(
            risk=round_half_up(adjusted),
            level=level,
            prediction=PREDICTION_TEMPLATES[level],
        )

        logger.debug(
            "delay_risk_estimated",
            production_item=metrics.production_item,
            adjusted_risk=round(adjusted, 4),
            risk=result.risk,
            level=level.value,
        )
        return result
