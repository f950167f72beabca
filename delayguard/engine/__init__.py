"""
Delay-risk engine.

Components:
    - estimator: Metrics -> DelayRisk scoring formula
    - scheduler: Cancellable timers (asyncio loop or virtual clock)
    - controller: Single-flight analysis lifecycle and completion notifications
"""

from .controller import AnalysisController, AnalysisHandle
from .estimator import RiskEstimator, classify_risk, compute_risk_factors, make_rng
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "AnalysisController",
    "AnalysisHandle",
    "RiskEstimator",
    "classify_risk",
    "compute_risk_factors",
    "make_rng",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
]
