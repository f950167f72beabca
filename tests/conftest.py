"""
Pytest configuration and shared fixtures for the DelayGuard test suite.

Provides metric factories, pinned random sources and a controller wired to a
virtual-clock scheduler so lifecycle tests never wait on real time.
"""

import os

import pytest

# Pin configuration BEFORE importing the package so cached settings are predictable
os.environ["SIMULATED_DELAY_MS"] = "2000"
os.environ["RNG_SEED"] = "42"

from delayguard.config import get_settings
from delayguard.engine.controller import AnalysisController
from delayguard.engine.estimator import RiskEstimator
from delayguard.engine.scheduler import ManualScheduler
from delayguard.models.metrics import ProductionMetrics


def make_metrics(
    raw_material_availability: float = 85,
    machine_availability: float = 90,
    shift_capacity_utilization: float = 75,
    workstation_efficiency: float = 80,
    order_complexity: int = 5,
    supplier_reliability: float = 85,
    **overrides,
) -> ProductionMetrics:
    """Factory function for creating test ProductionMetrics objects."""
    defaults = dict(
        raw_material_availability=raw_material_availability,
        machine_availability=machine_availability,
        shift_capacity_utilization=shift_capacity_utilization,
        workstation_efficiency=workstation_efficiency,
        order_complexity=order_complexity,
        supplier_reliability=supplier_reliability,
        quantity=100,
        production_item="Standard Widget",
    )
    defaults.update(overrides)
    return ProductionMetrics(**defaults)


def fixed_rng(value: float):
    """Random source that always returns value (0.5 means zero jitter)."""
    return lambda: value


ZERO_JITTER = 0.5
MAX_JITTER = 1.0


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def estimator() -> RiskEstimator:
    return RiskEstimator()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> AnalysisController:
    return AnalysisController(scheduler=scheduler, rng=fixed_rng(ZERO_JITTER), delay_seconds=2.0)


@pytest.fixture
def notifications(controller: AnalysisController) -> list:
    received = []
    controller.on_analysis_complete(received.append)
    return received
