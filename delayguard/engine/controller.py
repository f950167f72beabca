"""
Analysis Controller — single-flight lifecycle for delay-risk estimates.

Accepts one analysis request at a time, waits out the simulated processing
delay on a non-blocking timer, computes the estimate and publishes it to
listeners. Requests arriving while an analysis is pending are ignored.
"""

import itertools
import threading
from typing import Callable, Optional

import structlog

from delayguard.config import Settings, get_settings
from delayguard.engine.estimator import RandomSource, RiskEstimator, make_rng
from delayguard.engine.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from delayguard.models.enums import AnalysisState
from delayguard.models.metrics import ProductionMetrics
from delayguard.models.risk import AnalysisNotification, DelayRisk

logger = structlog.get_logger()

CompletionListener = Callable[[AnalysisNotification], None]


class AnalysisHandle:
    """Handle to one scheduled analysis request."""

    def __init__(self, controller: "AnalysisController", request_id: int, timer: TimerHandle):
        self._controller = controller
        self.request_id = request_id
        self.timer = timer

    def cancel(self) -> bool:
        """Cancel this request if it is still pending. Returns True if cancelled."""
        return self._controller._cancel_request(self.request_id)

    def cancelled(self) -> bool:
        return self.timer.cancelled()


class AnalysisController:
    """
    Orchestrates delay-risk analyses.

    State machine: IDLE -> ANALYZING on request, ANALYZING -> IDLE on
    completion or cancellation. The stored result and the state are mutated
    only here and guarded by a lock so a multi-threaded host can share the
    controller.

    Attributes:
        estimator: Risk estimator invoked on completion
        scheduler: Timer source for the simulated delay
        rng: Random source passed to the estimator
        delay_seconds: Simulated processing delay

    Example:
        >>> controller = AnalysisController(scheduler=ManualScheduler())
        >>> controller.on_analysis_complete(lambda n: print(n.description))
        >>> controller.request_analysis(metrics)
        >>> controller.scheduler.advance(controller.delay_seconds)
    """

    def __init__(
        self,
        estimator: Optional[RiskEstimator] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[RandomSource] = None,
        delay_seconds: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.estimator = estimator or RiskEstimator.from_settings(settings)
        self.scheduler = scheduler or AsyncioScheduler()
        self.rng = rng or make_rng(settings.rng_seed)
        self.delay_seconds = (
            settings.simulated_delay_seconds if delay_seconds is None else delay_seconds
        )
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be non-negative, got {self.delay_seconds}")

        self._lock = threading.Lock()
        self._state = AnalysisState.IDLE
        self._result: Optional[DelayRisk] = None
        self._pending_id: Optional[int] = None
        self._pending_timer: Optional[TimerHandle] = None
        self._request_ids = itertools.count(1)
        self._listeners: list[CompletionListener] = []
        self.logger = structlog.get_logger()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def is_busy(self) -> bool:
        """True while an analysis is pending."""
        return self._state == AnalysisState.ANALYZING

    def current_result(self) -> Optional[DelayRisk]:
        """Most recently completed estimate, or None if none has completed."""
        return self._result

    def on_analysis_complete(self, listener: CompletionListener) -> Callable[[], None]:
        """
        Subscribe to completion notifications.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def request_analysis(self, metrics: ProductionMetrics) -> Optional[AnalysisHandle]:
        """
        Start an analysis unless one is already pending.

        Args:
            metrics: Validated production metrics

        Returns:
            Handle for the scheduled request, or None if ignored because busy
        """
        with self._lock:
            if self._state == AnalysisState.ANALYZING:
                self.logger.info("analysis_request_ignored", pending_request_id=self._pending_id)
                return None

            request_id = next(self._request_ids)
            timer = self.scheduler.call_later(
                self.delay_seconds, lambda: self._complete(request_id, metrics)
            )
            self._state = AnalysisState.ANALYZING
            self._pending_id = request_id
            self._pending_timer = timer

        self.logger.info(
            "analysis_requested",
            request_id=request_id,
            production_item=metrics.production_item,
            quantity=metrics.quantity,
            delay_seconds=self.delay_seconds,
        )
        return AnalysisHandle(self, request_id, timer)

    def cancel(self) -> bool:
        """
        Cancel the pending analysis, if any.

        The stored result is left untouched and no notification is emitted.

        Returns:
            True if a pending analysis was cancelled
        """
        with self._lock:
            if self._pending_id is None:
                return False
            return self._cancel_locked()

    def _cancel_request(self, request_id: int) -> bool:
        with self._lock:
            if self._pending_id != request_id:
                return False
            return self._cancel_locked()

    def _cancel_locked(self) -> bool:
        request_id = self._pending_id
        if self._pending_timer is not None:
            self._pending_timer.cancel()
        self._reset_pending()
        self.logger.info("analysis_cancelled", request_id=request_id)
        return True

    def _reset_pending(self) -> None:
        self._state = AnalysisState.IDLE
        self._pending_id = None
        self._pending_timer = None

    def _complete(self, request_id: int, metrics: ProductionMetrics) -> None:
        with self._lock:
            if self._pending_id != request_id:
                # Superseded or cancelled after the timer already fired
                self.logger.debug("stale_completion_discarded", request_id=request_id)
                return
            try:
                result = self.estimator.estimate(metrics, self.rng)
                self._result = result
            finally:
                self._reset_pending()
            listeners = list(self._listeners)

        notification = AnalysisNotification.for_result(request_id, result)
        self.logger.info(
            "analysis_completed",
            request_id=request_id,
            risk=result.risk,
            level=result.level.value,
            urgent=notification.urgent,
        )

        for listener in listeners:
            try:
                listener(notification)
            except Exception as e:
                self.logger.warning(
                    "analysis_listener_failed",
                    request_id=request_id,
                    error=str(e),
                )
