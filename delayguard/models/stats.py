"""
Reporting counters shown alongside predictions.

The engine never reads or writes these; they belong to the surrounding
application. record_prediction lets a reporting collaborator derive an updated
snapshot from a completed analysis if it chooses to subscribe.
"""

from pydantic import BaseModel, ConfigDict, Field


class StatsSnapshot(BaseModel):
    """Read-only system performance counters."""

    model_config = ConfigDict(frozen=True)

    model_accuracy: float = Field(default=89.0, ge=0.0, le=100.0, description="Model accuracy %")
    predictions_made: int = Field(default=1547, ge=0, description="Predictions made to date")
    delays_prevented: int = Field(default=234, ge=0, description="Delays prevented to date")
    efficiency_gain: float = Field(default=15.8, description="Efficiency gain %")

    def record_prediction(self) -> "StatsSnapshot":
        """
        Return a new snapshot counting one more prediction.

        Only predictions_made moves: whether a delay was actually prevented is
        not known when the prediction is made.
        """
        return self.model_copy(update={"predictions_made": self.predictions_made + 1})


DEFAULT_STATS = StatsSnapshot()
