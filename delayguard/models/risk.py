"""
Delay-risk output models.

Pydantic models for the estimate published after each analysis run and the
completion notification handed to the presentation layer.
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import RiskLevel

PREDICTION_TEMPLATES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "Production on track - minimal delay risk detected",
    RiskLevel.MEDIUM: "Moderate delay risk - monitor key metrics closely",
    RiskLevel.HIGH: "High delay risk - immediate attention required",
}


class DelayRisk(BaseModel):
    """
    Delay-risk estimate for one production order.

    A value recomputed on every analysis run; it replaces the previous
    estimate and carries no identity across runs.

    Attributes:
        risk: Adjusted risk percentage, rounded half-up
        level: Band derived from the unrounded adjusted risk
        prediction: Human-readable explanation for the band
    """

    model_config = ConfigDict(frozen=True)

    risk: int = Field(ge=0, le=100, description="Rounded delay-risk percentage")
    level: RiskLevel = Field(description="Qualitative risk band")
    prediction: str = Field(description="Human-readable explanation keyed by level")


class AnalysisNotification(BaseModel):
    """
    Completion notice emitted by the analysis controller.

    Attributes:
        request_id: Sequence number of the request that produced the result
        result: The freshly computed estimate
        title: Short headline for the presentation layer
        description: One-line summary of risk and band
        urgent: True when the result is high risk
    """

    model_config = ConfigDict(frozen=True)

    request_id: int = Field(ge=1, description="Monotonic request sequence number")
    result: DelayRisk
    title: str = Field(default="Analysis Complete")
    description: str
    urgent: bool = Field(default=False, description="High-risk results are urgent")

    @classmethod
    def for_result(cls, request_id: int, result: DelayRisk) -> "AnalysisNotification":
        return cls(
            request_id=request_id,
            result=result,
            description=f"Delay risk: {result.risk}% ({result.level.value})",
            urgent=result.level == RiskLevel.HIGH,
        )
