"""
Production metrics input model.

This module defines the readiness metrics a caller supplies for one delay-risk
analysis, together with the lenient validation policy: out-of-range numbers are
clamped or coerced (soft errors, recovered locally), while an unknown
production item is rejected (hard error surfaced to the caller).
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from delayguard.config import DEFAULT_PRODUCTION_ITEMS, get_settings
from delayguard.models.enums import EfficiencyBand
from delayguard.utils.numeric import clamp, coerce_number, round_half_up

logger = structlog.get_logger()

PERCENT_FIELDS = (
    "raw_material_availability",
    "machine_availability",
    "shift_capacity_utilization",
    "workstation_efficiency",
    "supplier_reliability",
)

HIGH_EFFICIENCY_THRESHOLD = 80.0
MEDIUM_EFFICIENCY_THRESHOLD = 60.0


class InvalidSelectionError(Exception):
    """Raised when a production item is not part of the configured catalog."""

    def __init__(self, production_item: Any, catalog: Iterable[str]):
        self.production_item = production_item
        self.catalog = tuple(catalog)
        super().__init__(
            f"Unknown production item {production_item!r}; expected one of {list(self.catalog)}"
        )


class ProductionMetrics(BaseModel):
    """
    Operational readiness metrics for a single production order.

    Accepts both snake_case field names and the camelCase aliases used by the
    presentation layer. Immutable: an edit produces a new instance.

    Attributes:
        raw_material_availability: % of required raw material on hand
        machine_availability: % of machines currently operable
        shift_capacity_utilization: % of shift labor capacity in use
        workstation_efficiency: % efficiency rating of workstations
        order_complexity: Subjective complexity score (1-10)
        supplier_reliability: % reliability rating of suppliers
        quantity: Units ordered (carried for display, not scored)
        production_item: Item identity (carried for display, not scored)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    raw_material_availability: float = Field(
        default=85.0, alias="rawMaterialAvailability", ge=0.0, le=100.0,
        description="% of required raw material on hand",
    )
    machine_availability: float = Field(
        default=90.0, alias="machineAvailability", ge=0.0, le=100.0,
        description="% of machines currently operable",
    )
    shift_capacity_utilization: float = Field(
        default=75.0, alias="shiftCapacityUtilization", ge=0.0, le=100.0,
        description="% of shift labor capacity in use",
    )
    workstation_efficiency: float = Field(
        default=80.0, alias="workstationEfficiency", ge=0.0, le=100.0,
        description="% efficiency rating of workstations",
    )
    order_complexity: int = Field(
        default=5, alias="orderComplexity", ge=1, le=10,
        description="Subjective complexity score",
    )
    supplier_reliability: float = Field(
        default=85.0, alias="supplierReliability", ge=0.0, le=100.0,
        description="% reliability rating of suppliers",
    )
    quantity: int = Field(default=100, ge=0, description="Units ordered")
    production_item: str = Field(
        default=DEFAULT_PRODUCTION_ITEMS[0], alias="productionItem",
        description="Item identity from the production catalog",
    )

    @field_validator(*PERCENT_FIELDS, mode="before")
    @classmethod
    def clamp_percentage(cls, v: Any, info: ValidationInfo) -> float:
        """Clamp percentages into [0, 100]; non-numeric values fall back to the default."""
        number = coerce_number(v)
        if number is None:
            default = cls.model_fields[info.field_name].default
            logger.debug("metric_defaulted", field=info.field_name, value=repr(v), default=default)
            return default
        clamped = clamp(number, 0.0, 100.0)
        if clamped != number:
            logger.debug("metric_clamped", field=info.field_name, value=number, clamped=clamped)
        return clamped

    @field_validator("order_complexity", mode="before")
    @classmethod
    def clamp_complexity(cls, v: Any, info: ValidationInfo) -> int:
        """Clamp complexity into [1, 10] and round to a whole score."""
        number = coerce_number(v)
        if number is None:
            default = cls.model_fields[info.field_name].default
            logger.debug("metric_defaulted", field=info.field_name, value=repr(v), default=default)
            return default
        clamped = round_half_up(clamp(number, 1.0, 10.0))
        if clamped != number:
            logger.debug("metric_clamped", field=info.field_name, value=number, clamped=clamped)
        return clamped

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> int:
        """Coerce quantity to a non-negative integer, 0 when invalid."""
        if isinstance(v, int) and not isinstance(v, bool):
            return max(v, 0)
        if isinstance(v, str):
            try:
                return max(int(v.strip()), 0)
            except ValueError:
                pass
        number = coerce_number(v)
        if number is None or math.isinf(number) or number < 0:
            return 0
        return int(number)

    def readiness_bands(self) -> dict[str, EfficiencyBand]:
        """Classify every percentage metric into its efficiency band."""
        return {name: efficiency_band(getattr(self, name)) for name in PERCENT_FIELDS}


def efficiency_band(value: float) -> EfficiencyBand:
    """Band a percentage metric: >= 80 high, >= 60 medium, otherwise low."""
    if value >= HIGH_EFFICIENCY_THRESHOLD:
        return EfficiencyBand.HIGH
    if value >= MEDIUM_EFFICIENCY_THRESHOLD:
        return EfficiencyBand.MEDIUM
    return EfficiencyBand.LOW


def validate_metrics(
    raw: Union[ProductionMetrics, Mapping[str, Any]],
    catalog: Optional[Iterable[str]] = None,
) -> ProductionMetrics:
    """
    Validate raw input into a ProductionMetrics value.

    Numeric fields are clamped or coerced into their domains; missing fields
    take their defaults. The production item must belong to the catalog.

    Args:
        raw: Mapping with snake_case or camelCase keys, or existing metrics
        catalog: Allowed production items (defaults to the configured catalog)

    Returns:
        Validated, immutable ProductionMetrics

    Raises:
        InvalidSelectionError: production item is not in the catalog
    """
    if isinstance(raw, ProductionMetrics):
        data = raw.model_dump()
    else:
        data = dict(raw)

    allowed = tuple(catalog) if catalog is not None else get_settings().item_catalog
    for key in ("production_item", "productionItem"):
        if key in data and not isinstance(data[key], str):
            logger.warning("production_item_rejected", production_item=repr(data[key]))
            raise InvalidSelectionError(data[key], allowed)

    # Checked on the built model: with both keys present the alias wins
    metrics = ProductionMetrics.model_validate(data)
    if metrics.production_item not in allowed:
        logger.warning("production_item_rejected", production_item=repr(metrics.production_item))
        raise InvalidSelectionError(metrics.production_item, allowed)

    logger.debug("metrics_validated", production_item=metrics.production_item)
    return metrics
