"""Forecast models: swarming, production, health trajectory, interventions.

These are projections from fixed rules, not learned estimates.  Every
number here can be traced back to a lookup table or a threshold in
hive_assess.core.forecaster.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from hive_assess.domain.enums import RiskLevel, Season, TrendDirection


# ── Swarming ─────────────────────────────────────────────────────────────────


class ContributingFactor(BaseModel):
    factor: str
    impact: int = Field(..., ge=0)
    description: str

    model_config = {"frozen": True}


class SwarmingForecast(BaseModel):
    probability_percentage: int = Field(..., ge=0, le=100)
    risk_level: RiskLevel
    contributing_factors: list[ContributingFactor] = Field(default_factory=list)
    estimated_timeframe: str
    prevention_measures: list[str] = Field(default_factory=list)
    monitoring_cadence: str
    confidence_level: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


# ── Production ───────────────────────────────────────────────────────────────


class ProductionFactor(BaseModel):
    factor: str
    multiplier: float = Field(..., ge=0.0)
    impact_percent: float
    has_data: bool

    model_config = {"frozen": True}


class SeasonProjection(BaseModel):
    season: Season
    expected_kg: float = Field(..., ge=0.0)

    model_config = {"frozen": True}


class HarvestProjection(BaseModel):
    expected_date: date
    expected_kg: float = Field(..., ge=0.0)

    model_config = {"frozen": True}


class AnnualProjection(BaseModel):
    base_kg: float = Field(..., ge=0.0)
    expected_kg: float = Field(..., ge=0.0)
    change_percent: float

    model_config = {"frozen": True}


class ConfidenceInterval(BaseModel):
    lower_kg: float = Field(..., ge=0.0)
    upper_kg: float = Field(..., ge=0.0)
    margin_percent: float = Field(..., ge=0.0)

    model_config = {"frozen": True}


class ProductionForecast(BaseModel):
    hive_type: str
    current_season: SeasonProjection
    next_harvest: HarvestProjection
    annual_projection: AnnualProjection
    factors_analysis: list[ProductionFactor] = Field(default_factory=list)
    confidence_interval: ConfidenceInterval

    model_config = {"frozen": True}


# ── Health trajectory ────────────────────────────────────────────────────────


class HealthProjection(BaseModel):
    horizon_days: int = Field(..., gt=0)
    projected_score: int = Field(..., ge=0, le=100)
    outlook: TrendDirection

    model_config = {"frozen": True}


class CriticalThreshold(BaseModel):
    threshold: int
    label: str
    breached_in: Optional[str] = Field(
        default=None,
        description="'current', 'short_term', 'medium_term' or None if not breached",
    )

    model_config = {"frozen": True}


class InterventionPoint(BaseModel):
    timing: str
    reason: str

    model_config = {"frozen": True}


class HealthTrajectory(BaseModel):
    current_state: str
    current_score: int = Field(..., ge=0, le=100)
    risk_factors: list[str] = Field(default_factory=list)
    short_term_forecast: HealthProjection
    medium_term_forecast: HealthProjection
    critical_thresholds: list[CriticalThreshold] = Field(default_factory=list)
    intervention_points: list[InterventionPoint] = Field(default_factory=list)

    model_config = {"frozen": True}


# ── Intervention timing ──────────────────────────────────────────────────────


class Intervention(BaseModel):
    type: str
    recommended: bool
    priority: int = Field(..., ge=1, description="Lower number = more urgent")
    window: str
    reason: str = ""
    resources: dict[str, int] = Field(default_factory=dict)

    model_config = {"frozen": True}


class InterventionPlan(BaseModel):
    recommended_interventions: list[Intervention] = Field(default_factory=list)
    resource_requirements: dict[str, int] = Field(default_factory=dict)

    model_config = {"frozen": True}


class Predictions(BaseModel):
    swarming: SwarmingForecast
    production: ProductionForecast
    health_trajectory: HealthTrajectory
    intervention_timing: InterventionPlan

    model_config = {"frozen": True}
