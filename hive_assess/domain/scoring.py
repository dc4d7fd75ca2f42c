"""Score models: per-dimension points, composite score and weighted view."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hive_assess.domain.enums import ColorCode, Grade, PerformanceLevel, Priority


class DimensionScores(BaseModel):
    """Raw points per dimension, each bounded by its declared maximum."""

    queen_score: int = Field(..., ge=0, le=25)
    brood_score: int = Field(..., ge=0, le=25)
    population_score: int = Field(..., ge=0, le=20)
    food_score: int = Field(..., ge=0, le=15)
    health_score: int = Field(..., ge=0, le=15)
    total_score: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class DimensionBreakdown(BaseModel):
    score: int = Field(..., ge=0)
    max_score: int = Field(..., gt=0)
    percentage: float = Field(..., ge=0.0, le=100.0)

    model_config = {"frozen": True}


class Strength(BaseModel):
    dimension: str
    score: int
    percentage: float

    model_config = {"frozen": True}


class ImprovementArea(BaseModel):
    dimension: str
    current_score: int
    max_score: int
    percentage: float
    improvement_potential: int = Field(..., ge=0)
    priority: Priority

    model_config = {"frozen": True}


class ScoreAnalysis(BaseModel):
    """Everything the score calculator derives from one snapshot.

    ``scores`` is None only on the fallback path, where no per-dimension
    computation took place.
    """

    scores: Optional[DimensionScores] = None
    composite_score: int = Field(..., ge=0, le=100)
    weighted_score: int = Field(..., ge=0, le=100)
    grade: Grade
    performance_level: PerformanceLevel
    color_code: ColorCode
    confidence_level: int = Field(..., ge=50, le=100)
    score_breakdown: dict[str, DimensionBreakdown] = Field(default_factory=dict)
    strengths: list[Strength] = Field(default_factory=list)
    improvement_areas: list[ImprovementArea] = Field(default_factory=list)

    model_config = {"frozen": True}
