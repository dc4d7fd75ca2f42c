"""ScoreCalculator: fixed point tables turned into a composite hive score.

Point tables (not configurable):

    Queen       (max 25)  present=yes → 15, plus laying=yes 10 / poor 5
                          present=not_seen → 8 flat, no/unknown → 0
    Brood       (max 25)  excellent 25, good 20, fair 15, poor 8, none 0
    Population  (max 20)  very_strong 20, strong 16, moderate 12, weak 6, very_weak 2
    Food        (max 15)  abundant 15, adequate 12, low 6, critical 2, none 0
    Health      (max 15)  15 − min(3·diseases, 10) − min(2·pests, 5), floor 0

Composite = sum of the five (0–100).  Grade bands are inclusive lower
bounds.  A missing answer (None) scores zero in its dimension.
"""

from __future__ import annotations

from hive_assess.domain.enums import (
    BroodPattern,
    ColorCode,
    FoodStores,
    Grade,
    PerformanceLevel,
    PopulationStrength,
    Priority,
    QueenLaying,
    QueenPresence,
)
from hive_assess.domain.scoring import (
    DimensionBreakdown,
    DimensionScores,
    ImprovementArea,
    ScoreAnalysis,
    Strength,
)
from hive_assess.domain.snapshot import REQUIRED_FIELDS, Snapshot

# ── Point tables ─────────────────────────────────────────────────────────────

QUEEN_MAX = 25
BROOD_MAX = 25
POPULATION_MAX = 20
FOOD_MAX = 15
HEALTH_MAX = 15

BROOD_POINTS: dict[BroodPattern, int] = {
    BroodPattern.EXCELLENT: 25,
    BroodPattern.GOOD: 20,
    BroodPattern.FAIR: 15,
    BroodPattern.POOR: 8,
    BroodPattern.NONE: 0,
}

POPULATION_POINTS: dict[PopulationStrength, int] = {
    PopulationStrength.VERY_STRONG: 20,
    PopulationStrength.STRONG: 16,
    PopulationStrength.MODERATE: 12,
    PopulationStrength.WEAK: 6,
    PopulationStrength.VERY_WEAK: 2,
}

FOOD_POINTS: dict[FoodStores, int] = {
    FoodStores.ABUNDANT: 15,
    FoodStores.ADEQUATE: 12,
    FoodStores.LOW: 6,
    FoodStores.CRITICAL: 2,
    FoodStores.NONE: 0,
}

# (inclusive lower bound, grade), highest first
GRADE_BANDS: tuple[tuple[int, Grade], ...] = (
    (90, Grade.A_PLUS),
    (85, Grade.A),
    (80, Grade.B_PLUS),
    (75, Grade.B),
    (70, Grade.C_PLUS),
    (65, Grade.C),
    (60, Grade.D_PLUS),
    (55, Grade.D),
)

PERFORMANCE_BY_GRADE: dict[Grade, PerformanceLevel] = {
    Grade.A_PLUS: PerformanceLevel.EXCELLENT,
    Grade.A: PerformanceLevel.EXCELLENT,
    Grade.B_PLUS: PerformanceLevel.GOOD,
    Grade.B: PerformanceLevel.GOOD,
    Grade.C_PLUS: PerformanceLevel.FAIR,
    Grade.C: PerformanceLevel.FAIR,
    Grade.D_PLUS: PerformanceLevel.POOR,
    Grade.D: PerformanceLevel.POOR,
    Grade.F: PerformanceLevel.CRITICAL,
}

STRENGTH_THRESHOLD = 80.0
IMPROVEMENT_THRESHOLD = 60.0
HIGH_PRIORITY_THRESHOLD = 40.0

MISSING_PENALTY = 15
UNCERTAIN_PENALTY = 10
MIN_CONFIDENCE = 50


# ── Dimension scoring ────────────────────────────────────────────────────────


def queen_points(present: QueenPresence | None, laying: QueenLaying | None) -> int:
    if present == QueenPresence.YES:
        if laying == QueenLaying.YES:
            return 25
        if laying == QueenLaying.POOR:
            return 20
        return 15
    if present == QueenPresence.NOT_SEEN:
        return 8
    return 0


def health_points(disease_count: int, pest_count: int) -> int:
    points = HEALTH_MAX
    points -= min(disease_count * 3, 10)
    points -= min(pest_count * 2, 5)
    return max(0, points)


def grade_for(score: int) -> Grade:
    for lower_bound, grade in GRADE_BANDS:
        if score >= lower_bound:
            return grade
    return Grade.F


def confidence_level(snapshot: Snapshot) -> int:
    """Confidence in the observation itself, clamped to [50, 100].

    A field answered ``unknown`` lands in both the missing bucket and the
    uncertain bucket, so it costs 25 points; ``not_seen`` costs 10.
    """
    values = [getattr(snapshot, name) for name in REQUIRED_FIELDS]
    missing = [v for v in values if v is None or v.value == "unknown"]
    uncertain = [v for v in values if v is not None and v.value in ("not_seen", "unknown")]

    confidence = 100
    confidence -= len(missing) * MISSING_PENALTY
    confidence -= len(uncertain) * UNCERTAIN_PENALTY
    return max(MIN_CONFIDENCE, confidence)


def color_code_for(snapshot: Snapshot, composite: int) -> ColorCode:
    """Traffic-light status: hard failures are red regardless of score."""
    no_queen = snapshot.queen_present == QueenPresence.NO
    food_crisis = snapshot.food_stores in (FoodStores.CRITICAL, FoodStores.NONE)
    if no_queen or food_crisis or composite < 40:
        return ColorCode.RED
    if snapshot.has_health_issues or composite < 60:
        return ColorCode.ORANGE
    if composite < 80:
        return ColorCode.YELLOW
    return ColorCode.GREEN


# ── Calculator ───────────────────────────────────────────────────────────────


class ScoreCalculator:
    """Stateless scorer.  ``score`` never mutates the snapshot."""

    def dimension_scores(self, snapshot: Snapshot) -> DimensionScores:
        queen = queen_points(snapshot.queen_present, snapshot.queen_laying)
        brood = BROOD_POINTS[snapshot.brood_pattern] if snapshot.brood_pattern else 0
        population = (
            POPULATION_POINTS[snapshot.population_strength]
            if snapshot.population_strength else 0
        )
        food = FOOD_POINTS[snapshot.food_stores] if snapshot.food_stores else 0
        health = health_points(len(snapshot.diseases_found), len(snapshot.pests_found))

        return DimensionScores(
            queen_score=queen,
            brood_score=brood,
            population_score=population,
            food_score=food,
            health_score=health,
            total_score=queen + brood + population + food + health,
        )

    def composite(self, snapshot: Snapshot) -> int:
        return self.dimension_scores(snapshot).total_score

    def score(self, snapshot: Snapshot) -> ScoreAnalysis:
        """Scores, composite, grade, confidence and the weighted display view."""
        scores = self.dimension_scores(snapshot)
        composite = scores.total_score
        grade = grade_for(composite)

        breakdown = {
            "queen_assessment": _breakdown(scores.queen_score, QUEEN_MAX),
            "brood_assessment": _breakdown(scores.brood_score, BROOD_MAX),
            "population_assessment": _breakdown(scores.population_score, POPULATION_MAX),
            "food_assessment": _breakdown(scores.food_score, FOOD_MAX),
            "health_assessment": _breakdown(scores.health_score, HEALTH_MAX),
        }

        return ScoreAnalysis(
            scores=scores,
            composite_score=composite,
            weighted_score=composite,
            grade=grade,
            performance_level=PERFORMANCE_BY_GRADE[grade],
            color_code=color_code_for(snapshot, composite),
            confidence_level=confidence_level(snapshot),
            score_breakdown=breakdown,
            strengths=_strengths(breakdown),
            improvement_areas=_improvement_areas(breakdown),
        )


def _breakdown(score: int, max_score: int) -> DimensionBreakdown:
    return DimensionBreakdown(
        score=score,
        max_score=max_score,
        percentage=round(score / max_score * 100, 1),
    )


def _strengths(breakdown: dict[str, DimensionBreakdown]) -> list[Strength]:
    return [
        Strength(dimension=name, score=dim.score, percentage=dim.percentage)
        for name, dim in breakdown.items()
        if dim.percentage >= STRENGTH_THRESHOLD
    ]


def _improvement_areas(breakdown: dict[str, DimensionBreakdown]) -> list[ImprovementArea]:
    return [
        ImprovementArea(
            dimension=name,
            current_score=dim.score,
            max_score=dim.max_score,
            percentage=dim.percentage,
            improvement_potential=dim.max_score - dim.score,
            priority=Priority.HIGH if dim.percentage < HIGH_PRIORITY_THRESHOLD else Priority.MEDIUM,
        )
        for name, dim in breakdown.items()
        if dim.percentage < IMPROVEMENT_THRESHOLD
    ]
