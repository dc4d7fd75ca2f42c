"""Tests for the ScoreCalculator: point tables, grade bands, confidence."""

from __future__ import annotations

import pytest

from hive_assess.core.score_calculator import (
    GRADE_BANDS,
    ScoreCalculator,
    confidence_level,
    grade_for,
    health_points,
    queen_points,
)
from hive_assess.domain.enums import (
    ColorCode,
    Grade,
    PerformanceLevel,
    Priority,
    QueenLaying,
    QueenPresence,
)
from hive_assess.domain.snapshot import Snapshot

calculator = ScoreCalculator()

_GRADE_ORDER = [Grade.F] + [grade for _, grade in reversed(GRADE_BANDS)]


class TestDimensionTables:
    @pytest.mark.parametrize(
        ("present", "laying", "expected"),
        [
            (QueenPresence.YES, QueenLaying.YES, 25),
            (QueenPresence.YES, QueenLaying.POOR, 20),
            (QueenPresence.YES, QueenLaying.NO, 15),
            (QueenPresence.YES, None, 15),
            (QueenPresence.NOT_SEEN, QueenLaying.YES, 8),
            (QueenPresence.NO, QueenLaying.YES, 0),
            (QueenPresence.UNKNOWN, QueenLaying.YES, 0),
            (None, None, 0),
        ],
    )
    def test_queen_points(self, present, laying, expected) -> None:
        assert queen_points(present, laying) == expected

    @pytest.mark.parametrize(
        ("diseases", "pests", "expected"),
        [(0, 0, 15), (1, 0, 12), (4, 0, 5), (0, 3, 10), (5, 5, 0), (1, 1, 10)],
    )
    def test_health_points(self, diseases: int, pests: int, expected: int) -> None:
        assert health_points(diseases, pests) == expected

    def test_perfect_snapshot_scores_100(self, perfect_snapshot: Snapshot) -> None:
        analysis = calculator.score(perfect_snapshot)
        assert analysis.scores.queen_score == 25
        assert analysis.scores.brood_score == 25
        assert analysis.scores.population_score == 20
        assert analysis.scores.food_score == 15
        assert analysis.scores.health_score == 15
        assert analysis.composite_score == 100
        assert analysis.weighted_score == 100
        assert analysis.grade == Grade.A_PLUS
        assert analysis.performance_level == PerformanceLevel.EXCELLENT

    def test_typical_snapshot(self, make_snapshot) -> None:
        assert calculator.composite(make_snapshot()) == 84

    def test_unanswered_snapshot_scores_only_health(self) -> None:
        analysis = calculator.score(Snapshot())
        assert analysis.composite_score == 15
        assert analysis.grade == Grade.F
        assert analysis.performance_level == PerformanceLevel.CRITICAL

    def test_sub_scores_never_exceed_maximum(self, make_snapshot) -> None:
        snap = make_snapshot(diseases_found=["a", "b", "c", "d", "e"], pests_found=["varroa"])
        scores = calculator.dimension_scores(snap)
        assert 0 <= scores.health_score <= 15
        assert scores.total_score == (
            scores.queen_score + scores.brood_score + scores.population_score
            + scores.food_score + scores.health_score
        )


class TestGrades:
    @pytest.mark.parametrize(
        ("score", "grade"),
        [
            (100, Grade.A_PLUS), (90, Grade.A_PLUS), (89, Grade.A), (85, Grade.A),
            (84, Grade.B_PLUS), (75, Grade.B), (70, Grade.C_PLUS), (65, Grade.C),
            (60, Grade.D_PLUS), (55, Grade.D), (54, Grade.F), (0, Grade.F),
        ],
    )
    def test_band_lower_bounds_are_inclusive(self, score: int, grade: Grade) -> None:
        assert grade_for(score) == grade

    def test_grade_is_non_decreasing_in_score(self) -> None:
        ranks = [_GRADE_ORDER.index(grade_for(score)) for score in range(101)]
        assert ranks == sorted(ranks)


class TestConfidence:
    def test_fully_answered(self, make_snapshot) -> None:
        assert confidence_level(make_snapshot()) == 100

    def test_not_seen_costs_ten(self, make_snapshot) -> None:
        assert confidence_level(make_snapshot(queen_present="not_seen")) == 90

    def test_unknown_costs_twenty_five(self, make_snapshot) -> None:
        # counted as missing and as uncertain
        assert confidence_level(make_snapshot(queen_laying="unknown")) == 75

    def test_unknown_penalised_more_than_not_seen(self, make_snapshot) -> None:
        not_seen = 100 - confidence_level(make_snapshot(queen_present="not_seen"))
        unknown = 100 - confidence_level(make_snapshot(queen_present="unknown"))
        assert (not_seen, unknown) == (10, 25)

    def test_missing_answer_costs_fifteen(self, make_snapshot) -> None:
        assert confidence_level(make_snapshot(food_stores=None)) == 85

    def test_clamped_at_fifty(self) -> None:
        assert confidence_level(Snapshot()) == 50
        snap = Snapshot(queen_present="unknown", queen_laying="unknown")
        assert confidence_level(snap) == 50


class TestColorCode:
    def test_healthy_is_green(self, make_snapshot) -> None:
        assert calculator.score(make_snapshot()).color_code == ColorCode.GREEN

    def test_queenless_is_red_even_with_high_score(self, perfect_snapshot: Snapshot) -> None:
        snap = perfect_snapshot.model_copy(update={"queen_present": QueenPresence.NO})
        analysis = calculator.score(snap)
        assert analysis.composite_score == 75
        assert analysis.color_code == ColorCode.RED

    @pytest.mark.parametrize("food", ["critical", "none"])
    def test_food_crisis_is_red(self, make_snapshot, food: str) -> None:
        assert calculator.score(make_snapshot(food_stores=food)).color_code == ColorCode.RED

    def test_health_issue_is_orange(self, make_snapshot) -> None:
        snap = make_snapshot(pests_found=["varroa"])
        assert calculator.score(snap).color_code == ColorCode.ORANGE

    def test_mid_score_is_yellow(self, make_snapshot) -> None:
        snap = make_snapshot(brood_pattern="fair")
        analysis = calculator.score(snap)
        assert analysis.composite_score == 79
        assert analysis.color_code == ColorCode.YELLOW

    def test_low_score_is_red(self) -> None:
        assert calculator.score(Snapshot()).color_code == ColorCode.RED


class TestWeightedView:
    def test_breakdown_keys_and_percentages(self, make_snapshot) -> None:
        analysis = calculator.score(make_snapshot())
        assert list(analysis.score_breakdown) == [
            "queen_assessment",
            "brood_assessment",
            "population_assessment",
            "food_assessment",
            "health_assessment",
        ]
        brood = analysis.score_breakdown["brood_assessment"]
        assert (brood.score, brood.max_score, brood.percentage) == (20, 25, 80.0)
        assert analysis.score_breakdown["population_assessment"].percentage == 60.0

    def test_strengths_at_or_above_eighty_percent(self, make_snapshot) -> None:
        analysis = calculator.score(make_snapshot())
        names = [s.dimension for s in analysis.strengths]
        assert names == ["queen_assessment", "brood_assessment", "food_assessment", "health_assessment"]

    def test_improvement_areas_below_sixty_percent(self, make_snapshot) -> None:
        snap = make_snapshot(queen_present="not_seen", population_strength="weak")
        areas = {a.dimension: a for a in calculator.score(snap).improvement_areas}

        queen = areas["queen_assessment"]
        assert queen.percentage == 32.0
        assert queen.improvement_potential == 17
        assert queen.priority == Priority.HIGH

        population = areas["population_assessment"]
        assert population.percentage == 30.0
        assert population.priority == Priority.HIGH

    def test_medium_priority_between_forty_and_sixty(self, make_snapshot) -> None:
        snap = make_snapshot(food_stores="low")
        areas = {a.dimension: a for a in calculator.score(snap).improvement_areas}
        assert areas["food_assessment"].percentage == 40.0
        assert areas["food_assessment"].priority == Priority.MEDIUM
