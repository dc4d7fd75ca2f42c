"""PredictiveForecaster: swarming, production, health trajectory, interventions.

All four sub-models are additive/multiplicative rule tables.  Dates are
derived from the injected ``now``; nothing here reads the clock.

Swarming (score out of 100):
    population strength   0–25
    space constraint      0–20   (frame capacity vs. population)
    queen age / quality   0–15
    seasonal base rate    1–15   (12-entry month table, spring peak)
    brood+population      0/10   (excellent brood AND very_strong)
    history signal        0–15   (+5 per past note mentioning swarming)

Production:
    base(hive_type) × population × queen × health  (kg/year)
"""

from __future__ import annotations

from datetime import date, datetime

from hive_assess.core.seasons import season_at
from hive_assess.domain.enums import (
    BroodPattern,
    FoodStores,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
    RiskLevel,
    Season,
    TrendDirection,
)
from hive_assess.domain.forecast import (
    AnnualProjection,
    ConfidenceInterval,
    ContributingFactor,
    CriticalThreshold,
    HarvestProjection,
    HealthProjection,
    HealthTrajectory,
    Intervention,
    InterventionPlan,
    InterventionPoint,
    Predictions,
    ProductionFactor,
    ProductionForecast,
    SeasonProjection,
    SwarmingForecast,
)
from hive_assess.domain.risk import RiskAnalysis
from hive_assess.domain.scoring import ScoreAnalysis
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot
from hive_assess.domain.trend import TrendAnalysis

# ── Swarming tables ──────────────────────────────────────────────────────────

SEASONAL_SWARMING_RATE: dict[int, int] = {
    1: 2, 2: 3, 3: 8, 4: 15, 5: 12, 6: 8,
    7: 4, 8: 3, 9: 2, 10: 1, 11: 1, 12: 1,
}

SWARM_NOTE_KEYWORDS: tuple[str, ...] = ("swarm", "queen cell")

QUEEN_FACTOR_CAP = 15
HISTORY_FACTOR_CAP = 15
HISTORY_POINTS_PER_EVENT = 5

SWARMING_CADENCE: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "daily",
    RiskLevel.HIGH: "every_2_days",
    RiskLevel.MEDIUM: "weekly",
    RiskLevel.LOW: "monthly",
}

_URGENT_PREVENTION = [
    "Add supers immediately to relieve congestion",
    "Inspect for and remove queen cells",
    "Split the colony if needed",
]
_ROUTINE_PREVENTION = [
    "Check for queen cells daily",
    "Improve hive ventilation",
    "Reduce crowding in the brood nest",
]

# ── Production tables ────────────────────────────────────────────────────────

BASE_PRODUCTION_KG: dict[str, float] = {
    "langstroth": 25.0,
    "top_bar": 15.0,
    "warre": 20.0,
    "baladi": 12.0,
    "american": 25.0,
    "kenyan": 18.0,
}
DEFAULT_BASE_PRODUCTION_KG = 20.0

POPULATION_MULTIPLIER: dict[PopulationStrength, float] = {
    PopulationStrength.VERY_STRONG: 1.3,
    PopulationStrength.STRONG: 1.1,
    PopulationStrength.MODERATE: 1.0,
    PopulationStrength.WEAK: 0.7,
    PopulationStrength.VERY_WEAK: 0.4,
}

QUEEN_MULTIPLIER: dict[QueenLaying, float] = {
    QueenLaying.YES: 1.1,
    QueenLaying.POOR: 0.8,
    QueenLaying.NO: 0.3,
    QueenLaying.UNKNOWN: 1.0,
}

SEASON_SHARE: dict[Season, float] = {
    Season.SPRING: 0.35,
    Season.SUMMER: 0.45,
    Season.AUTUMN: 0.15,
    Season.WINTER: 0.05,
}

HARVEST_MONTHS: tuple[int, ...] = (6, 9)

BASE_INTERVAL_MARGIN = 0.10
MISSING_FACTOR_MARGIN = 0.10

# ── Health trajectory tables ─────────────────────────────────────────────────

SHORT_TERM_DAYS = 14
MEDIUM_TERM_DAYS = 42
OUTLOOK_MARGIN = 3

HEALTH_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (60, "needs attention"),
    (50, "intensive monitoring"),
    (40, "colony at risk"),
)

NOT_NEEDED_PRIORITY = 9


def swarming_risk_level(probability: int) -> RiskLevel:
    if probability >= 70:
        return RiskLevel.CRITICAL
    if probability >= 50:
        return RiskLevel.HIGH
    if probability >= 30:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def swarming_timeframe(probability: int) -> str:
    if probability < 30:
        return "not_expected_soon"
    if probability < 50:
        return "4-6_weeks"
    if probability < 70:
        return "2-4_weeks"
    return "1-2_weeks"


def health_state(score: int) -> str:
    if score >= 85:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 55:
        return "fair"
    if score >= 40:
        return "poor"
    return "critical"


def _clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def _outlook(projected: int, current: int) -> TrendDirection:
    if projected - current > OUTLOOK_MARGIN:
        return TrendDirection.IMPROVING
    if projected - current < -OUTLOOK_MARGIN:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


class PredictiveForecaster:
    """Stateless forecaster composed of four independent sub-models."""

    # ── Swarming ─────────────────────────────────────────────────────────

    def swarming(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        history: list[HistoryPoint],
        now: datetime,
    ) -> SwarmingForecast:
        factors: list[ContributingFactor] = []

        population = snapshot.population_strength
        if population == PopulationStrength.VERY_STRONG:
            factors.append(ContributingFactor(
                factor="population_strength", impact=25,
                description="Very strong colonies are the most likely to swarm",
            ))
        elif population == PopulationStrength.STRONG:
            factors.append(ContributingFactor(
                factor="population_strength", impact=15,
                description="Strong colony may build up to swarm",
            ))

        space = self._space_constraint(population, context.frame_count)
        if space is not None:
            factors.append(space)

        queen = self._queen_swarming_factor(snapshot, context)
        if queen is not None:
            factors.append(queen)

        seasonal = SEASONAL_SWARMING_RATE[now.month]
        factors.append(ContributingFactor(
            factor="season", impact=seasonal,
            description=f"Base swarming rate for month {now.month}",
        ))

        if (snapshot.brood_pattern == BroodPattern.EXCELLENT
                and population == PopulationStrength.VERY_STRONG):
            factors.append(ContributingFactor(
                factor="brood_and_population", impact=10,
                description="Excellent brood in a very strong colony",
            ))

        past = self._past_swarming_events(history)
        if past:
            factors.append(ContributingFactor(
                factor="history",
                impact=min(HISTORY_FACTOR_CAP, past * HISTORY_POINTS_PER_EVENT),
                description=f"Swarming signs noted in {past} past inspection(s)",
            ))

        probability = min(100, sum(f.impact for f in factors))
        level = swarming_risk_level(probability)

        if level in (RiskLevel.CRITICAL, RiskLevel.HIGH):
            measures = _URGENT_PREVENTION + _ROUTINE_PREVENTION
        elif level == RiskLevel.MEDIUM:
            measures = list(_ROUTINE_PREVENTION)
        else:
            measures = []

        confidence = 70
        if snapshot.population_details:
            confidence += 10
        if snapshot.brood_details:
            confidence += 10
        if len(factors) >= 3:
            confidence += 10

        return SwarmingForecast(
            probability_percentage=probability,
            risk_level=level,
            contributing_factors=factors,
            estimated_timeframe=swarming_timeframe(probability),
            prevention_measures=measures,
            monitoring_cadence=SWARMING_CADENCE[level],
            confidence_level=min(100, confidence),
        )

    @staticmethod
    def _space_constraint(
        population: PopulationStrength | None,
        frame_count: int,
    ) -> ContributingFactor | None:
        if population == PopulationStrength.VERY_STRONG and frame_count < 15:
            impact, text = 20, "Very strong colony in limited space"
        elif population == PopulationStrength.STRONG and frame_count < 12:
            impact, text = 15, "Space may be insufficient for the colony"
        elif population == PopulationStrength.VERY_STRONG and frame_count < 20:
            impact, text = 10, "Space acceptable but expansion needed soon"
        else:
            return None
        return ContributingFactor(factor="space_constraint", impact=impact, description=text)

    @staticmethod
    def _queen_swarming_factor(
        snapshot: Snapshot,
        context: HiveContext,
    ) -> ContributingFactor | None:
        score = 0
        notes: list[str] = []
        if context.queen_age_months > 24:
            score = 15
            notes.append("queen older than two years")
        elif context.queen_age_months > 12:
            score = 8
            notes.append("queen older than one year")
        if snapshot.queen_laying == QueenLaying.POOR:
            score += 5
            notes.append("poor laying")
        if score == 0:
            return None
        return ContributingFactor(
            factor="queen_age_quality",
            impact=min(QUEEN_FACTOR_CAP, score),
            description=", ".join(notes),
        )

    @staticmethod
    def _past_swarming_events(history: list[HistoryPoint]) -> int:
        count = 0
        for point in history:
            text = (point.notes or "").lower()
            if any(keyword in text for keyword in SWARM_NOTE_KEYWORDS):
                count += 1
        return count

    # ── Production ───────────────────────────────────────────────────────

    def production(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        now: datetime,
    ) -> ProductionForecast:
        hive_type = context.hive_type.strip().lower()
        base = BASE_PRODUCTION_KG.get(hive_type, DEFAULT_BASE_PRODUCTION_KG)

        population = snapshot.population_strength
        population_mult = POPULATION_MULTIPLIER[population] if population else 1.0

        laying = snapshot.queen_laying
        queen_mult = QUEEN_MULTIPLIER[laying] if laying else 1.0

        health_mult = max(
            0.5,
            1 - 0.1 * len(snapshot.diseases_found) - 0.05 * len(snapshot.pests_found),
        )

        factors = [
            _production_factor("population_strength", population_mult, population is not None),
            _production_factor(
                "queen_performance", queen_mult,
                laying is not None and laying != QueenLaying.UNKNOWN,
            ),
            _production_factor("colony_health", health_mult, True),
        ]

        annual = base * population_mult * queen_mult * health_mult
        season = season_at(now)
        missing = sum(1 for f in factors if not f.has_data)
        margin = BASE_INTERVAL_MARGIN + MISSING_FACTOR_MARGIN * missing

        return ProductionForecast(
            hive_type=hive_type,
            current_season=SeasonProjection(
                season=season,
                expected_kg=round(annual * SEASON_SHARE[season], 2),
            ),
            next_harvest=HarvestProjection(
                expected_date=next_harvest_date(now),
                expected_kg=round(annual / len(HARVEST_MONTHS), 2),
            ),
            annual_projection=AnnualProjection(
                base_kg=base,
                expected_kg=round(annual, 2),
                change_percent=round((annual / base - 1) * 100, 1),
            ),
            factors_analysis=factors,
            confidence_interval=ConfidenceInterval(
                lower_kg=round(max(0.0, annual * (1 - margin)), 2),
                upper_kg=round(annual * (1 + margin), 2),
                margin_percent=round(margin * 100, 1),
            ),
        )

    # ── Health trajectory ────────────────────────────────────────────────

    def health_trajectory(
        self,
        scores: ScoreAnalysis,
        trend: TrendAnalysis,
        risks: RiskAnalysis,
    ) -> HealthTrajectory:
        current = scores.composite_score
        serious = [
            r for r in risks.identified_risks
            if not r.seasonal and r.level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
        ]
        penalty_count = len(serious)

        change = 0.0
        if trend.trend_available and trend.health_trend is not None:
            change = trend.health_trend.change

        short = _clamp_score(current + 0.5 * change - 5 * penalty_count)
        medium = _clamp_score(current + change - 8 * penalty_count)

        thresholds = []
        for value, label in HEALTH_THRESHOLDS:
            if current < value:
                breached = "current"
            elif short < value:
                breached = "short_term"
            elif medium < value:
                breached = "medium_term"
            else:
                breached = None
            thresholds.append(CriticalThreshold(threshold=value, label=label, breached_in=breached))

        points: list[InterventionPoint] = []
        if any(r.level == RiskLevel.CRITICAL for r in serious):
            points.append(InterventionPoint(
                timing="immediate", reason="Critical risk present",
            ))
        elif short < 50:
            points.append(InterventionPoint(
                timing="immediate", reason="Score projected below 50 within two weeks",
            ))
        if medium < 60:
            points.append(InterventionPoint(
                timing="within_2_weeks", reason="Score projected below 60 within six weeks",
            ))

        return HealthTrajectory(
            current_state=health_state(current),
            current_score=current,
            risk_factors=[r.type for r in serious],
            short_term_forecast=HealthProjection(
                horizon_days=SHORT_TERM_DAYS,
                projected_score=short,
                outlook=_outlook(short, current),
            ),
            medium_term_forecast=HealthProjection(
                horizon_days=MEDIUM_TERM_DAYS,
                projected_score=medium,
                outlook=_outlook(medium, current),
            ),
            critical_thresholds=thresholds,
            intervention_points=points,
        )

    # ── Intervention timing ──────────────────────────────────────────────

    def intervention_timing(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        now: datetime,
    ) -> InterventionPlan:
        candidates = [
            _feeding_intervention(snapshot),
            _treatment_intervention(snapshot),
            _space_intervention(snapshot, context, season_at(now)),
            _queen_intervention(snapshot, context),
        ]
        recommended = sorted(
            (c for c in candidates if c.recommended),
            key=lambda c: c.priority,
        )

        resources: dict[str, int] = {}
        for intervention in recommended:
            for key, amount in intervention.resources.items():
                resources[key] = resources.get(key, 0) + amount

        return InterventionPlan(
            recommended_interventions=recommended,
            resource_requirements=resources,
        )

    # ── Composite ────────────────────────────────────────────────────────

    def forecast(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        history: list[HistoryPoint],
        now: datetime,
        scores: ScoreAnalysis,
        trend: TrendAnalysis,
        risks: RiskAnalysis,
    ) -> Predictions:
        return Predictions(
            swarming=self.swarming(snapshot, context, history, now),
            production=self.production(snapshot, context, now),
            health_trajectory=self.health_trajectory(scores, trend, risks),
            intervention_timing=self.intervention_timing(snapshot, context, now),
        )


# ── Helpers ──────────────────────────────────────────────────────────────────


def _production_factor(name: str, multiplier: float, has_data: bool) -> ProductionFactor:
    return ProductionFactor(
        factor=name,
        multiplier=round(multiplier, 3),
        impact_percent=round((multiplier - 1) * 100, 1),
        has_data=has_data,
    )


def next_harvest_date(now: datetime) -> date:
    """First day of the next harvest month strictly after *now*."""
    today = now.date()
    for month in HARVEST_MONTHS:
        candidate = date(today.year, month, 1)
        if candidate > today:
            return candidate
    return date(today.year + 1, HARVEST_MONTHS[0], 1)


def _not_needed(kind: str) -> Intervention:
    return Intervention(type=kind, recommended=False, priority=NOT_NEEDED_PRIORITY, window="none")


def _feeding_intervention(snapshot: Snapshot) -> Intervention:
    if snapshot.food_stores in (FoodStores.CRITICAL, FoodStores.NONE):
        return Intervention(
            type="feeding", recommended=True, priority=1, window="immediate",
            reason="Stores critically low", resources={"sugar_syrup_liters": 5},
        )
    if snapshot.food_stores == FoodStores.LOW:
        return Intervention(
            type="feeding", recommended=True, priority=2, window="within_3_days",
            reason="Stores low", resources={"sugar_syrup_liters": 2},
        )
    return _not_needed("feeding")


def _treatment_intervention(snapshot: Snapshot) -> Intervention:
    if not snapshot.has_health_issues:
        return _not_needed("treatment")
    count = snapshot.health_issue_count
    return Intervention(
        type="treatment",
        recommended=True,
        priority=1 if count > 2 else 2,
        window="within_1_week",
        reason=f"{count} disease/pest finding(s)",
        resources={"treatment_doses": count},
    )


def _space_intervention(snapshot: Snapshot, context: HiveContext, season: Season) -> Intervention:
    strong = snapshot.population_strength in (
        PopulationStrength.STRONG, PopulationStrength.VERY_STRONG,
    )
    if not strong or context.frame_count >= 15:
        return _not_needed("space")
    return Intervention(
        type="space",
        recommended=True,
        priority=2 if season == Season.SPRING else 3,
        window="within_2_weeks",
        reason=f"Strong colony on {context.frame_count} frames",
        resources={"supers": 1},
    )


def _queen_intervention(snapshot: Snapshot, context: HiveContext) -> Intervention:
    if snapshot.queen_present == QueenPresence.NO:
        return Intervention(
            type="queen", recommended=True, priority=1, window="immediate",
            reason="Colony is queenless", resources={"queens": 1},
        )
    if snapshot.queen_laying in (QueenLaying.NO, QueenLaying.POOR):
        return Intervention(
            type="queen", recommended=True, priority=2, window="within_1_week",
            reason="Queen laying is failing", resources={"queens": 1},
        )
    if context.queen_age_months > 24:
        return Intervention(
            type="queen", recommended=True, priority=4, window="next_season",
            reason="Queen older than two years", resources={"queens": 1},
        )
    return _not_needed("queen")
