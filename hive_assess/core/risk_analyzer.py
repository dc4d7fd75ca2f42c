"""RiskAnalyzer: independent risk rules merged into an overall level.

Rules run in a fixed order and each returns the Risk it found (if any)
together with the overall level it implies.  The overall level is the
max-by-rank merge of those implied levels, starting from ``low``:

    1. queen_present=no            → queen_loss     critical  (implies critical)
       else queen_laying∈{no,poor} → queen_failure  high      (implies high)
    2. population weak/very_weak   → population_decline high  (implies medium)
    3. food critical/none          → starvation     critical  (implies critical)
       else food low               → food_shortage  medium    (implies medium)
    4. any disease or pest         → health_issues  medium/high (implies medium)
    5. seasonal rule               → one low/medium risk      (implies nothing)

So ``overall_risk_level`` is critical whenever rule 1 or rule 3 fires
critical, no matter what else is observed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from hive_assess.core.seasons import season_at
from hive_assess.domain.enums import (
    FoodStores,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
    RiskLevel,
    Season,
    Timeframe,
)
from hive_assess.domain.risk import (
    MonitoringTask,
    Risk,
    RiskAnalysis,
    RiskMatrix,
    empty_risk_matrix,
)
from hive_assess.domain.snapshot import HiveContext, Snapshot

logger = logging.getLogger(__name__)

RISK_WEIGHTS: dict[RiskLevel, int] = {
    RiskLevel.CRITICAL: 10,
    RiskLevel.HIGH: 7,
    RiskLevel.MEDIUM: 4,
    RiskLevel.LOW: 1,
}

# timeframe → (frequency, duration); long_term risks get no schedule entry
MONITORING_CADENCE: dict[Timeframe, tuple[str, str]] = {
    Timeframe.IMMEDIATE: ("daily", "1-3 days"),
    Timeframe.SHORT_TERM: ("every 3 days", "1-2 weeks"),
    Timeframe.MEDIUM_TERM: ("weekly", "1 month"),
}

WEAK_POPULATIONS = (PopulationStrength.WEAK, PopulationStrength.VERY_WEAK)
STRONG_POPULATIONS = (PopulationStrength.STRONG, PopulationStrength.VERY_STRONG)

RuleOutcome = tuple[Optional[Risk], RiskLevel]


# ── Rules ────────────────────────────────────────────────────────────────────


def queen_rule(snapshot: Snapshot) -> RuleOutcome:
    if snapshot.queen_present == QueenPresence.NO:
        return Risk(
            type="queen_loss",
            level=RiskLevel.CRITICAL,
            probability=100,
            impact="high",
            description="Queen lost: the colony will die without intervention",
            timeframe=Timeframe.IMMEDIATE,
            mitigation=["Introduce a new queen immediately", "Merge with a queenright colony"],
        ), RiskLevel.CRITICAL
    if snapshot.queen_laying in (QueenLaying.NO, QueenLaying.POOR):
        return Risk(
            type="queen_failure",
            level=RiskLevel.HIGH,
            probability=80,
            impact="high",
            description="Queen laying is weak or has stopped",
            timeframe=Timeframe.SHORT_TERM,
            mitigation=["Monitor closely", "Prepare a replacement queen", "Improve feeding"],
        ), RiskLevel.HIGH
    return None, RiskLevel.LOW


def population_rule(snapshot: Snapshot) -> RuleOutcome:
    if snapshot.population_strength in WEAK_POPULATIONS:
        return Risk(
            type="population_decline",
            level=RiskLevel.HIGH,
            probability=70,
            impact="medium",
            description="Colony strength is severely reduced",
            timeframe=Timeframe.SHORT_TERM,
            mitigation=[
                "Strengthen with a frame of capped brood",
                "Improve feeding",
                "Protect from cold",
            ],
        ), RiskLevel.MEDIUM
    return None, RiskLevel.LOW


def food_rule(snapshot: Snapshot) -> RuleOutcome:
    if snapshot.food_stores in (FoodStores.CRITICAL, FoodStores.NONE):
        return Risk(
            type="starvation",
            level=RiskLevel.CRITICAL,
            probability=90,
            impact="high",
            description="Colony at risk of starvation",
            timeframe=Timeframe.IMMEDIATE,
            mitigation=["Emergency feeding now", "Check stores daily"],
        ), RiskLevel.CRITICAL
    if snapshot.food_stores == FoodStores.LOW:
        return Risk(
            type="food_shortage",
            level=RiskLevel.MEDIUM,
            probability=60,
            impact="medium",
            description="Food stores are running low",
            timeframe=Timeframe.SHORT_TERM,
            mitigation=["Start supplemental feeding", "Check stores weekly"],
        ), RiskLevel.MEDIUM
    return None, RiskLevel.LOW


def health_rule(snapshot: Snapshot) -> RuleOutcome:
    if not snapshot.has_health_issues:
        return None, RiskLevel.LOW
    labels = ", ".join([*snapshot.diseases_found, *snapshot.pests_found])
    level = RiskLevel.HIGH if snapshot.health_issue_count > 2 else RiskLevel.MEDIUM
    return Risk(
        type="health_issues",
        level=level,
        probability=75,
        impact="medium",
        description=f"Health problems found: {labels}",
        timeframe=Timeframe.SHORT_TERM,
        mitigation=["Start appropriate treatment", "Isolate if necessary", "Improve hygiene"],
    ), RiskLevel.MEDIUM


def seasonal_risk(snapshot: Snapshot, now: datetime) -> Risk:
    """Exactly one low/medium risk per season.  Never escalates the overall level."""
    season = season_at(now)
    population = snapshot.population_strength

    if season == Season.SPRING:
        level = RiskLevel.MEDIUM if population in STRONG_POPULATIONS else RiskLevel.LOW
        return Risk(
            type="swarming_season",
            level=level,
            probability=60 if level == RiskLevel.MEDIUM else 25,
            impact="medium",
            description="Spring swarming season",
            timeframe=Timeframe.SHORT_TERM,
            mitigation=["Check for queen cells", "Give the colony room to expand"],
            seasonal=True,
        )
    if season == Season.SUMMER:
        level = RiskLevel.MEDIUM if population in WEAK_POPULATIONS else RiskLevel.LOW
        return Risk(
            type="robbing_pressure",
            level=level,
            probability=50 if level == RiskLevel.MEDIUM else 20,
            impact="medium",
            description="Summer dearth robbing pressure",
            timeframe=Timeframe.MEDIUM_TERM,
            mitigation=["Reduce the entrance", "Avoid spilling syrup or honey"],
            seasonal=True,
        )
    if season == Season.AUTUMN:
        well_stocked = snapshot.food_stores in (FoodStores.ABUNDANT, FoodStores.ADEQUATE)
        level = RiskLevel.LOW if well_stocked else RiskLevel.MEDIUM
        return Risk(
            type="winter_preparation",
            level=level,
            probability=55 if level == RiskLevel.MEDIUM else 20,
            impact="high",
            description="Stores may not last through winter",
            timeframe=Timeframe.MEDIUM_TERM,
            mitigation=["Feed heavy syrup", "Combine weak colonies"],
            seasonal=True,
        )
    level = RiskLevel.MEDIUM if population in WEAK_POPULATIONS else RiskLevel.LOW
    return Risk(
        type="winter_cluster_stress",
        level=level,
        probability=50 if level == RiskLevel.MEDIUM else 15,
        impact="medium",
        description="Small winter cluster may fail to keep warm",
        timeframe=Timeframe.LONG_TERM,
        mitigation=["Insulate the hive", "Avoid opening the hive in cold weather"],
        seasonal=True,
    )


ORDERED_RULES: tuple[Callable[[Snapshot], RuleOutcome], ...] = (
    queen_rule,
    population_rule,
    food_rule,
    health_rule,
)


# ── Aggregation ──────────────────────────────────────────────────────────────


def risk_score(risks: list[Risk]) -> int:
    return sum(RISK_WEIGHTS[risk.level] for risk in risks)


def risk_matrix(risks: list[Risk]) -> RiskMatrix:
    matrix = empty_risk_matrix()
    for risk in risks:
        matrix[risk.level][risk.timeframe].append(risk)
    return matrix


def monitoring_schedule(risks: list[Risk]) -> list[MonitoringTask]:
    schedule: list[MonitoringTask] = []
    for risk in risks:
        cadence = MONITORING_CADENCE.get(risk.timeframe)
        if cadence is None:
            continue
        frequency, duration = cadence
        schedule.append(MonitoringTask(
            risk_type=risk.type,
            task=f"Monitor: {risk.description}",
            frequency=frequency,
            duration=duration,
        ))
    return schedule


class RiskAnalyzer:
    """Stateless rule evaluator."""

    def analyze(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        now: datetime,
    ) -> RiskAnalysis:
        risks: list[Risk] = []
        overall = RiskLevel.LOW

        for rule in ORDERED_RULES:
            risk, implied = rule(snapshot)
            if risk is not None:
                risks.append(risk)
                overall = RiskLevel.highest(overall, implied)

        risks.append(seasonal_risk(snapshot, now))

        logger.debug(
            "Risk analysis: level=%s risks=%s frames=%d",
            overall.value, [r.type for r in risks], context.frame_count,
        )

        return RiskAnalysis(
            overall_risk_level=overall,
            risk_score=risk_score(risks),
            identified_risks=risks,
            risk_matrix=risk_matrix(risks),
            monitoring_schedule=monitoring_schedule(risks),
        )
