"""RecommendationEngine: trigger conditions mapped to action items and alerts.

Recommendations are gathered per category in a fixed order, followed by
contextual best-practice items, de-duplicated by action text (first
occurrence wins) and stably sorted so ``critical`` comes first.

Alerts are the user-facing subset: queen loss, starvation, very weak
colonies, detected diseases and two seasonal warnings.
"""

from __future__ import annotations

from datetime import datetime

from hive_assess.core.seasons import season_at
from hive_assess.domain.enums import (
    BroodPattern,
    FoodStores,
    PopulationStrength,
    Priority,
    QueenLaying,
    QueenPresence,
    RiskLevel,
    Season,
)
from hive_assess.domain.recommendation import Alert, Recommendation
from hive_assess.domain.snapshot import HiveContext, Snapshot

SPACE_FRAME_LIMIT = 15
LISTED_LABEL_LIMIT = 3

SEASONAL_RECOMMENDATIONS: dict[Season, str] = {
    Season.SPRING: "Inspect for queen cells every 7-10 days during swarming season",
    Season.SUMMER: "Make sure the colony has water and shade in the heat",
    Season.AUTUMN: "Build up winter stores before the cold sets in",
    Season.WINTER: "Keep inspections short and avoid opening the hive in the cold",
}

RECORD_KEEPING_ACTION = "Record this inspection and compare it with the previous one"


def summarize_labels(labels: list[str]) -> str:
    """First few labels, with a count of the rest: ``"a, b, c and 4 more"``."""
    shown = ", ".join(labels[:LISTED_LABEL_LIMIT])
    hidden = len(labels) - LISTED_LABEL_LIMIT
    return f"{shown} and {hidden} more" if hidden > 0 else shown


def _rec(kind: str, priority: Priority, *actions: str) -> list[Recommendation]:
    return [Recommendation(type=kind, priority=priority, action=a) for a in actions]


# ── Category rules ───────────────────────────────────────────────────────────


def queen_management(snapshot: Snapshot) -> list[Recommendation]:
    recs: list[Recommendation] = []
    if snapshot.queen_present == QueenPresence.NO:
        recs += _rec(
            "queen_management", Priority.CRITICAL,
            "Introduce a new queen immediately",
            "Investigate the cause of the queen loss",
        )
    elif snapshot.queen_present == QueenPresence.NOT_SEEN:
        recs += _rec(
            "queen_management", Priority.MEDIUM,
            "Look for the queen at the next inspection",
            "Check for freshly laid eggs",
        )

    if snapshot.queen_laying == QueenLaying.NO:
        recs += _rec("queen_management", Priority.HIGH, "Replace the queen")
    elif snapshot.queen_laying == QueenLaying.POOR:
        recs += _rec(
            "queen_management", Priority.HIGH,
            "Monitor the laying pattern",
            "Check the queen's age and condition",
        )

    if snapshot.brood_pattern in (BroodPattern.POOR, BroodPattern.NONE):
        recs += _rec(
            "queen_management", Priority.MEDIUM,
            "Check the queen and the quality of her laying",
            "Rule out brood diseases",
        )
    return recs


def population_management(snapshot: Snapshot) -> list[Recommendation]:
    if snapshot.population_strength not in (PopulationStrength.WEAK, PopulationStrength.VERY_WEAK):
        return []
    priority = (
        Priority.HIGH if snapshot.population_strength == PopulationStrength.VERY_WEAK
        else Priority.MEDIUM
    )
    return _rec(
        "population_management", priority,
        "Strengthen the colony with a frame of capped brood",
        "Reduce the hive volume",
        "Increase feeding",
    )


def feeding(snapshot: Snapshot) -> list[Recommendation]:
    if snapshot.food_stores in (FoodStores.CRITICAL, FoodStores.NONE):
        return _rec(
            "feeding", Priority.CRITICAL,
            "Emergency feeding with sugar syrup now",
            "Check stores daily until the colony recovers",
        )
    if snapshot.food_stores == FoodStores.LOW:
        return _rec(
            "feeding", Priority.HIGH,
            "Feed sugar syrup",
            "Add a protein patty",
        )
    return []


def health_treatment(snapshot: Snapshot) -> list[Recommendation]:
    recs: list[Recommendation] = []
    if snapshot.diseases_found:
        priority = Priority.HIGH if snapshot.health_issue_count > 2 else Priority.MEDIUM
        recs += _rec(
            "health_treatment", priority,
            f"Start treatment for: {summarize_labels(snapshot.diseases_found)}",
            "Isolate the hive if necessary",
            "Disinfect hive tools",
        )
    if snapshot.pests_found:
        recs += _rec(
            "health_treatment", Priority.MEDIUM,
            "Apply a pest control programme",
            "Improve hive ventilation",
        )
    return recs


def space_management(snapshot: Snapshot, context: HiveContext, season: Season) -> list[Recommendation]:
    strong = snapshot.population_strength in (
        PopulationStrength.STRONG, PopulationStrength.VERY_STRONG,
    )
    if not strong or context.frame_count >= SPACE_FRAME_LIMIT:
        return []
    priority = Priority.HIGH if season == Season.SPRING else Priority.MEDIUM
    return _rec(
        "space_management", priority,
        "Add a super or extra frames",
        "Improve hive ventilation",
    )


def contextual(season: Season) -> list[Recommendation]:
    return [
        Recommendation(type="seasonal", priority=Priority.LOW, action=SEASONAL_RECOMMENDATIONS[season]),
        Recommendation(type="record_keeping", priority=Priority.LOW, action=RECORD_KEEPING_ACTION),
    ]


def prioritize(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Drop repeated actions (first wins) and stably sort critical first."""
    seen: set[str] = set()
    unique: list[Recommendation] = []
    for rec in recommendations:
        if rec.action in seen:
            continue
        seen.add(rec.action)
        unique.append(rec)
    return sorted(unique, key=lambda rec: rec.priority.rank, reverse=True)


# ── Alerts ───────────────────────────────────────────────────────────────────


def build_alerts(snapshot: Snapshot, now: datetime) -> list[Alert]:
    alerts: list[Alert] = []

    if snapshot.queen_present == QueenPresence.NO:
        alerts.append(Alert(
            level=RiskLevel.CRITICAL,
            type="queen_loss",
            title="Queen lost",
            message="The colony has no queen: immediate intervention required",
            action_required=True,
            timeline="within 24 hours",
        ))

    if snapshot.food_stores in (FoodStores.CRITICAL, FoodStores.NONE):
        alerts.append(Alert(
            level=RiskLevel.CRITICAL,
            type="starvation_risk",
            title="Starvation risk",
            message="Food stores are exhausted or nearly exhausted",
            action_required=True,
            timeline="immediately",
        ))

    if snapshot.population_strength == PopulationStrength.VERY_WEAK:
        alerts.append(Alert(
            level=RiskLevel.HIGH,
            type="weak_colony",
            title="Very weak colony",
            message="Colony strength is very low and needs intervention",
            action_required=True,
            timeline="within 48 hours",
        ))

    diseases = snapshot.diseases_found
    if diseases:
        alerts.append(Alert(
            level=RiskLevel.HIGH if len(diseases) > 2 else RiskLevel.MEDIUM,
            type="disease_detected",
            title="Diseases detected",
            message=f"Detected: {summarize_labels(diseases)}",
            action_required=True,
            timeline="within 1 week",
        ))

    alerts.extend(seasonal_alerts(snapshot, season_at(now)))

    return sorted(alerts, key=lambda alert: alert.level.rank, reverse=True)


def seasonal_alerts(snapshot: Snapshot, season: Season) -> list[Alert]:
    if season == Season.SPRING and snapshot.population_strength in (
        PopulationStrength.STRONG, PopulationStrength.VERY_STRONG,
    ):
        return [Alert(
            level=RiskLevel.MEDIUM,
            type="swarming_season",
            title="Swarming season",
            message="Strong colony in spring: watch for queen cells",
            action_required=False,
            timeline="next inspection",
        )]
    if season == Season.AUTUMN and snapshot.food_stores in (
        FoodStores.LOW, FoodStores.CRITICAL, FoodStores.NONE,
    ):
        return [Alert(
            level=RiskLevel.MEDIUM,
            type="winter_preparation",
            title="Winter preparation",
            message="Stores are too low to carry the colony through winter",
            action_required=False,
            timeline="before first frost",
        )]
    return []


# ── Engine ───────────────────────────────────────────────────────────────────


class RecommendationEngine:
    """Stateless mapping from triggered conditions to actions and alerts."""

    def recommend(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        now: datetime,
    ) -> list[Recommendation]:
        season = season_at(now)
        gathered = [
            *queen_management(snapshot),
            *population_management(snapshot),
            *feeding(snapshot),
            *health_treatment(snapshot),
            *space_management(snapshot, context, season),
            *contextual(season),
        ]
        return prioritize(gathered)

    def alerts(self, snapshot: Snapshot, now: datetime) -> list[Alert]:
        return build_alerts(snapshot, now)
