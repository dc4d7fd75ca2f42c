"""Seasonal lookup tables shared by the risk, forecast and recommendation rules.

Seasons are derived from the injected analysis time, never from the clock.
"""

from __future__ import annotations

from datetime import datetime

from hive_assess.domain.analysis import SeasonalContext, SeasonalExpectations
from hive_assess.domain.enums import Season

SEASONAL_EXPECTATIONS: dict[Season, SeasonalExpectations] = {
    Season.SPRING: SeasonalExpectations(
        population="rapid growth",
        brood="large increase in brood",
        food_consumption="high",
        activity="intense foraging",
    ),
    Season.SUMMER: SeasonalExpectations(
        population="peak strength",
        brood="dense brood",
        food_consumption="moderate",
        activity="honey production",
    ),
    Season.AUTUMN: SeasonalExpectations(
        population="gradual decline",
        brood="brood rearing slows",
        food_consumption="storing for winter",
        activity="winter preparation",
    ),
    Season.WINTER: SeasonalExpectations(
        population="lowest level",
        brood="little or no brood",
        food_consumption="living on stores",
        activity="minimal",
    ),
}

OPTIMAL_ACTIVITIES: dict[Season, list[str]] = {
    Season.SPRING: [
        "Inspect for queen cells every 7-10 days",
        "Add supers ahead of the main flow",
        "Replace old or damaged comb",
    ],
    Season.SUMMER: [
        "Harvest capped honey",
        "Provide a water source near the apiary",
        "Watch for robbing during dearth",
    ],
    Season.AUTUMN: [
        "Treat for varroa after the last harvest",
        "Feed to build winter stores",
        "Reduce entrances and fit mouse guards",
    ],
    Season.WINTER: [
        "Heft hives to check stores without opening",
        "Keep entrances clear of dead bees",
        "Repair and clean equipment",
    ],
}


def season_at(now: datetime) -> Season:
    return Season.for_month(now.month)


def seasonal_context(now: datetime) -> SeasonalContext:
    season = season_at(now)
    return SeasonalContext(
        season=season,
        month=now.month,
        expectations=SEASONAL_EXPECTATIONS[season],
        optimal_activities=list(OPTIMAL_ACTIVITIES[season]),
    )
