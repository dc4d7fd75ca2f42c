"""Controlled enumerations for the hive-assessment domain.

Every categorical field of a snapshot or an assessment MUST reference an
enum defined here.  Values outside these domains are rejected by pydantic
at the boundary, so the engine never sees them.
"""

from __future__ import annotations

from enum import Enum


# ── Snapshot observations ────────────────────────────────────────────────────


class QueenPresence(str, Enum):
    YES = "yes"
    NO = "no"
    NOT_SEEN = "not_seen"
    UNKNOWN = "unknown"


class QueenLaying(str, Enum):
    YES = "yes"
    NO = "no"
    POOR = "poor"
    UNKNOWN = "unknown"


class BroodPattern(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NONE = "none"


class PopulationStrength(str, Enum):
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very_weak"


class FoodStores(str, Enum):
    ABUNDANT = "abundant"
    ADEQUATE = "adequate"
    LOW = "low"
    CRITICAL = "critical"
    NONE = "none"


# ── Assessment labels ────────────────────────────────────────────────────────


_LEVEL_RANK = {"low": 0, "medium": 1, "high": 2, "critical": 3}


class RiskLevel(str, Enum):
    """Totally ordered severity: critical > high > medium > low."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self.value]

    @classmethod
    def highest(cls, *levels: RiskLevel) -> RiskLevel:
        """Max-by-rank merge of any number of levels."""
        return max(levels, key=lambda level: level.rank)


class Priority(str, Enum):
    """Urgency attached to recommendations."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self.value]


class Timeframe(str, Enum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D_PLUS = "D+"
    D = "D"
    F = "F"


class PerformanceLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class ColorCode(str, Enum):
    """Traffic-light status stored on the inspection record."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"

    @classmethod
    def for_month(cls, month: int) -> Season:
        if 3 <= month <= 5:
            return cls.SPRING
        if 6 <= month <= 8:
            return cls.SUMMER
        if 9 <= month <= 11:
            return cls.AUTUMN
        return cls.WINTER
