"""LangGraph nodes: thin adapters from AssessmentState to the core engine.

Each node:
    - Receives the full AssessmentState
    - Returns a partial dict update
    - Has no side effects and never reads the clock

The engine components are stateless, so one module-level instance of
each is shared by every graph invocation.
"""

from __future__ import annotations

import logging

from hive_assess.core.confidence import confidence_metrics
from hive_assess.core.forecaster import PredictiveForecaster
from hive_assess.core.recommendations import RecommendationEngine
from hive_assess.core.risk_analyzer import RiskAnalyzer
from hive_assess.core.scheduling import next_inspection_date
from hive_assess.core.score_calculator import ScoreCalculator
from hive_assess.core.seasons import seasonal_context
from hive_assess.core.trend_analyzer import TrendAnalyzer
from hive_assess.graph.state import AssessmentState

logger = logging.getLogger(__name__)

calculator = ScoreCalculator()
risk_analyzer = RiskAnalyzer()
trend_analyzer = TrendAnalyzer(calculator)
forecaster = PredictiveForecaster()
recommendation_engine = RecommendationEngine()


# ── 1. score ─────────────────────────────────────────────────────────────────

def score_snapshot(state: AssessmentState) -> dict:
    analysis = calculator.score(state["snapshot"])
    logger.debug("Scored snapshot: composite=%d grade=%s",
                 analysis.composite_score, analysis.grade.value)
    return {"score_analysis": analysis}


# ── 2. risks ─────────────────────────────────────────────────────────────────

def analyze_risks(state: AssessmentState) -> dict:
    return {
        "risk_analysis": risk_analyzer.analyze(state["snapshot"], state["context"], state["now"]),
    }


# ── 3. trends ────────────────────────────────────────────────────────────────

def analyze_trends(state: AssessmentState) -> dict:
    return {"trend_analysis": trend_analyzer.analyze(state["snapshot"], state["history"])}


# ── 4. forecast ──────────────────────────────────────────────────────────────

def forecast(state: AssessmentState) -> dict:
    predictions = forecaster.forecast(
        state["snapshot"],
        state["context"],
        state["history"],
        state["now"],
        scores=state["score_analysis"],
        trend=state["trend_analysis"],
        risks=state["risk_analysis"],
    )
    return {"predictions": predictions}


# ── 5. recommend ─────────────────────────────────────────────────────────────

def recommend(state: AssessmentState) -> dict:
    snapshot, now = state["snapshot"], state["now"]
    return {
        "recommendations": recommendation_engine.recommend(snapshot, state["context"], now),
        "alerts": recommendation_engine.alerts(snapshot, now),
        "seasonal_context": seasonal_context(now),
    }


# ── 6. schedule ──────────────────────────────────────────────────────────────

def schedule(state: AssessmentState) -> dict:
    return {
        "next_inspection_date": next_inspection_date(
            state["now"],
            state["score_analysis"].composite_score,
            state["risk_analysis"].overall_risk_level,
        ),
    }


# ── 7. confidence ────────────────────────────────────────────────────────────

def compute_confidence(state: AssessmentState) -> dict:
    return {
        "confidence_metrics": confidence_metrics(
            state["snapshot"],
            state["score_analysis"],
            state["trend_analysis"],
            len(state["history"]),
        ),
    }
