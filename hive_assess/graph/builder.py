"""Graph builder: constructs the LangGraph assessment topology.

Topology:

    START → score → risks → trends → forecast → recommend → schedule
          → confidence → END

The pipeline is linear: forecast needs score, risk and trend output,
schedule needs score and risk.  The graph is compiled once and can be
invoked many times.
"""

from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from hive_assess.graph.nodes import (
    analyze_risks,
    analyze_trends,
    compute_confidence,
    forecast,
    recommend,
    schedule,
    score_snapshot,
)
from hive_assess.graph.state import AssessmentState

PIPELINE: tuple[str, ...] = (
    "score",
    "risks",
    "trends",
    "forecast",
    "recommend",
    "schedule",
    "confidence",
)


def build_assessment_graph():
    """Construct and compile the assessment graph."""
    graph = StateGraph(AssessmentState)

    # ── Register nodes ───────────────────────────────────────────────────
    graph.add_node("score", score_snapshot)
    graph.add_node("risks", analyze_risks)
    graph.add_node("trends", analyze_trends)
    graph.add_node("forecast", forecast)
    graph.add_node("recommend", recommend)
    graph.add_node("schedule", schedule)
    graph.add_node("confidence", compute_confidence)

    # ── Edges ────────────────────────────────────────────────────────────
    graph.add_edge(START, PIPELINE[0])
    for current, following in zip(PIPELINE, PIPELINE[1:]):
        graph.add_edge(current, following)
    graph.add_edge(PIPELINE[-1], END)

    return graph.compile()
