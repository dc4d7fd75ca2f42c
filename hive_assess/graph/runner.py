"""Graph runner: clean interface for invoking the assessment graph.

Usage:
    from hive_assess.graph.runner import run_assessment

    final_state = run_assessment(compiled, snapshot, context, history, now)

The runner seeds the initial state, invokes LangGraph and returns the
final AssessmentState.  No side effects.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot
from hive_assess.graph.state import AssessmentState

logger = logging.getLogger(__name__)


def run_assessment(
    compiled_graph: Any,
    snapshot: Snapshot,
    context: HiveContext,
    history: list[HistoryPoint],
    now: datetime,
) -> AssessmentState:
    """Invoke the compiled assessment graph for one snapshot.

    Args:
        compiled_graph: Result of build_assessment_graph().
        snapshot: Validated inspection observation.
        context: Static hive facts.
        history: Prior composite scores, any order.
        now: Analysis time; the only time source the engine sees.

    Returns:
        Final AssessmentState with every stage's output filled in.
    """
    initial_state: AssessmentState = {
        "snapshot": snapshot,
        "context": context,
        "history": list(history),
        "now": now,
    }

    logger.debug("Running assessment graph (history=%d, now=%s)", len(history), now.isoformat())
    final_state = compiled_graph.invoke(initial_state)
    logger.debug(
        "Assessment complete: composite=%d risk=%s recommendations=%d alerts=%d",
        final_state["score_analysis"].composite_score,
        final_state["risk_analysis"].overall_risk_level.value,
        len(final_state["recommendations"]),
        len(final_state["alerts"]),
    )
    return final_state
