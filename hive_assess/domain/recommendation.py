"""Recommendation and Alert models.

A Recommendation is an action item for the beekeeper.  An Alert is a
user-facing notice derived from a subset of risk conditions; it is what
the alert dispatcher pushes to connected clients.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from hive_assess.domain.enums import Priority, RiskLevel


class Recommendation(BaseModel):
    type: str = Field(..., description="Category, e.g. queen_management or feeding")
    priority: Priority
    action: str = Field(..., min_length=3)

    model_config = {"frozen": True}


class Alert(BaseModel):
    level: RiskLevel
    type: str
    title: str
    message: str
    action_required: bool
    timeline: str

    model_config = {"frozen": True}
