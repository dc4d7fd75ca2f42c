"""In-memory hive repository with async-safe access.

Design notes:
    - An asyncio.Lock guards all mutations so concurrent request handlers
      never corrupt state.
    - The store hands the engine read-only projections (HiveContext and
      HistoryPoint lists) and receives analysis results back through
      apply_analysis.  It never runs an analysis itself.
    - Lookups of unknown IDs raise a RecordNotFoundError subclass; the API
      layer maps those to 404.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from hive_assess.domain.analysis import AnalysisResult
from hive_assess.domain.records import (
    Apiary,
    ApiaryCreate,
    Hive,
    HiveCreate,
    InspectionRecord,
)
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a stored record does not exist."""


class ApiaryNotFoundError(RecordNotFoundError):
    pass


class HiveNotFoundError(RecordNotFoundError):
    pass


class InspectionNotFoundError(RecordNotFoundError):
    pass


class HiveStore:
    """Async-safe, in-memory store for apiaries, hives and inspections."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._apiaries: dict[UUID, Apiary] = {}
        self._hives: dict[UUID, Hive] = {}
        self._inspections: dict[UUID, InspectionRecord] = {}

    # ── Apiaries ─────────────────────────────────────────────────────────

    async def create_apiary(self, data: ApiaryCreate, now: datetime) -> Apiary:
        async with self._lock:
            apiary = Apiary(**data.model_dump(), created_at=now)
            self._apiaries[apiary.apiary_id] = apiary
            logger.info("Created apiary %s (%s)", apiary.apiary_id, apiary.name)
            return apiary

    async def list_apiaries(self) -> list[Apiary]:
        async with self._lock:
            return list(self._apiaries.values())

    async def get_apiary(self, apiary_id: UUID) -> Apiary:
        async with self._lock:
            return self._apiary(apiary_id)

    # ── Hives ────────────────────────────────────────────────────────────

    async def create_hive(self, apiary_id: UUID, data: HiveCreate, now: datetime) -> Hive:
        async with self._lock:
            self._apiary(apiary_id)
            hive = Hive(**data.model_dump(), apiary_id=apiary_id, created_at=now)
            self._hives[hive.hive_id] = hive
            logger.info("Created hive %s in apiary %s", hive.hive_id, apiary_id)
            return hive

    async def get_hive(self, hive_id: UUID) -> Hive:
        async with self._lock:
            return self._hive(hive_id)

    async def list_hives(self, apiary_id: Optional[UUID] = None) -> list[Hive]:
        async with self._lock:
            return [
                hive for hive in self._hives.values()
                if apiary_id is None or hive.apiary_id == apiary_id
            ]

    async def delete_hive(self, hive_id: UUID) -> None:
        """Remove a hive together with its inspection records."""
        async with self._lock:
            self._hive(hive_id)
            del self._hives[hive_id]
            self._inspections = {
                iid: rec for iid, rec in self._inspections.items() if rec.hive_id != hive_id
            }
            logger.info("Deleted hive %s", hive_id)

    async def hive_context(self, hive_id: UUID) -> HiveContext:
        async with self._lock:
            hive = self._hive(hive_id)
            apiary = self._apiaries.get(hive.apiary_id)
            return hive.context(location=apiary.location if apiary else None)

    # ── Inspections ──────────────────────────────────────────────────────

    async def record_inspection(
        self,
        hive_id: UUID,
        snapshot: Snapshot,
        inspected_at: datetime,
    ) -> InspectionRecord:
        async with self._lock:
            self._hive(hive_id)
            record = InspectionRecord(hive_id=hive_id, inspected_at=inspected_at, snapshot=snapshot)
            self._inspections[record.inspection_id] = record
            logger.info("Recorded inspection %s for hive %s", record.inspection_id, hive_id)
            return record

    async def get_inspection(self, inspection_id: UUID) -> InspectionRecord:
        async with self._lock:
            return self._inspection(inspection_id)

    async def list_inspections(self, hive_id: UUID, limit: Optional[int] = None) -> list[InspectionRecord]:
        """Inspections of one hive, newest first."""
        async with self._lock:
            self._hive(hive_id)
            records = self._newest_first(hive_id)
            return records[:limit] if limit is not None else records

    async def history(
        self,
        hive_id: UUID,
        before: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[HistoryPoint]:
        """Analysed inspections as engine history, newest first."""
        async with self._lock:
            self._hive(hive_id)
            points = [
                HistoryPoint(
                    date=rec.inspected_at,
                    composite_score=rec.auto_score,
                    notes=rec.snapshot.notes,
                )
                for rec in self._newest_first(hive_id)
                if rec.analysed and (before is None or rec.inspected_at < before)
            ]
            return points[:limit] if limit is not None else points

    async def apply_analysis(self, inspection_id: UUID, result: AnalysisResult) -> InspectionRecord:
        """Write the persisted subset of an analysis back onto the inspection."""
        async with self._lock:
            record = self._inspection(inspection_id)
            updated = record.model_copy(update={
                "auto_score": result.score_analysis.weighted_score,
                "overall_status": result.score_analysis.color_code,
                "risk_level": result.risk_analysis.overall_risk_level,
                "recommendations": [rec.action for rec in result.recommendations],
                "next_inspection_date": result.next_inspection_date,
            })
            self._inspections[inspection_id] = updated
            logger.debug(
                "Applied analysis to inspection %s (score=%s, risk=%s)",
                inspection_id, updated.auto_score, updated.risk_level,
            )
            return updated

    async def overdue_inspections(self, now: datetime) -> list[InspectionRecord]:
        """Latest inspection of every hive whose next inspection date has passed."""
        async with self._lock:
            overdue: list[InspectionRecord] = []
            for hive_id in self._hives:
                records = self._newest_first(hive_id)
                if not records:
                    continue
                latest = records[0]
                if latest.next_inspection_date is not None and latest.next_inspection_date < now:
                    overdue.append(latest)
            return sorted(overdue, key=lambda rec: rec.next_inspection_date)

    # ── Internals ────────────────────────────────────────────────────────

    def _apiary(self, apiary_id: UUID) -> Apiary:
        """Must be called while holding self._lock."""
        apiary = self._apiaries.get(apiary_id)
        if apiary is None:
            raise ApiaryNotFoundError(f"Apiary {apiary_id} not found")
        return apiary

    def _hive(self, hive_id: UUID) -> Hive:
        """Must be called while holding self._lock."""
        hive = self._hives.get(hive_id)
        if hive is None:
            raise HiveNotFoundError(f"Hive {hive_id} not found")
        return hive

    def _inspection(self, inspection_id: UUID) -> InspectionRecord:
        """Must be called while holding self._lock."""
        record = self._inspections.get(inspection_id)
        if record is None:
            raise InspectionNotFoundError(f"Inspection {inspection_id} not found")
        return record

    def _newest_first(self, hive_id: UUID) -> list[InspectionRecord]:
        """Must be called while holding self._lock."""
        records = [rec for rec in self._inspections.values() if rec.hive_id == hive_id]
        return sorted(records, key=lambda rec: rec.inspected_at, reverse=True)
