"""Persist run reports to the `dijkstra_log` table.

The archive is a sink: it receives a finished `RunReport` and appends one
row. It is constructed with a session factory, so which database it writes to
is decided by whoever builds it (the API uses `SessionLocal`, tests use an
in-memory SQLite engine).

A failed write is rolled back and the database error is re-raised as is.
The report and the result it came from are never modified.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pathtrace.db.models import DijkstraRun
from .run_report import RunReport


logger = logging.getLogger(__name__)


class RunArchive:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def save(self, report: RunReport) -> DijkstraRun:
        """Insert one record for `report` and return the stored row."""

        row = DijkstraRun(
            source_node=report.source,
            target_node=report.target,
            path=report.path_text,
            # unreachable targets are stored as NULL, not as infinity
            distance=None if math.isinf(report.total_distance) else report.total_distance,
            details=report.details,
            created_at=report.run_at,
        )

        db = self._session_factory()
        try:
            db.add(row)
            db.commit()
            db.refresh(row)
            db.expunge(row)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("failed to archive run %s -> %s", report.source, report.target)
            raise
        finally:
            db.close()

        logger.info("archived run %d: %s -> %s (%s)", row.id, row.source_node, row.target_node, row.path)
        return row

    def list_runs(self, limit: Optional[int] = None) -> List[DijkstraRun]:
        """Archived runs, newest first."""

        db = self._session_factory()
        try:
            query = db.query(DijkstraRun).order_by(DijkstraRun.id.desc())
            if limit is not None:
                query = query.limit(limit)
            rows = query.all()
            for row in rows:
                db.expunge(row)
            return rows
        finally:
            db.close()
