"""Read access to counseling sessions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import CounselingSession
from app.infrastructure.models import CounselingSessionModel


class CounselingSessionRepository:
    """Retrieve :class:`CounselingSession` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, session_id: str) -> CounselingSession | None:
        model = self.session.get(CounselingSessionModel, session_id)
        return self._to_entity(model) if model else None

    def list_ids_by_status_between(
        self, *, status: str, start: date, end: date
    ) -> Sequence[str]:
        """Return ids of sessions with ``status`` whose date falls in ``[start, end]``.

        Dates are stored as ISO strings, so the range compares lexicographically.
        """

        query = (
            self.session.query(CounselingSessionModel.id)
            .filter(CounselingSessionModel.status == status)
            .filter(CounselingSessionModel.date >= start.isoformat())
            .filter(CounselingSessionModel.date <= end.isoformat())
            .order_by(CounselingSessionModel.date.asc(), CounselingSessionModel.time.asc())
        )
        return [row.id for row in query.all()]

    @staticmethod
    def _to_entity(model: CounselingSessionModel) -> CounselingSession:
        return CounselingSession(
            id=model.id,
            patient_id=model.patient_id,
            counselor_id=model.counselor_id,
            date=model.date,
            time=model.time,
            status=model.status,
            type=model.type,
            duration=model.duration,
        )


__all__ = ["CounselingSessionRepository"]
