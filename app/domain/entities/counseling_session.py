"""Domain entity representing a booked counseling session."""

from __future__ import annotations

from dataclasses import dataclass

SESSION_STATUS_SCHEDULED = "scheduled"


@dataclass
class CounselingSession:
    """Session between a patient and a counselor.

    ``date`` and ``time`` are kept as the raw strings entered at booking time;
    they are only turned into an instant when a reminder is computed.
    """

    id: str
    patient_id: str | None
    counselor_id: str | None
    date: str | None
    time: str | None
    status: str
    type: str | None = None
    duration: int | None = None

    def participant_ids(self) -> list[str]:
        """Return the distinct participants, patient first."""

        participants: list[str] = []
        for candidate in (self.patient_id, self.counselor_id):
            if candidate and candidate not in participants:
                participants.append(candidate)
        return participants


__all__ = [
    "CounselingSession",
    "SESSION_STATUS_SCHEDULED",
]
