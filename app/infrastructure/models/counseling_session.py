"""SQLAlchemy model for booked counseling sessions."""

from sqlalchemy import Column, Integer, String

from app.infrastructure.database import Base


class CounselingSessionModel(Base):
    """Database representation of a counseling session."""

    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True)
    patient_id = Column(String(36), nullable=True, index=True)
    counselor_id = Column(String(36), nullable=True, index=True)
    date = Column(String(10), nullable=True, index=True)
    time = Column(String(8), nullable=True)
    status = Column(String(20), nullable=False, default="scheduled", index=True)
    type = Column(String(30), nullable=True)
    duration = Column(Integer, nullable=True)


__all__ = ["CounselingSessionModel"]
