"""
Interview ORM Model
"""
from sqlalchemy import Column, String, Integer, Date, DateTime, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from core.database import Base


class InterviewModel(Base):
    """Interview table ORM model"""

    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, autoincrement=True)

    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    employer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    applicant_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    interview_date = Column(Date, nullable=False)
    interview_time = Column(String(20), nullable=False)
    interview_type = Column(String(20), nullable=False, default="in-person")
    location = Column(String(255), nullable=True)
    meeting_link = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="scheduled", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<InterviewModel {self.id} {self.interview_date} - {self.status}>"
