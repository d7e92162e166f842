"""
Offer ORM Model
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from core.database import Base


class OfferModel(Base):
    """Offer table ORM model"""

    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, autoincrement=True)

    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    employer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    applicant_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    salary = Column(Integer, nullable=False)
    compensation = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<OfferModel {self.id} - {self.status}>"
