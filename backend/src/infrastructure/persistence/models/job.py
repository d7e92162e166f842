"""
Job ORM Model
SQLAlchemy model for job postings
"""
from sqlalchemy import Column, String, Integer, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from core.database import Base


class JobModel(Base):
    """Job posting table ORM model"""

    __tablename__ = "jobs"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Owner
    employer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Basic Info
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    job_type = Column(String(50), nullable=False, default="Full-time")
    location = Column(String(255), nullable=False)

    # Pay
    salary_min = Column(Integer, nullable=False, default=0)
    salary_max = Column(Integer, nullable=False, default=0)
    wage = Column(String(100), nullable=True)

    # Audience
    gender = Column(String(20), nullable=False, default="Any")
    age_min = Column(Integer, nullable=True)
    age_max = Column(Integer, nullable=True)

    # Status
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<JobModel {self.id} {self.title}>"
