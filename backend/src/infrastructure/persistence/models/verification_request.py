"""
Verification Request ORM Model
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from core.database import Base


class VerificationRequestModel(Base):
    """Identity verification request table ORM model"""

    __tablename__ = "verification_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    id_type = Column(String(50), nullable=False)
    id_number = Column(String(100), nullable=False)
    id_document_url = Column(String(500), nullable=True)
    selfie_url = Column(String(500), nullable=True)

    status = Column(String(20), nullable=False, default="pending", index=True)
    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<VerificationRequestModel {self.id} - {self.status}>"
