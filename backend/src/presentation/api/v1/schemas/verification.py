"""
Verification Schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from domain.value_objects import VerificationStatus
from .common import CamelModel


class VerificationSubmitRequest(CamelModel):
    # Presence is checked by the verification rules so the error names the field
    id_type: Optional[str] = Field(None, max_length=50)
    id_number: Optional[str] = Field(None, max_length=100)
    id_document_url: Optional[str] = Field(None, max_length=500)
    selfie_url: Optional[str] = Field(None, max_length=500)


class VerificationRequestResponse(CamelModel):
    id: int
    user_id: UUID
    id_type: str
    id_number: str
    id_document_url: Optional[str] = None
    selfie_url: Optional[str] = None
    status: VerificationStatus
    admin_notes: Optional[str] = None
    reviewed_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VerificationStatusResponse(CamelModel):
    is_verified: bool
    request: Optional[VerificationRequestResponse] = None


class VerificationDecisionRequest(CamelModel):
    status: VerificationStatus
    admin_notes: Optional[str] = Field(None, max_length=2000)
