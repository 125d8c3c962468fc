"""
Facility Entity

A facility visited by a clinic; owned by the clinic account that created it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import FacilityType


class Facility(SQLModel, table=True):
    """
    Facility entity - tenant-scoped resource.

    Business Rules:
    - created_by establishes tenant membership
    - A clinic_admin only ever sees facilities it created
    """

    __tablename__ = "facilities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    facility_type: FacilityType = Field(nullable=False)

    postal_code: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    phone: Optional[str] = Field(default=None, max_length=50)
    fax: Optional[str] = Field(default=None, max_length=50)
    units: Optional[int] = None
    notes: Optional[str] = None

    created_by: UUID = Field(nullable=False, index=True)
    updated_by: Optional[UUID] = None

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_facility_name", "name"),)
