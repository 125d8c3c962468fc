"""
Facility Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Facility, FacilityType


class CreateFacilityCommand(BaseModel):
    name: str
    facility_type: FacilityType
    postal_code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    units: Optional[int] = None
    notes: Optional[str] = None


class UpdateFacilityCommand(BaseModel):
    """Partial update; None means unchanged"""

    name: Optional[str] = None
    facility_type: Optional[FacilityType] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    units: Optional[int] = None
    notes: Optional[str] = None


class FacilityResponse(BaseModel):
    id: str
    name: str
    facility_type: str
    postal_code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    units: Optional[int] = None
    notes: Optional[str] = None
    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_facility(cls, facility: Facility) -> "FacilityResponse":
        return cls(
            id=str(facility.id),
            name=facility.name,
            facility_type=facility.facility_type.value,
            postal_code=facility.postal_code,
            address=facility.address,
            phone=facility.phone,
            fax=facility.fax,
            units=facility.units,
            notes=facility.notes,
            created_by=str(facility.created_by),
            updated_by=str(facility.updated_by) if facility.updated_by else None,
            created_at=facility.created_at,
            updated_at=facility.updated_at,
        )


class ListFacilitiesResponse(BaseModel):
    count: int
    data: List[FacilityResponse]
