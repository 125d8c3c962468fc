"""
Facility Use Cases

Tenant-scoped CRUD for facilities visited by a clinic.
"""

from .list_facilities_use_case import ListFacilitiesUseCase
from .get_facility_use_case import GetFacilityUseCase
from .create_facility_use_case import CreateFacilityUseCase
from .update_facility_use_case import UpdateFacilityUseCase
from .delete_facility_use_case import DeleteFacilityUseCase
from .dtos import (
    CreateFacilityCommand,
    FacilityResponse,
    ListFacilitiesResponse,
    UpdateFacilityCommand,
)

__all__ = [
    "ListFacilitiesUseCase",
    "GetFacilityUseCase",
    "CreateFacilityUseCase",
    "UpdateFacilityUseCase",
    "DeleteFacilityUseCase",
    "CreateFacilityCommand",
    "UpdateFacilityCommand",
    "FacilityResponse",
    "ListFacilitiesResponse",
]
