"""
Audit Log Use Cases
"""

from .list_audit_log_use_case import ListAuditLogUseCase, clamp_limit
from .purge_audit_log_use_case import PurgeAuditLogUseCase
from .dtos import AuditLogEntryResponse, ListAuditLogResponse, PurgeAuditLogResponse

__all__ = [
    "ListAuditLogUseCase",
    "PurgeAuditLogUseCase",
    "clamp_limit",
    "AuditLogEntryResponse",
    "ListAuditLogResponse",
    "PurgeAuditLogResponse",
]
