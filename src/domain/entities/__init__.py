"""
Clinic Account Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AccountState,
    CredentialState,
    FacilityType,
    OAuthProvider,
    Role,
)

# Export all entities
from .account import Account, normalize_email
from .external_identity import ExternalIdentity
from .audit_log_entry import AuditLogEntry
from .facility import Facility

__all__ = [
    # Enums
    "AccountState",
    "CredentialState",
    "FacilityType",
    "OAuthProvider",
    "Role",
    # Entities
    "Account",
    "normalize_email",
    "ExternalIdentity",
    "AuditLogEntry",
    "Facility",
]
