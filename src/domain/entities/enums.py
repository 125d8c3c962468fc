"""
Clinic Account Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class Role(str, Enum):
    """Account role; determines authorization scope"""

    system_admin = "system_admin"
    clinic_admin = "clinic_admin"
    admin = "admin"  # legacy alias of system_admin
    dentist = "dentist"
    hygienist = "hygienist"
    staff = "staff"
    billing = "billing"


class AccountState(str, Enum):
    """Account lifecycle state"""

    active = "active"
    suspended = "suspended"
    deleted = "deleted"


class CredentialState(str, Enum):
    """How an account is able to authenticate"""

    password = "password"
    oauth_only = "oauth_only"
    both = "both"


class OAuthProvider(str, Enum):
    """Supported external identity providers"""

    google = "google"
    facebook = "facebook"


class FacilityType(str, Enum):
    """Kind of facility visited by the clinic"""

    long_term_care = "long_term_care"
    medical = "medical"
    home = "home"
    other = "other"
