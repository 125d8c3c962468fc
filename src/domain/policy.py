"""
Authorization Policy

Pure decisions over (actor role, action, resource owner). Use cases consult
this module before touching data; nothing here performs I/O.

Roles are mapped to privilege levels through ROLE_PRIVILEGES, and each
action lists the roles that may attempt it. Tenant-privileged roles
(clinic_admin) are further restricted to resources they own, which is
expressed both as a per-resource decision (can_perform) and as a query
predicate (access_scope) that repositories apply when listing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Union
from uuid import UUID

from src.domain.entities.enums import Role


class PrivilegeLevel(str, Enum):
    system = "system"
    tenant = "tenant"
    clinical = "clinical"


class Action(str, Enum):
    list_accounts = "list_accounts"
    provision_account = "provision_account"
    set_account_status = "set_account_status"
    delete_account = "delete_account"
    purge_account = "purge_account"
    reissue_password = "reissue_password"
    change_role = "change_role"
    view_audit_log = "view_audit_log"
    purge_audit_log = "purge_audit_log"
    read_resource = "read_resource"
    create_resource = "create_resource"
    update_resource = "update_resource"
    delete_resource = "delete_resource"
    create_visit_record = "create_visit_record"


class Decision(str, Enum):
    allow = "allow"
    deny = "deny"


# `admin` predates `system_admin` and carries the same privilege level.
ROLE_PRIVILEGES: Dict[Role, PrivilegeLevel] = {
    Role.system_admin: PrivilegeLevel.system,
    Role.admin: PrivilegeLevel.system,
    Role.clinic_admin: PrivilegeLevel.tenant,
    Role.dentist: PrivilegeLevel.clinical,
    Role.hygienist: PrivilegeLevel.clinical,
    Role.staff: PrivilegeLevel.clinical,
    Role.billing: PrivilegeLevel.clinical,
}

SYSTEM_ROLES: FrozenSet[Role] = frozenset(
    role for role, level in ROLE_PRIVILEGES.items() if level == PrivilegeLevel.system
)
ALL_ROLES: FrozenSet[Role] = frozenset(ROLE_PRIVILEGES)
RESOURCE_MANAGERS: FrozenSet[Role] = SYSTEM_ROLES | {Role.clinic_admin}

ACTION_ROLES: Dict[Action, FrozenSet[Role]] = {
    Action.list_accounts: SYSTEM_ROLES,
    Action.provision_account: SYSTEM_ROLES,
    Action.set_account_status: SYSTEM_ROLES,
    Action.delete_account: SYSTEM_ROLES,
    Action.purge_account: SYSTEM_ROLES,
    Action.reissue_password: SYSTEM_ROLES,
    Action.change_role: SYSTEM_ROLES,
    Action.view_audit_log: SYSTEM_ROLES,
    Action.purge_audit_log: SYSTEM_ROLES,
    Action.read_resource: ALL_ROLES,
    Action.create_resource: RESOURCE_MANAGERS,
    Action.update_resource: RESOURCE_MANAGERS,
    Action.delete_resource: RESOURCE_MANAGERS,
    Action.create_visit_record: SYSTEM_ROLES | {Role.dentist, Role.hygienist},
}

# Actions on an existing resource; tenant roles must own the resource.
OWNER_SCOPED_ACTIONS: FrozenSet[Action] = frozenset(
    {Action.read_resource, Action.update_resource, Action.delete_resource}
)


@dataclass(frozen=True)
class ActorContext:
    """The authenticated caller, resolved from the bearer token on every request."""

    account_id: UUID
    role: Role
    internal_id: Optional[UUID] = None


@dataclass(frozen=True)
class AccessScope:
    """Row predicate for listing: either everything or one owner's rows."""

    owner_id: Optional[UUID] = None

    @property
    def unrestricted(self) -> bool:
        return self.owner_id is None

    def permits(self, resource_owner_id: Optional[UUID]) -> bool:
        return self.unrestricted or resource_owner_id == self.owner_id


def _as_role(role: Union[Role, str]) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


def privilege_of(role: Union[Role, str]) -> Optional[PrivilegeLevel]:
    parsed = _as_role(role)
    return ROLE_PRIVILEGES.get(parsed) if parsed else None


def can_perform(
    actor_role: Union[Role, str],
    action: Action,
    resource_owner_id: Optional[UUID] = None,
    actor_id: Optional[UUID] = None,
) -> Decision:
    """
    Decide whether an actor may perform an action.

    Unknown roles and unknown actions are denied. For tenant roles and
    owner-scoped actions the resource owner must equal the actor.
    """
    role = _as_role(actor_role)
    if role is None or role not in ACTION_ROLES.get(action, frozenset()):
        return Decision.deny

    if ROLE_PRIVILEGES[role] == PrivilegeLevel.tenant and action in OWNER_SCOPED_ACTIONS:
        if actor_id is None or resource_owner_id != actor_id:
            return Decision.deny

    return Decision.allow


def is_allowed(
    actor: ActorContext, action: Action, resource_owner_id: Optional[UUID] = None
) -> bool:
    return (
        can_perform(actor.role, action, resource_owner_id, actor.account_id)
        == Decision.allow
    )


def access_scope(actor_role: Union[Role, str], actor_id: UUID) -> AccessScope:
    """Listing predicate: tenant roles see only rows they own."""
    if privilege_of(actor_role) == PrivilegeLevel.tenant:
        return AccessScope(owner_id=actor_id)
    return AccessScope()
