"""Permission system for role-based access control (RBAC)."""

from taskgate.core.permissions.aggregator import EffectivePermissionSet, aggregate
from taskgate.core.permissions.catalog import (
    DEFAULT_CATALOG,
    DEFAULT_ROLES,
    PermissionCatalog,
)
from taskgate.core.permissions.checker import PermissionChecker, check_access
from taskgate.core.permissions.models import Permission, Principal, Role
from taskgate.core.permissions.requirements import (
    AccessRequirement,
    PermissionClause,
    PermissionsClause,
    RoleClause,
)


__all__ = [
    # Models
    "Permission",
    "Principal",
    "Role",
    # Requirements
    "AccessRequirement",
    "PermissionClause",
    "PermissionsClause",
    "RoleClause",
    # Aggregation
    "EffectivePermissionSet",
    "aggregate",
    # Checker
    "PermissionChecker",
    "check_access",
    # Catalog
    "DEFAULT_CATALOG",
    "DEFAULT_ROLES",
    "PermissionCatalog",
]
