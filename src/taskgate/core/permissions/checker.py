"""Permission checking logic.

This module answers authorization queries for one principal: single
permission, any-of, all-of, role membership, and composite
``AccessRequirement`` evaluation. Every query reads an immutable
snapshot and returns a boolean; nothing here raises or mutates state.
A missing principal is fully unauthenticated, so every check fails.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, assert_never

import structlog

from taskgate.core.permissions.aggregator import EffectivePermissionSet, aggregate
from taskgate.core.permissions.models import Principal
from taskgate.core.permissions.requirements import (
    AccessRequirement,
    PermissionClause,
    PermissionsClause,
    RoleClause,
)


if TYPE_CHECKING:
    from taskgate.core.permissions.catalog import PermissionCatalog
    from taskgate.core.session.store import SessionSnapshot


logger = structlog.get_logger()


class PermissionChecker:
    """Evaluates authorization queries for a principal.

    The effective permission set is computed once, at construction, unless
    one is supplied (the session store already holds it).
    """

    def __init__(
        self,
        principal: Principal | None,
        effective: EffectivePermissionSet | None = None,
        catalog: "PermissionCatalog | None" = None,
    ) -> None:
        self.principal = principal
        if principal is None:
            self.effective = EffectivePermissionSet.empty()
        else:
            self.effective = effective if effective is not None else aggregate(principal)
        self.catalog = catalog
        self._role_names = principal.role_names if principal is not None else ()

    @classmethod
    def from_session(
        cls,
        snapshot: "SessionSnapshot",
        catalog: "PermissionCatalog | None" = None,
    ) -> "PermissionChecker":
        """Build a checker reusing the snapshot's effective set."""
        return cls(snapshot.principal, effective=snapshot.effective, catalog=catalog)

    @property
    def permission_names(self) -> tuple[str, ...]:
        return self.effective.names

    @property
    def role_names(self) -> tuple[str, ...]:
        return self._role_names

    def has_permission(self, name: str) -> bool:
        """Check if the principal holds a permission.

        Args:
            name: Permission name (e.g., "view tasks")

        Returns:
            True if the name is in the effective set
        """
        if name in self.effective:
            return True
        if self.catalog is not None and name not in self.catalog:
            logger.warning("unknown_permission", permission=name)
        return False

    def has_any_permission(self, names: Iterable[str]) -> bool:
        """Check if the principal holds at least one of the permissions.

        An empty list is never satisfied. Open access comes only from the
        ``none`` requirement, not from an empty list.
        """
        return any(self.has_permission(name) for name in names)

    def has_all_permissions(self, names: Iterable[str]) -> bool:
        """Check if the principal holds every permission.

        An empty list is vacuously satisfied.
        """
        return all(self.has_permission(name) for name in names)

    def has_role(self, role_name: str) -> bool:
        """Check role membership (exact, case-sensitive)."""
        return role_name in self._role_names

    def evaluate(self, requirement: AccessRequirement) -> bool:
        """Evaluate a composite requirement.

        Clauses are checked in order (permission, permissions, role) and
        the first failure denies. No clauses means allow.

        Args:
            requirement: The requirement to evaluate

        Returns:
            True if every clause passes
        """
        for clause in requirement.clauses:
            if isinstance(clause, PermissionClause):
                passed = self.has_permission(clause.name)
            elif isinstance(clause, PermissionsClause):
                if clause.require_all:
                    passed = self.has_all_permissions(clause.names)
                else:
                    passed = self.has_any_permission(clause.names)
            elif isinstance(clause, RoleClause):
                passed = self.has_role(clause.name)
            else:
                assert_never(clause)

            if not passed:
                return False
        return True


def check_access(
    principal: Principal | None,
    requirement: AccessRequirement,
) -> bool:
    """Convenience function for a one-off requirement check.

    Args:
        principal: The principal, or None when unauthenticated
        requirement: The requirement to evaluate

    Returns:
        True if the requirement passes
    """
    return PermissionChecker(principal).evaluate(requirement)
