"""Effective permission aggregation.

A principal's effective permissions are its direct grants merged with
everything its roles grant, deduplicated by name. The result is
recomputed from scratch whenever the principal changes, so a revoked
role never leaves stale entries behind.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from taskgate.core.permissions.models import Principal


class EffectivePermissionSet(BaseModel):
    """Deduplicated permission names in first-seen order.

    Order is informational only; membership decides access.
    """

    model_config = ConfigDict(frozen=True)

    names: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "EffectivePermissionSet":
        """The set held by an unauthenticated caller."""
        return cls()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "EffectivePermissionSet":
        # dict preserves first-seen order
        return cls(names=tuple(dict.fromkeys(names)))

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)


def aggregate(principal: Principal | None) -> EffectivePermissionSet:
    """Merge direct and role-inherited permissions into one set.

    Args:
        principal: The principal, or None when unauthenticated

    Returns:
        The effective permission set; empty for None
    """
    if principal is None:
        return EffectivePermissionSet.empty()
    return EffectivePermissionSet.from_names(
        permission.name for permission in principal.iter_granted()
    )
