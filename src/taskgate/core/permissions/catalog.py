"""Known permission names and default roles.

Permission names are free-form strings, so a typo in a requirement would
otherwise read as an ordinary denial. The catalog lets configuration be
checked against the names the backend actually seeds. Evaluation does
not depend on it: an unknown name is still simply not granted.
"""

from collections.abc import Iterable

from taskgate.core.constants import ADMIN_ROLE, SEEDED_PERMISSIONS
from taskgate.core.errors import UnknownPermissionError
from taskgate.core.permissions.models import Permission, Role
from taskgate.core.permissions.requirements import AccessRequirement


class PermissionCatalog:
    """The set of permission names the system defines."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names: tuple[str, ...] = tuple(dict.fromkeys(names))
        self._lookup = frozenset(self._names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __len__(self) -> int:
        return len(self._names)

    def unknown(self, names: Iterable[str]) -> list[str]:
        """Return the names missing from the catalog, in input order."""
        return [name for name in dict.fromkeys(names) if name not in self._lookup]

    def validate_requirement(
        self, requirement: AccessRequirement, source: str | None = None
    ) -> None:
        """Check every permission a requirement references.

        Args:
            requirement: The requirement to check
            source: What the requirement is attached to, for the error message

        Raises:
            UnknownPermissionError: If any referenced name is not in the catalog
        """
        unknown = self.unknown(requirement.permission_names())
        if unknown:
            raise UnknownPermissionError(unknown, source=source)

    def permissions(self) -> tuple[Permission, ...]:
        """Return catalog entries as Permission models."""
        return tuple(Permission(name=name) for name in self._names)


DEFAULT_CATALOG = PermissionCatalog(SEEDED_PERMISSIONS)

# The backend seeds a single admin role holding every permission.
DEFAULT_ROLES: tuple[Role, ...] = (
    Role(name=ADMIN_ROLE, permissions=DEFAULT_CATALOG.permissions()),
)
