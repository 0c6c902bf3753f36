"""Principal, role and permission models.

This module defines the RBAC data the identity service hands us:
- Permission: a named capability (e.g. "view tasks")
- Role: a named set of permissions
- Principal: the authenticated user with direct grants and roles

All models are immutable. A new login or profile fetch produces a new
Principal; nothing is patched in place.
"""

from collections.abc import Iterator
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Permission(BaseModel):
    """A named capability.

    Attributes:
        name: Unique permission name (e.g., "view tasks", "edit projects")
        id: Identifier assigned by the identity service, if known
        description: Human-readable description
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    id: int | None = None
    description: str | None = None

    def __repr__(self) -> str:
        return f"<Permission({self.name})>"


class Role(BaseModel):
    """A named set of permissions.

    Attributes:
        name: Role name (e.g., "admin", "manager")
        id: Identifier assigned by the identity service, if known
        permissions: Permissions granted through this role
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    id: int | None = None
    permissions: tuple[Permission, ...] = ()

    @field_validator("permissions", mode="before")
    @classmethod
    def coerce_permissions(cls, v: Any) -> Any:
        """Accept bare permission names as well as permission objects."""
        return _coerce_permissions(v)

    @property
    def permission_names(self) -> tuple[str, ...]:
        """Return the names of this role's permissions."""
        return tuple(permission.name for permission in self.permissions)

    def __repr__(self) -> str:
        return f"<Role({self.name})>"


class Principal(BaseModel):
    """The authenticated user whose access is being evaluated.

    Attributes:
        id: User identifier from the identity service
        name: Display name
        email: Email address
        avatar_url: Optional avatar URL
        roles: Assigned roles, each carrying its permissions
        permissions: Permissions granted directly to the user
    """

    model_config = ConfigDict(frozen=True)

    # Fields a profile update may change without touching access data
    PROFILE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"name", "email", "avatar_url"}
    )

    id: int | str
    name: str = ""
    email: str = ""
    avatar_url: str | None = None
    roles: tuple[Role, ...] = ()
    permissions: tuple[Permission, ...] = ()

    @field_validator("permissions", mode="before")
    @classmethod
    def coerce_permissions(cls, v: Any) -> Any:
        """Accept bare permission names as well as permission objects."""
        return _coerce_permissions(v)

    @property
    def role_names(self) -> tuple[str, ...]:
        """Return assigned role names in assignment order."""
        return tuple(role.name for role in self.roles)

    def iter_granted(self) -> Iterator[Permission]:
        """Yield every granted permission: direct grants first, then by role.

        Duplicates are not removed here; see ``aggregate``.
        """
        yield from self.permissions
        for role in self.roles:
            yield from role.permissions

    def with_profile(self, **fields: Any) -> "Principal":
        """Return a copy with profile fields changed.

        Args:
            **fields: Any of name, email, avatar_url

        Returns:
            A new Principal sharing this one's roles and permissions

        Raises:
            ValueError: If a non-profile field is passed
        """
        forbidden = set(fields) - self.PROFILE_FIELDS
        if forbidden:
            raise ValueError(
                f"Profile updates cannot change: {', '.join(sorted(forbidden))}"
            )
        return self.model_copy(update=fields)


def _coerce_permissions(value: Any) -> Any:
    """Turn ``["view tasks"]`` into ``[{"name": "view tasks"}]``."""
    if isinstance(value, list | tuple):
        return [{"name": item} if isinstance(item, str) else item for item in value]
    return value
