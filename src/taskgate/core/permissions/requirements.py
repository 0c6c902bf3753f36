"""Declarative access requirements.

A requirement is an ordered tuple of clauses. Each clause is one variant
of a closed union discriminated on ``kind``:

- ``permission``: a single permission name must be held
- ``permissions``: any (or, with ``require_all``, every) listed name
- ``role``: the principal must hold the named role

An empty requirement is the ``none`` requirement and always allows.
Clauses present together are conjunctive. The configuration shape is
a plain mapping::

    {"permission": "view roles"}
    {"permissions": ["view rating configs", "create task ratings"],
     "require_all": False}
    {"role": "admin", "permission": "view users"}
"""

from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PermissionClause(BaseModel):
    """Requires a single permission."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["permission"] = "permission"
    name: str = Field(..., min_length=1)


class PermissionsClause(BaseModel):
    """Requires any, or all, of several permissions."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["permissions"] = "permissions"
    names: tuple[str, ...]
    require_all: bool = False


class RoleClause(BaseModel):
    """Requires a role, matched by exact name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["role"] = "role"
    name: str = Field(..., min_length=1)


Clause = Annotated[
    PermissionClause | PermissionsClause | RoleClause,
    Field(discriminator="kind"),
]

# Evaluation order; also the order clauses are stored in.
CLAUSE_ORDER: tuple[str, ...] = ("permission", "permissions", "role")


class AccessRequirement(BaseModel):
    """A declarative gate attached to a route or navigation node."""

    model_config = ConfigDict(frozen=True)

    clauses: tuple[Clause, ...] = ()

    @field_validator("clauses")
    @classmethod
    def validate_clauses(cls, v: tuple[Any, ...]) -> tuple[Any, ...]:
        """Allow one clause per kind and store them in evaluation order."""
        kinds = [clause.kind for clause in v]
        duplicated = sorted({kind for kind in kinds if kinds.count(kind) > 1})
        if duplicated:
            raise ValueError(f"Duplicate clause kind(s): {', '.join(duplicated)}")
        return tuple(sorted(v, key=lambda clause: CLAUSE_ORDER.index(clause.kind)))

    @model_validator(mode="before")
    @classmethod
    def parse_config_shape(cls, data: Any) -> Any:
        """Accept the flat configuration mapping as well as ``clauses``."""
        if data is None:
            return {"clauses": ()}
        if isinstance(data, Mapping) and "clauses" not in data:
            return {"clauses": _clauses_from_mapping(data)}
        return data

    @classmethod
    def none(cls) -> "AccessRequirement":
        """The open requirement: always allows."""
        return cls(clauses=())

    @classmethod
    def permission(cls, name: str) -> "AccessRequirement":
        return cls(clauses=(PermissionClause(name=name),))

    @classmethod
    def permissions(
        cls, names: Iterable[str], require_all: bool = False
    ) -> "AccessRequirement":
        return cls(
            clauses=(PermissionsClause(names=tuple(names), require_all=require_all),)
        )

    @classmethod
    def role(cls, name: str) -> "AccessRequirement":
        return cls(clauses=(RoleClause(name=name),))

    @classmethod
    def of(
        cls,
        permission: str | None = None,
        permissions: Iterable[str] | None = None,
        require_all: bool = False,
        role: str | None = None,
    ) -> "AccessRequirement":
        """Build a requirement from the optional clause arguments.

        Usage:
            AccessRequirement.of(permission="view users", role="admin")

        Args:
            permission: Single permission name
            permissions: Several permission names
            require_all: If True, every name in ``permissions`` is required
            role: Role name

        Returns:
            The combined requirement; ``none`` when no argument is given
        """
        return cls.model_validate(
            {
                "permission": permission,
                "permissions": None if permissions is None else list(permissions),
                "require_all": require_all,
                "role": role,
            }
        )

    @property
    def is_open(self) -> bool:
        """True for the ``none`` requirement."""
        return not self.clauses

    def permission_names(self) -> tuple[str, ...]:
        """Return every permission name referenced, in clause order."""
        names: list[str] = []
        for clause in self.clauses:
            if isinstance(clause, PermissionClause):
                names.append(clause.name)
            elif isinstance(clause, PermissionsClause):
                names.extend(clause.names)
        return tuple(names)

    def to_config(self) -> dict[str, Any]:
        """Serialise back to the flat configuration mapping."""
        config: dict[str, Any] = {}
        for clause in self.clauses:
            if isinstance(clause, PermissionClause):
                config["permission"] = clause.name
            elif isinstance(clause, PermissionsClause):
                config["permissions"] = list(clause.names)
                config["require_all"] = clause.require_all
            else:
                config["role"] = clause.name
        return config


def _clauses_from_mapping(data: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Translate the flat configuration mapping into clause dicts."""
    unknown = set(data) - {"permission", "permissions", "require_all", "role"}
    if unknown:
        raise ValueError(f"Unknown requirement key(s): {', '.join(sorted(unknown))}")

    clauses: list[dict[str, Any]] = []
    if data.get("permission") is not None:
        clauses.append({"kind": "permission", "name": data["permission"]})
    if data.get("permissions") is not None:
        names = data["permissions"]
        if isinstance(names, str):
            raise ValueError("'permissions' must be a list of names")
        clauses.append(
            {
                "kind": "permissions",
                "names": names,
                "require_all": data.get("require_all", False),
            }
        )
    if data.get("role") is not None:
        clauses.append({"kind": "role", "name": data["role"]})
    return clauses
