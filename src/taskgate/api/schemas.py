"""Request and response schemas for the access API."""

from pydantic import BaseModel, ConfigDict, Field

from taskgate.core.permissions.requirements import AccessRequirement
from taskgate.navigation.models import NavigationNode


class PermissionsResponse(BaseModel):
    """Effective permissions and role names of the current principal."""

    permissions: list[str]
    roles: list[str]


class NavigationItem(BaseModel):
    """A visible navigation entry, as rendered by the client.

    Requirements are not sent; the client only sees what it may show.
    """

    title: str
    href: str | None = None
    icon: str | None = None
    children: list["NavigationItem"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: NavigationNode) -> "NavigationItem":
        return cls(
            title=node.title,
            href=node.href,
            icon=node.icon,
            children=[cls.from_node(child) for child in node.children],
        )


class NavigationResponse(BaseModel):
    items: list[NavigationItem]


class RequirementIn(BaseModel):
    """An access requirement in configuration shape.

    All fields are optional; an empty body is the open requirement.
    """

    model_config = ConfigDict(extra="forbid")

    permission: str | None = Field(None, min_length=1)
    permissions: list[str] | None = None
    require_all: bool = False
    role: str | None = Field(None, min_length=1)

    def to_requirement(self) -> AccessRequirement:
        return AccessRequirement.of(
            permission=self.permission,
            permissions=self.permissions,
            require_all=self.require_all,
            role=self.role,
        )


class AccessResponse(BaseModel):
    allowed: bool
