"""Navigation tree model."""

from pydantic import BaseModel, ConfigDict, Field

from taskgate.core.permissions.requirements import AccessRequirement


class NavigationNode(BaseModel):
    """One entry in a configured menu.

    Attributes:
        title: Label shown in the menu
        href: Direct destination, if the entry is a link
        icon: Icon identifier for the renderer
        requirement: Gate for this entry; open by default
        children: Sub-entries, each with its own requirement
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    href: str | None = None
    icon: str | None = None
    requirement: AccessRequirement = AccessRequirement.none()
    children: tuple["NavigationNode", ...] = ()

    @property
    def is_group(self) -> bool:
        """An expandable group: children and no direct destination."""
        return self.href is None and bool(self.children)

    @property
    def is_leaf(self) -> bool:
        return not self.is_group
