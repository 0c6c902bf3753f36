"""Default task-manager navigation menu."""

from taskgate.core.permissions.requirements import AccessRequirement
from taskgate.navigation.models import NavigationNode


DEFAULT_NAVIGATION: tuple[NavigationNode, ...] = (
    NavigationNode(title="Dashboard", href="/dashboard", icon="layout-dashboard"),
    NavigationNode(
        title="Analytics",
        href="/analytics",
        icon="bar-chart-3",
        requirement=AccessRequirement.permission("view analytics"),
    ),
    NavigationNode(
        title="Users",
        href="/users",
        icon="users",
        requirement=AccessRequirement.permission("view users"),
    ),
    NavigationNode(
        title="Projects",
        href="/projects",
        icon="folder-open",
        requirement=AccessRequirement.permission("view projects"),
    ),
    NavigationNode(
        title="Tasks",
        href="/tasks",
        icon="check-square",
        requirement=AccessRequirement.permission("view tasks"),
    ),
    NavigationNode(
        title="Help Requests",
        href="/help-requests",
        icon="help-circle",
        requirement=AccessRequirement.permission("view help requests"),
    ),
    NavigationNode(
        title="Tickets",
        href="/tickets",
        icon="ticket",
        requirement=AccessRequirement.permission("view tickets"),
    ),
    NavigationNode(
        title="Ratings",
        icon="star",
        requirement=AccessRequirement.permissions(
            ["view rating configs", "create task ratings"]
        ),
        children=(
            NavigationNode(
                title="Configurations",
                href="/rating-configs",
                requirement=AccessRequirement.permission("view rating configs"),
            ),
            NavigationNode(
                title="Ratings",
                href="/ratings",
                requirement=AccessRequirement.permissions(
                    ["create task ratings", "create stakeholder ratings"]
                ),
            ),
        ),
    ),
    NavigationNode(
        title="Roles",
        href="/roles",
        icon="shield",
        requirement=AccessRequirement.permission("view roles"),
    ),
)
