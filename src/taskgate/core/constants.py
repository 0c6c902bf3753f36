"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic strings and ensure consistency.
"""

# Routes
DEFAULT_LANDING_ROUTE = "/dashboard"
DEFAULT_LOGIN_ROUTE = "/login"

# Redirect status for a denied page (browser re-issues a GET)
GUARD_REDIRECT_STATUS = 303

# Role names
ADMIN_ROLE = "admin"

# Seeded permission names, grouped by resource
USER_PERMISSIONS = ("view users", "create users", "edit users", "delete users")
ROLE_PERMISSIONS = ("view roles", "create roles", "edit roles", "delete roles")
PERMISSION_PERMISSIONS = ("view permissions",)
PROJECT_PERMISSIONS = (
    "view projects",
    "create projects",
    "edit projects",
    "delete projects",
)
SECTION_PERMISSIONS = (
    "view sections",
    "create sections",
    "edit sections",
    "delete sections",
)
TASK_PERMISSIONS = ("view tasks", "create tasks", "edit tasks", "delete tasks")
SUBTASK_PERMISSIONS = (
    "view subtasks",
    "create subtasks",
    "edit subtasks",
    "delete subtasks",
)
HELP_REQUEST_PERMISSIONS = (
    "view help requests",
    "create help requests",
    "edit help requests",
    "delete help requests",
)
TICKET_PERMISSIONS = ("view tickets", "edit tickets", "delete tickets")
RATING_CONFIG_PERMISSIONS = (
    "view rating configs",
    "create rating configs",
    "edit rating configs",
    "delete rating configs",
)
RATING_PERMISSIONS = (
    "create task ratings",
    "edit task ratings",
    "create stakeholder ratings",
    "edit stakeholder ratings",
    "view final ratings",
    "calculate final ratings",
)
ANALYTICS_PERMISSIONS = ("view analytics",)

SEEDED_PERMISSIONS: tuple[str, ...] = (
    *USER_PERMISSIONS,
    *ROLE_PERMISSIONS,
    *PERMISSION_PERMISSIONS,
    *PROJECT_PERMISSIONS,
    *SECTION_PERMISSIONS,
    *TASK_PERMISSIONS,
    *SUBTASK_PERMISSIONS,
    *HELP_REQUEST_PERMISSIONS,
    *TICKET_PERMISSIONS,
    *RATING_CONFIG_PERMISSIONS,
    *RATING_PERMISSIONS,
    *ANALYTICS_PERMISSIONS,
)
