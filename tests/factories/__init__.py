"""Test factories."""

from tests.factories.principal import (
    PermissionFactory,
    PrincipalFactory,
    RoleFactory,
    make_principal,
)


__all__ = [
    "PermissionFactory",
    "PrincipalFactory",
    "RoleFactory",
    "make_principal",
]
