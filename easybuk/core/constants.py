from enum import Enum


class Role(str, Enum):
    CLIENT = "CLIENT"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"


# Roles a user may pick at signup or add to their own account.
SELF_SERVICE_ROLES: frozenset[Role] = frozenset({Role.CLIENT, Role.PROVIDER})
