# storefront/domain/identity.py
from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    MANAGER = "MANAGER"
    CUSTOMER = "CUSTOMER"


@dataclass(frozen=True)
class Caller:
    """Identity of whoever makes the request, as forwarded by the gateway."""

    user_id: int
    roles: frozenset = field(default_factory=frozenset)
    customer_id: int | None = None

    def has_role(self, role: Role) -> bool:
        return role in self.roles
