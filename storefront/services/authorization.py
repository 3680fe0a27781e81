"""
Authorization predicates.

Every resource-level check reduces to "is the caller an admin, or the customer
who owns the resource". The predicates are pure functions of the caller and
the owning customer id, so they can be evaluated without any web framework.
"""
from storefront.domain.errors import AccessDeniedError
from storefront.domain.identity import Caller, Role


def has_any_role(caller: Caller, *roles: Role) -> bool:
    return any(caller.has_role(role) for role in roles)


def is_authorized(caller: Caller, owner_customer_id: int | None) -> bool:
    if caller.has_role(Role.ADMIN):
        return True
    if caller.customer_id is None or owner_customer_id is None:
        return False
    return caller.customer_id == owner_customer_id


def require_owner(caller: Caller, owner_customer_id: int | None) -> None:
    if not is_authorized(caller, owner_customer_id):
        raise AccessDeniedError()


def require_roles(caller: Caller, *roles: Role) -> None:
    if not has_any_role(caller, *roles):
        raise AccessDeniedError()
