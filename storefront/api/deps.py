# storefront/api/deps.py
from functools import lru_cache

from fastapi import Header, HTTPException

from storefront.domain.identity import Caller, Role
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService


def get_caller(
    x_user_id: int | None = Header(None),
    x_user_roles: str = Header(""),
    x_customer_id: int | None = Header(None),
) -> Caller:
    """
    Identity of the caller, forwarded by the gateway after authentication.
    Unknown role names are ignored.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing caller identity")

    names = {r.strip().upper() for r in x_user_roles.split(",") if r.strip()}
    roles = frozenset(Role(n) for n in names if n in Role.__members__)

    return Caller(user_id=x_user_id, roles=roles, customer_id=x_customer_id)


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


def get_notifier() -> NotificationService:
    return NotificationService()
