import uuid
from contextlib import contextmanager

import redis
from storefront.domain.errors import ConflictingStateError
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in one atomic step, only the owner of the token can release
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Short-lived per-customer cart lock.
    Cart mutations and checkout of one customer are serialized through it,
    the key expires by itself so a crashed request cannot block the cart.
    """

    def __init__(self, url: str | None = None, ttl: int | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl or CART_LOCK_TTL_SECONDS

    @staticmethod
    def _cart_key(customer_id: int) -> str:
        return f"cart:{customer_id}:lock"

    @redis_retry()
    def acquire_cart_lock(self, customer_id: int, token: str) -> bool:
        key = self._cart_key(customer_id)
        logger.debug(f"Acquire lock {key} token {token}")
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    @redis_retry()
    def release_cart_lock(self, customer_id: int, token: str) -> bool:
        key = self._cart_key(customer_id)
        logger.debug(f"Release lock {key} token {token}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, customer_id: int):
        token = uuid.uuid4().hex
        if not self.acquire_cart_lock(customer_id, token):
            raise ConflictingStateError(f"Cart of customer {customer_id} is busy, try again")
        try:
            yield token
        finally:
            if not self.release_cart_lock(customer_id, token):
                logger.warning(f"Cart lock for customer {customer_id} expired before release")
