from unittest.mock import MagicMock

import pytest

from storefront.domain.errors import ConflictingStateError
from storefront.services.lock_service import LockService

pytestmark = pytest.mark.unit


@pytest.fixture
def locks():
    service = LockService(url="redis://localhost:6379/0", ttl=5)
    service.redis = MagicMock()
    service.redis.set.return_value = True
    service.redis.eval.return_value = 1
    return service


def test_cart_lock_sets_key_with_nx_and_ttl(locks):
    with locks.cart_lock(42) as token:
        locks.redis.set.assert_called_once_with(name="cart:42:lock", value=token, nx=True, ex=5)

    locks.redis.eval.assert_called_once()
    args = locks.redis.eval.call_args.args
    assert args[1:] == (1, "cart:42:lock", token)


def test_busy_cart_raises_conflict(locks):
    locks.redis.set.return_value = None

    with pytest.raises(ConflictingStateError):
        with locks.cart_lock(42):
            pytest.fail("body must not run without the lock")

    locks.redis.eval.assert_not_called()


def test_lock_released_when_body_fails(locks):
    with pytest.raises(RuntimeError):
        with locks.cart_lock(7):
            raise RuntimeError("boom")

    locks.redis.eval.assert_called_once()


def test_release_reports_lost_lock(locks):
    locks.redis.eval.return_value = 0

    with locks.cart_lock(7):
        pass

    assert locks.release_cart_lock(7, "other-token") is False
