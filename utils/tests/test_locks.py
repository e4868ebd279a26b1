import pytest
from django.core.cache import cache

from utils.locks import ResourceLock, ResourceLockedException


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


def test_lock_is_exclusive_and_released():
    with ResourceLock("job", "1") as lock:
        assert lock.is_locked()
        assert lock.get_lock_info()["resource_id"] == "1"

        with pytest.raises(ResourceLockedException):
            with ResourceLock("job", "1"):
                pass

        # a different resource is independent
        with ResourceLock("job", "2"):
            pass

    assert not ResourceLock("job", "1").is_locked()


def test_lock_released_on_error():
    with pytest.raises(RuntimeError):
        with ResourceLock("job", "1"):
            raise RuntimeError("boom")

    assert ResourceLock("job", "1").acquire()
