import logging
import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def silence_django_request_logger():
    """Reduce noise from expected 4xx in passing tests.

    API tests intentionally exercise 400/404/409 paths. Django logs these
    at WARNING via 'django.request'. Lower that logger to ERROR during
    tests to avoid clutter.
    """
    logger = logging.getLogger("django.request")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture(autouse=True)
def reset_throttle_cache():
    # DRF keeps throttle history in the default cache, shared across tests
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def no_redirect_delay(settings):
    settings.STAFF_PORTAL = {**settings.STAFF_PORTAL, "REDIRECT_DELAY_MS": 0}
    return settings
