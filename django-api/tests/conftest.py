"""Pytest configuration and shared fixtures."""

import pytest
from django.core.cache import caches
from rest_framework.test import APIClient
from support import FakeClock, FakeMillis, RecordingNotifier

from attendance.conf import AttendanceSettings, CacheTTLs
from attendance.services import build_services
from attendance.services.cache import ReadThroughCache
from attendance.stores.memory_store import InMemoryAttendanceStore


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def millis() -> FakeMillis:
    return FakeMillis()


@pytest.fixture
def store(clock) -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore(clock=clock)


@pytest.fixture
def cache(millis) -> ReadThroughCache:
    return ReadThroughCache(clock=millis)


@pytest.fixture
def attendance_settings() -> AttendanceSettings:
    return AttendanceSettings(
        ttls=CacheTTLs(),
        cache_enabled=True,
        send_certificate_emails=False,
        certificate_from_email=None,
        event_name="Test Conf",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def services(store, cache, attendance_settings, notifier, clock):
    return build_services(store, cache, attendance_settings, notifier=notifier, clock=clock)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    cache = caches["attendance"]
    cache.clear()
    yield
    cache.clear()
