"""Shared fixtures: sample profile and the ASGI app wired to it."""
from __future__ import annotations

import pytest

from services.profile_service import profile_service
from tests.factories import make_profile


@pytest.fixture
def profile():
    return make_profile()


@pytest.fixture
def active_profile(profile):
    profile_service.use_profile(profile)
    yield profile
    profile_service.reset()


@pytest.fixture
def app(active_profile):
    from app import app as _app
    return _app
