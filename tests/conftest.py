"""Root conftest — configure Django once for the whole suite.

Invariants:
    - Settings come from carebook.settings with test-only secrets
    - No test talks to a real MongoDB or Cloudinary account
"""

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "carebook.settings")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("MONGO_URI", "mongodb://127.0.0.1:1/")
os.environ.setdefault("CREDENTIALS_STORAGE", "local")

django.setup()

from django.test.utils import setup_test_environment  # noqa: E402

setup_test_environment()

from tests.fakes import FakeAuth, FakeFileIntake, FakeStore  # noqa: E402


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def file_intake():
    return FakeFileIntake()


@pytest.fixture
def auth():
    """Authenticated as the therapist id below unless a test clears it."""
    return FakeAuth(caller_id="65f1c0ffee0000000000abcd")
