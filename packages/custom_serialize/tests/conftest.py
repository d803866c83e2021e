"""Shared pytest configuration for custom_serialize tests."""

import django
from django.conf import settings


def pytest_configure():
    """Configure Django settings for tests (sqlite, in-memory)."""
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "custom_serialize",
                "testapp",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            DEFAULT_AUTO_FIELD="django.db.models.AutoField",
            SECRET_KEY="test-secret-key",
            USE_TZ=True,
        )
        django.setup()
