"""
Django settings for SeaTrace tests.

Includes all apps needed to run the full SeaTrace test suite.
"""

SECRET_KEY = "test-secret-key-for-seatrace-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "simple_history",
    "rest_framework",
    "seatrace",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

ROOT_URLCONF = "seatrace.tests.test_api_urls"

USE_TZ = True
TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
}

SEATRACE = {
    "MISMATCH_TOLERANCE_KG": "0.1",
}
