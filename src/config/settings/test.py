"""Test settings - uses SQLite for fast local testing."""
import os

os.environ.setdefault("SECRET_KEY", "test-only-secret-key-0123456789-abcdefghijklmnopqrstuvwxyz")
os.environ.setdefault("DEBUG", "True")

from .base import *  # noqa: E402,F401,F403

DEBUG = True

# Use SQLite for tests (no PostgreSQL dependency)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable Redis cache in tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Disable Celery in tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_RESULT_BACKEND = "cache+memory://"

# Disable API throttling in tests for deterministic runs
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

# Fixed defaults regardless of the developer's .env
COUNTED_SALE_STATUSES = ["WRITTEN", "ISSUED", "PAID"]
ROI_DEFAULT_MONTHS_BACK = 12
ROI_MAX_MONTHS_BACK = 36
BENCHMARKS_SNAPSHOT_VERSION = 1
TIME_ZONE = "UTC"

# Disable logging noise during tests
LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["handlers"].pop("file")  # noqa: F405
for _name in ("salesroi", "benchmarks", "roi"):
    LOGGING["loggers"][_name]["handlers"] = ["console"]  # noqa: F405
    LOGGING["loggers"][_name]["level"] = "WARNING"  # noqa: F405
