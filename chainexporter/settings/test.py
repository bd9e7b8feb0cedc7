from .project import *  # noqa

IS_TEST = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

LOGGING["loggers"]["chainexporter"]["level"] = "DEBUG"  # noqa: F405
