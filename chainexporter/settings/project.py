# -*- coding: utf-8 -*-
import os

import environ


class Environments:
    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"  # local development environment


def env_variable_truthy(key, default=""):
    return os.environ.get(key, default).lower().strip() in ["1", "true", "t", "y"]


env = environ.Env(
    DEBUG=(bool, False),
)  # set default values and casting
ENVIRONMENT = os.environ.get("APP_ENV", Environments.DEVELOPMENT).lower()
DEBUG = env_variable_truthy("DEBUG")


DATABASE_HOST = os.environ.get("DATABASE_HOST", "localhost")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "chainexporter")
DATABASE_USER = os.environ.get("DATABASE_USER", "chainexporter")
DATABASE_PORT = os.environ.get("DATABASE_PORT", "5432")
DATABASE_PASSWORD = os.environ.get("DATABASE_PASSWORD", "chainexporter")
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "USER": DATABASE_USER,
        "NAME": DATABASE_NAME,
        "PASSWORD": DATABASE_PASSWORD,
        "HOST": DATABASE_HOST,
        "PORT": DATABASE_PORT,
    }
}
if os.environ.get("DATABASE_URL"):
    DATABASES["default"] = env.db("DATABASE_URL")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "chainexporter.apps.chain",
    "chainexporter.apps.governance",
    "chainexporter.apps.alerts",
    "chainexporter.apps.peers",
]

SITE_ROOT = PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
BACKEND_FOLDER = SITE_ROOT + "/chainexporter"

USE_TZ = True
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"

IS_TEST = False

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": ("%(levelname)s %(asctime)s |" "%(pathname)s:%(lineno)d (in %(funcName)s) |" " %(message)s ")
        },
        "simple": {"format": "%(levelname)s %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "django.db.backends": {
            "handlers": ["null"],
            "propagate": False,
        },
        "chainexporter": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
        },
    },
}

BASE_DIR = SITE_ROOT

SECRET_KEY = os.environ.get("SECRET_KEY", "secret")

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

if "SENTRY_BACKEND_URL" in os.environ:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=os.environ["SENTRY_BACKEND_URL"],
        integrations=[DjangoIntegration()],
        # Errors only, alerts go through ALERT_SENTRY_DSN
        traces_sample_rate=0.0,
        environment=ENVIRONMENT,
    )
