"""Django settings for the check-in project.

Values come from the environment; a ``.env`` file next to manage.py is
loaded first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-dev-only-key")
DEBUG = env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "attendance.apps.AttendanceConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "checkin.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "checkin.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("ATTENDANCE_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("ATTENDANCE_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("ATTENDANCE_DB_USER", ""),
        "PASSWORD": os.environ.get("ATTENDANCE_DB_PASSWORD", ""),
        "HOST": os.environ.get("ATTENDANCE_DB_HOST", ""),
        "PORT": os.environ.get("ATTENDANCE_DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
    "attendance": {
        "BACKEND": os.environ.get(
            "ATTENDANCE_CACHE_BACKEND", "django.core.cache.backends.locmem.LocMemCache"
        ),
        "LOCATION": os.environ.get("ATTENDANCE_CACHE_LOCATION", "attendance"),
        "TIMEOUT": None,
    },
}

REST_FRAMEWORK = {
    "EXCEPTION_HANDLER": "attendance.handlers.errors.domain_exception_handler",
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
}

EMAIL_BACKEND = os.environ.get(
    "EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend"
)
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "25"))
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = env_bool("EMAIL_USE_TLS", False)
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "certificates@localhost")

ATTENDANCE = {
    "TICKET_TYPES_TTL_MS": int(os.environ.get("ATTENDANCE_TICKET_TYPES_TTL_MS", "60000")),
    "TICKETS_TTL_MS": int(os.environ.get("ATTENDANCE_TICKETS_TTL_MS", "60000")),
    "STATUS_TTL_MS": int(os.environ.get("ATTENDANCE_STATUS_TTL_MS", "30000")),
    "CACHE_ENABLED": env_bool("ATTENDANCE_CACHE_ENABLED", True),
    "SEND_CERTIFICATE_EMAILS": env_bool("ATTENDANCE_CERTIFICATE_EMAILS", True),
    "CERTIFICATE_FROM_EMAIL": os.environ.get("ATTENDANCE_CERTIFICATE_FROM_EMAIL")
    or DEFAULT_FROM_EMAIL,
    "EVENT_NAME": os.environ.get("ATTENDANCE_EVENT_NAME", "Event"),
    "CACHE_ALIAS": "attendance",
}

LOG_LEVEL = os.environ.get("DJANGO_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "attendance": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.db.backends": {
            "level": "WARNING",
        },
    },
}
