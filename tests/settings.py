# FILE: tests/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv


# ── helpers ───────────────────────────────────────────────────────────────────
def env_bool(name: str, default: bool = False) -> bool:
    v = str(os.getenv(name, str(int(default)))).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


# ── base ──────────────────────────────────────────────────────────────────────
load_dotenv()
BASE_DIR = Path(__file__).resolve().parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "seo-tests")
DEBUG = env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── i18n ──────────────────────────────────────────────────────────────────────
LANGUAGE_CODE = "ru"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── apps ──────────────────────────────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "seo",
    "tests.testapp",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
    "seo.middleware.SeoMiddleware",
]

ROOT_URLCONF = "tests.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "seo.context_processors.seo",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# ── SEO ───────────────────────────────────────────────────────────────────────
SEO = {
    "APP_NAME": os.getenv("SEO_APP_NAME", "Test Site"),
    "BASE_URL": "https://example.com",
}

# ── logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"std": {"format": "[%(levelname)s] %(asctime)s %(name)s: %(message)s"}},
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "std"}},
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "seo": {"level": "DEBUG"},
    },
}
