"""
Django settings for Eighty-Six.

Secrets come from the environment (or a local .env file) - never hardcode
credentials.
Run with: uv run python apps/web/manage.py runserver
"""

from pathlib import Path

import environ  # type: ignore[import-untyped]

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Initialize environ
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    LOG_LEVEL=(str, "INFO"),
    DELIVERY_PROVIDER=(str, "uber_eats"),
    UBER_EATS_BASE_URL=(str, "https://api.uber.com/v2/eats"),
    UBER_EATS_STORE_ID=(str, ""),
    UBER_EATS_ACCESS_TOKEN=(str, ""),
    DELIVERY_HTTP_TIMEOUT_SECONDS=(float, 10.0),
    DELIVERY_ITEM_TIMEOUT_SECONDS=(float, 30.0),
    DELIVERY_MAX_RETRIES=(int, 3),
    DELIVERY_RETRY_BACKOFF_SECONDS=(float, 1.0),
)
environ.Env.read_env(BASE_DIR.parent.parent / ".env")

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.web.core",
    "apps.web.catalog",
    "apps.web.availability",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "apps.web.core.middleware.RequestLoggingMiddleware",
]

ROOT_URLCONF = "apps.web.config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "apps.web.config.wsgi.application"

# Database
# https://docs.djangoproject.com/en/5.1/ref/settings/#databases
# Connection string from the environment: DATABASE_URL
DATABASES = {
    "default": env.db(
        "DATABASE_URL",
        default=f"sqlite:///{BASE_DIR.parent.parent / 'menu_manager.db'}",
    ),
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR.parent.parent / "staticfiles"  # /app/staticfiles in production

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Logging
LOG_LEVEL = env("LOG_LEVEL").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
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
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

# Delivery platform (remote menu gateway)
DELIVERY_PROVIDER = env("DELIVERY_PROVIDER")
UBER_EATS_BASE_URL = env("UBER_EATS_BASE_URL")
UBER_EATS_STORE_ID = env("UBER_EATS_STORE_ID")
UBER_EATS_ACCESS_TOKEN = env("UBER_EATS_ACCESS_TOKEN")

# Per-request HTTP timeout, and the overall budget for one item's gateway call
# (including the adapter's retries).
DELIVERY_HTTP_TIMEOUT_SECONDS = env("DELIVERY_HTTP_TIMEOUT_SECONDS")
DELIVERY_ITEM_TIMEOUT_SECONDS = env("DELIVERY_ITEM_TIMEOUT_SECONDS")
DELIVERY_MAX_RETRIES = env("DELIVERY_MAX_RETRIES")
DELIVERY_RETRY_BACKOFF_SECONDS = env("DELIVERY_RETRY_BACKOFF_SECONDS")
