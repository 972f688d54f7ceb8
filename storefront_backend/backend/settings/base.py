"""
PATH: backend/settings/base.py

BASE SETTINGS (shared by dev + prod)

Covers:
- Storage backend selection (MySQL or Supabase)
- Content directory resolution inputs (dev / Docker / production)
- Upload limits
- Throttling + CORS
- Logging, Sentry (optional)
"""

from __future__ import annotations

from pathlib import Path

import environ
from corsheaders.defaults import default_headers, default_methods

from catalog.backends import select_store_backend

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "UTC"),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    CORS_ALLOWED_ORIGINS=(list, ["http://localhost:3000"]),
    CSRF_TRUSTED_ORIGINS=(list, ["http://localhost:3000"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    LOG_LEVEL=(str, "INFO"),
    # Runtime environment (same names the storefront frontend uses)
    NODE_ENV=(str, "development"),
    DOCKER_ENV=(bool, False),
    CONTENT_DIR=(str, ""),
    CONTENT_DIR_HOST=(str, ""),
    # Storage backend
    STORE_BACKEND=(str, ""),
    DATABASE_HOST=(str, "localhost"),
    DATABASE_PORT=(int, 3306),
    DATABASE_USER=(str, "storefront_user"),
    DATABASE_PASSWORD=(str, ""),
    DATABASE_NAME=(str, "storefront_db"),
    DB_CONNECT_RETRIES=(int, 5),
    DB_CONNECT_RETRY_DELAY=(float, 3.0),
    DB_CONNECT_TIMEOUT=(int, 10),
    SUPABASE_URL=(str, ""),
    SUPABASE_ANON_KEY=(str, ""),
    NEXT_PUBLIC_SUPABASE_URL=(str, ""),
    NEXT_PUBLIC_SUPABASE_ANON_KEY=(str, ""),
    NEXT_PUBLIC_GEMINI_API_KEY=(str, ""),
    # Catalog
    STORE_CATEGORIES=(list, ["perfumes", "ropa", "prendas", "calzados"]),
    # Uploads
    UPLOAD_MAX_BYTES=(int, 5 * 1024 * 1024),
    # Throttling
    THROTTLE_ANON_RATE=(str, "120/min"),
    THROTTLE_UPLOAD_RATE=(str, "30/min"),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS")

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = (env("TIME_ZONE") or "UTC").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "catalog.apps.CatalogConfig",
    "uploads.apps.UploadsConfig",
]

# -----------------------------------------
# MIDDLEWARE
# -----------------------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "backend.urls"
WSGI_APPLICATION = "backend.wsgi.application"

# Routes are declared without trailing slash (/api/products, /uploads/...)
APPEND_SLASH = False

# -----------------------------------------
# TEMPLATES (browsable API + Swagger UI)
# -----------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    }
]

# -----------------------------------------
# REST FRAMEWORK
# -----------------------------------------
REST_FRAMEWORK = {
    # Admin access control lives in the frontend; the API itself is open.
    "DEFAULT_AUTHENTICATION_CLASSES": (),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.AllowAny",),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "backend.exceptions.json_error_handler",
    "DEFAULT_THROTTLE_CLASSES": ("rest_framework.throttling.AnonRateThrottle",),
    "DEFAULT_THROTTLE_RATES": {
        "anon": env("THROTTLE_ANON_RATE"),
        "upload": env("THROTTLE_UPLOAD_RATE"),
    },
}

# -----------------------------------------
# DATABASE (Django internals only; store data lives in STORE_BACKEND)
# -----------------------------------------
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# -----------------------------------------
# RUNTIME ENVIRONMENT
# -----------------------------------------
NODE_ENV = (env("NODE_ENV") or "development").strip().lower()
DOCKER_ENV = env.bool("DOCKER_ENV")

# -----------------------------------------
# STORAGE BACKEND
# -----------------------------------------
SUPABASE_URL = (env("SUPABASE_URL") or env("NEXT_PUBLIC_SUPABASE_URL") or "").strip()
SUPABASE_ANON_KEY = (
    env("SUPABASE_ANON_KEY") or env("NEXT_PUBLIC_SUPABASE_ANON_KEY") or ""
).strip()

STORE_BACKEND = select_store_backend(env("STORE_BACKEND"), SUPABASE_URL, SUPABASE_ANON_KEY)

MYSQL = {
    "HOST": (env("DATABASE_HOST") or "localhost").strip(),
    "PORT": env.int("DATABASE_PORT"),
    "USER": (env("DATABASE_USER") or "").strip(),
    "PASSWORD": env("DATABASE_PASSWORD") or "",
    "NAME": (env("DATABASE_NAME") or "").strip(),
    "CONNECT_TIMEOUT": env.int("DB_CONNECT_TIMEOUT"),
}

DB_CONNECT_RETRIES = env.int("DB_CONNECT_RETRIES")
DB_CONNECT_RETRY_DELAY = env.float("DB_CONNECT_RETRY_DELAY")

# Read by the fragrance advisor UI; kept so one .env serves both apps.
GEMINI_API_KEY = (env("NEXT_PUBLIC_GEMINI_API_KEY") or "").strip()

# -----------------------------------------
# CATALOG
# -----------------------------------------
STORE_CATEGORIES = [c.strip().lower() for c in env.list("STORE_CATEGORIES") if c.strip()]
STORE_GENDERS = ["hombre", "mujer", "unisex"]

# -----------------------------------------
# CONTENT / UPLOADS
# -----------------------------------------
CONTENT_DIR = (env("CONTENT_DIR") or "").strip()
CONTENT_DIR_HOST = (env("CONTENT_DIR_HOST") or "").strip()
CONTENT_DIR_DOCKER = "/app/CONTENT"
CONTENT_DIR_DEV = str(BASE_DIR / "CONTENT")
CONTENT_DIR_PRODUCTION_FALLBACKS = [
    "/opt/storefront/CONTENT",
    "/var/www/storefront/CONTENT",
    "/srv/storefront/CONTENT",
]

UPLOAD_MAX_BYTES = env.int("UPLOAD_MAX_BYTES")
UPLOAD_URL_PREFIX = "/uploads/"

# Request bodies above this are spooled to disk by Django
FILE_UPLOAD_MAX_MEMORY_SIZE = UPLOAD_MAX_BYTES
DATA_UPLOAD_MAX_MEMORY_SIZE = UPLOAD_MAX_BYTES + 1024 * 1024

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "catalog": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "uploads": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "backend": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )

# -----------------------------------------
# CORS / CSRF
# -----------------------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = list(default_methods)
CORS_ALLOW_HEADERS = list(default_headers)
# /uploads/* and /api/upload answer their own preflights with open CORS
CORS_URLS_REGEX = r"^/api/(?!upload/?$).*$"

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS")

# -----------------------------------------
# STATIC FILES
# -----------------------------------------
STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# SWAGGER
# -----------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Storefront API",
    "DESCRIPTION": "Products, store settings and image uploads",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

API_VERSION = SPECTACULAR_SETTINGS["VERSION"]
