"""
Settings for the sangat registration backend.

Everything deployment specific comes from the environment; a `.env`
file next to `manage.py` is loaded for local development.  The values
at the bottom of this module (uploads, badge texts, ID cards) are read
by the ``registry`` app.
"""
from __future__ import annotations

import os
from pathlib import Path

import dj_database_url  # type: ignore
from dotenv import load_dotenv  # type: ignore

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# -----------------------------------------------------------------------------
# Deployment
# -----------------------------------------------------------------------------
ENV = os.getenv("ENV", "dev")
DEBUG = _env_bool("DEBUG")
ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver")

_DEV_SECRET = "dev-only-sangat-secret-key"
SECRET_KEY = os.getenv("SECRET_KEY") or _DEV_SECRET

if ENV == "prod":
    # refuse to boot a production process with development defaults
    if DEBUG or SECRET_KEY == _DEV_SECRET or "*" in ALLOWED_HOSTS:
        raise RuntimeError("prod requires DEBUG=0, a real SECRET_KEY and explicit ALLOWED_HOSTS")

    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "3600"))
    SECURE_SSL_REDIRECT = _env_bool("SECURE_SSL_REDIRECT", "1")
    SESSION_COOKIE_SECURE = CSRF_COOKIE_SECURE = True

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

# -----------------------------------------------------------------------------
# Apps, middleware, templates
# -----------------------------------------------------------------------------
INSTALLED_APPS = [
    "django_prometheus",
    "corsheaders",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework.authtoken",
    "rest_framework_simplejwt.token_blacklist",
    "drf_yasg",
    "registry",
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
]

ROOT_URLCONF = "sangat.urls"
WSGI_APPLICATION = "sangat.wsgi.application"
ASGI_APPLICATION = "sangat.asgi.application"

# the badge sheet lives in registry/templates; admin needs the rest
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
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

# -----------------------------------------------------------------------------
# Database: MYSQL_* variables, else DATABASE_URL, else local SQLite
# -----------------------------------------------------------------------------
DB_CONN_MAX_AGE = int(os.getenv("DB_CONN_MAX_AGE", "120"))


def _database() -> dict:
    name = os.getenv("MYSQL_NAME") or os.getenv("DB_NAME")
    user = os.getenv("MYSQL_USER") or os.getenv("DB_USER")
    if name and user:
        return {
            "ENGINE": "django.db.backends.mysql",
            "NAME": name,
            "USER": user,
            "PASSWORD": os.getenv("MYSQL_PASSWORD") or os.getenv("DB_PASSWORD") or "",
            "HOST": os.getenv("MYSQL_HOST") or os.getenv("DB_HOST", "localhost"),
            "PORT": os.getenv("MYSQL_PORT") or os.getenv("DB_PORT", "3306"),
            "CONN_MAX_AGE": DB_CONN_MAX_AGE,
            # Devanagari names need the full utf8mb4 range
            "OPTIONS": {"charset": "utf8mb4", "init_command": "SET sql_mode='STRICT_TRANS_TABLES'"},
        }
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return dj_database_url.parse(url, conn_max_age=DB_CONN_MAX_AGE)
    return {"ENGINE": "django.db.backends.sqlite3", "NAME": (BASE_DIR / "db.sqlite3").as_posix()}


DATABASES = {"default": _database()}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------------------------------------------
# Locale, static files, photo storage
# -----------------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
MEDIA_URL = "/media/"
MEDIA_ROOT = Path(os.getenv("MEDIA_ROOT", BASE_DIR / "media"))

STORAGES = {
    # registration photos; swap for an object store backend in deployment
    "default": {"BACKEND": os.getenv("PHOTO_STORAGE_BACKEND", "django.core.files.storage.FileSystemStorage")},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# -----------------------------------------------------------------------------
# Accounts & REST framework
# -----------------------------------------------------------------------------
AUTH_USER_MODEL = "registry.User"
AUTH_TOKEN_TTL_HOURS = int(os.getenv("AUTH_TOKEN_TTL_HOURS", "24"))

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": f"django.contrib.auth.password_validation.{name}"}
    for name in (
        "UserAttributeSimilarityValidator",
        "MinimumLengthValidator",
        "CommonPasswordValidator",
        "NumericPasswordValidator",
    )
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "registry.authentication.TokenAuthentication",
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
        "rest_framework.throttling.ScopedRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": os.getenv("ANON_RATE", "60/min"),
        "user": os.getenv("USER_RATE", "240/min"),
        # the public form is shared by a whole desk, keep it generous
        "public_register": os.getenv("PUBLIC_REGISTER_RATE", "60/hour"),
        "login": os.getenv("LOGIN_RATE", "10/min"),
    },
    "EXCEPTION_HANDLER": "registry.exceptions.api_exception_handler",
}

# the front end calls the API without trailing slashes
APPEND_SLASH = False

SWAGGER_SETTINGS = {"DEFAULT_INFO": "sangat.urls.api_info"}

CORS_ALLOWED_ORIGINS = _env_list("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_CREDENTIALS = True

# -----------------------------------------------------------------------------
# Cache: throttle counters; Redis when REDIS_URL is set
# -----------------------------------------------------------------------------
REDIS_URL = os.getenv("REDIS_URL", "")
if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "SOCKET_CONNECT_TIMEOUT": 3,
                "SOCKET_TIMEOUT": 3,
            },
        }
    }
    SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"
else:
    CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "sangat"}}

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "registry": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
    },
}

# -----------------------------------------------------------------------------
# Registry: uploads, badges, ID cards
# -----------------------------------------------------------------------------
UPLOAD_MAX_MB = int(os.getenv("UPLOAD_MAX_MB", "15"))
ALLOWED_UPLOAD_TYPES = _env_list("ALLOWED_UPLOAD_TYPES", "image/")
PHOTO_UPLOAD_DIR = os.getenv("PHOTO_UPLOAD_DIR", "sangat-images")

BADGE_ORGANISATION = os.getenv("BADGE_ORGANISATION", "राधा स्वामी सत्संग ब्यास, पीथमपुर")
BADGE_SUBTITLE = os.getenv("BADGE_SUBTITLE", "वृद्ध संगत")
BADGES_PER_PAGE = int(os.getenv("BADGES_PER_PAGE", "8"))
ID_CARD_PREFIX = os.getenv("ID_CARD_PREFIX", "RSSB")
