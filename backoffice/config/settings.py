"""
Django settings for the tailoring back-office.

All business data lives behind the upstream REST API; this project only
serves the role-scoped dashboards and forwards the session cookie.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me')

DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h.strip()]


INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'rest_framework',
    'backoffice.core',
    'backoffice.dashboards',
    'backoffice.parties',
    'backoffice.catalog',
    'backoffice.measurements',
    'backoffice.orders',
    'backoffice.appointments',
    'backoffice.cashbook',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'backoffice.core.middleware.RoleGuardMiddleware',
]

ROOT_URLCONF = 'backoffice.config.urls'

WSGI_APPLICATION = 'backoffice.config.wsgi.application'

# Nothing is stored locally
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.getenv('TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# Upstream API
BACKEND_HOST = os.getenv('BACKEND_HOST', 'localhost')
BACKEND_PORT = os.getenv('BACKEND_PORT', '8000')
UPSTREAM_API_URL = os.getenv('UPSTREAM_API_URL', f'http://{BACKEND_HOST}:{BACKEND_PORT}').rstrip('/')
UPSTREAM_TIMEOUT = float(os.getenv('UPSTREAM_TIMEOUT', '15'))

# Paths reachable without a validated session
PUBLIC_PATH_PREFIXES = ('/auth', '/static', '/favicon.ico', '/unauthorized')
PUBLIC_EXACT_PATHS = ('/',)
LOGIN_PATH = '/auth/login/'
UNAUTHORIZED_PATH = '/unauthorized/'


REST_FRAMEWORK = {
    # Sessions belong to the upstream API; the guard middleware validates them
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'UNAUTHENTICATED_USER': None,
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}


# Cache
REDIS_URL = os.getenv('REDIS_URL', '')
if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': REDIS_URL,
            'OPTIONS': {
                'CLIENT_CLASS': 'django_redis.client.DefaultClient',
                'IGNORE_EXCEPTIONS': True,
            },
            'KEY_PREFIX': 'backoffice',
            'TIMEOUT': 300,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'backoffice-default',
        }
    }

LOOKUP_CACHE_TTL = int(os.getenv('LOOKUP_CACHE_TTL', '60'))


# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'backoffice': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
