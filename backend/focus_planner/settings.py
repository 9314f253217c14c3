"""
Django settings for focus_planner project.

Secrets and debug mode come from the environment; everything else has a
development default.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-only-insecure-key-change-me')

DEBUG = os.environ.get('DJANGO_DEBUG', 'true').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = [h for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'drf_spectacular',
    'scheduling',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'focus_planner.urls'

WSGI_APPLICATION = 'focus_planner.wsgi.application'

# The engine persists nothing; the database only backs Django internals.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('DJANGO_TIME_ZONE', 'UTC')
USE_I18N = False
USE_TZ = True

# ============================================
# REST FRAMEWORK
# ============================================

REST_FRAMEWORK = {
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Focus Planner API',
    'DESCRIPTION': 'Capacity-aware task scheduling and prioritization',
    'VERSION': '1.0.0',
}

# ============================================
# SCHEDULING ENGINE
# ============================================

SCHEDULING = {
    'LOOK_AHEAD_DAYS': int(os.environ.get('SCHEDULING_LOOK_AHEAD_DAYS', 90)),
    'DEFAULT_DAILY_MAX_TASKS': {'weekday': 4, 'weekend': 4},
    'DEFAULT_DAILY_MAX_HOURS': {'weekday': 8, 'weekend': 6},
    'DEFAULT_CATEGORY_HOURS': {'weekday': 4, 'weekend': 4},
}

# ============================================
# LOGGING
# ============================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'scheduling': {
            'handlers': ['console'],
            'level': os.environ.get('SCHEDULING_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
