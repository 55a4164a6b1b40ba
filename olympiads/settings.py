"""
Django settings for the olympiads project.

Values come from the environment so the same settings serve local use and
deployments.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'olympiads-insecure-dev-key')

DEBUG = env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'olympiads.scoring_core',
    'olympiads.scoreboard',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

USE_TZ = True
TIME_ZONE = 'UTC'
LANGUAGE_CODE = 'fr-fr'

# Scoreboard
OLYMPIADS_SNAPSHOT_PATH = os.environ.get(
    'OLYMPIADS_SNAPSHOT_PATH', str(BASE_DIR / 'olympiads.json')
)
# Numeric results (score_num) are recorded but not scored unless enabled
OLYMPIADS_SCORE_NUMERIC_RESULTS = env_bool('OLYMPIADS_SCORE_NUMERIC_RESULTS', False)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'olympiads': {
            'handlers': ['console'],
            'level': os.environ.get('OLYMPIADS_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
