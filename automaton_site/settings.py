"""
Django settings for the regex automaton site.

Only what the regex_automaton app and its tests need: no templates, static
files, sessions or auth.
"""
import os

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-insecure-regex-automaton-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'regex_automaton',
]

MIDDLEWARE = [
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
]

ROOT_URLCONF = 'automaton_site.urls'

# In-memory database so django.test.TestCase can run; the app defines no models
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

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
        'regex_automaton': {
            'handlers': ['console'],
            'level': os.environ.get('REGEX_AUTOMATON_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
