"""Logging configuration.

Every module logs through ``logging.getLogger(__name__)``, so the
``filevault`` logger level controls the whole project. Records
propagate to the root console handler.
"""

from filevault.settings.components import config

LOG_LEVEL = config('DJANGO_LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'level': 'WARNING',
        },
        'filevault': {
            'level': LOG_LEVEL,
        },
    },
}
