"""Main settings file for the filevault project.

Settings are split into components and environments, assembled here
with ``django-split-settings``. The environment is chosen with the
``DJANGO_ENV`` variable (``development`` by default).
"""

from os import environ

from split_settings.tools import include, optional

_ENV = environ.setdefault('DJANGO_ENV', 'development')

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/storages.py',

    # Select the right env:
    f'environments/{_ENV}.py',

    # Optionally override some settings:
    optional('environments/local.py'),
)

include(*_base_settings)
