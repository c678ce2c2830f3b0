"""
This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from typing import Final

from server.settings.components import config
from server.settings.components.common import SECRET_KEY
from server.settings.components.vault import JWT_SECRET

# Setting the development status:

DEBUG = config('DJANGO_DEBUG', cast=bool, default=True)

SECRET_KEY = SECRET_KEY or 'django-insecure-development-only-key'  # noqa: S105
JWT_SECRET = JWT_SECRET or 'development-only-jwt-secret-do-not-deploy'  # noqa: S105

ALLOWED_HOSTS: Final = [
    config('DOMAIN_NAME', default='localhost'),
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
    'testserver',
]
