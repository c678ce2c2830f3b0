"""Application settings: uploads, tokens, sharing and trash retention."""

from decouple import Csv

from server.settings.components import config

# Uploads

MAX_UPLOAD_SIZE = config('MAX_FILE_SIZE', cast=int, default=104857600)

ALLOWED_FILE_TYPES = config(
    'ALLOWED_FILE_TYPES',
    cast=Csv(),
    default=(
        'image/*,video/*,application/pdf,text/*,'
        'application/json,application/xml'
    ),
)

# Bearer tokens

JWT_SECRET = config('JWT_SECRET', default='')
JWT_ALGORITHM = 'HS256'
JWT_EXPIRES_IN_DAYS = config('JWT_EXPIRES_IN_DAYS', cast=int, default=7)

# Google sign-in

GOOGLE_CLIENT_ID = config('GOOGLE_CLIENT_ID', default='')
GOOGLE_CLIENT_SECRET = config('GOOGLE_CLIENT_SECRET', default='')
GOOGLE_REDIRECT_URI = config(
    'GOOGLE_REDIRECT_URI',
    default='http://localhost:3000/auth/google/callback',
)

# Sharing and trash

SHARE_DEFAULT_EXPIRY_DAYS = config(
    'DEFAULT_SHARE_EXPIRY_DAYS',
    cast=int,
    default=7,
)
TRASH_PURGE_DAYS = config('TRASH_PURGE_DAYS', cast=int, default=30)
