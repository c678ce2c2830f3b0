"""Business logic for Google sign-in."""

import logging
from dataclasses import dataclass
from typing import Any, Final
from urllib.parse import urlencode

from django.conf import settings
from django.db import transaction
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from server.apps.accounts.logic.tokens import issue_token
from server.apps.accounts.models import User
from server.common.exceptions import (
    ConflictError,
    ServiceError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

_GOOGLE_AUTH_ENDPOINT: Final = 'https://accounts.google.com/o/oauth2/v2/auth'
_GOOGLE_SCOPES: Final = (
    'https://www.googleapis.com/auth/userinfo.profile',
    'https://www.googleapis.com/auth/userinfo.email',
)
_INVALID_TOKEN = 'Invalid Google token'


@dataclass(frozen=True, slots=True)
class GoogleProfile:
    """Identity claims extracted from a verified Google ID token."""

    google_id: str
    email: str
    name: str
    picture: str
    email_verified: bool


def verify_id_token(token: str) -> GoogleProfile:
    """Verify a Google ID token against our OAuth client id.

    Args:
        token: ID token issued by Google to the frontend.

    Returns:
        Verified profile claims.

    Raises:
        UnauthenticatedError: If token is invalid, expired or lacks email.
    """
    try:
        claims: dict[str, Any] = google_id_token.verify_oauth2_token(
            token,
            google_requests.Request(),
            settings.GOOGLE_CLIENT_ID or None,
        )
    except (ValueError, google_exceptions.GoogleAuthError) as error:
        logger.warning('Google token verification failed: %s', error)
        raise UnauthenticatedError(_INVALID_TOKEN) from error

    if not claims.get('sub') or not claims.get('email'):
        raise UnauthenticatedError(_INVALID_TOKEN)

    return GoogleProfile(
        google_id=str(claims['sub']),
        email=User.objects.normalize_email(claims['email']),
        name=claims.get('name', ''),
        picture=claims.get('picture', ''),
        email_verified=bool(claims.get('email_verified', False)),
    )


def sign_in_with_profile(profile: GoogleProfile) -> User:
    """Find, link or create the user for a verified Google profile.

    Lookup order: by Google id, then by email (links the existing
    credential account), else a new OAuth-only user is created.
    Display fields are refreshed on every sign-in.
    An account already linked to another Google subject is never
    relinked.

    Args:
        profile: Verified Google profile.

    Returns:
        Up-to-date User instance.

    Raises:
        ConflictError: If the email belongs to an account linked to a
            different Google subject.
    """
    refreshed = {
        'name': profile.name,
        'avatar': profile.picture,
        'email_verified': profile.email_verified,
    }
    with transaction.atomic():
        user = User.objects.select_for_update().filter(
            google_id=profile.google_id,
        ).first()
        if user is not None:
            action = 'updated'
        else:
            user = User.objects.select_for_update().filter(
                email__iexact=profile.email,
            ).first()
            action = 'linked'
        if user is None:
            user = User.objects.create_user(
                email=profile.email,
                google_id=profile.google_id,
                google_email=profile.email,
                **refreshed,
            )
            logger.info('New Google user created: %s', user.email)
            return user

        if action == 'linked':
            if user.google_id:
                logger.warning(
                    'Google sign-in refused, %s is linked to another subject',
                    user.email,
                )
                raise ConflictError(
                    'This account is linked to a different Google account',
                )
            user.google_id = profile.google_id
            user.google_email = profile.email
        for field, value in refreshed.items():
            setattr(user, field, value)
        user.save()

    logger.info('Google user %s: %s', action, user.email)
    return user


def authenticate_with_google(token: str) -> tuple[User, str]:
    """Sign in with a Google ID token.

    Args:
        token: Google ID token.

    Returns:
        Tuple of user and bearer token.
    """
    user = sign_in_with_profile(verify_id_token(token))
    logger.info('Google user authenticated: %s', user.email)
    return user, issue_token(user)


def build_google_auth_url() -> str:
    """Build the Google OAuth consent URL for the frontend.

    Returns:
        Consent screen URL.

    Raises:
        ServiceError: If GOOGLE_CLIENT_ID is not configured.
    """
    if not settings.GOOGLE_CLIENT_ID:
        raise ServiceError('GOOGLE_CLIENT_ID is not configured')

    query = urlencode({
        'client_id': settings.GOOGLE_CLIENT_ID,
        'redirect_uri': settings.GOOGLE_REDIRECT_URI,
        'response_type': 'code',
        'scope': ' '.join(_GOOGLE_SCOPES),
        'access_type': 'offline',
        'prompt': 'consent',
    })
    return f'{_GOOGLE_AUTH_ENDPOINT}?{query}'
