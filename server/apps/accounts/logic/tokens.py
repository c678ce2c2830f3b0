"""Bearer token issuance and verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final

import jwt
from django.conf import settings

from server.common.exceptions import UnauthenticatedError

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS: Final = ('id', 'email', 'exp')


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Verified claims of a bearer token."""

    user_id: str
    email: str


def issue_token(user: 'User') -> str:
    """Sign a bearer token for the user.

    Args:
        user: Authenticated user.

    Returns:
        Encoded JWT carrying user id and email.
    """
    issued_at = datetime.now(tz=UTC)
    payload = {
        'id': str(user.id),
        'email': user.email,
        'iat': issued_at,
        'exp': issued_at + timedelta(days=settings.JWT_EXPIRES_IN_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry of a bearer token.

    Args:
        token: Encoded JWT.

    Returns:
        Verified claims.

    Raises:
        UnauthenticatedError: If token is expired, tampered or malformed.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={'require': list(_REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as error:
        raise UnauthenticatedError('Token expired') from error
    except jwt.InvalidTokenError as error:
        logger.debug('Rejected bearer token: %s', error)
        raise UnauthenticatedError('Invalid token') from error

    return TokenClaims(user_id=str(payload['id']), email=str(payload['email']))
