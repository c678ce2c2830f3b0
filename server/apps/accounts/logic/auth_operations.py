"""Business logic for credential accounts."""

import logging

from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from server.apps.accounts.logic.tokens import issue_token
from server.apps.accounts.models import User
from server.common.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = 'Invalid email or password'


def _validate_email(email: str) -> str:
    normalized = (email or '').strip()
    try:
        validate_email(normalized)
    except ValidationError as error:
        raise InvalidArgumentError('Invalid email format') from error
    return User.objects.normalize_email(normalized)


def register(email: str, password: str, name: str | None = None) -> tuple[User, str]:
    """Create a credentialed user and sign a token for it.

    Args:
        email: Unique email address.
        password: Raw password, checked by AUTH_PASSWORD_VALIDATORS.
        name: Optional display name.

    Returns:
        Tuple of created user and bearer token.

    Raises:
        InvalidArgumentError: If email or password is invalid.
        ConflictError: If email is already registered.
    """
    email = _validate_email(email)
    try:
        password_validation.validate_password(password or '')
    except ValidationError as error:
        raise InvalidArgumentError(' '.join(error.messages)) from error

    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError('User with this email already exists')

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name or '',
                email_verified=False,
            )
    except IntegrityError as error:
        # Lost a race with a concurrent registration
        raise ConflictError('User with this email already exists') from error

    logger.info('New user registered: %s', user.email)
    return user, issue_token(user)


def login(email: str, password: str) -> tuple[User, str]:
    """Check credentials and sign a token.

    Args:
        email: Account email.
        password: Raw password.

    Returns:
        Tuple of user and bearer token.

    Raises:
        UnauthenticatedError: If credentials are wrong or the account
            only supports Google sign-in.
    """
    user = User.objects.filter(email__iexact=(email or '').strip()).first()
    if user is None or not user.is_active:
        raise UnauthenticatedError(_INVALID_CREDENTIALS)

    if not user.has_usable_password():
        raise UnauthenticatedError(
            'This account requires Google authentication',
        )

    if not user.check_password(password or ''):
        logger.info('Failed login for %s', user.email)
        raise UnauthenticatedError(_INVALID_CREDENTIALS)

    logger.info('User logged in: %s', user.email)
    return user, issue_token(user)


def get_profile(user_id: str) -> User:
    """Load the profile of an authenticated user.

    Args:
        user_id: User primary key.

    Returns:
        User instance.

    Raises:
        NotFoundError: If the user no longer exists.
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except (User.DoesNotExist, ValidationError) as error:
        raise NotFoundError('User not found') from error
