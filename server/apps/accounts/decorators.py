"""View decorators for bearer-token authentication."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse

from server.apps.accounts.logic.tokens import decode_token
from server.apps.accounts.models import User
from server.common.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = 'bearer'

_View = Callable[..., HttpResponse]


def _extract_bearer_token(request: HttpRequest) -> str:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != _BEARER_PREFIX or not token.strip():
        raise UnauthenticatedError('Access token required')
    return token.strip()


def authenticate_request(request: HttpRequest) -> User:
    """Resolve the user behind the request's bearer token.

    Args:
        request: Incoming request.

    Returns:
        Active user referenced by the token.

    Raises:
        UnauthenticatedError: If token is missing, invalid, expired,
            or the user no longer exists.
    """
    claims = decode_token(_extract_bearer_token(request))
    try:
        return User.objects.get(id=claims.user_id, is_active=True)
    except (User.DoesNotExist, ValidationError) as error:
        raise UnauthenticatedError('User not found') from error


def jwt_required(view: _View) -> _View:
    """Require a valid bearer token and expose the user as ``request.api_user``.

    Args:
        view: View function to protect.

    Returns:
        Wrapped view.
    """

    @functools.wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        request.api_user = authenticate_request(request)  # type: ignore[attr-defined]
        return view(request, *args, **kwargs)

    return wrapper
