"""HTTP views for authentication."""

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from server.apps.accounts.decorators import jwt_required
from server.apps.accounts.logic import auth_operations, google_auth
from server.apps.accounts.serializers import serialize_auth, serialize_profile
from server.common.exceptions import InvalidArgumentError
from server.common.parsing import parse_json_body
from server.common.responses import success_response


def _required_string(payload: dict, field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f'{field} is required')
    return value


@csrf_exempt
@require_POST
def register(request: HttpRequest) -> HttpResponse:
    """Create a credentialed account."""
    payload = parse_json_body(request)
    name = payload.get('name')
    if name is not None and not isinstance(name, str):
        raise InvalidArgumentError('name must be a string')
    user, token = auth_operations.register(
        email=_required_string(payload, 'email'),
        password=_required_string(payload, 'password'),
        name=name,
    )
    return success_response(serialize_auth(user, token), status=201)


@csrf_exempt
@require_POST
def login(request: HttpRequest) -> HttpResponse:
    """Exchange email and password for a bearer token."""
    payload = parse_json_body(request)
    user, token = auth_operations.login(
        email=_required_string(payload, 'email'),
        password=_required_string(payload, 'password'),
    )
    return success_response(serialize_auth(user, token))


@csrf_exempt
@require_POST
def google_login(request: HttpRequest) -> HttpResponse:
    """Exchange a Google ID token for a bearer token."""
    payload = parse_json_body(request)
    user, token = google_auth.authenticate_with_google(
        _required_string(payload, 'idToken'),
    )
    return success_response(serialize_auth(user, token))


@require_GET
def google_url(request: HttpRequest) -> HttpResponse:
    """Return the Google OAuth consent URL."""
    return success_response({'authUrl': google_auth.build_google_auth_url()})


@require_GET
@jwt_required
def profile(request: HttpRequest) -> HttpResponse:
    """Return the caller's profile."""
    user = auth_operations.get_profile(request.api_user.id)  # type: ignore[attr-defined]
    return success_response(serialize_profile(user))
