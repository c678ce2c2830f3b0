"""HTTP views for share links."""

import uuid

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.accounts.decorators import jwt_required
from server.apps.shares.logic import share_operations
from server.apps.shares.serializers import serialize_resolved_share, serialize_share
from server.common.parsing import parse_iso_datetime, parse_json_body
from server.common.responses import success_response


@require_GET
@jwt_required
def share_list(request: HttpRequest) -> HttpResponse:
    """List the caller's shares."""
    shares = share_operations.list_shares(request.api_user)  # type: ignore[attr-defined]
    return success_response([serialize_share(share) for share in shares])


@csrf_exempt
@require_http_methods(['POST', 'DELETE'])
@jwt_required
def share_by_id(request: HttpRequest, object_id: uuid.UUID) -> HttpResponse:
    """POST creates a share for file ``object_id``; DELETE deactivates share ``object_id``."""
    owner = request.api_user  # type: ignore[attr-defined]
    if request.method == 'DELETE':
        share_operations.deactivate_share(owner, object_id)
        return success_response(message='Share deactivated successfully')

    payload = parse_json_body(request)
    share = share_operations.create_share(
        owner,
        object_id,
        expires_at=parse_iso_datetime(payload.get('expiresAt'), 'expiresAt'),
    )
    return success_response(serialize_share(share), status=201)


@require_GET
def resolve(request: HttpRequest, token: str) -> HttpResponse:
    """Resolve a public share token. No authentication."""
    resolved = share_operations.resolve_share(token)
    return success_response(serialize_resolved_share(resolved))
