"""JSON envelopes used by every API view."""

from typing import Any

from django.http import JsonResponse


def success_response(data: Any = None, status: int = 200, **extra: Any) -> JsonResponse:
    """Wrap payload into ``{"success": true, "data": ...}``.

    Args:
        data: Payload placed under ``data`` (omitted when None).
        status: HTTP status code.
        extra: Extra top-level keys, e.g. ``message``.

    Returns:
        JsonResponse with the success envelope.
    """
    body: dict[str, Any] = {'success': True}
    if data is not None:
        body['data'] = data
    body.update(extra)
    return JsonResponse(body, status=status)


def error_response(message: str, status: int, **extra: Any) -> JsonResponse:
    """Wrap an error into ``{"error": {"message", "statusCode"}}``.

    Args:
        message: Error message.
        status: HTTP status code.
        extra: Extra keys placed inside the ``error`` object.

    Returns:
        JsonResponse with the error envelope.
    """
    error = {'message': message, 'statusCode': status}
    error.update(extra)
    return JsonResponse({'error': error}, status=status)
