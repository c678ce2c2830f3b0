"""Request body and parameter parsing for API views."""

import json
import uuid
from datetime import UTC, datetime
from typing import Any

from django.http import HttpRequest
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from server.common.exceptions import InvalidArgumentError


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object from the request body.

    An empty body is treated as ``{}``.

    Args:
        request: Incoming request.

    Returns:
        Decoded JSON object.

    Raises:
        InvalidArgumentError: If body is not a JSON object.
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as error:
        raise InvalidArgumentError('Request body must be valid JSON') from error
    if not isinstance(payload, dict):
        raise InvalidArgumentError('Request body must be a JSON object')
    return payload


def parse_uuid_list(raw_ids: Any, field: str = 'fileIds') -> list[uuid.UUID]:
    """Validate a non-empty list of UUID strings.

    Args:
        raw_ids: Value taken from the request.
        field: Field name used in the error message.

    Returns:
        Parsed UUIDs in input order.

    Raises:
        InvalidArgumentError: If list is missing, empty or malformed.
    """
    if not isinstance(raw_ids, list) or not raw_ids:
        raise InvalidArgumentError(f'{field} array is required')
    parsed = []
    for raw_id in raw_ids:
        try:
            parsed.append(uuid.UUID(str(raw_id)))
        except ValueError as error:
            raise InvalidArgumentError(
                f'{field} contains an invalid id: {raw_id}',
            ) from error
    return parsed


def parse_positive_int(
    raw_value: str | None,
    field: str,
    default: int,
    maximum: int | None = None,
) -> int:
    """Parse an optional integer query parameter.

    Args:
        raw_value: Raw query string value.
        field: Parameter name for error messages.
        default: Value used when parameter is absent.
        maximum: Optional inclusive upper bound.

    Returns:
        Parsed integer.

    Raises:
        InvalidArgumentError: If value is not an integer in range.
    """
    if raw_value in (None, ''):
        return default
    try:
        number = int(raw_value)
    except ValueError as error:
        raise InvalidArgumentError(f'{field} must be an integer') from error
    if number < 1 or (maximum is not None and number > maximum):
        if maximum is None:
            raise InvalidArgumentError(f'{field} must be at least 1')
        raise InvalidArgumentError(f'{field} must be between 1 and {maximum}')
    return number


def parse_iso_datetime(raw_value: Any, field: str) -> datetime | None:
    """Parse an optional ISO-8601 timestamp into an aware datetime.

    Naive values are interpreted as UTC.

    Args:
        raw_value: Raw value from the request body.
        field: Field name for error messages.

    Returns:
        Aware datetime, or None when the value is absent.

    Raises:
        InvalidArgumentError: If value is not a valid timestamp.
    """
    if raw_value in (None, ''):
        return None
    if not isinstance(raw_value, str):
        raise InvalidArgumentError(f'{field} must be an ISO-8601 string')
    # JavaScript clients send a trailing Z
    try:
        parsed = parse_datetime(raw_value.replace('Z', '+00:00'))
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidArgumentError(f'{field} must be an ISO-8601 string')
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, UTC)
    return parsed
