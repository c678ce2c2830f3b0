"""Middleware for request logging and error envelopes."""

import logging
import time
from collections.abc import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseNotAllowed

from server.common.exceptions import ServiceError
from server.common.responses import error_response

logger = logging.getLogger(__name__)

_INTERNAL_ERROR_MESSAGE = 'Internal server error'


class RequestLoggingMiddleware:
    """Log one line per request: method, path, status and duration."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Store the next handler in the chain.

        Args:
            get_response: Next middleware or view.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and log the outcome.

        Args:
            request: Incoming request.

        Returns:
            Response from the rest of the chain.
        """
        started = time.monotonic()
        response = self.get_response(request)
        duration_ms = (time.monotonic() - started) * 1000
        logger.info(
            'HTTP %s %s %d %.1fms',
            request.method,
            request.path,
            response.status_code,
            duration_ms,
        )
        return response


class ServiceErrorMiddleware:
    """Map exceptions raised by views to the JSON error envelope.

    ``ServiceError`` subclasses keep their status and message. Anything
    else becomes a 500 whose message is hidden unless DEBUG is on.
    405 responses from the ``require_*`` decorators are rewrapped too.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Store the next handler in the chain.

        Args:
            get_response: Next middleware or view.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through, enveloping 405 responses.

        Args:
            request: Incoming request.

        Returns:
            Response from the rest of the chain.
        """
        response = self.get_response(request)
        if isinstance(response, HttpResponseNotAllowed):
            enveloped = error_response('Method not allowed', 405)
            enveloped['Allow'] = response['Allow']
            return enveloped
        return response

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse:
        """Convert an exception into an error response.

        Args:
            request: Request that failed.
            exception: Raised exception.

        Returns:
            JSON error response.
        """
        if isinstance(exception, ServiceError):
            logger.warning(
                'Request failed: %s %s -> %d %s',
                request.method,
                request.path,
                exception.status_code,
                exception.message,
            )
            message = exception.message
            if exception.status_code >= 500 and not settings.DEBUG:
                message = _INTERNAL_ERROR_MESSAGE
            return error_response(message, exception.status_code)

        logger.exception(
            'Unhandled error: %s %s',
            request.method,
            request.path,
        )
        message = str(exception) if settings.DEBUG else _INTERNAL_ERROR_MESSAGE
        return error_response(message, 500)
