"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

API routes carry no trailing slash; every app URLConf is mounted
under ``api/`` and spells out its own prefix.
"""

import time
from typing import Any, Final

from django.contrib import admin
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.urls import include, path
from django.utils import timezone

from server.apps.accounts import urls as accounts_urls
from server.apps.files import tag_urls
from server.apps.files import urls as files_urls
from server.apps.shares import urls as shares_urls
from server.common.responses import error_response

_STARTED_AT: Final = time.monotonic()


def health(request: HttpRequest) -> HttpResponse:
    """Liveness probe: status, timestamp and process uptime."""
    return JsonResponse({
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'uptime': round(time.monotonic() - _STARTED_AT, 3),
    })


def not_found(request: HttpRequest, exception: Any = None) -> HttpResponse:
    """Unknown routes get the JSON error envelope."""
    return error_response('Route not found', status=404)


urlpatterns = [
    path('health', health, name='health'),
    path('api/', include(accounts_urls, namespace='accounts')),
    path('api/', include(files_urls, namespace='files')),
    path('api/', include(tag_urls, namespace='tags')),
    path('api/', include(shares_urls, namespace='shares')),
    path('admin/', admin.site.urls),
]

handler404 = not_found
