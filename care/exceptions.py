import logging

from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)

# Headers DRF sets on error responses that clients rely on
PASSTHROUGH_HEADERS = ('WWW-Authenticate', 'Retry-After')


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception("unhandled error on %s", getattr(request, 'path', '?'))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    normalized = Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
    for header in PASSTHROUGH_HEADERS:
        if header in resp:
            normalized[header] = resp[header]
    return normalized
