"""
Helpers shared by the view modules.

Services signal scope violations with ``PermissionError``, missing records
with ``LookupError`` and conflicts with ``ValueError``; ``service_errors``
turns those into the usual ``{'ok': False, 'detail': ...}`` responses.
"""
import functools

from rest_framework.response import Response


def fail(detail, status: int) -> Response:
    return Response({'ok': False, 'detail': str(detail)}, status=status)


def service_errors(view):
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except PermissionError as e:
            return fail(e, 403)
        except KeyError:
            raise
        except LookupError as e:
            return fail(e, 404)
        except ValueError as e:
            return fail(e, 400)
    return wrapper


def ok(data=None, **extra) -> Response:
    payload = {'ok': True, 'data': data}
    payload.update(extra)
    return Response(payload)


def created(data) -> Response:
    return Response({'ok': True, 'data': data}, status=201)


def paginated(items, total: int, page: int, page_size: int) -> Response:
    return Response({'ok': True, 'data': items, 'pagination': {'total': total, 'page': page, 'pageSize': page_size}})
