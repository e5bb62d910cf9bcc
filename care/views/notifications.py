from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.notifications import MarkReadSerializer, NotificationListQuerySerializer
from care.services.notifications import list_notifications, mark_read, unread_count
from care.views.common import ok, paginated


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notifications(request):
    q = NotificationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    items, total = list_notifications(request.user, unread_only=vd['unreadOnly'], page=vd['page'], page_size=vd['pageSize'])
    return paginated(items, total, vd['page'], vd['pageSize'])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notifications_unread_count(request):
    return ok({'count': unread_count(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notifications_mark_read(request):
    s = MarkReadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    updated = mark_read(request.user, s.validated_data.get('ids'))
    return ok({'updated': updated})
