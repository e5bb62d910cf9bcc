from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import OrganizationQuerySerializer
from care.serializers.social import (
    ActivityListQuerySerializer, ConnectionListQuerySerializer, DateRangeQuerySerializer,
    RecentActivityQuerySerializer, SocialActivitySerializer, SocialConnectionSerializer,
)
from care.services import social as svc
from care.views.common import created, ok, service_errors


# ---------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def activities(request):
    if request.method == 'GET':
        q = OrganizationQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return ok(svc.organization_activities(request.user, q.validated_data.get('organizationId')))
    s = SocialActivitySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    activity = svc.create_activity(request.user, data.pop('residentId'), data)
    return created(svc.format_activity(activity))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_activities(request, resident_id: int):
    q = ActivityListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.list_activities(request.user, resident_id, page=q.validated_data.get('page'),
                                  page_size=q.validated_data.get('pageSize')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_recent_activities(request, resident_id: int):
    q = RecentActivityQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.recent_activities(request.user, resident_id, q.validated_data['limit']))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_activities_in_range(request, resident_id: int):
    q = DateRangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.activities_in_range(request.user, resident_id, q.validated_data['startDate'],
                                      q.validated_data['endDate']))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def activity_detail(request, activity_id: int):
    if request.method == 'GET':
        return ok(svc.format_activity(svc.get_activity(request.user, activity_id)))
    if request.method == 'DELETE':
        svc.delete_activity(request.user, activity_id)
        return ok({'deleted': activity_id})
    s = SocialActivitySerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    changes.pop('residentId', None)
    return ok(svc.format_activity(svc.update_activity(request.user, activity_id, changes)))


# ---------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def connections(request):
    if request.method == 'GET':
        q = OrganizationQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return ok(svc.organization_connections(request.user, q.validated_data.get('organizationId')))
    s = SocialConnectionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    connection = svc.create_connection(request.user, data.pop('residentId'), data)
    return created(svc.format_connection(connection))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_connections(request, resident_id: int):
    q = ConnectionListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.list_connections(request.user, resident_id, connection_type=q.validated_data.get('connectionType')))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def connection_detail(request, connection_id: int):
    if request.method == 'GET':
        return ok(svc.format_connection(svc.get_connection(request.user, connection_id)))
    if request.method == 'DELETE':
        svc.delete_connection(request.user, connection_id)
        return ok({'deleted': connection_id})
    s = SocialConnectionSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    changes.pop('residentId', None)
    return ok(svc.format_connection(svc.update_connection(request.user, connection_id, changes)))
