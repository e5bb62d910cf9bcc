from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.serializers.personal_care import (
    ActivitiesSerializer, ActivityRecordSerializer, DayNotesSerializer, DayQuerySerializer, DaySerializer,
    DayStatusSerializer, TaskEventSerializer,
)
from care.services import personal_care as svc
from care.views.common import created, ok, service_errors


def _day_request(serializer_class, request):
    s = serializer_class(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    return data.pop('residentId'), data.pop('date'), data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def open_day(request):
    """Open the day's personal care sheet, or return the one already open."""
    resident_id, on, data = _day_request(DaySerializer, request)
    day, was_created = svc.open_day(request.user, resident_id, on, data.get('shift'))
    return Response({'ok': True, 'created': was_created, 'data': svc.format_day(day)},
                    status=201 if was_created else 200)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def day_status(request, daily_id: int):
    s = DayStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.format_day(svc.set_day_status(request.user, daily_id, s.validated_data['status'])))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def record_task(request):
    resident_id, on, data = _day_request(TaskEventSerializer, request)
    return created(svc.format_event(svc.record_task(request.user, resident_id, on, data)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def record_activities(request):
    resident_id, on, data = _day_request(ActivitiesSerializer, request)
    events = svc.record_activities(request.user, resident_id, on, data)
    return created([svc.format_event(e) for e in events])


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def record_activity_entry(request):
    resident_id, on, data = _day_request(ActivityRecordSerializer, request)
    return created(svc.format_event(svc.record_activity_entry(request.user, resident_id, on, data)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def add_notes(request):
    resident_id, on, data = _day_request(DayNotesSerializer, request)
    event = svc.add_notes(request.user, resident_id, on, data['notes'], data.get('shift'))
    return created(svc.format_event(event))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_day(request, resident_id: int):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.get_day(request.user, resident_id, q.validated_data['date']))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_task_statuses(request, resident_id: int):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.task_statuses(request.user, resident_id, q.validated_data['date']))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_records(request, resident_id: int):
    return ok(svc.all_records(request.user, resident_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_report_dates(request, resident_id: int):
    return ok(svc.report_dates(request.user, resident_id))
