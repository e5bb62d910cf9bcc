"""
Appointments, appointment notes and quick care notes.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.appointments import (
    AppointmentNoteSerializer, AppointmentNoteUpdateSerializer, AppointmentSerializer, AppointmentStatusSerializer,
    NoteListQuerySerializer, ResidentAppointmentsQuerySerializer, ScopeAppointmentsQuerySerializer,
)
from care.serializers.care_notes import QuickCareNoteSerializer
from care.serializers.notifications import MarkReadSerializer
from care.services import appointment_notes, appointments as svc, care_notes
from care.services.scoping import resolve_team
from care.views.common import created, ok, service_errors


def _scope(user, vd):
    """``teamId`` wins; else ``organizationId``; else the active team."""
    if vd.get('organizationId') and not vd.get('teamId'):
        return {'organization_id': vd['organizationId']}
    return {'team': resolve_team(user, vd.get('teamId'))}


# ---------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def appointments(request):
    if request.method == 'POST':
        s = AppointmentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)
        appt = svc.create_appointment(request.user, data.pop('residentId'), data)
        return created(svc.format_appointment(appt))

    q = ScopeAppointmentsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    return ok(svc.list_for_scope(request.user, include_all=vd['includeAll'], status=vd.get('status'),
                                 **_scope(request.user, vd)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def upcoming_count(request):
    q = ScopeAppointmentsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok({'count': svc.upcoming_count(request.user, **_scope(request.user, q.validated_data))})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def appointments_mark_read(request):
    s = MarkReadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok({'marked': svc.mark_read(request.user, s.validated_data.get('ids') or [])})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_appointments(request, resident_id: int):
    q = ResidentAppointmentsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    return ok(svc.list_for_resident(request.user, resident_id, status=vd.get('status'),
                                    upcoming=vd['upcoming'], limit=vd.get('limit')))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def appointment_detail(request, appointment_id: int):
    if request.method == 'GET':
        return ok(svc.format_appointment(svc.get_appointment(request.user, appointment_id)))
    if request.method == 'DELETE':
        svc.delete_appointment(request.user, appointment_id)
        return ok({'deleted': appointment_id})
    s = AppointmentSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    changes.pop('residentId', None)
    return ok(svc.format_appointment(svc.update_appointment(request.user, appointment_id, changes)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def appointment_status(request, appointment_id: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.format_appointment(svc.update_status(request.user, appointment_id, s.validated_data['status'])))


# ---------------------------------------------------------------------
# Appointment notes
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def appointment_note_create(request):
    s = AppointmentNoteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    note = appointment_notes.create_note(request.user, data.pop('residentId'), data)
    return created(appointment_notes.format_note(note))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_appointment_notes(request, resident_id: int):
    q = NoteListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(appointment_notes.list_notes(request.user, resident_id, active_only=q.validated_data['activeOnly'],
                                           category=q.validated_data.get('category')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_appointment_notes_summary(request, resident_id: int):
    return ok(appointment_notes.notes_summary(request.user, resident_id))


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def appointment_note_detail(request, note_id: int):
    if request.method == 'DELETE':
        appointment_notes.delete_note(request.user, note_id)
        return ok({'deleted': note_id})
    s = AppointmentNoteUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    note = appointment_notes.update_note(request.user, note_id, dict(s.validated_data))
    return ok(appointment_notes.format_note(note))


# ---------------------------------------------------------------------
# Quick care notes
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def care_note_create(request):
    s = QuickCareNoteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    note = care_notes.create_care_note(request.user, data.pop('residentId'), data)
    return created(care_notes.format_care_note(note))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_care_notes(request, resident_id: int):
    q = NoteListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(care_notes.list_care_notes(request.user, resident_id, active_only=q.validated_data['activeOnly'],
                                         category=q.validated_data.get('category')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_care_notes_summary(request, resident_id: int):
    return ok(care_notes.care_notes_summary(request.user, resident_id))


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def care_note_detail(request, note_id: int):
    if request.method == 'DELETE':
        care_notes.delete_care_note(request.user, note_id)
        return ok({'deleted': note_id})
    s = QuickCareNoteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    changes.pop('residentId', None)
    return ok(care_notes.format_care_note(care_notes.update_care_note(request.user, note_id, changes)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def care_note_deactivate(request, note_id: int):
    return ok(care_notes.format_care_note(care_notes.deactivate_care_note(request.user, note_id)))
