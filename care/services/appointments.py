from typing import Optional

from django.db import transaction
from django.utils import timezone

from care.models import Appointment, AppointmentReadStatus, Resident, Team
from care.services.activity import log_action
from care.services.caching import invalidate_dashboard
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped, resolve_organization_id, scope_queryset


def format_appointment(a: Appointment, *, read_ids: Optional[set]=None) -> dict:
    data = {
        'id': a.id,
        'residentId': a.resident_id,
        'title': a.title,
        'description': a.description,
        'startTime': a.start_time.isoformat(),
        'endTime': a.end_time.isoformat(),
        'location': a.location,
        'staff': a.staff or None,
        'status': a.status,
        'teamId': a.team_id,
        'organizationId': a.organization_id,
        'createdBy': a.created_by_id,
        'createdAt': a.created_at.isoformat(),
        'updatedAt': a.updated_at.isoformat(),
    }
    if read_ids is not None:
        r = a.resident
        data['resident'] = {
            'id': r.id,
            'firstName': r.first_name,
            'lastName': r.last_name,
            'roomNumber': r.room_number,
        }
        data['isRead'] = a.id in read_ids
    return data


def _changed(a: Appointment, event: str) -> None:
    invalidate_dashboard(a.team_id)
    publish_team_event(a.team_id, event, {'appointmentId': a.id, 'residentId': a.resident_id})


def create_appointment(user, resident_id: int, data: dict) -> Appointment:
    resident = get_scoped(Resident, resident_id, user)
    start = data['start_time']
    appt = Appointment.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        title=data['title'],
        description=data.get('description', ''),
        start_time=start,
        end_time=data.get('end_time') or start,
        location=data['location'],
        staff=data.get('staff', ''),
        status=data.get('status') or Appointment.STATUS_SCHEDULED,
        created_by=user, updated_by=user,
    )
    log_action(user=user, action='appointment_create', object_type='appointment', object_id=appt.id, resident=resident)
    _changed(appt, 'appointment.changed')
    return appt


def get_appointment(user, appointment_id: int) -> Appointment:
    return get_scoped(Appointment, appointment_id, user, select=('resident',))


@transaction.atomic
def update_appointment(user, appointment_id: int, changes: dict) -> Appointment:
    appt = get_appointment(user, appointment_id)
    before = (appt.start_time, appt.location)
    for field in ('title', 'description', 'start_time', 'end_time', 'location', 'staff', 'status'):
        if field in changes and changes[field] is not None:
            setattr(appt, field, changes[field])
    if appt.end_time < appt.start_time:
        raise ValueError('End time cannot be before start time')
    appt.updated_by = user
    appt.save()
    # rescheduling resets read state for everyone else
    if (appt.start_time, appt.location) != before:
        AppointmentReadStatus.objects.filter(appointment=appt).exclude(user=user).delete()
    _changed(appt, 'appointment.changed')
    return appt


def update_status(user, appointment_id: int, status: str) -> Appointment:
    appt = get_appointment(user, appointment_id)
    appt.status = status
    appt.updated_by = user
    appt.save(update_fields=['status', 'updated_by', 'updated_at'])
    log_action(user=user, action='appointment_status', object_type='appointment', object_id=appt.id,
               resident=appt.resident, detail={'status': status})
    _changed(appt, 'appointment.changed')
    return appt


def delete_appointment(user, appointment_id: int) -> None:
    appt = get_appointment(user, appointment_id)
    log_action(user=user, action='appointment_delete', object_type='appointment', object_id=appt.id, resident=appt.resident)
    appt.delete()
    invalidate_dashboard(appt.team_id)
    publish_team_event(appt.team_id, 'appointment.changed', {'appointmentId': appointment_id, 'deleted': True})


def list_for_resident(user, resident_id: int, *, status: Optional[str]=None, upcoming: bool=False,
                      limit: Optional[int]=None) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = Appointment.objects.filter(resident=resident)
    if upcoming:
        qs = qs.filter(status=Appointment.STATUS_SCHEDULED, start_time__gt=timezone.now())
    elif status:
        qs = qs.filter(status=status)
    qs = qs.order_by('start_time', 'id')
    if limit:
        qs = qs[:limit]
    return [format_appointment(a) for a in qs]


def _scope_qs(user, *, team: Optional[Team]=None, organization_id: Optional[int]=None):
    if team is not None:
        return Appointment.objects.filter(team=team)
    org_id = resolve_organization_id(user, organization_id)
    return scope_queryset(Appointment.objects.filter(organization_id=org_id), user)


def list_for_scope(user, *, team: Optional[Team]=None, organization_id: Optional[int]=None,
                   include_all: bool=False, status: Optional[str]=None) -> list[dict]:
    """Team (or organization) calendar with resident summary and read state."""
    qs = _scope_qs(user, team=team, organization_id=organization_id).select_related('resident')
    if include_all:
        if status:
            qs = qs.filter(status=status)
    else:
        qs = qs.filter(status=Appointment.STATUS_SCHEDULED, start_time__gte=timezone.now())
    items = list(qs.order_by('start_time', 'id'))
    read_ids = set(AppointmentReadStatus.objects
                   .filter(user=user, appointment_id__in=[a.id for a in items])
                   .values_list('appointment_id', flat=True))
    return [format_appointment(a, read_ids=read_ids) for a in items]


def upcoming_count(user, *, team: Optional[Team]=None, organization_id: Optional[int]=None) -> int:
    return (_scope_qs(user, team=team, organization_id=organization_id)
            .filter(status=Appointment.STATUS_SCHEDULED, start_time__gte=timezone.now())
            .count())


def mark_read(user, appointment_ids: list[int]) -> int:
    visible = scope_queryset(Appointment.objects.filter(id__in=appointment_ids), user).values_list('id', flat=True)
    created = 0
    for appointment_id in visible:
        _, was_created = AppointmentReadStatus.objects.get_or_create(user=user, appointment_id=appointment_id)
        created += int(was_created)
    return created
