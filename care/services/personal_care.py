"""
Personal care sheets.

A resident has at most one :class:`PersonalCareDaily` per date.  Care
given is appended to it as :class:`PersonalCareTaskEvent` rows that are
never edited; the newest event for a task type is that task's status.
Tasks that were refused, unable or missed with a reason code are also
copied onto the day's ``exceptions``.
"""
from datetime import date
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from care.models import PersonalCareDaily, PersonalCareTaskEvent, Resident
from care.services.activity import log_action
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped

ACTIVITY_RECORD = 'daily_activity_record'
GENERAL_NOTES = 'general_notes'


def format_day(d: PersonalCareDaily) -> dict:
    return {
        'id': d.id,
        'residentId': d.resident_id,
        'date': d.date.isoformat(),
        'shift': d.shift or None,
        'status': d.status,
        'exceptions': d.exceptions,
        'teamId': d.team_id,
        'createdBy': d.created_by_id,
        'updatedBy': d.updated_by_id,
        'createdAt': d.created_at.isoformat(),
        'updatedAt': d.updated_at.isoformat(),
    }


def format_event(e: PersonalCareTaskEvent) -> dict:
    return {
        'id': e.id,
        'dailyId': e.daily_id,
        'taskType': e.task_type,
        'status': e.status,
        'shift': e.shift or None,
        'startedAt': e.started_at.isoformat() if e.started_at else None,
        'completedAt': e.completed_at.isoformat() if e.completed_at else None,
        'performedBy': e.performed_by_id,
        'assistanceLevel': e.assistance_level or None,
        'reasonCode': e.reason_code or None,
        'reasonNote': e.reason_note or None,
        'notes': e.notes or None,
        'payload': e.payload,
        'createdAt': e.created_at.isoformat(),
    }


def _day(resident: Resident, on: date) -> Optional[PersonalCareDaily]:
    return PersonalCareDaily.objects.filter(resident=resident, date=on).first()


def _get_or_create_day(user, resident: Resident, on: date, shift: Optional[str]=None):
    existing = _day(resident, on)
    if existing is not None:
        return existing, False
    try:
        with transaction.atomic():
            day = PersonalCareDaily.objects.create(
                resident=resident,
                organization_id=resident.organization_id,
                team_id=resident.team_id,
                date=on,
                shift=shift or '',
                created_by=user, updated_by=user,
            )
    except IntegrityError:
        # opened by a concurrent request
        existing = _day(resident, on)
        if existing is None:
            raise
        return existing, False
    log_action(user=user, action='personal_care_day_open', object_type='personal_care_day', object_id=day.id,
               resident=resident, detail={'date': on.isoformat()})
    return day, True


def _writable_day(user, resident_id: int, on: date, shift: Optional[str]=None) -> PersonalCareDaily:
    resident = get_scoped(Resident, resident_id, user)
    day, _ = _get_or_create_day(user, resident, on, shift)
    if day.status == 'cancelled':
        raise ValueError('Personal care for this day was cancelled')
    return day


def _touch(user, day: PersonalCareDaily, fields=()) -> None:
    day.updated_by = user
    day.save(update_fields=['updated_by', 'updated_at', *fields])
    publish_team_event(day.team_id, 'personal_care.changed',
                       {'residentId': day.resident_id, 'date': day.date.isoformat()})


def _append(user, day: PersonalCareDaily, task_type: str, status: str, *, shift: Optional[str]=None,
            notes: str='', payload: Optional[dict]=None, **extra) -> PersonalCareTaskEvent:
    now = timezone.now()
    return PersonalCareTaskEvent.objects.create(
        daily=day,
        task_type=task_type,
        status=status,
        shift=shift or day.shift,
        started_at=now if status == 'in_progress' else None,
        completed_at=now if status == 'completed' else None,
        performed_by=user,
        notes=notes,
        payload=payload or {},
        **extra,
    )


# ---------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------
def open_day(user, resident_id: int, on: date, shift: Optional[str]=None):
    """Return ``(day, created)``; an existing sheet is returned unchanged."""
    resident = get_scoped(Resident, resident_id, user)
    return _get_or_create_day(user, resident, on, shift)


@transaction.atomic
def record_task(user, resident_id: int, on: date, data: dict) -> PersonalCareTaskEvent:
    day = _writable_day(user, resident_id, on, data.get('shift'))
    status = data['status']
    reason_code = data.get('reason_code', '')
    payload = {'timePeriod': data['time_period']} if data.get('time_period') else {}
    event = _append(
        user, day, data['task_type'], status,
        shift=data.get('shift'),
        notes=data.get('notes', ''),
        payload=payload,
        assistance_level=data.get('assistance_level', ''),
        reason_code=reason_code,
        reason_note=data.get('reason_note', ''),
    )
    changed = []
    if status in PersonalCareTaskEvent.NOT_DONE and reason_code:
        day.exceptions = day.exceptions + [{
            'taskType': event.task_type,
            'code': reason_code,
            'note': event.reason_note or None,
            'recordedAt': event.created_at.isoformat(),
            'recordedBy': user.id,
        }]
        changed.append('exceptions')
    _touch(user, day, changed)
    log_action(user=user, action='personal_care_task', object_type='personal_care_day', object_id=day.id,
               resident=day.resident, detail={'taskType': event.task_type, 'status': status})
    return event


@transaction.atomic
def record_activities(user, resident_id: int, on: date, data: dict) -> list[PersonalCareTaskEvent]:
    """Log several activities carried out together as completed tasks."""
    day = _writable_day(user, resident_id, on, data.get('shift'))
    payload = {'time': data['time'], 'staff': data['staff']}
    if data.get('assisted_staff'):
        payload['assistedStaff'] = data['assisted_staff']
    events = [
        _append(user, day, task_type, 'completed', shift=data.get('shift'), notes=data.get('notes', ''),
                payload=payload)
        for task_type in dict.fromkeys(data['activities'])
    ]
    _touch(user, day)
    log_action(user=user, action='personal_care_activities', object_type='personal_care_day', object_id=day.id,
               resident=day.resident, detail={'activities': [e.task_type for e in events]})
    return events


@transaction.atomic
def record_activity_entry(user, resident_id: int, on: date, data: dict) -> PersonalCareTaskEvent:
    day = _writable_day(user, resident_id, on, data.get('shift'))
    event = _append(user, day, ACTIVITY_RECORD, 'completed', shift=data.get('shift'), notes=data.get('notes', ''),
                    payload={'time': data['time'], 'staff': data['staff']})
    _touch(user, day)
    return event


@transaction.atomic
def add_notes(user, resident_id: int, on: date, notes: str, shift: Optional[str]=None) -> PersonalCareTaskEvent:
    day = _writable_day(user, resident_id, on, shift)
    event = _append(user, day, GENERAL_NOTES, 'completed', shift=shift, notes=notes)
    _touch(user, day)
    return event


def set_day_status(user, daily_id: int, status: str) -> PersonalCareDaily:
    day = get_scoped(PersonalCareDaily, daily_id, user, select=('resident',))
    day.status = status
    _touch(user, day, ['status'])
    log_action(user=user, action='personal_care_day_status', object_type='personal_care_day', object_id=day.id,
               resident=day.resident, detail={'status': status})
    return day


# ---------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------
def get_day(user, resident_id: int, on: date) -> Optional[dict]:
    resident = get_scoped(Resident, resident_id, user)
    day = _day(resident, on)
    if day is None:
        return None
    tasks = day.task_events.order_by('created_at', 'id')
    return {'daily': format_day(day), 'tasks': [format_event(e) for e in tasks]}


def task_statuses(user, resident_id: int, on: date) -> dict:
    """Latest event per task type for the day, ``{}`` when there is no sheet."""
    resident = get_scoped(Resident, resident_id, user)
    latest = {}
    for event in PersonalCareTaskEvent.objects.filter(daily__resident=resident, daily__date=on).order_by('created_at', 'id'):
        latest[event.task_type] = format_event(event)
    return latest


def all_records(user, resident_id: int) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    events = (PersonalCareTaskEvent.objects
              .filter(daily__resident=resident)
              .select_related('daily')
              .order_by('-created_at', '-id'))
    records = []
    for e in events:
        item = format_event(e)
        item.update({'date': e.daily.date.isoformat(), 'dailyShift': e.daily.shift or None,
                     'dailyStatus': e.daily.status})
        records.append(item)
    return records


def report_dates(user, resident_id: int) -> list[str]:
    """Dates with at least one recorded task, newest first."""
    resident = get_scoped(Resident, resident_id, user)
    days = (PersonalCareDaily.objects
            .filter(resident=resident, task_events__isnull=False)
            .order_by('-date')
            .values_list('date', flat=True)
            .distinct())
    return [d.isoformat() for d in days]
