from collections import Counter
from typing import Optional

from django.db.models import QuerySet

from care.models import AppointmentNote, Resident
from care.services.activity import log_action
from care.services.scoping import get_scoped


def summarize_notes(qs: QuerySet) -> dict:
    """Counts of active notes per category and priority."""
    notes = list(qs.filter(is_active=True).values('category', 'priority', 'updated_at'))
    return {
        'totalNotes': len(notes),
        'byCategory': dict(Counter(n['category'] for n in notes)),
        'byPriority': dict(Counter(n['priority'] or 'unset' for n in notes)),
        'lastUpdated': max((n['updated_at'] for n in notes), default=None),
    }


def format_note(n: AppointmentNote) -> dict:
    return {
        'id': n.id,
        'residentId': n.resident_id,
        'category': n.category,
        'preparationTime': n.preparation_time or None,
        'preparationNotes': n.preparation_notes or None,
        'preferredTime': n.preferred_time or None,
        'transportPreference': n.transport_preference or None,
        'instructions': n.instructions or None,
        'transportationNeeds': n.transportation_needs,
        'medicalNeeds': n.medical_needs,
        'priority': n.priority,
        'isActive': n.is_active,
        'createdBy': n.created_by_id,
        'updatedBy': n.updated_by_id,
        'createdAt': n.created_at.isoformat(),
        'updatedAt': n.updated_at.isoformat(),
    }


def create_note(user, resident_id: int, data: dict) -> AppointmentNote:
    resident = get_scoped(Resident, resident_id, user)
    note = AppointmentNote.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **data,
    )
    log_action(user=user, action='appointment_note_create', object_type='appointment_note', object_id=note.id,
               resident=resident, detail={'category': note.category})
    return note


def list_notes(user, resident_id: int, *, active_only: bool=True, category: Optional[str]=None) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = AppointmentNote.objects.filter(resident=resident)
    if active_only:
        qs = qs.filter(is_active=True)
    if category:
        qs = qs.filter(category=category)
    return [format_note(n) for n in qs.order_by('-created_at', '-id')]


def update_note(user, note_id: int, changes: dict) -> AppointmentNote:
    note = get_scoped(AppointmentNote, note_id, user)
    for field, value in changes.items():
        setattr(note, field, value)
    note.updated_by = user
    note.save()
    return note


def delete_note(user, note_id: int) -> None:
    note = get_scoped(AppointmentNote, note_id, user)
    log_action(user=user, action='appointment_note_delete', object_type='appointment_note', object_id=note.id,
               resident=note.resident)
    note.delete()


def notes_summary(user, resident_id: int) -> dict:
    resident = get_scoped(Resident, resident_id, user)
    summary = summarize_notes(AppointmentNote.objects.filter(resident=resident))
    if summary['lastUpdated']:
        summary['lastUpdated'] = summary['lastUpdated'].isoformat()
    return summary
