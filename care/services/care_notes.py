from typing import Optional

from care.models import QuickCareNote, Resident
from care.services.activity import log_action
from care.services.appointment_notes import summarize_notes
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped


def format_care_note(n: QuickCareNote) -> dict:
    return {
        'id': n.id,
        'residentId': n.resident_id,
        'category': n.category,
        'showerOrBath': n.shower_or_bath or None,
        'preferredTime': n.preferred_time or None,
        'toiletType': n.toilet_type or None,
        'assistanceLevel': n.assistance_level or None,
        'walkingAid': n.walking_aid or None,
        'communicationNeeds': n.communication_needs,
        'safetyAlerts': n.safety_alerts,
        'priority': n.priority or None,
        'isActive': n.is_active,
        'createdBy': n.created_by_id,
        'updatedBy': n.updated_by_id,
        'createdAt': n.created_at.isoformat(),
        'updatedAt': n.updated_at.isoformat(),
    }


def create_care_note(user, resident_id: int, data: dict) -> QuickCareNote:
    resident = get_scoped(Resident, resident_id, user)
    note = QuickCareNote.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **data,
    )
    log_action(user=user, action='care_note_create', object_type='care_note', object_id=note.id,
               resident=resident, detail={'category': note.category})
    publish_team_event(note.team_id, 'care_note.changed', {'residentId': resident.id})
    return note


def list_care_notes(user, resident_id: int, *, active_only: bool=True, category: Optional[str]=None) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = QuickCareNote.objects.filter(resident=resident)
    if active_only:
        qs = qs.filter(is_active=True)
    if category:
        qs = qs.filter(category=category)
    return [format_care_note(n) for n in qs.order_by('-created_at', '-id')]


def update_care_note(user, note_id: int, changes: dict) -> QuickCareNote:
    note = get_scoped(QuickCareNote, note_id, user)
    for field, value in changes.items():
        setattr(note, field, value)
    note.updated_by = user
    note.save()
    publish_team_event(note.team_id, 'care_note.changed', {'residentId': note.resident_id})
    return note


def deactivate_care_note(user, note_id: int) -> QuickCareNote:
    note = get_scoped(QuickCareNote, note_id, user)
    note.is_active = False
    note.updated_by = user
    note.save(update_fields=['is_active', 'updated_by', 'updated_at'])
    log_action(user=user, action='care_note_deactivate', object_type='care_note', object_id=note.id,
               resident=note.resident)
    publish_team_event(note.team_id, 'care_note.changed', {'residentId': note.resident_id})
    return note


def delete_care_note(user, note_id: int) -> None:
    note = get_scoped(QuickCareNote, note_id, user)
    note.delete()
    publish_team_event(note.team_id, 'care_note.changed', {'residentId': note.resident_id})


def care_notes_summary(user, resident_id: int) -> dict:
    resident = get_scoped(Resident, resident_id, user)
    summary = summarize_notes(QuickCareNote.objects.filter(resident=resident))
    if summary['lastUpdated']:
        summary['lastUpdated'] = summary['lastUpdated'].isoformat()
    return summary
