import logging
from datetime import date, timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from care.models import Resident, EmergencyContact, ActivityLog, ResidentAuditItem, Team
from care.permissions import is_manager
from care.services.activity import log_action, format_activity
from care.services.caching import invalidate_dashboard
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped, resolve_organization_id, scope_queryset

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def compute_age(dob: date, today: Optional[date]=None) -> int:
    today = today or timezone.localdate()
    return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))


def length_of_stay(admitted: date, today: Optional[date]=None) -> dict:
    today = today or timezone.localdate()
    days = abs((today - admitted).days)
    return {'days': days, 'months': (days % 365) // 30, 'years': days // 365}


def format_contact(c: EmergencyContact) -> dict:
    return {
        'id': c.id,
        'residentId': c.resident_id,
        'name': c.name,
        'phoneNumber': c.phone,
        'relationship': c.relationship,
        'address': c.address,
        'isPrimary': c.is_primary,
    }


def format_resident(r: Resident, *, detail: bool=False) -> dict:
    data = {
        'id': r.id,
        'firstName': r.first_name,
        'lastName': r.last_name,
        'fullName': r.full_name,
        'dateOfBirth': r.date_of_birth.isoformat(),
        'roomNumber': r.room_number,
        'admissionDate': r.admission_date.isoformat(),
        'status': r.status,
        'isActive': r.is_active,
        'organizationId': r.organization_id,
        'teamId': r.team_id,
        'age': compute_age(r.date_of_birth),
    }
    if not detail:
        return data
    data.update({
        'phoneNumber': r.phone,
        'nhsHealthNumber': r.nhs_number,
        'gpName': r.gp_name,
        'gpAddress': r.gp_address,
        'gpPhone': r.gp_phone,
        'careManagerName': r.care_manager_name,
        'careManagerAddress': r.care_manager_address,
        'careManagerPhone': r.care_manager_phone,
        'healthConditions': r.health_conditions,
        'risks': r.risks,
        'dependencies': r.dependencies,
        'allergies': r.allergies,
        'medications': r.medications,
        'medicalConditions': r.medical_conditions,
        'dischargeDate': r.discharge_date.isoformat() if r.discharge_date else None,
        'dischargeReason': r.discharge_reason or None,
        'dataRetentionUntil': r.data_retention_until.isoformat() if r.data_retention_until else None,
        'lengthOfStay': length_of_stay(r.admission_date),
        'emergencyContacts': [format_contact(c) for c in r.emergency_contacts.order_by('-is_primary', 'id')],
        'createdBy': r.created_by_id,
        'createdAt': r.created_at.isoformat(),
        'updatedAt': r.updated_at.isoformat(),
    })
    return data


def get_resident(user, resident_id: int) -> Resident:
    return get_scoped(Resident, resident_id, user)


def _clear_other_primaries(contact: EmergencyContact) -> None:
    if contact.is_primary:
        EmergencyContact.objects.filter(resident_id=contact.resident_id, is_primary=True).exclude(id=contact.id).update(is_primary=False)


@transaction.atomic
def create_resident(user, team: Team, data: dict, contacts: Optional[list]=None, request=None) -> Resident:
    resident = Resident.objects.create(
        organization_id=team.organization_id, team=team,
        created_by=user, updated_by=user,
        **data,
    )
    for c in contacts or []:
        contact = EmergencyContact.objects.create(resident=resident, **c)
        _clear_other_primaries(contact)
    log_action(user=user, action='created', object_type='resident', object_id=resident.id,
               resident=resident, detail={'name': resident.full_name}, request=request)
    invalidate_dashboard(team.id)
    publish_team_event(team.id, 'resident.changed', {'residentId': resident.id})
    logger.info("resident %s created in team %s", resident.id, team.id)
    return resident


@transaction.atomic
def update_resident(user, resident_id: int, changes: dict, request=None) -> Resident:
    """Apply only the provided fields."""
    resident = get_resident(user, resident_id)
    changed = [f for f, v in changes.items() if getattr(resident, f) != v]
    for field in changed:
        setattr(resident, field, changes[field])
    if resident.admission_date < resident.date_of_birth:
        raise ValueError('Admission cannot precede date of birth')
    if changed:
        resident.updated_by = user
        resident.save(update_fields=changed + ['updated_by', 'updated_at'])
        log_action(user=user, action='updated', object_type='resident', object_id=resident.id,
                   resident=resident, detail={'fields': sorted(changed)}, request=request)
        publish_team_event(resident.team_id, 'resident.changed', {'residentId': resident.id})
    return resident


@transaction.atomic
def update_status(user, resident_id: int, status: str, reason: str='', request=None) -> Resident:
    if not is_manager(user):
        raise PermissionError('Only managers can change resident status')
    resident = get_resident(user, resident_id)
    before = {'status': resident.status, 'isActive': resident.is_active}
    now = timezone.now()
    resident.status = status
    resident.is_active = status == Resident.STATUS_ACTIVE
    if status in Resident.CLOSING_STATUSES:
        resident.discharge_date = now
        resident.discharge_reason = reason or ''
        resident.data_retention_until = now + timedelta(days=365 * settings.RESIDENT_RETENTION_YEARS)
    elif status == Resident.STATUS_ACTIVE:
        resident.discharge_date = None
        resident.discharge_reason = ''
        resident.data_retention_until = None
    resident.updated_by = user
    resident.save()
    log_action(user=user, action='status_changed', object_type='resident', object_id=resident.id,
               resident=resident, request=request,
               detail={'before': before, 'after': {'status': resident.status, 'isActive': resident.is_active}, 'reason': reason or None})
    invalidate_dashboard(resident.team_id)
    publish_team_event(resident.team_id, 'resident.changed', {'residentId': resident.id})
    return resident


@transaction.atomic
def delete_resident(user, resident_id: int, request=None) -> None:
    if not is_manager(user):
        raise PermissionError('Only managers can delete residents')
    resident = get_resident(user, resident_id)
    team_id = resident.team_id
    log_action(user=user, action='deleted', object_type='resident', object_id=resident.id,
               detail={'name': resident.full_name, 'residentId': resident.id}, request=request)
    resident.delete()
    invalidate_dashboard(team_id)
    publish_team_event(team_id, 'resident.changed', {'residentId': resident_id, 'deleted': True})


def list_team_residents(user, team: Team, *, active_only: bool=True, q: Optional[str]=None,
                        page: Optional[int]=None, page_size: Optional[int]=None):
    qs = Resident.objects.filter(team=team)
    if active_only:
        qs = qs.filter(is_active=True)
    if q:
        qs = qs.filter(Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(room_number__iexact=q))
    qs = qs.order_by('last_name', 'first_name', 'id')
    total = qs.count()
    if page or page_size:
        page, page_size = page or 1, page_size or DEFAULT_PAGE_SIZE
        start = (page - 1) * page_size
        qs = qs[start:start + page_size]
    return [format_resident(r) for r in qs], total


def list_organization_residents(user, organization_id: Optional[int]=None) -> list[dict]:
    org_id = resolve_organization_id(user, organization_id)
    qs = scope_queryset(Resident.objects.filter(organization_id=org_id, is_active=True), user)
    return [format_resident(r) for r in qs.order_by('last_name', 'first_name', 'id')]


def resident_activity(user, resident_id: int, limit: int=50) -> list[dict]:
    resident = get_resident(user, resident_id)
    entries = ActivityLog.objects.filter(resident=resident).select_related('user').order_by('-created_at', '-id')[:limit]
    return [format_activity(e) for e in entries]


def resident_overview(user, resident_id: int, include_audit_log: bool=False) -> dict:
    resident = get_resident(user, resident_id)
    data = format_resident(resident, detail=True)
    if include_audit_log:
        data['auditLog'] = resident_activity(user, resident_id, limit=10)
    return data


# ---------------------------------------------------------------------
# Emergency contacts
# ---------------------------------------------------------------------
@transaction.atomic
def add_contact(user, resident_id: int, data: dict) -> EmergencyContact:
    resident = get_resident(user, resident_id)
    contact = EmergencyContact.objects.create(resident=resident, **data)
    _clear_other_primaries(contact)
    log_action(user=user, action='updated', object_type='emergency_contact', object_id=contact.id,
               resident=resident, detail={'op': 'add_contact'})
    return contact


def _get_contact(user, contact_id: int) -> EmergencyContact:
    contact = EmergencyContact.objects.select_related('resident').filter(id=contact_id).first()
    if contact is None:
        raise LookupError('Emergency contact not found')
    get_resident(user, contact.resident_id)
    return contact


@transaction.atomic
def update_contact(user, contact_id: int, changes: dict) -> EmergencyContact:
    contact = _get_contact(user, contact_id)
    for field, value in changes.items():
        setattr(contact, field, value)
    contact.save()
    _clear_other_primaries(contact)
    return contact


def delete_contact(user, contact_id: int) -> None:
    contact = _get_contact(user, contact_id)
    log_action(user=user, action='updated', object_type='emergency_contact', object_id=contact.id,
               resident=contact.resident, detail={'op': 'delete_contact'})
    contact.delete()


def primary_contact(resident: Resident) -> Optional[EmergencyContact]:
    return resident.emergency_contacts.order_by('-is_primary', 'id').first()


# ---------------------------------------------------------------------
# Resident audit checklist
# ---------------------------------------------------------------------
def format_audit_item(item: ResidentAuditItem) -> dict:
    return {
        'id': item.id,
        'residentId': item.resident_id,
        'itemName': item.item_name,
        'status': item.status,
        'auditorName': item.auditor_name,
        'lastAudited': item.last_audited.isoformat() if item.last_audited else None,
        'dueDate': item.due_date.isoformat() if item.due_date else None,
        'updatedAt': item.updated_at.isoformat(),
    }


def upsert_audit_item(user, resident_id: int, data: dict) -> ResidentAuditItem:
    resident = get_resident(user, resident_id)
    item_name = data.pop('item_name')
    item, _ = ResidentAuditItem.objects.update_or_create(
        resident=resident, item_name=item_name,
        defaults={**data, 'organization_id': resident.organization_id, 'team_id': resident.team_id},
    )
    return item


def list_audit_items(user, resident_id: int) -> list[dict]:
    resident = get_resident(user, resident_id)
    return [format_audit_item(i) for i in resident.audit_items.order_by('item_name')]


def overdue_audit_item_count(user, resident_id: int) -> int:
    resident = get_resident(user, resident_id)
    return (resident.audit_items
            .filter(due_date__lt=timezone.localdate())
            .exclude(status__in=ResidentAuditItem.SETTLED_STATUSES)
            .count())


def list_team_audit_items(user, team: Team) -> list[dict]:
    qs = ResidentAuditItem.objects.filter(team=team).order_by('resident_id', 'item_name')
    return [format_audit_item(i) for i in qs]
