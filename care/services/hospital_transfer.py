from typing import Optional

from django.utils import timezone

from care.models import HospitalPassport, HospitalTransferLog, Resident, Team
from care.services.activity import log_action
from care.services.realtime import publish_team_event
from care.services.residents import primary_contact
from care.services.scoping import get_scoped, resolve_organization_id, scope_queryset


# ---------------------------------------------------------------------
# Hospital passports
# ---------------------------------------------------------------------
def format_passport(p: HospitalPassport) -> dict:
    return {
        'id': p.id,
        'residentId': p.resident_id,
        'generalDetails': p.general_details,
        'medicalCareNeeds': p.medical_care_needs,
        'skinMedicationAttachments': p.skin_medication_attachments,
        'signOff': p.sign_off,
        'status': p.status,
        'organizationId': p.organization_id,
        'teamId': p.team_id,
        'createdBy': p.created_by_id,
        'createdAt': p.created_at.isoformat(),
        'updatedAt': p.updated_at.isoformat(),
    }


def create_passport(user, resident_id: int, data: dict) -> HospitalPassport:
    resident = get_scoped(Resident, resident_id, user)
    passport = HospitalPassport.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        general_details=data['generalDetails'],
        medical_care_needs=data['medicalCareNeeds'],
        skin_medication_attachments=data['skinMedicationAttachments'],
        sign_off=data['signOff'],
        status=data.get('status') or 'completed',
        created_by=user, updated_by=user,
    )
    log_action(user=user, action='hospital_passport_create', object_type='hospital_passport', object_id=passport.id,
               resident=resident, detail={'status': passport.status})
    publish_team_event(passport.team_id, 'hospital_transfer.changed', {'residentId': resident.id})
    return passport


def prefill_general_details(user, resident_id: int) -> dict:
    """Passport ``generalDetails`` filled from what is already on file."""
    resident = get_scoped(Resident, resident_id, user, select=('team',))
    contact = primary_contact(resident)
    return {
        'personName': resident.full_name,
        'knownAs': resident.first_name,
        'dateOfBirth': resident.date_of_birth.isoformat(),
        'nhsNumber': resident.nhs_number,
        'transferDateTime': timezone.localtime().strftime('%Y-%m-%dT%H:%M'),
        'englishFirstLanguage': 'yes',
        'careHomeName': resident.team.name,
        'nextOfKinName': contact.name if contact else '',
        'nextOfKinAddress': contact.address if contact else '',
        'nextOfKinPhone': contact.phone if contact else '',
        'gpName': resident.gp_name,
        'gpAddress': resident.gp_address,
        'gpPhone': resident.gp_phone,
        'careManagerName': resident.care_manager_name,
        'careManagerAddress': resident.care_manager_address,
        'careManagerPhone': resident.care_manager_phone,
    }


def get_passport(user, passport_id: int) -> HospitalPassport:
    return get_scoped(HospitalPassport, passport_id, user)


def update_passport_status(user, passport_id: int, status: str) -> HospitalPassport:
    passport = get_passport(user, passport_id)
    passport.status = status
    passport.updated_by = user
    passport.save(update_fields=['status', 'updated_by', 'updated_at'])
    return passport


def delete_passport(user, passport_id: int) -> None:
    passport = get_passport(user, passport_id)
    log_action(user=user, action='hospital_passport_delete', object_type='hospital_passport', object_id=passport.id,
               resident=passport.resident)
    passport.delete()


def list_passports(user, *, resident_id: Optional[int]=None, team: Optional[Team]=None,
                   organization_id: Optional[int]=None) -> list[dict]:
    qs = _scoped(HospitalPassport, user, resident_id=resident_id, team=team, organization_id=organization_id)
    return [format_passport(p) for p in qs.order_by('-created_at', '-id')]


def _scoped(model, user, *, resident_id=None, team=None, organization_id=None):
    if resident_id is not None:
        return model.objects.filter(resident=get_scoped(Resident, resident_id, user))
    if team is not None:
        return model.objects.filter(team=team)
    org_id = resolve_organization_id(user, organization_id)
    return scope_queryset(model.objects.filter(organization_id=org_id), user)


# ---------------------------------------------------------------------
# Transfer logs
# ---------------------------------------------------------------------
def format_transfer_log(t: HospitalTransferLog) -> dict:
    return {
        'id': t.id,
        'residentId': t.resident_id,
        'date': t.date.isoformat(),
        'hospitalName': t.hospital_name,
        'reason': t.reason,
        'outcome': t.outcome or None,
        'followUp': t.follow_up or None,
        'filesChanged': t.files_changed or None,
        'medicationChanges': t.medication_changes or None,
        'organizationId': t.organization_id,
        'teamId': t.team_id,
        'createdBy': t.created_by_id,
        'createdAt': t.created_at.isoformat(),
        'updatedAt': t.updated_at.isoformat(),
    }


TRANSFER_FIELDS = ('date', 'hospital_name', 'reason', 'outcome', 'follow_up', 'files_changed', 'medication_changes')


def create_transfer_log(user, resident_id: int, data: dict) -> HospitalTransferLog:
    resident = get_scoped(Resident, resident_id, user)
    log = HospitalTransferLog.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **{f: data[f] for f in TRANSFER_FIELDS if f in data},
    )
    log_action(user=user, action='transfer_log_create', object_type='transfer_log', object_id=log.id,
               resident=resident, detail={'hospital': log.hospital_name})
    publish_team_event(log.team_id, 'hospital_transfer.changed', {'residentId': resident.id})
    return log


def get_transfer_log(user, log_id: int) -> HospitalTransferLog:
    return get_scoped(HospitalTransferLog, log_id, user)


def replace_transfer_log(user, log_id: int, data: dict) -> HospitalTransferLog:
    """Full update: fields missing from ``data`` are cleared."""
    log = get_transfer_log(user, log_id)
    log.date = data['date']
    log.hospital_name = data['hospital_name']
    log.reason = data['reason']
    log.outcome = data.get('outcome', '')
    log.follow_up = data.get('follow_up', '')
    log.files_changed = data.get('files_changed') or {}
    log.medication_changes = data.get('medication_changes') or {}
    log.updated_by = user
    log.save()
    return log


def delete_transfer_log(user, log_id: int) -> None:
    log = get_transfer_log(user, log_id)
    log_action(user=user, action='transfer_log_delete', object_type='transfer_log', object_id=log.id, resident=log.resident)
    log.delete()


def list_transfer_logs(user, *, resident_id: Optional[int]=None, team: Optional[Team]=None,
                       organization_id: Optional[int]=None) -> list[dict]:
    qs = _scoped(HospitalTransferLog, user, resident_id=resident_id, team=team, organization_id=organization_id)
    return [format_transfer_log(t) for t in qs.order_by('-date', '-created_at', '-id')]
