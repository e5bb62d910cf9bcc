from django.db import transaction

from care.models import MovingHandlingAssessment, Resident
from care.services.activity import log_action
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped


def risk_flags(a: MovingHandlingAssessment) -> list[dict]:
    """Risk factors that apply at least sometimes."""
    flags = []
    for factor in MovingHandlingAssessment.RISK_FACTORS:
        entry = a.risk_factors.get(factor) or {}
        state = entry.get('state')
        if state and state != 'NEVER':
            flags.append({'factor': factor, 'state': state, 'comments': entry.get('comments') or None})
    return flags


def format_summary(a: MovingHandlingAssessment) -> dict:
    return {
        'id': a.id,
        'residentId': a.resident_id,
        'residentName': a.resident_name,
        'completedBy': a.completed_by,
        'completionDate': a.completion_date.isoformat(),
        'savedAsDraft': a.saved_as_draft,
        'createdAt': a.created_at.isoformat(),
    }


def format_assessment(a: MovingHandlingAssessment) -> dict:
    data = format_summary(a)
    data.update({
        'dateOfBirth': a.date_of_birth.isoformat(),
        'bedroomNumber': a.bedroom_number,
        'weight': a.weight,
        'height': a.height,
        'historyOfFalls': a.history_of_falls,
        'independentMobility': a.independent_mobility,
        'canWeightBear': a.can_weight_bear,
        'limbUpperRight': a.limb_upper_right,
        'limbUpperLeft': a.limb_upper_left,
        'limbLowerRight': a.limb_lower_right,
        'limbLowerLeft': a.limb_lower_left,
        'equipmentUsed': a.equipment_used or None,
        'needsRiskStaff': a.needs_risk_staff or None,
        'riskFactors': a.risk_factors,
        'riskFlags': risk_flags(a),
        'jobRole': a.job_role,
        'signature': a.signature,
        'organizationId': a.organization_id,
        'teamId': a.team_id,
        'createdBy': a.created_by_id,
        'updatedAt': a.updated_at.isoformat(),
    })
    return data


def submit_assessment(user, resident_id: int, data: dict) -> MovingHandlingAssessment:
    resident = get_scoped(Resident, resident_id, user)
    missing = [f for f in MovingHandlingAssessment.RISK_FACTORS if f not in data.get('risk_factors', {})]
    if missing:
        raise ValueError(f'Missing risk factor states: {", ".join(missing)}')
    assessment = MovingHandlingAssessment.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **data,
    )
    log_action(user=user, action='moving_handling_submit', object_type='moving_handling', object_id=assessment.id,
               resident=resident, detail={'draft': assessment.saved_as_draft})
    publish_team_event(assessment.team_id, 'care_file.changed', {'residentId': resident.id})
    return assessment


def get_assessment(user, assessment_id: int) -> MovingHandlingAssessment:
    return get_scoped(MovingHandlingAssessment, assessment_id, user)


def list_assessments(user, resident_id: int) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = MovingHandlingAssessment.objects.filter(resident=resident).order_by('-created_at', '-id')
    return [format_summary(a) for a in qs]


def has_assessment(user, resident_id: int) -> bool:
    resident = get_scoped(Resident, resident_id, user)
    return MovingHandlingAssessment.objects.filter(resident=resident).exists()


@transaction.atomic
def update_assessment(user, assessment_id: int, changes: dict) -> MovingHandlingAssessment:
    """Edit a draft.  ``savedAsDraft=false`` finalizes it; final assessments are read-only."""
    assessment = get_assessment(user, assessment_id)
    if not assessment.saved_as_draft:
        raise ValueError('Only draft assessments can be edited')
    risk_changes = changes.pop('risk_factors', {})
    if risk_changes:
        merged = dict(assessment.risk_factors)
        for factor, entry in risk_changes.items():
            current = dict(merged.get(factor) or {})
            if entry.get('state'):
                current['state'] = entry['state']
            if 'comments' in entry:
                current['comments'] = entry['comments']
            merged[factor] = current
        assessment.risk_factors = merged
    for field, value in changes.items():
        setattr(assessment, field, value)
    assessment.updated_by = user
    assessment.save()
    if not assessment.saved_as_draft:
        log_action(user=user, action='moving_handling_finalize', object_type='moving_handling',
                   object_id=assessment.id, resident=assessment.resident)
    publish_team_event(assessment.team_id, 'care_file.changed', {'residentId': assessment.resident_id})
    return assessment


def delete_assessment(user, assessment_id: int) -> None:
    assessment = get_assessment(user, assessment_id)
    log_action(user=user, action='moving_handling_delete', object_type='moving_handling', object_id=assessment.id,
               resident=assessment.resident)
    assessment.delete()
