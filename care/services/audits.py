"""
Audit templates and the audit response lifecycle.

A response moves ``draft`` -> ``in-progress`` -> ``completed``.  Only one
open (draft or in-progress) response may exist per template and team;
the database enforces this with a partial unique constraint and
:func:`get_or_create_draft` turns a lost race into a re-read.  Auto-save
calls :func:`save_progress`, which skips the write when the submitted
answers hash to the stored ``content_hash``.
"""
import hashlib
import json
import logging
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from care.models import AuditTemplate, AuditResponse, Team
from care.permissions import is_manager
from care.services import action_plans
from care.services.activity import log_action
from care.services.caching import invalidate_dashboard
from care.services.realtime import publish_team_event
from care.services.scoping import can_access_team, can_access_organization, get_scoped, resolve_organization_id

logger = logging.getLogger(__name__)

FREQUENCY_DAYS = {
    'daily': 1,
    'weekly': 7,
    'monthly': 30,
    'quarterly': 90,
    'yearly': 365,
}


# ---------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------
def format_template(t: AuditTemplate) -> dict:
    return {
        'id': t.id,
        'name': t.name,
        'description': t.description,
        'category': t.category,
        'questions': t.questions,
        'frequency': t.frequency or None,
        'isActive': t.is_active,
        'organizationId': t.organization_id,
        'teamId': t.team_id,
        'createdBy': t.created_by_id,
        'createdAt': t.created_at.isoformat(),
        'updatedAt': t.updated_at.isoformat(),
    }


def get_template(user, template_id: int, *, for_write: bool=False) -> AuditTemplate:
    template = AuditTemplate.objects.filter(id=template_id).first()
    if template is None:
        raise LookupError('Audit template not found')
    if for_write:
        if not is_manager(user):
            raise PermissionError('Only managers can change audit templates')
        if not can_access_team(user, template.team_id):
            raise PermissionError('No access to this template')
    elif not (can_access_team(user, template.team_id) or can_access_organization(user, template.organization_id)):
        raise PermissionError('No access to this template')
    return template


def create_template(user, team: Team, data: dict) -> AuditTemplate:
    if not is_manager(user):
        raise PermissionError('Only managers can create audit templates')
    template = AuditTemplate.objects.create(
        organization_id=team.organization_id, team=team,
        name=data['name'],
        description=data.get('description', ''),
        category=data['category'],
        questions=[dict(q) for q in data['questions']],
        frequency=data.get('frequency') or '',
        created_by=user, updated_by=user,
    )
    log_action(user=user, action='audit_template_create', object_type='audit_template', object_id=template.id)
    return template


def update_template(user, template_id: int, changes: dict) -> AuditTemplate:
    template = get_template(user, template_id, for_write=True)
    for field in ('name', 'description', 'category', 'frequency'):
        if field in changes:
            setattr(template, field, changes[field] or '')
    if 'questions' in changes:
        template.questions = [dict(q) for q in changes['questions']]
    template.updated_by = user
    template.save()
    log_action(user=user, action='audit_template_update', object_type='audit_template', object_id=template.id,
               detail={'fields': sorted(changes)})
    return template


def archive_template(user, template_id: int) -> AuditTemplate:
    template = get_template(user, template_id, for_write=True)
    template.is_active = False
    template.updated_by = user
    template.save(update_fields=['is_active', 'updated_by', 'updated_at'])
    log_action(user=user, action='audit_template_archive', object_type='audit_template', object_id=template.id)
    return template


def delete_template(user, template_id: int) -> None:
    template = get_template(user, template_id, for_write=True)
    log_action(user=user, action='audit_template_delete', object_type='audit_template', object_id=template.id,
               detail={'name': template.name})
    template.delete()
    invalidate_dashboard(template.team_id)


def list_team_templates(user, team: Team, *, category: Optional[str]=None, include_archived: bool=False) -> list[dict]:
    qs = AuditTemplate.objects.filter(team=team)
    if not include_archived:
        qs = qs.filter(is_active=True)
    if category:
        qs = qs.filter(category=category)
    return [format_template(t) for t in qs.order_by('category', 'name', 'id')]


def list_organization_templates(user, organization_id: Optional[int]=None, *, category: Optional[str]=None) -> list[dict]:
    org_id = resolve_organization_id(user, organization_id)
    qs = AuditTemplate.objects.filter(organization_id=org_id, is_active=True)
    if category:
        qs = qs.filter(category=category)
    return [format_template(t) for t in qs.order_by('category', 'name', 'id')]


# ---------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------
def format_response(r: AuditResponse, *, with_answers: bool=True) -> dict:
    data = {
        'id': r.id,
        'templateId': r.template_id,
        'templateName': r.template_name,
        'category': r.category,
        'organizationId': r.organization_id,
        'teamId': r.team_id,
        'status': r.status,
        'frequency': r.frequency or None,
        'auditedBy': r.audited_by_id,
        'auditedByName': (r.audited_by.get_full_name() or r.audited_by.username) if r.audited_by else None,
        'auditedAt': r.audited_at.isoformat(),
        'completedAt': r.completed_at.isoformat() if r.completed_at else None,
        'nextAuditDue': r.next_audit_due.isoformat() if r.next_audit_due else None,
        'updatedAt': r.updated_at.isoformat(),
    }
    if with_answers:
        data['responses'] = r.responses
    return data


def content_hash(responses: list) -> str:
    canonical = json.dumps(responses, sort_keys=True, separators=(',', ':'), default=str)
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


def next_due(frequency: Optional[str], completed_at: datetime) -> Optional[datetime]:
    """``adhoc`` (or no frequency) audits have no next due date."""
    days = FREQUENCY_DAYS.get(frequency or '')
    if days is None:
        return None
    return completed_at + timedelta(days=days)


def validate_answers(template: AuditTemplate, responses: list) -> list:
    """Check every answer refers to a template question and fits its type."""
    types = {q['id']: q.get('type') for q in template.questions or [] if isinstance(q, dict) and 'id' in q}
    allowed = template.ANSWER_VALUES
    cleaned = []
    for entry in responses:
        entry = dict(entry)
        answers = []
        for answer in entry.get('answers', []):
            answer = dict(answer)
            qid = answer.get('questionId')
            if qid not in types:
                raise ValueError(f'Unknown question: {qid}')
            value = answer.get('value')
            if value and types[qid] in allowed and value not in allowed[types[qid]]:
                raise ValueError(f'Invalid answer for {qid}: {value}')
            answers.append(answer)
        entry['answers'] = answers
        cleaned.append(entry)
    return cleaned


def _open_response(template_id: int, team_id: int) -> Optional[AuditResponse]:
    return (AuditResponse.objects
            .filter(template_id=template_id, team_id=team_id, status__in=AuditResponse.OPEN_STATUSES)
            .order_by('-updated_at')
            .first())


def get_or_create_draft(user, template_id: int, team: Team) -> tuple[AuditResponse, bool]:
    """Return the open response for (template, team), creating one if needed."""
    template = get_template(user, template_id)
    existing = _open_response(template.id, team.id)
    if existing is not None:
        return existing, False
    if not template.is_active:
        raise ValueError('Audit template is archived')
    try:
        with transaction.atomic():
            draft = AuditResponse.objects.create(
                template=template,
                template_name=template.name,
                category=template.category,
                organization_id=team.organization_id,
                team=team,
                responses=[],
                content_hash=content_hash([]),
                status=AuditResponse.STATUS_DRAFT,
                audited_by=user,
                updated_by=user,
                frequency=template.frequency,
            )
    except IntegrityError:
        # a concurrent request created it first
        existing = _open_response(template.id, team.id)
        if existing is None:
            raise
        return existing, False
    log_action(user=user, action='audit_draft_create', object_type='audit_response', object_id=draft.id,
               detail={'templateId': template.id})
    invalidate_dashboard(team.id)
    return draft, True


def get_response(user, response_id: int) -> AuditResponse:
    return get_scoped(AuditResponse, response_id, user, select=('audited_by',))


@transaction.atomic
def save_progress(user, response_id: int, responses: list, status: str=AuditResponse.STATUS_IN_PROGRESS) -> tuple[AuditResponse, bool]:
    """Persist answers of an open response.  Returns ``(response, saved)``."""
    if status == AuditResponse.STATUS_COMPLETED:
        raise ValueError('Use completion to finish an audit')
    get_response(user, response_id)
    response = AuditResponse.objects.select_for_update().get(id=response_id)
    if not response.is_open:
        raise ValueError('Completed audits are read-only')
    cleaned = validate_answers(response.template, responses)
    digest = content_hash(cleaned)
    if digest == response.content_hash and status == response.status:
        return response, False
    response.responses = cleaned
    response.content_hash = digest
    response.status = status
    response.updated_by = user
    response.save(update_fields=['responses', 'content_hash', 'status', 'updated_by', 'updated_at'])
    publish_team_event(response.team_id, 'audit.saved', {'responseId': response.id, 'status': response.status})
    return response, True


def prune_history(template_id: int, team_id: int, keep: Optional[int]=None) -> int:
    """Delete completed responses beyond the newest ``keep`` for a template and team."""
    keep = settings.AUDIT_HISTORY_LIMIT if keep is None else keep
    stale_ids = list(
        AuditResponse.objects
        .filter(template_id=template_id, team_id=team_id, status=AuditResponse.STATUS_COMPLETED)
        .order_by('-completed_at', '-id')
        .values_list('id', flat=True)[keep:]
    )
    if not stale_ids:
        return 0
    AuditResponse.objects.filter(id__in=stale_ids).delete()
    logger.info("pruned %s completed audit responses for template %s team %s", len(stale_ids), template_id, team_id)
    return len(stale_ids)


@transaction.atomic
def complete_audit(user, response_id: int, responses: list, plans: Optional[list]=None):
    """Finish an open response, raise its action plans and trim old history."""
    get_response(user, response_id)
    response = AuditResponse.objects.select_for_update().select_related('template', 'team').get(id=response_id)
    if not response.is_open:
        raise ValueError('Audit is already completed')
    cleaned = validate_answers(response.template, responses)
    now = timezone.now()
    response.responses = cleaned
    response.content_hash = content_hash(cleaned)
    response.status = AuditResponse.STATUS_COMPLETED
    response.completed_at = now
    response.frequency = response.template.frequency or response.frequency
    response.next_audit_due = next_due(response.frequency, now)
    response.updated_by = user
    response.save()

    created = [
        action_plans.create_plan(user, response.team, plan, audit_response=response, template=response.template)
        for plan in plans or []
    ]
    prune_history(response.template_id, response.team_id)
    log_action(user=user, action='audit_complete', object_type='audit_response', object_id=response.id,
               detail={'templateId': response.template_id, 'actionPlans': [p.id for p in created]})
    invalidate_dashboard(response.team_id)
    publish_team_event(response.team_id, 'audit.completed', {'responseId': response.id, 'templateId': response.template_id})
    return response, created


def delete_response(user, response_id: int) -> None:
    response = get_response(user, response_id)
    if not is_manager(user) and not (response.is_open and response.audited_by_id == user.id):
        raise PermissionError('Only managers can delete audit responses')
    log_action(user=user, action='audit_response_delete', object_type='audit_response', object_id=response.id,
               detail={'templateId': response.template_id, 'status': response.status})
    response.delete()
    invalidate_dashboard(response.team_id)


def _completed(template_id: Optional[int], team_id: int):
    qs = AuditResponse.objects.filter(team_id=team_id, status=AuditResponse.STATUS_COMPLETED)
    if template_id is not None:
        qs = qs.filter(template_id=template_id)
    return qs.select_related('audited_by').order_by('-completed_at', '-id')


def list_completed(user, template_id: int, team: Team) -> list[dict]:
    get_template(user, template_id)
    return [format_response(r) for r in _completed(template_id, team.id)[:settings.AUDIT_HISTORY_LIMIT]]


def latest_completed(user, template_id: int, team: Team) -> Optional[dict]:
    get_template(user, template_id)
    latest = _completed(template_id, team.id).first()
    return format_response(latest) if latest else None


def list_open_drafts(user, team: Team) -> list[dict]:
    qs = (AuditResponse.objects
          .filter(team=team, status__in=AuditResponse.OPEN_STATUSES)
          .select_related('audited_by')
          .order_by('-updated_at'))
    return [format_response(r, with_answers=False) for r in qs]


def latest_per_template(team_id: int) -> list[AuditResponse]:
    """Newest completed response of every template the team has completed."""
    seen, latest = set(), []
    for r in _completed(None, team_id).order_by('template_id', '-completed_at', '-id'):
        if r.template_id in seen:
            continue
        seen.add(r.template_id)
        latest.append(r)
    return latest


def overdue_responses(team_id: int, now: Optional[datetime]=None) -> list[AuditResponse]:
    now = now or timezone.now()
    return [r for r in latest_per_template(team_id) if r.next_audit_due and r.next_audit_due < now]


def upcoming_responses(team_id: int, now: Optional[datetime]=None) -> list[AuditResponse]:
    now = now or timezone.now()
    horizon = now + timedelta(days=settings.AUDIT_UPCOMING_WINDOW_DAYS)
    return [r for r in latest_per_template(team_id) if r.next_audit_due and now <= r.next_audit_due <= horizon]
