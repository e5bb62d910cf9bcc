from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from care.models import ActionPlan, AuditResponse, Notification, Team
from care.permissions import is_manager
from care.services.activity import log_action
from care.services.caching import invalidate_dashboard
from care.services.notifications import notify
from care.services.realtime import publish_team_event
from care.services.scoping import can_access_team, get_scoped, scope_queryset

User = get_user_model()


def format_plan(p: ActionPlan) -> dict:
    return {
        'id': p.id,
        'auditResponseId': p.audit_response_id,
        'templateId': p.template_id,
        'description': p.description,
        'assignedTo': p.assigned_to_id,
        'assignedToName': (p.assigned_to.get_full_name() or p.assigned_to.username) if p.assigned_to_id else None,
        'priority': p.priority,
        'dueDate': p.due_date.isoformat() if p.due_date else None,
        'status': p.status,
        'completedAt': p.completed_at.isoformat() if p.completed_at else None,
        'completedBy': p.completed_by_id,
        'teamId': p.team_id,
        'createdBy': p.created_by_id,
        'createdAt': p.created_at.isoformat(),
        'updatedAt': p.updated_at.isoformat(),
    }


def _assignee(team: Team, user_id: int):
    assignee = User.objects.filter(id=user_id, is_active=True).first()
    if assignee is None:
        raise LookupError('Assignee not found')
    if not can_access_team(assignee, team.id):
        raise ValueError('Assignee is not a member of this team')
    return assignee


def create_plan(user, team: Team, data: dict, *, audit_response=None, template=None) -> ActionPlan:
    """``data`` carries ``description``, ``assignedTo``, ``priority`` and ``dueDate``."""
    if not is_manager(user):
        raise PermissionError('Only managers can create action plans')
    assignee = _assignee(team, data['assignedTo'])
    plan = ActionPlan.objects.create(
        audit_response=audit_response,
        template=template or getattr(audit_response, 'template', None),
        description=data['description'],
        assigned_to=assignee,
        priority=data['priority'],
        due_date=data.get('dueDate'),
        organization_id=team.organization_id,
        team=team,
        created_by=user,
    )
    source = plan.template.name if plan.template_id else 'an audit'
    notify(
        recipient=assignee, sender=user, type=Notification.TYPE_ACTION_PLAN,
        title='New Action Plan Assigned',
        message=f'You have been assigned an action plan from {source}: {plan.description[:200]}',
        link=f'/action-plans/{plan.id}',
        metadata={'actionPlanId': plan.id, 'auditResponseId': plan.audit_response_id, 'priority': plan.priority},
        team=team,
    )
    log_action(user=user, action='action_plan_create', object_type='action_plan', object_id=plan.id,
               detail={'assignedTo': assignee.id})
    invalidate_dashboard(team.id)
    publish_team_event(team.id, 'action_plan.changed', {'actionPlanId': plan.id})
    return plan


def get_plan(user, plan_id: int) -> ActionPlan:
    return get_scoped(ActionPlan, plan_id, user, select=('assigned_to', 'template', 'team'))


def _can_edit(user, plan: ActionPlan) -> bool:
    return is_manager(user) or plan.assigned_to_id == user.id


@transaction.atomic
def update_plan(user, plan_id: int, changes: dict) -> ActionPlan:
    plan = get_plan(user, plan_id)
    if not _can_edit(user, plan):
        raise PermissionError('Only managers or the assignee can update this action plan')
    if ('assignedTo' in changes or 'description' in changes or 'priority' in changes) and not is_manager(user):
        raise PermissionError('Only managers can reassign or edit action plans')
    if 'description' in changes:
        plan.description = changes['description']
    if 'priority' in changes:
        plan.priority = changes['priority']
    if 'dueDate' in changes:
        plan.due_date = changes['dueDate']
    if 'assignedTo' in changes:
        plan.assigned_to = _assignee(plan.team, changes['assignedTo'])
    completing = changes.get('status') == ActionPlan.STATUS_COMPLETED
    if 'status' in changes and not completing:
        plan.status = changes['status']
        plan.completed_at = None
        plan.completed_by = None
    plan.save()
    if completing:
        return complete_plan(user, plan.id)
    invalidate_dashboard(plan.team_id)
    publish_team_event(plan.team_id, 'action_plan.changed', {'actionPlanId': plan.id})
    return plan


@transaction.atomic
def complete_plan(user, plan_id: int) -> ActionPlan:
    plan = get_plan(user, plan_id)
    if not _can_edit(user, plan):
        raise PermissionError('Only managers or the assignee can complete this action plan')
    if plan.status == ActionPlan.STATUS_COMPLETED:
        return plan
    plan.status = ActionPlan.STATUS_COMPLETED
    plan.completed_at = timezone.now()
    plan.completed_by = user
    plan.save()
    if plan.created_by_id and plan.created_by_id != user.id:
        notify(
            recipient=plan.created_by, sender=user, type=Notification.TYPE_ACTION_PLAN_COMPLETED,
            title='Action Plan Completed',
            message=f'{user.get_full_name() or user.username} completed: {plan.description[:200]}',
            link=f'/action-plans/{plan.id}',
            metadata={'actionPlanId': plan.id},
            team=plan.team,
        )
    log_action(user=user, action='action_plan_complete', object_type='action_plan', object_id=plan.id)
    invalidate_dashboard(plan.team_id)
    publish_team_event(plan.team_id, 'action_plan.changed', {'actionPlanId': plan.id})
    return plan


def delete_plan(user, plan_id: int) -> None:
    plan = get_plan(user, plan_id)
    if not is_manager(user):
        raise PermissionError('Only managers can delete action plans')
    log_action(user=user, action='action_plan_delete', object_type='action_plan', object_id=plan.id)
    plan.delete()
    invalidate_dashboard(plan.team_id)


def _open(qs):
    return qs.exclude(status=ActionPlan.STATUS_COMPLETED)


def list_plans(user, *, team: Optional[Team]=None, audit_response_id: Optional[int]=None,
               template_id: Optional[int]=None, assigned_to: Optional[int]=None,
               status: Optional[str]=None) -> list[dict]:
    qs = scope_queryset(ActionPlan.objects.select_related('assigned_to'), user)
    if audit_response_id:
        response = get_scoped(AuditResponse, audit_response_id, user)
        qs = qs.filter(audit_response=response)
    elif template_id:
        from care.services.audits import get_template
        qs = qs.filter(template=get_template(user, template_id))
    elif team is None:
        qs = qs.filter(assigned_to_id=assigned_to or user.id)
    if team is not None:
        qs = qs.filter(team=team)
    if template_id:
        qs = qs.filter(template_id=template_id)
    if assigned_to:
        qs = qs.filter(assigned_to_id=assigned_to)
    if status:
        qs = qs.filter(status=status)
    return [format_plan(p) for p in qs.order_by('due_date', '-created_at')]


def overdue_plans(team: Team, now=None):
    now = now or timezone.now()
    return _open(ActionPlan.objects.filter(team=team, due_date__lt=now)).select_related('assigned_to').order_by('due_date')


def plan_stats(team: Team, now=None) -> dict:
    now = now or timezone.now()
    qs = ActionPlan.objects.filter(team=team)
    return {
        'total': qs.count(),
        'pending': qs.filter(status=ActionPlan.STATUS_PENDING).count(),
        'inProgress': qs.filter(status=ActionPlan.STATUS_IN_PROGRESS).count(),
        'completed': qs.filter(status=ActionPlan.STATUS_COMPLETED).count(),
        'overdue': _open(qs).filter(Q(status=ActionPlan.STATUS_OVERDUE) | Q(due_date__lt=now)).count(),
        'highPriority': _open(qs).filter(priority='High').count(),
    }


@transaction.atomic
def mark_overdue(now=None) -> int:
    """Flip past-due open plans to ``overdue`` and tell their assignees."""
    now = now or timezone.now()
    stale = list(
        ActionPlan.objects
        .filter(due_date__lt=now, status__in=[ActionPlan.STATUS_PENDING, ActionPlan.STATUS_IN_PROGRESS])
        .select_related('assigned_to', 'team')
    )
    for plan in stale:
        plan.status = ActionPlan.STATUS_OVERDUE
        plan.save(update_fields=['status', 'updated_at'])
        notify(
            recipient=plan.assigned_to, type=Notification.TYPE_ACTION_PLAN_OVERDUE,
            title='Action Plan Overdue',
            message=f'Action plan is past its due date: {plan.description[:200]}',
            link=f'/action-plans/{plan.id}',
            metadata={'actionPlanId': plan.id},
            team=plan.team,
        )
    for team_id in {p.team_id for p in stale}:
        invalidate_dashboard(team_id)
    return len(stale)
