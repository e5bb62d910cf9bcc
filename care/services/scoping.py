"""
Tenancy rules: which organizations and teams a user may touch.

``super`` sees everything, ``admin`` every team of their organization and
everyone else only the teams they are a member of.  Helpers raise
``PermissionError`` for scope violations and ``LookupError`` for missing
records so that views can map them to 403/404.
"""
from typing import Optional, Iterable

from django.contrib.auth import get_user_model
from django.db.models import Model, QuerySet

from care.models import Team, TeamMember

User = get_user_model()


def is_super(user) -> bool:
    return getattr(user, 'role', '') == 'super'


def accessible_team_ids(user) -> Optional[set[int]]:
    """Team ids visible to ``user``; ``None`` means unrestricted."""
    if is_super(user):
        return None
    if getattr(user, 'role', '') == 'admin' and user.organization_id:
        return set(Team.objects.filter(organization_id=user.organization_id).values_list('id', flat=True))
    return set(TeamMember.objects.filter(user=user).values_list('team_id', flat=True))


def can_access_team(user, team_id: Optional[int]) -> bool:
    if team_id is None:
        return False
    allowed = accessible_team_ids(user)
    return allowed is None or team_id in allowed


def can_access_organization(user, organization_id: Optional[int]) -> bool:
    if is_super(user):
        return True
    return organization_id is not None and organization_id == getattr(user, 'organization_id', None)


def scope_queryset(qs: QuerySet, user, *, team_field: str='team_id') -> QuerySet:
    allowed = accessible_team_ids(user)
    if allowed is None:
        return qs
    return qs.filter(**{f'{team_field}__in': allowed})


def resolve_team(user, team_id: Optional[int]=None) -> Team:
    """Explicit team (access checked) else the user's active team."""
    if team_id is None:
        team_id = getattr(user, 'active_team_id', None)
        if team_id is None:
            raise ValueError('No team selected')
    team = Team.objects.select_related('organization').filter(id=team_id).first()
    if team is None:
        raise LookupError('Team not found')
    if not can_access_team(user, team.id):
        raise PermissionError('No access to this team')
    return team


def resolve_organization_id(user, organization_id: Optional[int]=None) -> int:
    organization_id = organization_id or getattr(user, 'organization_id', None)
    if organization_id is None:
        raise ValueError('No organization selected')
    if not can_access_organization(user, organization_id):
        raise PermissionError('No access to this organization')
    return organization_id


def get_scoped(model: type[Model], pk: int, user, *, select: Iterable[str]=()) -> Model:
    """Fetch a team-owned record, enforcing team access."""
    qs = model.objects.all()
    if select:
        qs = qs.select_related(*select)
    obj = qs.filter(pk=pk).first()
    if obj is None:
        raise LookupError(f'{model.__name__} not found')
    if not can_access_team(user, getattr(obj, 'team_id', None)):
        raise PermissionError('No access to this record')
    return obj


def list_user_teams(user) -> list[dict]:
    qs = Team.objects.select_related('organization').order_by('organization_id', 'name')
    allowed = accessible_team_ids(user)
    if allowed is not None:
        qs = qs.filter(id__in=allowed)
    return [{
        'id': t.id,
        'name': t.name,
        'organizationId': t.organization_id,
        'organizationName': t.organization.name,
        'isActive': t.id == getattr(user, 'active_team_id', None),
    } for t in qs]


def switch_active_team(user, team_id: int) -> Team:
    team = resolve_team(user, team_id)
    user.active_team = team
    fields = ['active_team']
    if user.organization_id is None:
        user.organization_id = team.organization_id
        fields.append('organization')
    user.save(update_fields=fields)
    return team


def add_member(actor, team_id: int, user_id: int, role: str='member') -> TeamMember:
    team = resolve_team(actor, team_id)
    target = User.objects.filter(id=user_id).first()
    if target is None:
        raise LookupError('User not found')
    if target.organization_id not in (None, team.organization_id):
        raise PermissionError('User belongs to another organization')
    member, created = TeamMember.objects.get_or_create(team=team, user=target, defaults={'role': role})
    if not created and member.role != role:
        member.role = role
        member.save(update_fields=['role'])
    if target.organization_id is None:
        target.organization_id = team.organization_id
        target.save(update_fields=['organization'])
    return member


def remove_member(actor, team_id: int, user_id: int) -> int:
    team = resolve_team(actor, team_id)
    deleted, _ = TeamMember.objects.filter(team=team, user_id=user_id).delete()
    if deleted:
        User.objects.filter(id=user_id, active_team=team).update(active_team=None)
    return deleted
