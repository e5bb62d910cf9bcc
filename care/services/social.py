import math
from typing import Optional

from care.models import Resident, SocialActivity, SocialConnection
from care.services.activity import log_action
from care.services.realtime import publish_team_event
from care.services.scoping import get_scoped, resolve_organization_id, scope_queryset


# ---------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------
def format_activity(a: SocialActivity) -> dict:
    return {
        'id': a.id,
        'residentId': a.resident_id,
        'activityDate': a.activity_date.isoformat(),
        'activityTime': a.activity_time or None,
        'activityType': a.activity_type,
        'activityName': a.activity_name,
        'description': a.description or None,
        'participants': a.participants,
        'location': a.location or None,
        'duration': a.duration,
        'engagementLevel': a.engagement_level,
        'moodBefore': a.mood_before or None,
        'moodAfter': a.mood_after or None,
        'socialInteraction': a.social_interaction or None,
        'enjoyment': a.enjoyment or None,
        'notes': a.notes or None,
        'recordedBy': a.recorded_by,
        'organizationId': a.organization_id,
        'teamId': a.team_id,
        'createdBy': a.created_by_id,
        'createdAt': a.created_at.isoformat(),
        'updatedAt': a.updated_at.isoformat(),
    }


def _newest_first(qs):
    return qs.order_by('-activity_date', '-activity_time', '-created_at', '-id')


def create_activity(user, resident_id: int, data: dict) -> SocialActivity:
    resident = get_scoped(Resident, resident_id, user)
    activity = SocialActivity.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **data,
    )
    log_action(user=user, action='social_activity_create', object_type='social_activity', object_id=activity.id,
               resident=resident, detail={'type': activity.activity_type})
    publish_team_event(activity.team_id, 'social.changed', {'residentId': resident.id})
    return activity


def list_activities(user, resident_id: int, *, page: Optional[int]=None, page_size: Optional[int]=None):
    """All activities for a resident, or one page of them when paging is asked for.

    Paged results come back as ``{activities, totalCount, totalPages, currentPage}``.
    """
    resident = get_scoped(Resident, resident_id, user)
    qs = _newest_first(SocialActivity.objects.filter(resident=resident))
    if page is None and page_size is None:
        return [format_activity(a) for a in qs]
    page = page or 1
    page_size = page_size or 20
    total = qs.count()
    start = (page - 1) * page_size
    return {
        'activities': [format_activity(a) for a in qs[start:start + page_size]],
        'totalCount': total,
        'totalPages': math.ceil(total / page_size),
        'currentPage': page,
    }


def recent_activities(user, resident_id: int, limit: int=10) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = _newest_first(SocialActivity.objects.filter(resident=resident))[:limit]
    return [format_activity(a) for a in qs]


def activities_in_range(user, resident_id: int, start, end) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = SocialActivity.objects.filter(resident=resident, activity_date__gte=start, activity_date__lte=end)
    return [format_activity(a) for a in _newest_first(qs)]


def organization_activities(user, organization_id: Optional[int]=None) -> list[dict]:
    org_id = resolve_organization_id(user, organization_id)
    qs = scope_queryset(SocialActivity.objects.filter(organization_id=org_id), user)
    return [format_activity(a) for a in _newest_first(qs)]


def get_activity(user, activity_id: int) -> SocialActivity:
    return get_scoped(SocialActivity, activity_id, user)


def update_activity(user, activity_id: int, changes: dict) -> SocialActivity:
    activity = get_activity(user, activity_id)
    for field, value in changes.items():
        setattr(activity, field, value)
    activity.updated_by = user
    activity.save()
    publish_team_event(activity.team_id, 'social.changed', {'residentId': activity.resident_id})
    return activity


def delete_activity(user, activity_id: int) -> None:
    activity = get_activity(user, activity_id)
    log_action(user=user, action='social_activity_delete', object_type='social_activity', object_id=activity.id,
               resident=activity.resident)
    activity.delete()
    publish_team_event(activity.team_id, 'social.changed', {'residentId': activity.resident_id})


# ---------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------
def format_connection(c: SocialConnection) -> dict:
    return {
        'id': c.id,
        'residentId': c.resident_id,
        'name': c.name,
        'relationship': c.relationship,
        'connectionType': c.connection_type,
        'contactFrequency': c.contact_frequency or None,
        'phone': c.phone or None,
        'email': c.email or None,
        'notes': c.notes or None,
        'organizationId': c.organization_id,
        'teamId': c.team_id,
        'createdBy': c.created_by_id,
        'createdAt': c.created_at.isoformat(),
        'updatedAt': c.updated_at.isoformat(),
    }


def create_connection(user, resident_id: int, data: dict) -> SocialConnection:
    resident = get_scoped(Resident, resident_id, user)
    connection = SocialConnection.objects.create(
        resident=resident,
        organization_id=resident.organization_id,
        team_id=resident.team_id,
        created_by=user, updated_by=user,
        **data,
    )
    log_action(user=user, action='social_connection_create', object_type='social_connection',
               object_id=connection.id, resident=resident)
    return connection


def list_connections(user, resident_id: int, *, connection_type: Optional[str]=None) -> list[dict]:
    resident = get_scoped(Resident, resident_id, user)
    qs = SocialConnection.objects.filter(resident=resident)
    if connection_type:
        qs = qs.filter(connection_type=connection_type)
    return [format_connection(c) for c in qs.order_by('name', 'id')]


def organization_connections(user, organization_id: Optional[int]=None) -> list[dict]:
    org_id = resolve_organization_id(user, organization_id)
    qs = scope_queryset(SocialConnection.objects.filter(organization_id=org_id), user)
    return [format_connection(c) for c in qs.order_by('-created_at', '-id')]


def get_connection(user, connection_id: int) -> SocialConnection:
    return get_scoped(SocialConnection, connection_id, user)


def update_connection(user, connection_id: int, changes: dict) -> SocialConnection:
    connection = get_connection(user, connection_id)
    for field, value in changes.items():
        setattr(connection, field, value)
    connection.updated_by = user
    connection.save()
    return connection


def delete_connection(user, connection_id: int) -> None:
    connection = get_connection(user, connection_id)
    log_action(user=user, action='social_connection_delete', object_type='social_connection',
               object_id=connection.id, resident=connection.resident)
    connection.delete()
