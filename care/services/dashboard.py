from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from care.models import ActionPlan, Appointment, AuditResponse, Resident, Team
from care.services.audits import overdue_responses
from care.services.caching import dashboard_key


def team_summary(team: Team) -> dict:
    now = timezone.now()
    open_plans = ActionPlan.objects.filter(team=team).exclude(status=ActionPlan.STATUS_COMPLETED)
    return {
        'teamId': team.id,
        'activeResidents': Resident.objects.filter(team=team, is_active=True).count(),
        'upcomingAppointments': Appointment.objects.filter(
            team=team, status=Appointment.STATUS_SCHEDULED, start_time__gte=now,
        ).count(),
        'openDrafts': AuditResponse.objects.filter(team=team, status__in=AuditResponse.OPEN_STATUSES).count(),
        'overdueAudits': len(overdue_responses(team.id, now)),
        'openActionPlans': open_plans.count(),
        'overdueActionPlans': open_plans.filter(due_date__lt=now).count(),
        'generatedAt': now.isoformat(),
    }


def cached_team_summary(team: Team, *, refresh: bool=False) -> dict:
    key = dashboard_key(team.id)
    if not refresh:
        cached = cache.get(key)
        if cached:
            return cached
    summary = team_summary(team)
    cache.set(key, summary, settings.DASHBOARD_CACHE_SECONDS)
    return summary
