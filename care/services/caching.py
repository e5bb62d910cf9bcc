from django.core.cache import cache


def dashboard_key(team_id: int) -> str:
    return f'dashboard:team:{team_id}'


def invalidate_dashboard(team_id: int) -> None:
    cache.delete(dashboard_key(team_id))
