from django.core.management.base import BaseCommand
from django.utils import timezone

from care.models import Team
from care.services.caching import dashboard_key
from care.services.dashboard import cached_team_summary
from care.services.realtime import broadcast_refresh


class Command(BaseCommand):
    help = "Warm the team dashboard caches; broadcast WebSocket refresh event."

    def handle(self, *args, **options):
        now = timezone.now()
        keys_refreshed = []
        for team in Team.objects.all():
            cached_team_summary(team, refresh=True)
            keys_refreshed.append(dashboard_key(team.id))
        broadcast_refresh(keys_refreshed)
        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(keys_refreshed)} keys at {now}"))
