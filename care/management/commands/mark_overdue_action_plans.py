from django.core.management.base import BaseCommand

from care.services.action_plans import mark_overdue


class Command(BaseCommand):
    help = "Flag past-due open action plans as overdue and notify their assignees."

    def handle(self, *args, **options):
        count = mark_overdue()
        self.stdout.write(self.style.SUCCESS(f"Marked {count} action plans overdue"))
