# care/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password

from care.models import Organization, Team, TeamMember, User

TEST_SET = [
    ("staff1", "staff"),
    ("manager1", "manager"),
    ("admin1", "admin"),
    ("super", "super"),
]


class Command(BaseCommand):
    help = "Ensure one test user per role exists with password=123456 (idempotent)."

    def handle(self, *args, **opts):
        org, _ = Organization.objects.get_or_create(name="Test Care Group")
        team, _ = Team.objects.get_or_create(organization=org, name="Test Unit")
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={"role": role, "password": make_password("123456"), "is_active": True, "organization": org},
            )
            if not created:
                # reset password, role and active flag
                u.password = make_password("123456")
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            if role in ("staff", "manager"):
                TeamMember.objects.get_or_create(
                    team=team, user=u, defaults={"role": "lead" if role == "manager" else "member"},
                )
            if u.active_team_id is None and role != "super":
                u.active_team = team
                u.save(update_fields=["active_team"])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
