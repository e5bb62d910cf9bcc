"""
Management command to populate the database with demo data.
"""
import random
from datetime import date, timedelta

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from care.models import (
    ActionPlan, Appointment, AuditResponse, AuditTemplate, EmergencyContact, Organization, QuickCareNote,
    Resident, SocialActivity, Team, TeamMember, User,
)
from care.services.audits import content_hash, next_due

FIRST_NAMES = ['Margaret', 'Arthur', 'Edith', 'Harold', 'Dorothy', 'Albert', 'Joan', 'Walter', 'Irene', 'Frank']
LAST_NAMES = ['Smith', 'Jones', 'Taylor', 'Brown', 'Davies', 'Evans', 'Wilson', 'Thomas', 'Roberts', 'Walker']

TEMPLATES = [
    ('Medication Audit', 'clinical', 'monthly'),
    ('Care Plan Review', 'carefile', 'quarterly'),
    ('Environment Walkround', 'environment', 'weekly'),
]


class Command(BaseCommand):
    help = 'Populate database with demo data'

    def add_arguments(self, parser):
        parser.add_argument('--residents', type=int, default=8, help='Residents per team')

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')
        org, _ = Organization.objects.get_or_create(name='Sunrise Care Group')
        teams = [Team.objects.get_or_create(organization=org, name=name)[0] for name in ('Oak Wing', 'Willow Wing')]
        manager = self.create_user('demo_manager', 'manager', org, teams)
        staff = self.create_user('demo_staff', 'staff', org, teams[:1])

        for team in teams:
            residents = self.create_residents(team, manager, options['residents'])
            self.create_appointments(team, manager, residents)
            self.create_daily_care(team, staff, residents)
            self.create_audits(team, manager, staff)

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_user(self, username, role, org, teams):
        user, _ = User.objects.get_or_create(
            username=username,
            defaults={'role': role, 'organization': org, 'password': make_password('123456'), 'active_team': teams[0]},
        )
        for team in teams:
            TeamMember.objects.get_or_create(team=team, user=user,
                                             defaults={'role': 'lead' if role == 'manager' else 'member'})
        return user

    def create_residents(self, team, user, count):
        residents = []
        today = date.today()
        for i in range(count):
            resident = Resident.objects.create(
                organization=team.organization, team=team,
                first_name=random.choice(FIRST_NAMES),
                last_name=random.choice(LAST_NAMES),
                date_of_birth=today - timedelta(days=365 * random.randint(70, 98) + random.randint(0, 364)),
                admission_date=today - timedelta(days=random.randint(10, 1500)),
                room_number=str(100 + i),
                health_conditions=[{'condition': 'Hypertension'}],
                risks=[{'risk': 'Falls', 'level': random.choice(['low', 'medium', 'high'])}],
                dependencies={'mobility': 'Supervision Needed', 'eating': 'Independent',
                              'dressing': 'Assistance Needed', 'toileting': 'Independent'},
                created_by=user, updated_by=user,
            )
            EmergencyContact.objects.create(resident=resident, name=f'{resident.last_name} family',
                                            phone='07700 900000', relationship='Child', is_primary=True)
            residents.append(resident)
        return residents

    def create_appointments(self, team, user, residents):
        now = timezone.now()
        for resident in residents[:4]:
            start = now + timedelta(days=random.randint(1, 14), hours=random.randint(0, 8))
            Appointment.objects.create(
                organization=team.organization, team=team, resident=resident,
                title=random.choice(['GP visit', 'Chiropody', 'Hospital outpatients', 'Dentist']),
                start_time=start, end_time=start + timedelta(hours=1), location='Treatment room',
                created_by=user, updated_by=user,
            )

    def create_daily_care(self, team, user, residents):
        for resident in residents:
            QuickCareNote.objects.create(
                organization=team.organization, team=team, resident=resident,
                category='mobility_positioning', walking_aid=random.choice(['frame', 'stick', 'none']),
                priority='medium', created_by=user, updated_by=user,
            )
            SocialActivity.objects.create(
                organization=team.organization, team=team, resident=resident,
                activity_date=date.today() - timedelta(days=random.randint(0, 10)), activity_time='14:00',
                activity_type=random.choice(['music', 'games', 'crafts']), activity_name='Afternoon session',
                engagement_level=random.choice(['very_engaged', 'engaged', 'minimal']),
                recorded_by=user.username, created_by=user, updated_by=user,
            )

    def create_audits(self, team, manager, staff):
        for name, category, frequency in TEMPLATES:
            template, _ = AuditTemplate.objects.get_or_create(
                team=team, name=name,
                defaults={
                    'organization': team.organization, 'category': category, 'frequency': frequency,
                    'questions': [
                        {'id': 'q1', 'text': 'Records are up to date', 'type': 'compliance'},
                        {'id': 'q2', 'text': 'Signed by the nurse in charge', 'type': 'yesno'},
                    ],
                    'created_by': manager, 'updated_by': manager,
                },
            )
            completed_at = timezone.now() - timedelta(days=random.randint(1, 60))
            response = AuditResponse.objects.create(
                template=template, template_name=template.name, category=template.category,
                organization=team.organization, team=team, responses=[], content_hash=content_hash([]),
                status=AuditResponse.STATUS_COMPLETED, audited_by=staff, updated_by=staff,
                frequency=frequency, completed_at=completed_at, next_audit_due=next_due(frequency, completed_at),
            )
            ActionPlan.objects.create(
                audit_response=response, template=template, description=f'Follow up on {name.lower()}',
                assigned_to=staff, priority=random.choice(['Low', 'Medium', 'High']),
                due_date=timezone.now() + timedelta(days=random.randint(-5, 14)),
                organization=team.organization, team=team, created_by=manager,
            )
