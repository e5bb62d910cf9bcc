import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def scoped_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to='care.organization')),
        ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='care.team')),
        ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                         related_name='+', to=settings.AUTH_USER_MODEL)),
        ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                         related_name='+', to=settings.AUTH_USER_MODEL)),
    ]


PRIORITY_LOWER = [('low', 'low'), ('medium', 'medium'), ('high', 'high')]
MOOD = [('excellent', 'excellent'), ('good', 'good'), ('neutral', 'neutral'), ('poor', 'poor'),
        ('very_poor', 'very_poor')]
LIMB = [('FULLY', 'FULLY'), ('PARTIALLY', 'PARTIALLY'), ('NONE', 'NONE')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='Organization',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='Team',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='teams',
                                                   to='care.organization')),
            ],
            options={
                'unique_together': {('organization', 'name')},
            },
        ),
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(
                    default=False,
                    help_text='Designates that this user has all permissions without explicitly assigning them.',
                    verbose_name='superuser status')),
                ('username', models.CharField(
                    error_messages={'unique': 'A user with that username already exists.'},
                    help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.',
                    max_length=150, unique=True,
                    validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                    verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(
                    default=False, help_text='Designates whether the user can log into this admin site.',
                    verbose_name='staff status')),
                ('is_active', models.BooleanField(
                    default=True,
                    help_text='Designates whether this user should be treated as active. '
                              'Unselect this instead of deleting accounts.',
                    verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(choices=[('staff', 'Care staff'), ('manager', 'Manager'),
                                                   ('admin', 'Organization administrator'),
                                                   ('super', 'Super administrator')],
                                          default='staff', max_length=10)),
                ('organization', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                   related_name='users', to='care.organization')),
                ('active_team', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                  related_name='+', to='care.team')),
                ('groups', models.ManyToManyField(
                    blank=True,
                    help_text='The groups this user belongs to. A user will get all permissions granted to each '
                              'of their groups.',
                    related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(
                    blank=True, help_text='Specific permissions for this user.', related_name='user_set',
                    related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='TeamMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('lead', 'Team lead'), ('member', 'Member')], default='member',
                                          max_length=10)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members',
                                           to='care.team')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                           related_name='team_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'unique_together': {('team', 'user')},
            },
        ),
        migrations.CreateModel(
            name='Resident',
            fields=scoped_fields() + [
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('date_of_birth', models.DateField()),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('room_number', models.CharField(blank=True, max_length=20)),
                ('admission_date', models.DateField()),
                ('nhs_number', models.CharField(blank=True, max_length=20)),
                ('gp_name', models.CharField(blank=True, max_length=200)),
                ('gp_address', models.CharField(blank=True, max_length=500)),
                ('gp_phone', models.CharField(blank=True, max_length=30)),
                ('care_manager_name', models.CharField(blank=True, max_length=200)),
                ('care_manager_address', models.CharField(blank=True, max_length=500)),
                ('care_manager_phone', models.CharField(blank=True, max_length=30)),
                ('health_conditions', models.JSONField(blank=True, default=list)),
                ('risks', models.JSONField(blank=True, default=list)),
                ('dependencies', models.JSONField(blank=True, default=dict)),
                ('allergies', models.TextField(blank=True)),
                ('medications', models.TextField(blank=True)),
                ('medical_conditions', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('active', 'active'), ('discharged', 'discharged'),
                                                     ('deceased', 'deceased'), ('transferred', 'transferred'),
                                                     ('hospital', 'hospital')],
                                            db_index=True, default='active', max_length=16)),
                ('is_active', models.BooleanField(default=True)),
                ('discharge_date', models.DateTimeField(blank=True, null=True)),
                ('discharge_reason', models.CharField(blank=True, max_length=500)),
                ('data_retention_until', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['team', 'is_active'], name='resident_team_active_idx'),
                    models.Index(fields=['organization', 'is_active'], name='resident_org_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EmergencyContact',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('phone', models.CharField(max_length=30)),
                ('relationship', models.CharField(max_length=100)),
                ('address', models.CharField(blank=True, max_length=500)),
                ('is_primary', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='emergency_contacts', to='care.resident')),
            ],
        ),
        migrations.CreateModel(
            name='ActivityLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.IntegerField(blank=True, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                           to=settings.AUTH_USER_MODEL)),
                ('resident', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                               related_name='activity', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='activity_action_created_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'],
                                 name='activity_object_created_idx'),
                    models.Index(fields=['resident', 'created_at'], name='activity_resident_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ResidentAuditItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('item_name', models.CharField(max_length=200)),
                ('status', models.CharField(choices=[('n/a', 'n/a'), ('pending', 'pending'),
                                                     ('in-progress', 'in-progress'), ('completed', 'completed'),
                                                     ('overdue', 'overdue'), ('not-applicable', 'not-applicable')],
                                            default='pending', max_length=16)),
                ('auditor_name', models.CharField(blank=True, max_length=200)),
                ('last_audited', models.DateField(blank=True, null=True)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='audit_items', to='care.resident')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                                   to='care.organization')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to='care.team')),
            ],
            options={
                'unique_together': {('resident', 'item_name')},
            },
        ),
        migrations.CreateModel(
            name='AuditTemplate',
            fields=scoped_fields() + [
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(choices=[('resident', 'resident'), ('carefile', 'carefile'),
                                                       ('governance', 'governance'), ('clinical', 'clinical'),
                                                       ('environment', 'environment')],
                                              max_length=16)),
                ('questions', models.JSONField(default=list)),
                ('frequency', models.CharField(blank=True,
                                               choices=[('daily', 'daily'), ('weekly', 'weekly'),
                                                        ('monthly', 'monthly'), ('quarterly', 'quarterly'),
                                                        ('yearly', 'yearly'), ('adhoc', 'adhoc')],
                                               max_length=16)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['team', 'category', 'is_active'], name='audittpl_team_cat_active_idx'),
                    models.Index(fields=['organization', 'category', 'is_active'],
                                 name='audittpl_org_cat_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AuditResponse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('template_name', models.CharField(max_length=200)),
                ('category', models.CharField(max_length=16)),
                ('responses', models.JSONField(blank=True, default=list)),
                ('content_hash', models.CharField(blank=True, max_length=64)),
                ('status', models.CharField(choices=[('draft', 'draft'), ('in-progress', 'in-progress'),
                                                     ('completed', 'completed')],
                                            default='draft', max_length=16)),
                ('audited_at', models.DateTimeField(auto_now_add=True)),
                ('frequency', models.CharField(blank=True, max_length=16)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('next_audit_due', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('template', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='responses', to='care.audittemplate')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                                   to='care.organization')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to='care.team')),
                ('audited_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name='+', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['template', 'team', 'status', 'completed_at'],
                                 name='auditresp_tpl_team_status_idx'),
                    models.Index(fields=['team', 'status'], name='auditresp_team_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(status__in=['draft', 'in-progress']),
                                            fields=('template', 'team'),
                                            name='one_open_audit_response_per_template_team'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ActionPlan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.TextField()),
                ('priority', models.CharField(choices=[('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High')],
                                              max_length=8)),
                ('due_date', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'pending'), ('in_progress', 'in_progress'),
                                                     ('completed', 'completed'), ('overdue', 'overdue')],
                                            default='pending', max_length=16)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('audit_response', models.ForeignKey(blank=True, null=True,
                                                     on_delete=django.db.models.deletion.SET_NULL,
                                                     related_name='action_plans', to='care.auditresponse')),
                ('template', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                               related_name='action_plans', to='care.audittemplate')),
                ('assigned_to', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                  related_name='action_plans', to=settings.AUTH_USER_MODEL)),
                ('completed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                   related_name='+', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                                   to='care.organization')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to='care.team')),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['team', 'status'], name='actionplan_team_status_idx'),
                    models.Index(fields=['assigned_to', 'status'], name='actionplan_assignee_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('action_plan', 'action_plan'),
                                                   ('action_plan_completed', 'action_plan_completed'),
                                                   ('action_plan_overdue', 'action_plan_overdue')],
                                          max_length=32)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('link', models.CharField(blank=True, max_length=300)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                           related_name='notifications', to=settings.AUTH_USER_MODEL)),
                ('sender', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                             related_name='+', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE,
                                                   related_name='+', to='care.organization')),
                ('team', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE,
                                           related_name='+', to='care.team')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['user', 'is_read', 'created_at'], name='notification_user_read_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Appointment',
            fields=scoped_fields() + [
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField()),
                ('location', models.CharField(max_length=300)),
                ('staff', models.CharField(blank=True, max_length=200)),
                ('status', models.CharField(choices=[('scheduled', 'scheduled'), ('completed', 'completed'),
                                                     ('cancelled', 'cancelled')],
                                            default='scheduled', max_length=16)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='appointments', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['resident', 'start_time'], name='appt_resident_start_idx'),
                    models.Index(fields=['team', 'status', 'start_time'], name='appt_team_status_start_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AppointmentReadStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('read_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to=settings.AUTH_USER_MODEL)),
                ('appointment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                  related_name='read_statuses', to='care.appointment')),
            ],
            options={
                'unique_together': {('user', 'appointment')},
            },
        ),
        migrations.CreateModel(
            name='AppointmentNote',
            fields=scoped_fields() + [
                ('category', models.CharField(choices=[('preparation', 'preparation'),
                                                       ('preferences', 'preferences'),
                                                       ('special_instructions', 'special_instructions'),
                                                       ('transportation', 'transportation'),
                                                       ('medical_requirements', 'medical_requirements')],
                                              max_length=32)),
                ('preparation_time', models.CharField(blank=True, max_length=16)),
                ('preparation_notes', models.TextField(blank=True)),
                ('preferred_time', models.CharField(blank=True, max_length=16)),
                ('transport_preference', models.CharField(blank=True, max_length=16)),
                ('instructions', models.TextField(blank=True)),
                ('transportation_needs', models.JSONField(blank=True, default=list)),
                ('medical_needs', models.JSONField(blank=True, default=list)),
                ('priority', models.CharField(choices=PRIORITY_LOWER, default='medium', max_length=8)),
                ('is_active', models.BooleanField(default=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='appointment_notes', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['resident', 'category', 'is_active'], name='apptnote_res_cat_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuickCareNote',
            fields=scoped_fields() + [
                ('category', models.CharField(choices=[('shower_bath', 'shower_bath'), ('toileting', 'toileting'),
                                                       ('mobility_positioning', 'mobility_positioning'),
                                                       ('communication', 'communication'),
                                                       ('safety_alerts', 'safety_alerts'),
                                                       ('bed_safety', 'bed_safety'), ('positioning', 'positioning'),
                                                       ('mobility', 'mobility'), ('shower', 'shower')],
                                              max_length=32)),
                ('shower_or_bath', models.CharField(blank=True, max_length=8)),
                ('preferred_time', models.CharField(blank=True, max_length=16)),
                ('toilet_type', models.CharField(blank=True, max_length=16)),
                ('assistance_level', models.CharField(blank=True, max_length=16)),
                ('walking_aid', models.CharField(blank=True, max_length=16)),
                ('communication_needs', models.JSONField(blank=True, default=list)),
                ('safety_alerts', models.JSONField(blank=True, default=list)),
                ('priority', models.CharField(blank=True, choices=PRIORITY_LOWER, max_length=8)),
                ('is_active', models.BooleanField(default=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='care_notes', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['resident', 'category', 'is_active'], name='carenote_res_cat_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HospitalPassport',
            fields=scoped_fields() + [
                ('general_details', models.JSONField(default=dict)),
                ('medical_care_needs', models.JSONField(default=dict)),
                ('skin_medication_attachments', models.JSONField(default=dict)),
                ('sign_off', models.JSONField(default=dict)),
                ('status', models.CharField(choices=[('draft', 'draft'), ('completed', 'completed')],
                                            default='completed', max_length=16)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='hospital_passports', to='care.resident')),
            ],
        ),
        migrations.CreateModel(
            name='HospitalTransferLog',
            fields=scoped_fields() + [
                ('date', models.DateField()),
                ('hospital_name', models.CharField(max_length=200)),
                ('reason', models.TextField()),
                ('outcome', models.TextField(blank=True)),
                ('follow_up', models.TextField(blank=True)),
                ('files_changed', models.JSONField(blank=True, default=dict)),
                ('medication_changes', models.JSONField(blank=True, default=dict)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='transfer_logs', to='care.resident')),
            ],
        ),
        migrations.CreateModel(
            name='SocialActivity',
            fields=scoped_fields() + [
                ('activity_date', models.DateField()),
                ('activity_time', models.CharField(blank=True, max_length=5)),
                ('activity_type', models.CharField(
                    choices=[(v, v) for v in ('group_activity', 'one_on_one', 'family_visit', 'outing',
                                              'entertainment', 'exercise', 'crafts', 'music', 'reading', 'games',
                                              'therapy', 'religious', 'other')],
                    max_length=16)),
                ('activity_name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('participants', models.JSONField(blank=True, default=list)),
                ('location', models.CharField(blank=True, max_length=200)),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Minutes', null=True)),
                ('engagement_level', models.CharField(
                    choices=[(v, v) for v in ('very_engaged', 'engaged', 'somewhat_engaged', 'minimal',
                                              'disengaged')],
                    max_length=16)),
                ('mood_before', models.CharField(blank=True, choices=MOOD, max_length=16)),
                ('mood_after', models.CharField(blank=True, choices=MOOD, max_length=16)),
                ('social_interaction', models.CharField(
                    blank=True, choices=[(v, v) for v in ('active', 'responsive', 'minimal', 'withdrawn')],
                    max_length=16)),
                ('enjoyment', models.CharField(
                    blank=True,
                    choices=[(v, v) for v in ('loved_it', 'enjoyed', 'neutral', 'disliked', 'refused')],
                    max_length=16)),
                ('notes', models.TextField(blank=True)),
                ('recorded_by', models.CharField(max_length=200)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='social_activities', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['resident', 'activity_date'], name='social_resident_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SocialConnection',
            fields=scoped_fields() + [
                ('name', models.CharField(max_length=200)),
                ('relationship', models.CharField(max_length=100)),
                ('connection_type', models.CharField(choices=[('family', 'family'), ('friend', 'friend'),
                                                              ('staff', 'staff'), ('other', 'other')],
                                                     max_length=8)),
                ('contact_frequency', models.CharField(blank=True, max_length=100)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('notes', models.TextField(blank=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='social_connections', to='care.resident')),
            ],
        ),
        migrations.CreateModel(
            name='MovingHandlingAssessment',
            fields=scoped_fields() + [
                ('saved_as_draft', models.BooleanField(default=False)),
                ('resident_name', models.CharField(max_length=200)),
                ('date_of_birth', models.DateField()),
                ('bedroom_number', models.CharField(max_length=20)),
                ('weight', models.FloatField()),
                ('height', models.FloatField()),
                ('history_of_falls', models.BooleanField()),
                ('independent_mobility', models.BooleanField()),
                ('can_weight_bear', models.CharField(choices=[('FULLY', 'FULLY'), ('PARTIALLY', 'PARTIALLY'),
                                                              ('WITH-AID', 'WITH-AID'),
                                                              ('NO-WEIGHTBEARING', 'NO-WEIGHTBEARING')],
                                                     max_length=16)),
                ('limb_upper_right', models.CharField(choices=LIMB, max_length=16)),
                ('limb_upper_left', models.CharField(choices=LIMB, max_length=16)),
                ('limb_lower_right', models.CharField(choices=LIMB, max_length=16)),
                ('limb_lower_left', models.CharField(choices=LIMB, max_length=16)),
                ('equipment_used', models.TextField(blank=True)),
                ('needs_risk_staff', models.TextField(blank=True)),
                ('risk_factors', models.JSONField(default=dict)),
                ('completed_by', models.CharField(max_length=200)),
                ('job_role', models.CharField(max_length=200)),
                ('signature', models.CharField(max_length=200)),
                ('completion_date', models.DateField()),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='moving_handling_assessments', to='care.resident')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['resident', 'created_at'], name='mh_resident_created_idx'),
                ],
            },
        ),
    ]
