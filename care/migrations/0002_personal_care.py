import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

SHIFTS = [('AM', 'AM'), ('PM', 'PM'), ('Night', 'Night')]


class Migration(migrations.Migration):

    dependencies = [
        ('care', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PersonalCareDaily',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                                   to='care.organization')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+',
                                           to='care.team')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name='+', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name='+', to=settings.AUTH_USER_MODEL)),
                ('date', models.DateField()),
                ('shift', models.CharField(blank=True, choices=SHIFTS, max_length=8)),
                ('status', models.CharField(choices=[('open', 'open'), ('partial', 'partial'),
                                                     ('complete', 'complete'), ('cancelled', 'cancelled')],
                                            default='open', max_length=16)),
                ('exceptions', models.JSONField(blank=True, default=list)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name='personal_care_days', to='care.resident')),
            ],
            options={
                'constraints': [
                    models.UniqueConstraint(fields=('resident', 'date'), name='one_personal_care_day_per_resident'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PersonalCareTaskEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('task_type', models.CharField(max_length=32)),
                ('status', models.CharField(choices=[('pending', 'pending'), ('in_progress', 'in_progress'),
                                                     ('completed', 'completed'),
                                                     ('partially_completed', 'partially_completed'),
                                                     ('not_required', 'not_required'), ('refused', 'refused'),
                                                     ('unable', 'unable'), ('missed', 'missed')],
                                            max_length=24)),
                ('shift', models.CharField(blank=True, choices=SHIFTS, max_length=8)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('assistance_level', models.CharField(blank=True, choices=[
                    ('independent', 'independent'), ('prompting', 'prompting'), ('supervision', 'supervision'),
                    ('one_carer', 'one_carer'), ('two_carers', 'two_carers'),
                    ('hoist_or_mechanical', 'hoist_or_mechanical')], max_length=24)),
                ('reason_code', models.CharField(blank=True, choices=[
                    ('resident_refused', 'resident_refused'), ('asleep', 'asleep'), ('off_site', 'off_site'),
                    ('hospital', 'hospital'), ('end_of_life_care', 'end_of_life_care'),
                    ('clinical_hold', 'clinical_hold'), ('behavioural_risk', 'behavioural_risk'),
                    ('equipment_fault', 'equipment_fault'), ('unsafe_to_proceed', 'unsafe_to_proceed'),
                    ('not_in_care_plan', 'not_in_care_plan'), ('other', 'other')], max_length=24)),
                ('reason_note', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('payload', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('daily', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='task_events',
                                            to='care.personalcaredaily')),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                   related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['daily', 'task_type', 'created_at'], name='pcare_event_daily_task_idx'),
                ],
            },
        ),
    ]
