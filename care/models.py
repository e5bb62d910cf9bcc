"""
Database models for the care home backend.

Every care record is scoped to an organization and a team (a care home
unit) and carries creator/updater audit fields.  Nested form sections
that are only ever read and written whole (hospital passport sections,
audit answers, transfer checklists) are stored as JSON documents and
validated by the serializers in :mod:`care.serializers`.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import Q


class Organization(models.Model):
    """A care provider owning one or more care home teams."""
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Team(models.Model):
    """A care home unit.  All care records belong to exactly one team."""
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='teams')
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('organization', 'name')]

    def __str__(self) -> str:
        return f"{self.name} ({self.organization_id})"


class User(AbstractUser):
    """Custom user model with a role, an organization and an active team.

    Roles: 'staff' records care data, 'manager' additionally manages
    audit templates, action plans and resident status, 'admin' sees every
    team of the organization and 'super' sees everything.
    """
    ROLE_STAFF = 'staff'
    ROLE_MANAGER = 'manager'
    ROLE_ADMIN = 'admin'
    ROLE_SUPER = 'super'
    ROLE_CHOICES = [
        (ROLE_STAFF, 'Care staff'),
        (ROLE_MANAGER, 'Manager'),
        (ROLE_ADMIN, 'Organization administrator'),
        (ROLE_SUPER, 'Super administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_STAFF)
    organization = models.ForeignKey(
        Organization, null=True, blank=True, on_delete=models.SET_NULL, related_name='users'
    )
    active_team = models.ForeignKey(
        Team, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class TeamMember(models.Model):
    """Links a user to a team."""
    MEMBER_ROLE_CHOICES = [
        ('lead', 'Team lead'),
        ('member', 'Member'),
    ]
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='team_memberships')
    role = models.CharField(max_length=10, choices=MEMBER_ROLE_CHOICES, default='member')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('team', 'user')]

    def __str__(self) -> str:
        return f"{self.user} in {self.team} as {self.role}"


class TeamScopedRecord(models.Model):
    """Fields shared by every record owned by a team."""
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='+')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='+')
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    updated_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------
# Residents
# ---------------------------------------------------------------------
class Resident(TeamScopedRecord):
    """A care home occupant."""
    STATUS_ACTIVE = 'active'
    STATUS_DISCHARGED = 'discharged'
    STATUS_DECEASED = 'deceased'
    STATUS_TRANSFERRED = 'transferred'
    STATUS_HOSPITAL = 'hospital'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'active'),
        (STATUS_DISCHARGED, 'discharged'),
        (STATUS_DECEASED, 'deceased'),
        (STATUS_TRANSFERRED, 'transferred'),
        (STATUS_HOSPITAL, 'hospital'),
    )
    # Statuses that end the stay and start the retention clock
    CLOSING_STATUSES = (STATUS_DISCHARGED, STATUS_DECEASED)

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField()
    phone = models.CharField(max_length=30, blank=True)
    room_number = models.CharField(max_length=20, blank=True)
    admission_date = models.DateField()
    nhs_number = models.CharField(max_length=20, blank=True)

    gp_name = models.CharField(max_length=200, blank=True)
    gp_address = models.CharField(max_length=500, blank=True)
    gp_phone = models.CharField(max_length=30, blank=True)
    care_manager_name = models.CharField(max_length=200, blank=True)
    care_manager_address = models.CharField(max_length=500, blank=True)
    care_manager_phone = models.CharField(max_length=30, blank=True)

    health_conditions = models.JSONField(default=list, blank=True)
    risks = models.JSONField(default=list, blank=True)
    dependencies = models.JSONField(default=dict, blank=True)
    allergies = models.TextField(blank=True)
    medications = models.TextField(blank=True)
    medical_conditions = models.TextField(blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    is_active = models.BooleanField(default=True)
    discharge_date = models.DateTimeField(null=True, blank=True)
    discharge_reason = models.CharField(max_length=500, blank=True)
    data_retention_until = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['team', 'is_active'], name='resident_team_active_idx'),
            models.Index(fields=['organization', 'is_active'], name='resident_org_active_idx'),
        ]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} (room {self.room_number or '-'})"


class EmergencyContact(models.Model):
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='emergency_contacts')
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=30)
    relationship = models.CharField(max_length=100)
    address = models.CharField(max_length=500, blank=True)
    is_primary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.relationship}) for {self.resident_id}"


class ActivityLog(models.Model):
    """Append-only record of who did what to which object.

    Resident history is read back from the rows that carry a resident.
    """
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    resident = models.ForeignKey(
        Resident, on_delete=models.SET_NULL, null=True, blank=True, related_name='activity'
    )
    detail = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='activity_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='activity_object_created_idx'),
            models.Index(fields=['resident', 'created_at'], name='activity_resident_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.object_type}:{self.object_id}"


class ResidentAuditItem(models.Model):
    """One line of a resident's care-file audit checklist."""
    STATUS_CHOICES = (
        ('n/a', 'n/a'),
        ('pending', 'pending'),
        ('in-progress', 'in-progress'),
        ('completed', 'completed'),
        ('overdue', 'overdue'),
        ('not-applicable', 'not-applicable'),
    )
    # Statuses that never count as overdue
    SETTLED_STATUSES = ('completed', 'n/a')

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='audit_items')
    item_name = models.CharField(max_length=200)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='pending')
    auditor_name = models.CharField(max_length=200, blank=True)
    last_audited = models.DateField(null=True, blank=True)
    due_date = models.DateField(null=True, blank=True)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='+')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='+')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = [('resident', 'item_name')]


# ---------------------------------------------------------------------
# Audits
# ---------------------------------------------------------------------
class AuditTemplate(TeamScopedRecord):
    """A reusable audit checklist: a list of questions and a cadence."""
    CATEGORY_CHOICES = (
        ('resident', 'resident'),
        ('carefile', 'carefile'),
        ('governance', 'governance'),
        ('clinical', 'clinical'),
        ('environment', 'environment'),
    )
    FREQUENCY_CHOICES = (
        ('daily', 'daily'),
        ('weekly', 'weekly'),
        ('monthly', 'monthly'),
        ('quarterly', 'quarterly'),
        ('yearly', 'yearly'),
        ('adhoc', 'adhoc'),
    )
    ANSWER_VALUES = {
        'compliance': {'compliant', 'non-compliant', 'n/a'},
        'yesno': {'yes', 'no', 'n/a'},
    }
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=16, choices=CATEGORY_CHOICES)
    questions = models.JSONField(default=list)
    frequency = models.CharField(max_length=16, choices=FREQUENCY_CHOICES, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        indexes = [
            models.Index(fields=['team', 'category', 'is_active'], name='audittpl_team_cat_active_idx'),
            models.Index(fields=['organization', 'category', 'is_active'], name='audittpl_org_cat_active_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} [{self.category}]"


class AuditResponse(models.Model):
    """A filled-in instance of an audit template for a set of residents.

    At most one ``draft``/``in-progress`` response exists per template and
    team; completed responses are read-only history.
    """
    STATUS_DRAFT = 'draft'
    STATUS_IN_PROGRESS = 'in-progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = (
        (STATUS_DRAFT, 'draft'),
        (STATUS_IN_PROGRESS, 'in-progress'),
        (STATUS_COMPLETED, 'completed'),
    )
    OPEN_STATUSES = (STATUS_DRAFT, STATUS_IN_PROGRESS)

    template = models.ForeignKey(AuditTemplate, on_delete=models.CASCADE, related_name='responses')
    template_name = models.CharField(max_length=200)
    category = models.CharField(max_length=16)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='+')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='+')
    responses = models.JSONField(default=list, blank=True)
    content_hash = models.CharField(max_length=64, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    audited_by = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='+')
    audited_at = models.DateTimeField(auto_now_add=True)
    frequency = models.CharField(max_length=16, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    next_audit_due = models.DateTimeField(null=True, blank=True)
    updated_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['template', 'team'],
                condition=Q(status__in=['draft', 'in-progress']),
                name='one_open_audit_response_per_template_team',
            ),
        ]
        indexes = [
            models.Index(fields=['template', 'team', 'status', 'completed_at'], name='auditresp_tpl_team_status_idx'),
            models.Index(fields=['team', 'status'], name='auditresp_team_status_idx'),
        ]

    @property
    def is_open(self) -> bool:
        return self.status in self.OPEN_STATUSES

    def __str__(self) -> str:
        return f"{self.template_name} ({self.status})"


class ActionPlan(models.Model):
    """A follow-up task raised from an audit finding."""
    PRIORITY_CHOICES = (('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High'))
    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_OVERDUE = 'overdue'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_IN_PROGRESS, 'in_progress'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_OVERDUE, 'overdue'),
    )

    audit_response = models.ForeignKey(
        AuditResponse, null=True, blank=True, on_delete=models.SET_NULL, related_name='action_plans'
    )
    template = models.ForeignKey(
        AuditTemplate, null=True, blank=True, on_delete=models.SET_NULL, related_name='action_plans'
    )
    description = models.TextField()
    assigned_to = models.ForeignKey(User, on_delete=models.CASCADE, related_name='action_plans')
    priority = models.CharField(max_length=8, choices=PRIORITY_CHOICES)
    due_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    completed_at = models.DateTimeField(null=True, blank=True)
    completed_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='+')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='+')
    created_by = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['team', 'status'], name='actionplan_team_status_idx'),
            models.Index(fields=['assigned_to', 'status'], name='actionplan_assignee_status_idx'),
        ]


class Notification(models.Model):
    TYPE_ACTION_PLAN = 'action_plan'
    TYPE_ACTION_PLAN_COMPLETED = 'action_plan_completed'
    TYPE_ACTION_PLAN_OVERDUE = 'action_plan_overdue'
    TYPE_CHOICES = (
        (TYPE_ACTION_PLAN, 'action_plan'),
        (TYPE_ACTION_PLAN_COMPLETED, 'action_plan_completed'),
        (TYPE_ACTION_PLAN_OVERDUE, 'action_plan_overdue'),
    )
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    sender = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()
    link = models.CharField(max_length=300, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    organization = models.ForeignKey(Organization, null=True, blank=True, on_delete=models.CASCADE, related_name='+')
    team = models.ForeignKey(Team, null=True, blank=True, on_delete=models.CASCADE, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'is_read', 'created_at'], name='notification_user_read_idx')]


# ---------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------
class Appointment(TeamScopedRecord):
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = (
        (STATUS_SCHEDULED, 'scheduled'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_CANCELLED, 'cancelled'),
    )
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='appointments')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    location = models.CharField(max_length=300)
    staff = models.CharField(max_length=200, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)

    class Meta:
        indexes = [
            models.Index(fields=['resident', 'start_time'], name='appt_resident_start_idx'),
            models.Index(fields=['team', 'status', 'start_time'], name='appt_team_status_start_idx'),
        ]


class AppointmentReadStatus(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='+')
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name='read_statuses')
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('user', 'appointment')]


class AppointmentNote(TeamScopedRecord):
    """Preparation and logistics notes attached to a resident's appointments."""
    CATEGORY_CHOICES = (
        ('preparation', 'preparation'),
        ('preferences', 'preferences'),
        ('special_instructions', 'special_instructions'),
        ('transportation', 'transportation'),
        ('medical_requirements', 'medical_requirements'),
    )
    PRIORITY_CHOICES = (('low', 'low'), ('medium', 'medium'), ('high', 'high'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='appointment_notes')
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    preparation_time = models.CharField(max_length=16, blank=True)
    preparation_notes = models.TextField(blank=True)
    preferred_time = models.CharField(max_length=16, blank=True)
    transport_preference = models.CharField(max_length=16, blank=True)
    instructions = models.TextField(blank=True)
    transportation_needs = models.JSONField(default=list, blank=True)
    medical_needs = models.JSONField(default=list, blank=True)
    priority = models.CharField(max_length=8, choices=PRIORITY_CHOICES, default='medium')
    is_active = models.BooleanField(default=True)

    class Meta:
        indexes = [models.Index(fields=['resident', 'category', 'is_active'], name='apptnote_res_cat_active_idx')]


# ---------------------------------------------------------------------
# Daily care
# ---------------------------------------------------------------------
class QuickCareNote(TeamScopedRecord):
    """Short standing instruction about a resident's daily care."""
    CATEGORY_CHOICES = (
        ('shower_bath', 'shower_bath'),
        ('toileting', 'toileting'),
        ('mobility_positioning', 'mobility_positioning'),
        ('communication', 'communication'),
        ('safety_alerts', 'safety_alerts'),
        # legacy categories, readable but no longer offered
        ('bed_safety', 'bed_safety'),
        ('positioning', 'positioning'),
        ('mobility', 'mobility'),
        ('shower', 'shower'),
    )
    PRIORITY_CHOICES = (('low', 'low'), ('medium', 'medium'), ('high', 'high'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='care_notes')
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    shower_or_bath = models.CharField(max_length=8, blank=True)
    preferred_time = models.CharField(max_length=16, blank=True)
    toilet_type = models.CharField(max_length=16, blank=True)
    assistance_level = models.CharField(max_length=16, blank=True)
    walking_aid = models.CharField(max_length=16, blank=True)
    communication_needs = models.JSONField(default=list, blank=True)
    safety_alerts = models.JSONField(default=list, blank=True)
    priority = models.CharField(max_length=8, choices=PRIORITY_CHOICES, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        indexes = [models.Index(fields=['resident', 'category', 'is_active'], name='carenote_res_cat_active_idx')]


class PersonalCareDaily(TeamScopedRecord):
    """One resident's personal care sheet for one calendar day."""
    SHIFT_CHOICES = (('AM', 'AM'), ('PM', 'PM'), ('Night', 'Night'))
    STATUS_CHOICES = tuple((v, v) for v in ('open', 'partial', 'complete', 'cancelled'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='personal_care_days')
    date = models.DateField()
    shift = models.CharField(max_length=8, choices=SHIFT_CHOICES, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='open')
    # [{code, note, recordedAt, recordedBy}] for tasks that could not be done
    exceptions = models.JSONField(default=list, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['resident', 'date'], name='one_personal_care_day_per_resident'),
        ]


class PersonalCareTaskEvent(models.Model):
    """Append-only log entry for a task on a daily sheet.

    The latest event per ``task_type`` is the task's current status.
    """
    STATUS_CHOICES = tuple((v, v) for v in (
        'pending', 'in_progress', 'completed', 'partially_completed', 'not_required', 'refused', 'unable', 'missed',
    ))
    ASSISTANCE_CHOICES = tuple((v, v) for v in (
        'independent', 'prompting', 'supervision', 'one_carer', 'two_carers', 'hoist_or_mechanical',
    ))
    REASON_CHOICES = tuple((v, v) for v in (
        'resident_refused', 'asleep', 'off_site', 'hospital', 'end_of_life_care', 'clinical_hold',
        'behavioural_risk', 'equipment_fault', 'unsafe_to_proceed', 'not_in_care_plan', 'other',
    ))
    NOT_DONE = ('refused', 'unable', 'missed')

    daily = models.ForeignKey(PersonalCareDaily, on_delete=models.CASCADE, related_name='task_events')
    task_type = models.CharField(max_length=32)
    status = models.CharField(max_length=24, choices=STATUS_CHOICES)
    shift = models.CharField(max_length=8, choices=PersonalCareDaily.SHIFT_CHOICES, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    performed_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    assistance_level = models.CharField(max_length=24, choices=ASSISTANCE_CHOICES, blank=True)
    reason_code = models.CharField(max_length=24, choices=REASON_CHOICES, blank=True)
    reason_note = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    payload = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['daily', 'task_type', 'created_at'], name='pcare_event_daily_task_idx')]


# ---------------------------------------------------------------------
# Hospital transfer
# ---------------------------------------------------------------------
class HospitalPassport(TeamScopedRecord):
    """Information pack that travels with a resident transferred to hospital."""
    STATUS_CHOICES = (('draft', 'draft'), ('completed', 'completed'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='hospital_passports')
    general_details = models.JSONField(default=dict)
    medical_care_needs = models.JSONField(default=dict)
    skin_medication_attachments = models.JSONField(default=dict)
    sign_off = models.JSONField(default=dict)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='completed')


class HospitalTransferLog(TeamScopedRecord):
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='transfer_logs')
    date = models.DateField()
    hospital_name = models.CharField(max_length=200)
    reason = models.TextField()
    outcome = models.TextField(blank=True)
    follow_up = models.TextField(blank=True)
    files_changed = models.JSONField(default=dict, blank=True)
    medication_changes = models.JSONField(default=dict, blank=True)


# ---------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------
class SocialActivity(TeamScopedRecord):
    ACTIVITY_TYPE_CHOICES = tuple((v, v) for v in (
        'group_activity', 'one_on_one', 'family_visit', 'outing', 'entertainment', 'exercise',
        'crafts', 'music', 'reading', 'games', 'therapy', 'religious', 'other',
    ))
    ENGAGEMENT_CHOICES = tuple((v, v) for v in (
        'very_engaged', 'engaged', 'somewhat_engaged', 'minimal', 'disengaged',
    ))
    MOOD_CHOICES = tuple((v, v) for v in ('excellent', 'good', 'neutral', 'poor', 'very_poor'))
    INTERACTION_CHOICES = tuple((v, v) for v in ('active', 'responsive', 'minimal', 'withdrawn'))
    ENJOYMENT_CHOICES = tuple((v, v) for v in ('loved_it', 'enjoyed', 'neutral', 'disliked', 'refused'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='social_activities')
    activity_date = models.DateField()
    activity_time = models.CharField(max_length=5, blank=True)
    activity_type = models.CharField(max_length=16, choices=ACTIVITY_TYPE_CHOICES)
    activity_name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    participants = models.JSONField(default=list, blank=True)
    location = models.CharField(max_length=200, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Minutes")
    engagement_level = models.CharField(max_length=16, choices=ENGAGEMENT_CHOICES)
    mood_before = models.CharField(max_length=16, choices=MOOD_CHOICES, blank=True)
    mood_after = models.CharField(max_length=16, choices=MOOD_CHOICES, blank=True)
    social_interaction = models.CharField(max_length=16, choices=INTERACTION_CHOICES, blank=True)
    enjoyment = models.CharField(max_length=16, choices=ENJOYMENT_CHOICES, blank=True)
    notes = models.TextField(blank=True)
    recorded_by = models.CharField(max_length=200)

    class Meta:
        indexes = [models.Index(fields=['resident', 'activity_date'], name='social_resident_date_idx')]


class SocialConnection(TeamScopedRecord):
    TYPE_CHOICES = (('family', 'family'), ('friend', 'friend'), ('staff', 'staff'), ('other', 'other'))

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='social_connections')
    name = models.CharField(max_length=200)
    relationship = models.CharField(max_length=100)
    connection_type = models.CharField(max_length=8, choices=TYPE_CHOICES)
    contact_frequency = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    notes = models.TextField(blank=True)


# ---------------------------------------------------------------------
# Care file: moving & handling
# ---------------------------------------------------------------------
class MovingHandlingAssessment(TeamScopedRecord):
    """Moving and handling risk assessment.

    ``risk_factors`` maps each factor name to ``{"state": ..., "comments": ...}``.
    """
    WEIGHT_BEARING_CHOICES = tuple((v, v) for v in ('FULLY', 'PARTIALLY', 'WITH-AID', 'NO-WEIGHTBEARING'))
    LIMB_CHOICES = tuple((v, v) for v in ('FULLY', 'PARTIALLY', 'NONE'))
    RISK_FACTORS = (
        'deafness', 'blindness', 'unpredictableBehaviour', 'uncooperativeBehaviour',
        'distressedReaction', 'disorientated', 'unconscious', 'unbalance',
        'spasms', 'stiffness', 'catheters', 'incontinence', 'localisedPain', 'other',
    )

    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='moving_handling_assessments')
    saved_as_draft = models.BooleanField(default=False)

    resident_name = models.CharField(max_length=200)
    date_of_birth = models.DateField()
    bedroom_number = models.CharField(max_length=20)
    weight = models.FloatField()
    height = models.FloatField()
    history_of_falls = models.BooleanField()

    independent_mobility = models.BooleanField()
    can_weight_bear = models.CharField(max_length=16, choices=WEIGHT_BEARING_CHOICES)
    limb_upper_right = models.CharField(max_length=16, choices=LIMB_CHOICES)
    limb_upper_left = models.CharField(max_length=16, choices=LIMB_CHOICES)
    limb_lower_right = models.CharField(max_length=16, choices=LIMB_CHOICES)
    limb_lower_left = models.CharField(max_length=16, choices=LIMB_CHOICES)
    equipment_used = models.TextField(blank=True)
    needs_risk_staff = models.TextField(blank=True)

    risk_factors = models.JSONField(default=dict)

    completed_by = models.CharField(max_length=200)
    job_role = models.CharField(max_length=200)
    signature = models.CharField(max_length=200)
    completion_date = models.DateField()

    class Meta:
        indexes = [models.Index(fields=['resident', 'created_at'], name='mh_resident_created_idx')]
