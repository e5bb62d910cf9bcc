"""
Django admin registrations for the care models.

Lets superusers inspect and correct records through ``/admin/``.
"""
from django.contrib import admin

from .models import (
    Organization,
    Team,
    User,
    TeamMember,
    Resident,
    EmergencyContact,
    ActivityLog,
    AuditTemplate,
    AuditResponse,
    ActionPlan,
    Notification,
    Appointment,
    AppointmentNote,
    QuickCareNote,
    PersonalCareDaily,
    PersonalCareTaskEvent,
    HospitalPassport,
    HospitalTransferLog,
    SocialActivity,
    SocialConnection,
    MovingHandlingAssessment,
)


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name',)


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'organization', 'created_at')
    list_filter = ('organization',)
    search_fields = ('name',)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'organization', 'active_team', 'is_staff', 'is_superuser')
    list_filter = ('role', 'organization')
    search_fields = ('username', 'first_name', 'last_name', 'email')


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('user', 'team', 'role')
    list_filter = ('team', 'role')
    search_fields = ('user__username', 'team__name')


class EmergencyContactInline(admin.TabularInline):
    model = EmergencyContact
    extra = 0


@admin.register(Resident)
class ResidentAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'room_number', 'status', 'is_active', 'team')
    list_filter = ('status', 'is_active', 'team')
    search_fields = ('first_name', 'last_name', 'room_number', 'nhs_number')
    inlines = [EmergencyContactInline]


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'action', 'object_type', 'object_id', 'resident', 'created_at')
    list_filter = ('action', 'object_type')
    readonly_fields = ('created_at',)


@admin.register(AuditTemplate)
class AuditTemplateAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'category', 'frequency', 'is_active', 'team')
    list_filter = ('category', 'frequency', 'is_active')
    search_fields = ('name',)


@admin.register(AuditResponse)
class AuditResponseAdmin(admin.ModelAdmin):
    list_display = ('id', 'template_name', 'status', 'team', 'audited_by', 'completed_at', 'next_audit_due')
    list_filter = ('status', 'category')


@admin.register(ActionPlan)
class ActionPlanAdmin(admin.ModelAdmin):
    list_display = ('id', 'assigned_to', 'priority', 'status', 'due_date', 'team')
    list_filter = ('status', 'priority')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'type', 'title', 'is_read', 'created_at')
    list_filter = ('type', 'is_read')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'resident', 'start_time', 'status', 'team')
    list_filter = ('status', 'team')


admin.site.register(AppointmentNote)
admin.site.register(QuickCareNote)
admin.site.register(PersonalCareDaily)
admin.site.register(PersonalCareTaskEvent)
admin.site.register(HospitalPassport)
admin.site.register(HospitalTransferLog)
admin.site.register(SocialActivity)
admin.site.register(SocialConnection)
admin.site.register(MovingHandlingAssessment)
