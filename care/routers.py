"""
URL mappings for the care home API.

Paths carry no trailing slash; the client calls them exactly as listed.
"""
from django.urls import path, include

from .auth_views import login_view, jwt_refresh_view, jwt_logout_view
from .views import (
    action_plans,
    appointments,
    audits,
    dashboard,
    health,
    hospital_transfer,
    moving_handling,
    notifications,
    personal_care,
    residents,
    social,
    teams,
)


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    # Authentication
    path('api/auth/login', login_view, name='login'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt-refresh'),
    path('api/auth/logout', jwt_logout_view, name='jwt-logout'),
    path('api/auth/me', teams.me, name='me'),
    path('api/auth/switch-team', teams.switch_team, name='switch-team'),

    # Teams
    path('api/teams', teams.teams, name='teams'),
    path('api/teams/<int:team_id>/members', teams.team_add_member, name='team-members'),
    path('api/teams/<int:team_id>/members/<int:user_id>', teams.team_remove_member, name='team-member'),

    # Dashboard
    path('api/dashboard', dashboard.dashboard, name='dashboard'),

    # Residents
    path('api/residents', residents.residents, name='residents'),
    path('api/residents/organization', residents.organization_residents, name='organization-residents'),
    path('api/residents/<int:resident_id>', residents.resident_detail, name='resident-detail'),
    path('api/residents/<int:resident_id>/overview', residents.resident_overview, name='resident-overview'),
    path('api/residents/<int:resident_id>/status', residents.resident_status, name='resident-status'),
    path('api/residents/<int:resident_id>/activity', residents.resident_activity, name='resident-activity'),
    path('api/residents/<int:resident_id>/contacts', residents.contact_create, name='resident-contacts'),
    path('api/contacts/<int:contact_id>', residents.contact_detail, name='contact-detail'),
    path('api/residents/<int:resident_id>/audit-items', residents.resident_audit_items, name='resident-audit-items'),
    path('api/residents/<int:resident_id>/audit-items/overdue-count', residents.resident_overdue_audit_items,
         name='resident-audit-items-overdue'),
    path('api/audit-items', residents.team_audit_items, name='team-audit-items'),

    # Audit templates
    path('api/audit-templates', audits.templates, name='audit-templates'),
    path('api/audit-templates/<int:template_id>', audits.template_detail, name='audit-template-detail'),
    path('api/audit-templates/<int:template_id>/archive', audits.template_archive, name='audit-template-archive'),

    # Audit responses
    path('api/audit-responses', audits.completed_responses, name='audit-responses'),
    path('api/audit-responses/draft', audits.draft, name='audit-draft'),
    path('api/audit-responses/latest', audits.latest_response, name='audit-latest'),
    path('api/audit-responses/drafts', audits.open_drafts, name='audit-open-drafts'),
    path('api/audit-responses/overdue', audits.overdue, name='audit-overdue'),
    path('api/audit-responses/upcoming', audits.upcoming, name='audit-upcoming'),
    path('api/audit-responses/latest-per-template', audits.latest_per_template, name='audit-latest-per-template'),
    path('api/audit-responses/<int:response_id>', audits.response_detail, name='audit-response-detail'),
    path('api/audit-responses/<int:response_id>/save', audits.save, name='audit-save'),
    path('api/audit-responses/<int:response_id>/complete', audits.complete, name='audit-complete'),

    # Action plans
    path('api/action-plans', action_plans.action_plans, name='action-plans'),
    path('api/action-plans/overdue', action_plans.overdue, name='action-plans-overdue'),
    path('api/action-plans/stats', action_plans.stats, name='action-plans-stats'),
    path('api/action-plans/<int:plan_id>', action_plans.plan_detail, name='action-plan-detail'),
    path('api/action-plans/<int:plan_id>/complete', action_plans.plan_complete, name='action-plan-complete'),

    # Notifications
    path('api/notifications', notifications.notifications, name='notifications'),
    path('api/notifications/unread-count', notifications.notifications_unread_count, name='notifications-unread'),
    path('api/notifications/read', notifications.notifications_mark_read, name='notifications-read'),

    # Appointments
    path('api/appointments', appointments.appointments, name='appointments'),
    path('api/appointments/upcoming-count', appointments.upcoming_count, name='appointments-upcoming-count'),
    path('api/appointments/read', appointments.appointments_mark_read, name='appointments-read'),
    path('api/appointments/<int:appointment_id>', appointments.appointment_detail, name='appointment-detail'),
    path('api/appointments/<int:appointment_id>/status', appointments.appointment_status, name='appointment-status'),
    path('api/residents/<int:resident_id>/appointments', appointments.resident_appointments,
         name='resident-appointments'),

    # Appointment notes
    path('api/appointment-notes', appointments.appointment_note_create, name='appointment-notes'),
    path('api/appointment-notes/<int:note_id>', appointments.appointment_note_detail, name='appointment-note-detail'),
    path('api/residents/<int:resident_id>/appointment-notes', appointments.resident_appointment_notes,
         name='resident-appointment-notes'),
    path('api/residents/<int:resident_id>/appointment-notes/summary', appointments.resident_appointment_notes_summary,
         name='resident-appointment-notes-summary'),

    # Quick care notes
    path('api/care-notes', appointments.care_note_create, name='care-notes'),
    path('api/care-notes/<int:note_id>', appointments.care_note_detail, name='care-note-detail'),
    path('api/care-notes/<int:note_id>/deactivate', appointments.care_note_deactivate, name='care-note-deactivate'),
    path('api/residents/<int:resident_id>/care-notes', appointments.resident_care_notes, name='resident-care-notes'),
    path('api/residents/<int:resident_id>/care-notes/summary', appointments.resident_care_notes_summary,
         name='resident-care-notes-summary'),

    # Personal care
    path('api/personal-care/days', personal_care.open_day, name='personal-care-days'),
    path('api/personal-care/days/<int:daily_id>/status', personal_care.day_status, name='personal-care-day-status'),
    path('api/personal-care/tasks', personal_care.record_task, name='personal-care-tasks'),
    path('api/personal-care/activities', personal_care.record_activities, name='personal-care-activities'),
    path('api/personal-care/activity-records', personal_care.record_activity_entry,
         name='personal-care-activity-records'),
    path('api/personal-care/notes', personal_care.add_notes, name='personal-care-notes'),
    path('api/residents/<int:resident_id>/personal-care', personal_care.resident_day, name='resident-personal-care'),
    path('api/residents/<int:resident_id>/personal-care/statuses', personal_care.resident_task_statuses,
         name='resident-personal-care-statuses'),
    path('api/residents/<int:resident_id>/personal-care/records', personal_care.resident_records,
         name='resident-personal-care-records'),
    path('api/residents/<int:resident_id>/personal-care/dates', personal_care.resident_report_dates,
         name='resident-personal-care-dates'),

    # Hospital transfer
    path('api/hospital-passports', hospital_transfer.passports, name='hospital-passports'),
    path('api/hospital-passports/<int:passport_id>', hospital_transfer.passport_detail, name='hospital-passport-detail'),
    path('api/hospital-passports/<int:passport_id>/status', hospital_transfer.passport_status,
         name='hospital-passport-status'),
    path('api/residents/<int:resident_id>/hospital-passport/prefill', hospital_transfer.passport_prefill,
         name='hospital-passport-prefill'),
    path('api/transfer-logs', hospital_transfer.transfer_logs, name='transfer-logs'),
    path('api/transfer-logs/<int:log_id>', hospital_transfer.transfer_log_detail, name='transfer-log-detail'),

    # Social
    path('api/social-activities', social.activities, name='social-activities'),
    path('api/social-activities/<int:activity_id>', social.activity_detail, name='social-activity-detail'),
    path('api/residents/<int:resident_id>/social-activities', social.resident_activities,
         name='resident-social-activities'),
    path('api/residents/<int:resident_id>/social-activities/recent', social.resident_recent_activities,
         name='resident-social-activities-recent'),
    path('api/residents/<int:resident_id>/social-activities/range', social.resident_activities_in_range,
         name='resident-social-activities-range'),
    path('api/social-connections', social.connections, name='social-connections'),
    path('api/social-connections/<int:connection_id>', social.connection_detail, name='social-connection-detail'),
    path('api/residents/<int:resident_id>/social-connections', social.resident_connections,
         name='resident-social-connections'),

    # Moving & handling
    path('api/moving-handling', moving_handling.submit, name='moving-handling'),
    path('api/moving-handling/<int:assessment_id>', moving_handling.assessment_detail, name='moving-handling-detail'),
    path('api/residents/<int:resident_id>/moving-handling', moving_handling.resident_assessments,
         name='resident-moving-handling'),
    path('api/residents/<int:resident_id>/moving-handling/exists', moving_handling.resident_has_assessment,
         name='resident-moving-handling-exists'),
]
