from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from care.models import ActivityLog, Appointment, AppointmentReadStatus, QuickCareNote

pytestmark = pytest.mark.django_db


def book(client, resident, days=3, **extra):
    start = timezone.now() + timedelta(days=days)
    body = {
        'residentId': resident.id,
        'title': 'GP visit',
        'startTime': start.isoformat(),
        'endTime': (start + timedelta(hours=1)).isoformat(),
        'location': 'Treatment room',
    }
    body.update(extra)
    return client.post(reverse('appointments'), body, format='json')


def appointment(resident, days, status='scheduled'):
    start = timezone.now() + timedelta(days=days)
    return Appointment.objects.create(
        organization=resident.organization, team=resident.team, resident=resident,
        title='Chiropody', start_time=start, end_time=start + timedelta(minutes=30),
        location='Room 12', status=status,
    )


# ---------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------
def test_book_appointment(staff_client, resident, team):
    r = book(staff_client, resident)
    assert r.status_code == 201
    assert r.data['data']['teamId'] == team.id
    assert r.data['data']['status'] == 'scheduled'
    assert ActivityLog.objects.filter(action='appointment_create', resident=resident).exists()


def test_end_before_start_is_rejected(staff_client, resident):
    start = timezone.now() + timedelta(days=1)
    r = book(staff_client, resident, startTime=start.isoformat(), endTime=(start - timedelta(hours=1)).isoformat())
    assert r.status_code == 400


def test_booking_for_another_teams_resident_is_forbidden(outsider_client, resident):
    assert book(outsider_client, resident).status_code == 403


def test_team_calendar_defaults_to_upcoming_scheduled(staff_client, resident):
    soon = appointment(resident, 1)
    later = appointment(resident, 5)
    appointment(resident, -2)
    appointment(resident, 2, status='cancelled')

    r = staff_client.get(reverse('appointments'))
    assert [a['id'] for a in r.data['data']] == [soon.id, later.id]
    assert r.data['data'][0]['resident']['firstName'] == 'Margaret'
    assert r.data['data'][0]['isRead'] is False

    r = staff_client.get(reverse('appointments'), {'includeAll': 'true', 'status': 'cancelled'})
    assert len(r.data['data']) == 1

    assert staff_client.get(reverse('appointments-upcoming-count')).data['data'] == {'count': 2}


def test_organization_calendar_is_limited_to_visible_teams(staff_client, resident, organization, other_team):
    mine = appointment(resident, 1)
    Appointment.objects.create(
        organization=organization, team=other_team, resident=resident, title='Hidden',
        start_time=timezone.now() + timedelta(days=1), end_time=timezone.now() + timedelta(days=1, hours=1),
        location='Elsewhere',
    )
    r = staff_client.get(reverse('appointments'), {'organizationId': organization.id})
    assert [a['id'] for a in r.data['data']] == [mine.id]


def test_read_state_resets_when_rescheduled(staff_client, manager_client, staff, manager, resident):
    appt = appointment(resident, 2)
    staff_client.post(reverse('appointments-read'), {'ids': [appt.id]}, format='json')
    r = manager_client.post(reverse('appointments-read'), {'ids': [appt.id]}, format='json')
    assert r.data['data'] == {'marked': 1}
    assert staff_client.get(reverse('appointments')).data['data'][0]['isRead'] is True

    # a title change keeps read state
    manager_client.patch(reverse('appointment-detail', args=[appt.id]), {'title': 'Dentist'}, format='json')
    assert AppointmentReadStatus.objects.filter(appointment=appt).count() == 2

    new_start = timezone.now() + timedelta(days=4)
    r = manager_client.patch(reverse('appointment-detail', args=[appt.id]), {
        'startTime': new_start.isoformat(), 'endTime': (new_start + timedelta(hours=1)).isoformat(),
    }, format='json')
    assert r.status_code == 200
    assert list(AppointmentReadStatus.objects.filter(appointment=appt).values_list('user_id', flat=True)) == [manager.id]
    assert staff_client.get(reverse('appointments')).data['data'][0]['isRead'] is False


def test_resending_the_same_time_and_place_keeps_read_state(staff_client, manager_client, resident):
    appt = appointment(resident, 2)
    staff_client.post(reverse('appointments-read'), {'ids': [appt.id]}, format='json')

    r = manager_client.patch(reverse('appointment-detail', args=[appt.id]), {
        'startTime': appt.start_time.isoformat(), 'location': 'Room 12', 'description': 'Bring footwear',
    }, format='json')
    assert r.status_code == 200
    assert staff_client.get(reverse('appointments')).data['data'][0]['isRead'] is True

    manager_client.patch(reverse('appointment-detail', args=[appt.id]), {'location': 'Lounge'}, format='json')
    assert staff_client.get(reverse('appointments')).data['data'][0]['isRead'] is False


def test_update_cannot_end_before_start(staff_client, resident):
    appt = appointment(resident, 2)
    earlier = appt.start_time - timedelta(hours=2)
    r = staff_client.patch(reverse('appointment-detail', args=[appt.id]), {'endTime': earlier.isoformat()},
                           format='json')
    assert r.status_code == 400


def test_status_change_and_resident_listing(staff_client, resident):
    first = appointment(resident, 1)
    second = appointment(resident, 3)
    r = staff_client.post(reverse('appointment-status', args=[first.id]), {'status': 'completed'}, format='json')
    assert r.data['data']['status'] == 'completed'

    url = reverse('resident-appointments', args=[resident.id])
    assert [a['id'] for a in staff_client.get(url, {'upcoming': 'true'}).data['data']] == [second.id]
    assert [a['id'] for a in staff_client.get(url, {'status': 'completed'}).data['data']] == [first.id]
    assert len(staff_client.get(url, {'limit': 1}).data['data']) == 1

    assert staff_client.post(reverse('appointment-status', args=[first.id]), {'status': 'postponed'},
                             format='json').status_code == 400


def test_delete_appointment(staff_client, outsider_client, resident):
    appt = appointment(resident, 1)
    assert outsider_client.delete(reverse('appointment-detail', args=[appt.id])).status_code == 403
    assert staff_client.delete(reverse('appointment-detail', args=[appt.id])).status_code == 200
    assert not Appointment.objects.filter(id=appt.id).exists()


# ---------------------------------------------------------------------
# Appointment notes
# ---------------------------------------------------------------------
def test_appointment_notes_and_summary(staff_client, resident):
    r = staff_client.post(reverse('appointment-notes'), {
        'residentId': resident.id,
        'category': 'transportation',
        'transportPreference': 'wheelchair',
        'transportationNeeds': ['wheelchair_accessible', 'oxygen_support', 'wheelchair_accessible'],
    }, format='json')
    assert r.status_code == 201
    note = r.data['data']
    assert note['priority'] == 'medium'
    assert note['transportationNeeds'] == ['wheelchair_accessible', 'oxygen_support']

    staff_client.post(reverse('appointment-notes'), {
        'residentId': resident.id, 'category': 'medical_requirements', 'medicalNeeds': ['fasting_required'],
        'priority': 'high',
    }, format='json')

    summary = staff_client.get(reverse('resident-appointment-notes-summary', args=[resident.id])).data['data']
    assert summary['totalNotes'] == 2
    assert summary['byCategory'] == {'transportation': 1, 'medical_requirements': 1}
    assert summary['byPriority'] == {'medium': 1, 'high': 1}
    assert summary['lastUpdated']

    listed = staff_client.get(reverse('resident-appointment-notes', args=[resident.id]),
                              {'category': 'transportation'}).data['data']
    assert [n['id'] for n in listed] == [note['id']]


def test_appointment_note_rejects_unknown_choice(staff_client, resident):
    r = staff_client.post(reverse('appointment-notes'), {
        'residentId': resident.id, 'category': 'transportation', 'transportationNeeds': ['helicopter'],
    }, format='json')
    assert r.status_code == 400


def test_inactive_appointment_notes_are_hidden_by_default(staff_client, resident):
    note_id = staff_client.post(reverse('appointment-notes'), {
        'residentId': resident.id, 'category': 'preparation', 'preparationTime': '1_hour',
    }, format='json').data['data']['id']
    r = staff_client.patch(reverse('appointment-note-detail', args=[note_id]), {'isActive': False}, format='json')
    assert r.data['data']['isActive'] is False

    url = reverse('resident-appointment-notes', args=[resident.id])
    assert staff_client.get(url).data['data'] == []
    assert len(staff_client.get(url, {'activeOnly': 'false'}).data['data']) == 1
    assert staff_client.delete(reverse('appointment-note-detail', args=[note_id])).status_code == 200


# ---------------------------------------------------------------------
# Quick care notes
# ---------------------------------------------------------------------
def test_care_note_lifecycle(staff_client, resident):
    r = staff_client.post(reverse('care-notes'), {
        'residentId': resident.id, 'category': 'safety_alerts',
        'safetyAlerts': ['high_falls_risk', 'chair_bed_alarm'], 'priority': 'high',
    }, format='json')
    assert r.status_code == 201
    note_id = r.data['data']['id']

    r = staff_client.patch(reverse('care-note-detail', args=[note_id]), {'priority': 'low'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['priority'] == 'low'
    assert r.data['data']['safetyAlerts'] == ['high_falls_risk', 'chair_bed_alarm']

    r = staff_client.post(reverse('care-note-deactivate', args=[note_id]))
    assert r.data['data']['isActive'] is False
    assert staff_client.get(reverse('resident-care-notes', args=[resident.id])).data['data'] == []
    assert ActivityLog.objects.filter(action='care_note_deactivate', object_id=note_id).exists()


def test_legacy_care_note_categories_cannot_be_created(staff_client, resident):
    legacy = [c for c, _ in QuickCareNote.CATEGORY_CHOICES][5:]
    assert legacy
    r = staff_client.post(reverse('care-notes'), {'residentId': resident.id, 'category': legacy[0]}, format='json')
    assert r.status_code == 400


def test_care_note_summary(staff_client, resident):
    for category, priority in (('toileting', 'medium'), ('toileting', 'high'), ('communication', None)):
        body = {'residentId': resident.id, 'category': category}
        if priority:
            body['priority'] = priority
        staff_client.post(reverse('care-notes'), body, format='json')

    summary = staff_client.get(reverse('resident-care-notes-summary', args=[resident.id])).data['data']
    assert summary['totalNotes'] == 3
    assert summary['byCategory'] == {'toileting': 2, 'communication': 1}
    assert summary['byPriority'] == {'medium': 1, 'high': 1, 'unset': 1}


def test_care_notes_of_other_teams_are_forbidden(outsider_client, staff_client, resident):
    note_id = staff_client.post(reverse('care-notes'), {'residentId': resident.id, 'category': 'mobility_positioning',
                                                        'walkingAid': 'frame'}, format='json').data['data']['id']
    assert outsider_client.patch(reverse('care-note-detail', args=[note_id]), {'priority': 'low'},
                                 format='json').status_code == 403
    assert outsider_client.get(reverse('resident-care-notes', args=[resident.id])).status_code == 403
