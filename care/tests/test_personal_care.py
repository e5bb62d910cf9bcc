from datetime import date

import pytest
from django.urls import reverse

from care.models import ActivityLog, PersonalCareDaily, PersonalCareTaskEvent
from care.services import personal_care

pytestmark = pytest.mark.django_db

DAY = '2024-03-01'


def task(client, resident, task_type, status, on=DAY, **extra):
    body = {'residentId': resident.id, 'date': on, 'taskType': task_type, 'status': status}
    body.update(extra)
    return client.post(reverse('personal-care-tasks'), body, format='json')


def test_opening_a_day_is_idempotent(staff_client, resident, team):
    url = reverse('personal-care-days')
    first = staff_client.post(url, {'residentId': resident.id, 'date': DAY, 'shift': 'AM'}, format='json')
    assert first.status_code == 201
    assert first.data['created'] is True
    assert first.data['data']['status'] == 'open'
    assert first.data['data']['shift'] == 'AM'
    assert first.data['data']['teamId'] == team.id

    second = staff_client.post(url, {'residentId': resident.id, 'date': DAY, 'shift': 'PM'}, format='json')
    assert second.status_code == 200
    assert second.data['created'] is False
    assert second.data['data']['id'] == first.data['data']['id']
    assert second.data['data']['shift'] == 'AM'
    assert PersonalCareDaily.objects.count() == 1


def test_day_open_race_returns_the_existing_sheet(monkeypatch, staff, resident):
    existing, _ = personal_care.open_day(staff, resident.id, date(2024, 3, 1))
    real = personal_care._day
    calls = []

    def stale_then_real(res, on):
        calls.append(on)
        return None if len(calls) == 1 else real(res, on)

    monkeypatch.setattr(personal_care, '_day', stale_then_real)
    day, was_created = personal_care.open_day(staff, resident.id, existing.date)
    assert was_created is False
    assert day.id == existing.id
    assert PersonalCareDaily.objects.count() == 1


def test_recording_a_task_opens_the_day_and_sets_timestamps(staff_client, staff, resident):
    r = task(staff_client, resident, 'morning_wash', 'in_progress', timePeriod='morning',
             assistanceLevel='one_carer')
    assert r.status_code == 201
    started = r.data['data']
    assert started['startedAt'] is not None
    assert started['completedAt'] is None
    assert started['payload'] == {'timePeriod': 'morning'}
    assert started['performedBy'] == staff.id

    done = task(staff_client, resident, 'morning_wash', 'completed').data['data']
    assert done['completedAt'] is not None
    assert done['startedAt'] is None

    day = PersonalCareDaily.objects.get(resident=resident)
    assert day.updated_by == staff
    assert PersonalCareTaskEvent.objects.filter(daily=day).count() == 2
    assert ActivityLog.objects.filter(action='personal_care_task', resident=resident).count() == 2


def test_refusals_with_a_reason_are_kept_as_exceptions(staff_client, resident):
    task(staff_client, resident, 'nail_care', 'refused', reasonCode='resident_refused', reasonNote='Not today')
    task(staff_client, resident, 'bedrails', 'not_required', reasonCode='not_in_care_plan')

    day = staff_client.get(reverse('resident-personal-care', args=[resident.id]), {'date': DAY}).data['data']
    exceptions = day['daily']['exceptions']
    assert len(exceptions) == 1
    assert exceptions[0]['taskType'] == 'nail_care'
    assert exceptions[0]['code'] == 'resident_refused'
    assert exceptions[0]['note'] == 'Not today'


@pytest.mark.parametrize('field,value', [
    ('status', 'done'),
    ('taskType', 'morning wash'),
    ('timePeriod', 'midday'),
    ('assistanceLevel', 'three_carers'),
    ('reasonCode', 'tired'),
    ('shift', 'Evening'),
])
def test_task_validation(staff_client, resident, field, value):
    fields = {'status': 'completed', field: value}
    assert task(staff_client, resident, 'dressed', **fields).status_code == 400


def test_day_with_tasks_and_latest_statuses(staff_client, resident):
    url = reverse('resident-personal-care', args=[resident.id])
    assert staff_client.get(url, {'date': DAY}).data['data'] is None
    statuses_url = reverse('resident-personal-care-statuses', args=[resident.id])
    assert staff_client.get(statuses_url, {'date': DAY}).data['data'] == {}

    task(staff_client, resident, 'dressed', 'pending')
    task(staff_client, resident, 'hair_brushed', 'completed')
    task(staff_client, resident, 'dressed', 'partially_completed')

    day = staff_client.get(url, {'date': DAY}).data['data']
    assert [t['taskType'] for t in day['tasks']] == ['dressed', 'hair_brushed', 'dressed']

    statuses = staff_client.get(statuses_url, {'date': DAY}).data['data']
    assert {k: v['status'] for k, v in statuses.items()} == {
        'dressed': 'partially_completed', 'hair_brushed': 'completed',
    }
    assert staff_client.get(url).status_code == 400


def test_batch_activities_and_activity_record(staff_client, resident):
    r = staff_client.post(reverse('personal-care-activities'), {
        'residentId': resident.id, 'date': DAY, 'activities': ['shower', 'dressed', 'shower'],
        'time': '08:15', 'staff': 'Staff One', 'assistedStaff': 'Staff Two', 'shift': 'AM',
    }, format='json')
    assert r.status_code == 201
    assert [e['taskType'] for e in r.data['data']] == ['shower', 'dressed']
    assert r.data['data'][0]['payload'] == {'time': '08:15', 'staff': 'Staff One', 'assistedStaff': 'Staff Two'}
    assert all(e['status'] == 'completed' and e['shift'] == 'AM' for e in r.data['data'])

    r = staff_client.post(reverse('personal-care-activity-records'), {
        'residentId': resident.id, 'date': DAY, 'time': '14:00', 'staff': 'Staff One', 'notes': 'Watched TV',
    }, format='json')
    assert r.status_code == 201
    assert r.data['data']['taskType'] == 'daily_activity_record'
    assert r.data['data']['notes'] == 'Watched TV'

    bad = staff_client.post(reverse('personal-care-activities'), {
        'residentId': resident.id, 'date': DAY, 'activities': [], 'time': '08:15', 'staff': 'Staff One',
    }, format='json')
    assert bad.status_code == 400
    bad = staff_client.post(reverse('personal-care-activity-records'), {
        'residentId': resident.id, 'date': DAY, 'time': '8am', 'staff': 'Staff One',
    }, format='json')
    assert bad.status_code == 400


def test_general_notes(staff_client, resident):
    r = staff_client.post(reverse('personal-care-notes'), {'residentId': resident.id, 'date': DAY,
                                                           'notes': 'Settled well after lunch'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['taskType'] == 'general_notes'
    assert r.data['data']['status'] == 'completed'
    assert staff_client.post(reverse('personal-care-notes'), {'residentId': resident.id, 'date': DAY},
                             format='json').status_code == 400


def test_all_records_and_report_dates(staff_client, resident):
    task(staff_client, resident, 'dressed', 'completed', on='2024-02-28')
    task(staff_client, resident, 'bedrails', 'completed', on='2024-03-01', shift='Night')
    staff_client.post(reverse('personal-care-days'), {'residentId': resident.id, 'date': '2024-03-02'}, format='json')

    records = staff_client.get(reverse('resident-personal-care-records', args=[resident.id])).data['data']
    assert [(r['date'], r['taskType']) for r in records] == [('2024-03-01', 'bedrails'), ('2024-02-28', 'dressed')]
    assert records[0]['dailyStatus'] == 'open'
    assert records[0]['dailyShift'] == 'Night'

    dates = staff_client.get(reverse('resident-personal-care-dates', args=[resident.id])).data['data']
    assert dates == ['2024-03-01', '2024-02-28']


def test_cancelled_day_takes_no_more_tasks(staff_client, resident):
    day_id = staff_client.post(reverse('personal-care-days'), {'residentId': resident.id, 'date': DAY},
                               format='json').data['data']['id']
    r = staff_client.post(reverse('personal-care-day-status', args=[day_id]), {'status': 'cancelled'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['status'] == 'cancelled'
    assert task(staff_client, resident, 'dressed', 'completed').status_code == 400

    assert staff_client.post(reverse('personal-care-day-status', args=[day_id]), {'status': 'closed'},
                             format='json').status_code == 400


def test_personal_care_is_team_scoped(staff_client, outsider_client, resident):
    task(staff_client, resident, 'dressed', 'completed')
    day = PersonalCareDaily.objects.get(resident=resident)

    assert task(outsider_client, resident, 'dressed', 'completed').status_code == 403
    assert outsider_client.get(reverse('resident-personal-care', args=[resident.id]),
                               {'date': DAY}).status_code == 403
    assert outsider_client.get(reverse('resident-personal-care-records', args=[resident.id])).status_code == 403
    assert outsider_client.post(reverse('personal-care-day-status', args=[day.id]), {'status': 'complete'},
                                format='json').status_code == 403
    missing = staff_client.post(reverse('personal-care-tasks'), {'residentId': 99999, 'date': DAY, 'taskType': 'dressed',
                                                                 'status': 'completed'}, format='json')
    assert missing.status_code == 404
