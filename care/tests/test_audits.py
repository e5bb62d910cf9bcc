from datetime import timedelta

import pytest
from django.db import IntegrityError, transaction
from django.urls import reverse
from django.utils import timezone

from care.models import ActionPlan, AuditResponse, AuditTemplate, Notification
from care.services import audits
from care.services.audits import content_hash, next_due

pytestmark = pytest.mark.django_db

QUESTIONS = [
    {'id': 'q1', 'text': 'Care plan reviewed this month', 'type': 'compliance'},
    {'id': 'q2', 'text': 'Signed by the resident', 'type': 'yesno'},
]


@pytest.fixture
def template(team, manager):
    return AuditTemplate.objects.create(
        organization=team.organization, team=team, name='Care Plan Audit', category='carefile',
        questions=QUESTIONS, frequency='monthly', created_by=manager, updated_by=manager,
    )


def answers(resident, q1='compliant', q2='yes'):
    return [{
        'residentId': resident.id,
        'residentName': resident.full_name,
        'roomNumber': resident.room_number,
        'answers': [{'questionId': 'q1', 'value': q1}, {'questionId': 'q2', 'value': q2}],
    }]


def open_draft(client, template):
    return client.post(reverse('audit-draft'), {'templateId': template.id}, format='json')


def completed(template, team, user, days_ago, frequency='monthly'):
    at = timezone.now() - timedelta(days=days_ago)
    return AuditResponse.objects.create(
        template=template, template_name=template.name, category=template.category,
        organization=team.organization, team=team, responses=[], content_hash=content_hash([]),
        status=AuditResponse.STATUS_COMPLETED, audited_by=user, frequency=frequency,
        completed_at=at, next_audit_due=next_due(frequency, at),
    )


# ---------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------
def test_manager_creates_template(manager_client, team):
    r = manager_client.post(reverse('audit-templates'), {
        'name': 'Medication Audit', 'category': 'clinical', 'frequency': 'weekly', 'questions': QUESTIONS,
    }, format='json')
    assert r.status_code == 201
    assert r.data['data']['teamId'] == team.id
    assert r.data['data']['questions'][1]['type'] == 'yesno'


def test_staff_cannot_create_template(staff_client):
    r = staff_client.post(reverse('audit-templates'), {
        'name': 'Medication Audit', 'category': 'clinical', 'questions': QUESTIONS,
    }, format='json')
    assert r.status_code == 403


def test_template_questions_need_unique_ids(manager_client):
    r = manager_client.post(reverse('audit-templates'), {
        'name': 'Broken', 'category': 'clinical', 'questions': [QUESTIONS[0], QUESTIONS[0]],
    }, format='json')
    assert r.status_code == 400


def test_archived_templates_are_hidden_and_cannot_start_drafts(manager_client, staff_client, template):
    r = manager_client.post(reverse('audit-template-archive', args=[template.id]))
    assert r.status_code == 200
    assert r.data['data']['isActive'] is False

    assert staff_client.get(reverse('audit-templates')).data['data'] == []
    listed = staff_client.get(reverse('audit-templates'), {'includeArchived': 'true'}).data['data']
    assert [t['id'] for t in listed] == [template.id]

    r = open_draft(staff_client, template)
    assert r.status_code == 400


def test_organization_template_listing(staff_client, template, organization):
    r = staff_client.get(reverse('audit-templates'), {'organizationId': organization.id})
    assert [t['id'] for t in r.data['data']] == [template.id]


# ---------------------------------------------------------------------
# Draft, auto-save and completion
# ---------------------------------------------------------------------
def test_draft_is_reused_for_template_and_team(staff_client, template):
    first = open_draft(staff_client, template)
    assert first.status_code == 201
    assert first.data['created'] is True
    assert first.data['data']['status'] == 'draft'

    second = open_draft(staff_client, template)
    assert second.status_code == 200
    assert second.data['created'] is False
    assert second.data['data']['id'] == first.data['data']['id']
    assert AuditResponse.objects.filter(template=template).count() == 1


def test_database_allows_one_open_response_per_template_and_team(template, team, staff):
    fields = dict(template=template, template_name=template.name, category=template.category,
                  organization=team.organization, team=team, audited_by=staff)
    AuditResponse.objects.create(status='draft', **fields)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            AuditResponse.objects.create(status='in-progress', **fields)
    # completed history is unrestricted
    AuditResponse.objects.create(status='completed', **fields)
    AuditResponse.objects.create(status='completed', **fields)


def test_lost_draft_race_returns_the_winner(monkeypatch, staff_client, template, team):
    winner = open_draft(staff_client, template).data['data']['id']
    real = audits._open_response
    calls = []

    def stale_then_real(template_id, team_id):
        calls.append(template_id)
        # the first lookup runs before the other request commits
        return None if len(calls) == 1 else real(template_id, team_id)

    monkeypatch.setattr(audits, '_open_response', stale_then_real)
    r = open_draft(staff_client, template)
    assert r.status_code == 200
    assert r.data['created'] is False
    assert r.data['data']['id'] == winner
    assert len(calls) == 2
    assert AuditResponse.objects.filter(template=template, team=team,
                                        status__in=AuditResponse.OPEN_STATUSES).count() == 1


def test_autosave_skips_unchanged_answers(staff_client, template, resident):
    response_id = open_draft(staff_client, template).data['data']['id']
    url = reverse('audit-save', args=[response_id])

    r = staff_client.post(url, {'responses': answers(resident)}, format='json')
    assert r.status_code == 200
    assert r.data['saved'] is True
    assert r.data['data']['status'] == 'in-progress'

    r = staff_client.post(url, {'responses': answers(resident)}, format='json')
    assert r.data['saved'] is False

    r = staff_client.post(url, {'responses': answers(resident, q1='non-compliant')}, format='json')
    assert r.data['saved'] is True
    stored = AuditResponse.objects.get(id=response_id)
    assert stored.responses[0]['answers'][0]['value'] == 'non-compliant'


def test_save_rejects_unknown_questions_and_values(staff_client, template, resident):
    response_id = open_draft(staff_client, template).data['data']['id']
    url = reverse('audit-save', args=[response_id])
    bad_value = answers(resident, q2='maybe')
    assert staff_client.post(url, {'responses': bad_value}, format='json').status_code == 400

    unknown = answers(resident)
    unknown[0]['answers'].append({'questionId': 'q9', 'value': 'yes'})
    assert staff_client.post(url, {'responses': unknown}, format='json').status_code == 400


def test_complete_sets_next_due_and_raises_action_plans(manager_client, manager, staff, template, resident):
    response_id = open_draft(manager_client, template).data['data']['id']
    r = manager_client.post(reverse('audit-complete', args=[response_id]), {
        'responses': answers(resident, q1='non-compliant'),
        'actionPlans': [{'description': 'Review care plan with family', 'assignedTo': staff.id, 'priority': 'High'}],
    }, format='json')
    assert r.status_code == 200
    data = r.data['data']
    assert data['status'] == 'completed'
    assert len(data['actionPlans']) == 1

    stored = AuditResponse.objects.get(id=response_id)
    assert stored.next_audit_due - stored.completed_at == timedelta(days=30)
    plan = ActionPlan.objects.get(audit_response=stored)
    assert plan.template_id == template.id
    assert plan.assigned_to_id == staff.id
    note = Notification.objects.get(user=staff)
    assert note.type == Notification.TYPE_ACTION_PLAN
    assert note.metadata['actionPlanId'] == plan.id

    # completed audits are read-only
    r = manager_client.post(reverse('audit-save', args=[response_id]), {'responses': answers(resident)}, format='json')
    assert r.status_code == 400
    r = manager_client.post(reverse('audit-complete', args=[response_id]), {'responses': answers(resident)},
                            format='json')
    assert r.status_code == 400

    # a fresh draft may start once the previous one is completed
    assert open_draft(manager_client, template).status_code == 201


def test_staff_completion_with_action_plans_rolls_back(staff_client, staff, template, resident):
    response_id = open_draft(staff_client, template).data['data']['id']
    r = staff_client.post(reverse('audit-complete', args=[response_id]), {
        'responses': answers(resident),
        'actionPlans': [{'description': 'Fix it', 'assignedTo': staff.id, 'priority': 'Low'}],
    }, format='json')
    assert r.status_code == 403
    assert AuditResponse.objects.get(id=response_id).status == 'draft'
    assert not ActionPlan.objects.exists()


def test_adhoc_audits_have_no_due_date(staff_client, template, resident):
    template.frequency = 'adhoc'
    template.save()
    response_id = open_draft(staff_client, template).data['data']['id']
    r = staff_client.post(reverse('audit-complete', args=[response_id]), {'responses': answers(resident)},
                          format='json')
    assert r.status_code == 200
    assert r.data['data']['nextAuditDue'] is None


def test_completion_prunes_history(settings, staff_client, staff, template, team, resident):
    settings.AUDIT_HISTORY_LIMIT = 2
    oldest = completed(template, team, staff, days_ago=90)
    completed(template, team, staff, days_ago=60)

    response_id = open_draft(staff_client, template).data['data']['id']
    staff_client.post(reverse('audit-complete', args=[response_id]), {'responses': answers(resident)}, format='json')

    remaining = AuditResponse.objects.filter(template=template, status='completed')
    assert remaining.count() == 2
    assert not remaining.filter(id=oldest.id).exists()

    history = staff_client.get(reverse('audit-responses'), {'templateId': template.id}).data['data']
    assert history[0]['id'] == response_id
    latest = staff_client.get(reverse('audit-latest'), {'templateId': template.id}).data['data']
    assert latest['id'] == response_id


def test_overdue_and_upcoming_use_latest_completion(staff_client, staff, team, template, manager):
    weekly = AuditTemplate.objects.create(
        organization=team.organization, team=team, name='Environment Walkround', category='environment',
        questions=QUESTIONS, frequency='weekly', created_by=manager,
    )
    # care plan: an old overdue completion superseded by a recent one
    completed(template, team, staff, days_ago=45)
    completed(template, team, staff, days_ago=2)
    # walkround: last done 10 days ago, a week cadence
    walkround = completed(weekly, team, staff, days_ago=10, frequency='weekly')

    overdue = staff_client.get(reverse('audit-overdue')).data['data']
    assert [r['id'] for r in overdue] == [walkround.id]

    upcoming = staff_client.get(reverse('audit-upcoming')).data['data']
    assert upcoming == []

    latest = staff_client.get(reverse('audit-latest-per-template')).data['data']
    assert {r['templateId'] for r in latest} == {template.id, weekly.id}


def test_response_delete_rules(staff_client, manager_client, staff, team, template):
    draft_id = open_draft(staff_client, template).data['data']['id']
    assert staff_client.delete(reverse('audit-response-detail', args=[draft_id])).status_code == 200

    done = completed(template, team, staff, days_ago=1)
    assert staff_client.delete(reverse('audit-response-detail', args=[done.id])).status_code == 403
    assert manager_client.delete(reverse('audit-response-detail', args=[done.id])).status_code == 200


def test_other_team_cannot_open_response(outsider_client, staff_client, template):
    draft_id = open_draft(staff_client, template).data['data']['id']
    assert outsider_client.get(reverse('audit-response-detail', args=[draft_id])).status_code == 403
    assert outsider_client.get(reverse('audit-open-drafts')).data['data'] == []
