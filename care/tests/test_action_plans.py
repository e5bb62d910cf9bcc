from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone

from care.models import ActionPlan, AuditTemplate, Notification
from care.tests.conftest import client_for, make_user

pytestmark = pytest.mark.django_db


def new_plan(client, team, assignee, **extra):
    body = {'teamId': team.id, 'description': 'Replace bathroom grab rail', 'assignedTo': assignee.id,
            'priority': 'Medium'}
    body.update(extra)
    return client.post(reverse('action-plans'), body, format='json')


def plan_row(team, assignee, creator, **extra):
    fields = dict(description='Chase GP letter', assigned_to=assignee, priority='Low',
                  organization=team.organization, team=team, created_by=creator)
    fields.update(extra)
    return ActionPlan.objects.create(**fields)


def test_manager_creates_plan_and_assignee_is_notified(manager_client, team, staff):
    r = new_plan(manager_client, team, staff)
    assert r.status_code == 201
    assert r.data['data']['assignedTo'] == staff.id
    assert r.data['data']['status'] == 'pending'

    note = Notification.objects.get(user=staff)
    assert note.type == 'action_plan'
    assert note.metadata['actionPlanId'] == r.data['data']['id']


def test_staff_cannot_create_plans(staff_client, team, staff):
    assert new_plan(staff_client, team, staff).status_code == 403


def test_assignee_must_belong_to_the_team(manager_client, team, outsider):
    assert new_plan(manager_client, team, outsider).status_code == 400


def test_create_needs_a_target():
    from care.serializers.audits import ActionPlanCreateSerializer

    s = ActionPlanCreateSerializer(data={'description': 'x', 'assignedTo': 1, 'priority': 'Low'})
    assert not s.is_valid()


def test_assignee_lists_own_plans(staff_client, team, staff, manager):
    mine = plan_row(team, staff, manager)
    plan_row(team, manager, manager)
    r = staff_client.get(reverse('action-plans'))
    assert [p['id'] for p in r.data['data']] == [mine.id]

    r = staff_client.get(reverse('action-plans'), {'teamId': team.id})
    assert len(r.data['data']) == 2


def test_listing_by_template_returns_every_assignee(manager_client, outsider_client, team, staff, manager):
    template = AuditTemplate.objects.create(organization=team.organization, team=team, name='Kitchen Audit',
                                            category='environment', questions=[], created_by=manager)
    plan = plan_row(team, staff, manager, template=template)
    plan_row(team, staff, manager)

    r = manager_client.get(reverse('action-plans'), {'templateId': template.id})
    assert r.status_code == 200
    assert [p['id'] for p in r.data['data']] == [plan.id]

    # same organization sees the template but not another team's plans
    assert outsider_client.get(reverse('action-plans'), {'templateId': template.id}).data['data'] == []


def test_assignee_may_progress_but_not_reassign(staff_client, team, staff, manager):
    plan = plan_row(team, staff, manager)
    url = reverse('action-plan-detail', args=[plan.id])

    r = staff_client.patch(url, {'status': 'in_progress'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['status'] == 'in_progress'

    r = staff_client.patch(url, {'priority': 'High'}, format='json')
    assert r.status_code == 403
    plan.refresh_from_db()
    assert plan.priority == 'Low'


def test_other_staff_cannot_touch_the_plan(team, organization, staff, manager):
    colleague = make_user('staff3', 'staff', organization, team)
    plan = plan_row(team, staff, manager)
    r = client_for(colleague).post(reverse('action-plan-complete', args=[plan.id]))
    assert r.status_code == 403


def test_completion_notifies_the_creator(staff_client, team, staff, manager):
    plan = plan_row(team, staff, manager)
    r = staff_client.patch(reverse('action-plan-detail', args=[plan.id]), {'status': 'completed'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['completedBy'] == staff.id
    assert r.data['data']['completedAt']

    note = Notification.objects.get(user=manager)
    assert note.type == 'action_plan_completed'
    assert note.sender_id == staff.id

    # completing twice is a no-op
    r = staff_client.post(reverse('action-plan-complete', args=[plan.id]))
    assert r.status_code == 200
    assert Notification.objects.filter(user=manager).count() == 1


def test_reopening_clears_completion(manager_client, team, staff, manager):
    plan = plan_row(team, staff, manager, status='completed', completed_at=timezone.now(), completed_by=staff)
    r = manager_client.patch(reverse('action-plan-detail', args=[plan.id]), {'status': 'pending'}, format='json')
    assert r.data['data']['completedAt'] is None
    assert r.data['data']['completedBy'] is None


def test_overdue_and_stats(staff_client, team, staff, manager):
    now = timezone.now()
    late = plan_row(team, staff, manager, due_date=now - timedelta(days=2), priority='High')
    plan_row(team, staff, manager, due_date=now + timedelta(days=5))
    plan_row(team, staff, manager, due_date=now - timedelta(days=9), status='completed')

    r = staff_client.get(reverse('action-plans-overdue'))
    assert [p['id'] for p in r.data['data']] == [late.id]

    stats = staff_client.get(reverse('action-plans-stats')).data['data']
    assert stats == {'total': 3, 'pending': 2, 'inProgress': 0, 'completed': 1, 'overdue': 1, 'highPriority': 1}


def test_mark_overdue_command_flags_and_notifies(team, staff, manager):
    now = timezone.now()
    late = plan_row(team, staff, manager, due_date=now - timedelta(days=1))
    on_time = plan_row(team, staff, manager, due_date=now + timedelta(days=1))

    out = StringIO()
    call_command('mark_overdue_action_plans', stdout=out)
    assert 'Marked 1 action plans overdue' in out.getvalue()

    late.refresh_from_db()
    on_time.refresh_from_db()
    assert late.status == 'overdue'
    assert on_time.status == 'pending'
    assert Notification.objects.filter(user=staff, type='action_plan_overdue').count() == 1


def test_only_managers_delete(staff_client, manager_client, team, staff, manager):
    plan = plan_row(team, staff, manager)
    url = reverse('action-plan-detail', args=[plan.id])
    assert staff_client.delete(url).status_code == 403
    assert manager_client.delete(url).status_code == 200
    assert not ActionPlan.objects.filter(id=plan.id).exists()


def test_plans_of_other_teams_are_hidden(outsider_client, team, staff, manager):
    plan = plan_row(team, staff, manager)
    assert outsider_client.get(reverse('action-plan-detail', args=[plan.id])).status_code == 403


# ---------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------
def test_notification_inbox(staff_client, team, staff, manager):
    for i in range(3):
        Notification.objects.create(user=staff, type='action_plan', title=f'Plan {i}', message='m', team=team)
    Notification.objects.create(user=manager, type='action_plan', title='Not mine', message='m', team=team)

    r = staff_client.get(reverse('notifications'), {'pageSize': 2})
    assert r.status_code == 200
    assert r.data['pagination'] == {'total': 3, 'page': 1, 'pageSize': 2}
    assert [n['title'] for n in r.data['data']] == ['Plan 2', 'Plan 1']

    assert staff_client.get(reverse('notifications-unread')).data['data'] == {'count': 3}


def test_mark_selected_then_all_read(staff_client, team, staff):
    first = Notification.objects.create(user=staff, type='action_plan', title='a', message='m', team=team)
    Notification.objects.create(user=staff, type='action_plan', title='b', message='m', team=team)

    r = staff_client.post(reverse('notifications-read'), {'ids': [first.id]}, format='json')
    assert r.data['data'] == {'updated': 1}
    unread = staff_client.get(reverse('notifications'), {'unreadOnly': 'true'}).data['data']
    assert [n['title'] for n in unread] == ['b']

    r = staff_client.post(reverse('notifications-read'), {}, format='json')
    assert r.data['data'] == {'updated': 1}
    assert staff_client.get(reverse('notifications-unread')).data['data'] == {'count': 0}


def test_notification_text_is_stripped_of_markup(team, staff, manager):
    from care.services.notifications import notify

    n = notify(recipient=staff, sender=manager, type='action_plan', title='<b>Hi</b>',
               message='<script>x</script>done', team=team)
    assert n.title == 'Hi'
    assert '<script>' not in n.message
