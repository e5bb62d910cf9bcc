import pytest
from django.urls import reverse

from care.models import ActivityLog, MovingHandlingAssessment

pytestmark = pytest.mark.django_db


def assessment_body(resident, **overrides):
    body = {
        'residentId': resident.id,
        'residentName': 'Margaret Smith',
        'dateOfBirth': '1938-05-17',
        'bedroomNumber': '12',
        'weight': 58.5,
        'height': 160,
        'historyOfFalls': True,
        'independentMobility': False,
        'canWeightBear': 'PARTIALLY',
        'limbUpperRight': 'FULLY',
        'limbUpperLeft': 'FULLY',
        'limbLowerRight': 'PARTIALLY',
        'limbLowerLeft': 'NONE',
        'equipmentUsed': 'Standing hoist',
        'completedBy': 'Jane Nurse',
        'jobRole': 'Senior carer',
        'signature': 'J. Nurse',
        'completionDate': '2024-03-01',
    }
    for factor in MovingHandlingAssessment.RISK_FACTORS:
        body[f'{factor}State'] = 'NEVER'
    body.update(overrides)
    return body


def submit(client, resident, **overrides):
    return client.post(reverse('moving-handling'), assessment_body(resident, **overrides), format='json')


def test_submit_final_assessment_with_risk_flags(staff_client, resident):
    r = submit(staff_client, resident, unbalanceState='ALWAYS', unbalanceComments='Leans to the left',
               cathetersState='SOMETIMES')
    assert r.status_code == 201
    data = r.data['data']
    assert data['savedAsDraft'] is False
    assert data['riskFactors']['deafness'] == {'state': 'NEVER'}
    assert data['riskFlags'] == [
        {'factor': 'unbalance', 'state': 'ALWAYS', 'comments': 'Leans to the left'},
        {'factor': 'catheters', 'state': 'SOMETIMES', 'comments': None},
    ]
    assert ActivityLog.objects.filter(action='moving_handling_submit', resident=resident).exists()


def test_every_risk_factor_state_is_required(staff_client, resident):
    body = assessment_body(resident)
    del body['spasmsState']
    assert staff_client.post(reverse('moving-handling'), body, format='json').status_code == 400


@pytest.mark.parametrize('field,value', [
    ('canWeightBear', 'SOMETIMES'),
    ('limbLowerLeft', 'HALF'),
    ('deafnessState', 'OFTEN'),
    ('weight', -1),
])
def test_submit_rejects_bad_values(staff_client, resident, field, value):
    assert submit(staff_client, resident, **{field: value}).status_code == 400


def test_draft_is_editable_until_finalized(staff_client, resident):
    assessment_id = submit(staff_client, resident, savedAsDraft=True).data['data']['id']
    url = reverse('moving-handling-detail', args=[assessment_id])

    r = staff_client.patch(url, {'weight': 57, 'stiffnessState': 'SOMETIMES', 'stiffnessComments': 'Mornings'},
                           format='json')
    assert r.status_code == 200
    data = r.data['data']
    assert data['weight'] == 57
    assert data['savedAsDraft'] is True
    assert data['riskFactors']['stiffness'] == {'state': 'SOMETIMES', 'comments': 'Mornings'}
    # untouched factors keep their state
    assert data['riskFactors']['deafness'] == {'state': 'NEVER'}

    r = staff_client.patch(url, {'savedAsDraft': False}, format='json')
    assert r.data['data']['savedAsDraft'] is False
    assert ActivityLog.objects.filter(action='moving_handling_finalize', object_id=assessment_id).exists()

    assert staff_client.patch(url, {'weight': 60}, format='json').status_code == 400


def test_final_assessment_is_read_only(staff_client, resident):
    assessment_id = submit(staff_client, resident).data['data']['id']
    r = staff_client.patch(reverse('moving-handling-detail', args=[assessment_id]), {'height': 150}, format='json')
    assert r.status_code == 400


def test_listing_and_exists(staff_client, resident):
    url = reverse('resident-moving-handling-exists', args=[resident.id])
    assert staff_client.get(url).data['data'] == {'exists': False}

    first = submit(staff_client, resident, completionDate='2024-01-01').data['data']['id']
    second = submit(staff_client, resident, completionDate='2024-03-01').data['data']['id']
    assert staff_client.get(url).data['data'] == {'exists': True}

    listed = staff_client.get(reverse('resident-moving-handling', args=[resident.id])).data['data']
    assert [a['id'] for a in listed] == [second, first]
    assert 'riskFactors' not in listed[0]


def test_assessments_are_team_scoped(staff_client, outsider_client, resident):
    assessment_id = submit(staff_client, resident).data['data']['id']
    url = reverse('moving-handling-detail', args=[assessment_id])
    assert outsider_client.get(url).status_code == 403
    assert outsider_client.get(reverse('resident-moving-handling', args=[resident.id])).status_code == 403
    assert submit(outsider_client, resident).status_code == 403

    assert staff_client.delete(url).status_code == 200
    assert not MovingHandlingAssessment.objects.filter(id=assessment_id).exists()
