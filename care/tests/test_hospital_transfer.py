import copy

import pytest
from django.urls import reverse

from care.models import EmergencyContact, HospitalPassport, HospitalTransferLog

pytestmark = pytest.mark.django_db

PASSPORT = {
    'generalDetails': {
        'personName': 'Margaret Smith', 'knownAs': 'Maggie', 'dateOfBirth': '1938-05-17',
        'nhsNumber': '485 777 3456', 'transferDateTime': '2024-02-01T10:30', 'englishFirstLanguage': 'yes',
        'careHomeName': 'Oak Wing', 'careHomeAddress': '1 Care Street', 'careHomePhone': '0161 000 0000',
        'hospitalName': 'General Infirmary', 'hospitalAddress': 'Hospital Road',
        'nextOfKinName': 'Sue Smith', 'nextOfKinAddress': '2 Family Road', 'nextOfKinPhone': '07700 900001',
        'gpName': 'Dr Patel', 'gpAddress': 'Surgery Lane', 'gpPhone': '0161 496 0000',
    },
    'medicalCareNeeds': {
        'situation': 'Fall with suspected hip fracture', 'background': 'Frail, lives with dementia',
        'assessment': 'Pain on weight bearing', 'recommendations': 'X-ray', 'pastMedicalHistory': 'Hypertension',
        'hearingAid': True, 'glasses': True, 'mobilityAssistance': 'minimum', 'historyOfFalls': True,
        'toiletingAssistance': 'minimum', 'nutritionalAssistance': 'independent', 'swallowingDifficulties': False,
        'enteralNutrition': False, 'personalHygieneAssistance': 'full', 'topDentures': True,
        'bottomDentures': False, 'denturesAccompanying': True,
    },
    'skinMedicationAttachments': {
        'skinIntegrityAssistance': 'minimum', 'skinStateOnTransfer': 'Intact', 'knownToTVN': False,
        'currentMedicationRegime': 'See MAR chart', 'lastMedicationDateTime': '2024-02-01T08:00',
        'attachments': {'currentMedications': True, 'bodyMap': True, 'observations': True, 'dnacprForm': False,
                        'enteralFeedingRegime': False, 'other': False},
    },
    'signOff': {'signature': 'J. Nurse', 'printedName': 'Jane Nurse', 'designation': 'RGN',
                'contactPhone': '0161 000 0001', 'completedDate': '2024-02-01'},
}


def passport_body(resident, **overrides):
    body = copy.deepcopy(PASSPORT)
    body['residentId'] = resident.id
    body.update(overrides)
    return body


def transfer_body(resident, **overrides):
    body = {'residentId': resident.id, 'date': '2024-02-01', 'hospitalName': 'General Infirmary',
            'reason': 'Suspected hip fracture', 'outcome': 'Admitted to ward 4', 'followUp': 'Review on return',
            'filesChanged': {'carePlan': True, 'riskAssessment': False},
            'medicationChanges': {'medicationsAdded': True, 'addedMedications': 'Paracetamol',
                                  'medicationsRemoved': False, 'medicationsModified': False}}
    body.update(overrides)
    return body


# ---------------------------------------------------------------------
# Hospital passports
# ---------------------------------------------------------------------
def test_create_passport_defaults_to_completed(staff_client, resident, team):
    r = staff_client.post(reverse('hospital-passports'), passport_body(resident), format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['status'] == 'completed'
    assert data['teamId'] == team.id
    assert data['medicalCareNeeds']['hearingAid'] is True
    assert data['skinMedicationAttachments']['attachments']['bodyMap'] is True


def test_passport_requires_every_section(staff_client, resident):
    body = passport_body(resident)
    del body['signOff']
    assert staff_client.post(reverse('hospital-passports'), body, format='json').status_code == 400

    body = passport_body(resident)
    body['medicalCareNeeds']['mobilityAssistance'] = 'some'
    assert staff_client.post(reverse('hospital-passports'), body, format='json').status_code == 400


def test_passport_draft_then_complete(staff_client, resident):
    passport_id = staff_client.post(reverse('hospital-passports'), passport_body(resident, status='draft'),
                                    format='json').data['data']['id']
    r = staff_client.post(reverse('hospital-passport-status', args=[passport_id]), {'status': 'completed'},
                          format='json')
    assert r.data['data']['status'] == 'completed'


def test_list_passports_by_resident_team_and_organization(staff_client, resident, organization):
    staff_client.post(reverse('hospital-passports'), passport_body(resident), format='json')
    url = reverse('hospital-passports')
    assert len(staff_client.get(url, {'residentId': resident.id}).data['data']) == 1
    assert len(staff_client.get(url).data['data']) == 1
    assert len(staff_client.get(url, {'organizationId': organization.id}).data['data']) == 1


def test_passport_is_team_scoped(staff_client, outsider_client, resident):
    passport_id = staff_client.post(reverse('hospital-passports'), passport_body(resident),
                                    format='json').data['data']['id']
    assert outsider_client.get(reverse('hospital-passport-detail', args=[passport_id])).status_code == 403
    assert outsider_client.post(reverse('hospital-passports'), passport_body(resident),
                                format='json').status_code == 403
    assert staff_client.delete(reverse('hospital-passport-detail', args=[passport_id])).status_code == 200
    assert not HospitalPassport.objects.exists()


def test_prefill_uses_resident_record_and_primary_contact(staff_client, resident):
    EmergencyContact.objects.create(resident=resident, name='Tom Smith', phone='07700 900002',
                                    relationship='Son', address='3 Lane')
    EmergencyContact.objects.create(resident=resident, name='Sue Smith', phone='07700 900001',
                                    relationship='Daughter', address='2 Family Road', is_primary=True)
    r = staff_client.get(reverse('hospital-passport-prefill', args=[resident.id]))
    assert r.status_code == 200
    details = r.data['data']['generalDetails']
    assert details['personName'] == 'Margaret Smith'
    assert details['dateOfBirth'] == '1938-05-17'
    assert details['careHomeName'] == 'Oak Wing'
    assert details['nextOfKinName'] == 'Sue Smith'
    assert details['gpName'] == 'Dr Patel'


# ---------------------------------------------------------------------
# Transfer logs
# ---------------------------------------------------------------------
def test_transfer_logs_are_listed_newest_first(staff_client, resident):
    staff_client.post(reverse('transfer-logs'), transfer_body(resident, date='2023-11-10'), format='json')
    r = staff_client.post(reverse('transfer-logs'), transfer_body(resident), format='json')
    assert r.status_code == 201
    assert r.data['data']['medicationChanges']['addedMedications'] == 'Paracetamol'

    logs = staff_client.get(reverse('transfer-logs'), {'residentId': resident.id}).data['data']
    assert [log['date'] for log in logs] == ['2024-02-01', '2023-11-10']


def test_transfer_log_needs_core_fields(staff_client, resident):
    body = transfer_body(resident)
    del body['hospitalName']
    assert staff_client.post(reverse('transfer-logs'), body, format='json').status_code == 400


def test_put_replaces_the_whole_transfer_log(staff_client, resident):
    log_id = staff_client.post(reverse('transfer-logs'), transfer_body(resident), format='json').data['data']['id']
    r = staff_client.put(reverse('transfer-log-detail', args=[log_id]), {
        'date': '2024-02-02', 'hospitalName': 'City Hospital', 'reason': 'Chest pain',
    }, format='json')
    assert r.status_code == 200
    data = r.data['data']
    assert data['hospitalName'] == 'City Hospital'
    assert data['outcome'] is None
    assert data['followUp'] is None
    assert data['filesChanged'] is None
    assert data['residentId'] == resident.id

    stored = HospitalTransferLog.objects.get(id=log_id)
    assert stored.medication_changes == {}


def test_transfer_logs_of_other_teams_are_forbidden(staff_client, outsider_client, resident):
    log_id = staff_client.post(reverse('transfer-logs'), transfer_body(resident), format='json').data['data']['id']
    url = reverse('transfer-log-detail', args=[log_id])
    assert outsider_client.get(url).status_code == 403
    assert outsider_client.delete(url).status_code == 403
    assert staff_client.delete(url).status_code == 200
