"""
Integration tests for resident records.

Covers creation with emergency contacts, validation of the structured
fields, team isolation, status changes with data retention and the
per-resident activity history.
"""
from datetime import date, timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from care.models import ActivityLog, EmergencyContact, Organization, Resident, Team, TeamMember, User


class ResidentAPITests(APITestCase):
    def setUp(self) -> None:
        self.org = Organization.objects.create(name="Sunrise Care Group")
        self.team = Team.objects.create(organization=self.org, name="Oak Wing")
        self.other_team = Team.objects.create(organization=self.org, name="Willow Wing")

        self.staff = User.objects.create_user(username="staff1", password="P@ssw0rd1", role="staff",
                                              organization=self.org, active_team=self.team)
        self.manager = User.objects.create_user(username="manager1", password="P@ssw0rd1", role="manager",
                                                organization=self.org, active_team=self.team)
        self.outsider = User.objects.create_user(username="staff2", password="P@ssw0rd1", role="staff",
                                                 organization=self.org, active_team=self.other_team)
        TeamMember.objects.create(team=self.team, user=self.staff)
        TeamMember.objects.create(team=self.team, user=self.manager, role="lead")
        TeamMember.objects.create(team=self.other_team, user=self.outsider)

        self.resident = Resident.objects.create(
            organization=self.org, team=self.team,
            first_name="Margaret", last_name="Smith",
            date_of_birth=date(1938, 5, 17), admission_date=date(2021, 3, 1), room_number="12",
        )

    def authenticate(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def payload(self, **overrides) -> dict:
        data = {
            "firstName": "Arthur",
            "lastName": "Jones",
            "dateOfBirth": "1940-02-03",
            "admissionDate": "2023-06-01",
            "roomNumber": "14",
            "healthConditions": ["Diabetes", {"condition": "Hypertension"}],
            "risks": [{"risk": "Falls", "level": "high"}],
            "dependencies": {"mobility": "Supervision Needed", "eating": "Independent",
                             "dressing": "Assistance Needed", "toileting": "Independent"},
            "emergencyContacts": [
                {"name": "Sue Jones", "phoneNumber": "07700 900001", "relationship": "Daughter", "isPrimary": True},
                {"name": "Tom Jones", "phoneNumber": "07700 900002", "relationship": "Son", "isPrimary": True},
            ],
        }
        data.update(overrides)
        return data

    def test_create_resident_in_active_team(self):
        client = self.authenticate(self.staff)
        response = client.post(reverse("residents"), self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["teamId"], self.team.id)
        self.assertEqual(data["organizationId"], self.org.id)
        self.assertEqual(data["healthConditions"], [{"condition": "Diabetes"}, {"condition": "Hypertension"}])
        # only one contact stays primary
        resident = Resident.objects.get(id=data["id"])
        self.assertEqual(EmergencyContact.objects.filter(resident=resident, is_primary=True).count(), 1)
        self.assertTrue(ActivityLog.objects.filter(action="created", resident=resident).exists())

    def test_create_rejects_future_birth_date(self):
        client = self.authenticate(self.staff)
        tomorrow = (timezone.localdate() + timedelta(days=1)).isoformat()
        response = client.post(reverse("residents"), self.payload(dateOfBirth=tomorrow), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_admission_before_birth(self):
        client = self.authenticate(self.staff)
        response = client.post(reverse("residents"), self.payload(admissionDate="1930-01-01"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_incomplete_dependencies(self):
        client = self.authenticate(self.staff)
        response = client.post(reverse("residents"), self.payload(dependencies={"mobility": "Independent"}),
                               format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_in_foreign_team_is_forbidden(self):
        client = self.authenticate(self.staff)
        response = client.post(reverse("residents"), self.payload(teamId=self.other_team.id), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_is_scoped_to_team_and_searchable(self):
        Resident.objects.create(organization=self.org, team=self.other_team, first_name="Edith", last_name="Brown",
                                date_of_birth=date(1935, 1, 1), admission_date=date(2020, 1, 1))
        client = self.authenticate(self.staff)
        response = client.get(reverse("residents"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data["data"]], [self.resident.id])
        self.assertEqual(response.data["pagination"]["total"], 1)

        response = client.get(reverse("residents"), {"q": "marg"})
        self.assertEqual(len(response.data["data"]), 1)
        response = client.get(reverse("residents"), {"q": "nobody"})
        self.assertEqual(response.data["data"], [])

    def test_page_without_size_uses_the_default_size(self):
        for n in range(24):
            Resident.objects.create(organization=self.org, team=self.team, first_name="Resident",
                                    last_name=f"Number {n:02d}", date_of_birth=date(1940, 1, 1),
                                    admission_date=date(2022, 1, 1))
        client = self.authenticate(self.staff)

        response = client.get(reverse("residents"), {"page": 2})
        self.assertEqual(len(response.data["data"]), 5)
        self.assertEqual(response.data["pagination"], {"total": 25, "page": 2, "pageSize": 20})

        response = client.get(reverse("residents"), {"pageSize": 10})
        self.assertEqual(len(response.data["data"]), 10)
        self.assertEqual(response.data["pagination"], {"total": 25, "page": 1, "pageSize": 10})

        response = client.get(reverse("residents"))
        self.assertEqual(len(response.data["data"]), 25)
        self.assertEqual(response.data["pagination"]["pageSize"], 25)

    def test_other_team_cannot_read_resident(self):
        client = self.authenticate(self.outsider)
        response = client.get(reverse("resident-detail", args=[self.resident.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data["ok"])

    def test_missing_resident_is_404(self):
        client = self.authenticate(self.staff)
        response = client.get(reverse("resident-detail", args=[99999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_partial_update_only_touches_given_fields(self):
        client = self.authenticate(self.staff)
        response = client.patch(reverse("resident-detail", args=[self.resident.id]), {"roomNumber": "7B"},
                                format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.resident.refresh_from_db()
        self.assertEqual(self.resident.room_number, "7B")
        self.assertEqual(self.resident.first_name, "Margaret")
        entry = ActivityLog.objects.get(action="updated", resident=self.resident)
        self.assertEqual(entry.detail, {"fields": ["room_number"]})

    def test_discharge_sets_retention_and_reactivation_clears_it(self):
        client = self.authenticate(self.manager)
        url = reverse("resident-status", args=[self.resident.id])
        response = client.post(url, {"status": "discharged", "reason": "Moved to family"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.resident.refresh_from_db()
        self.assertFalse(self.resident.is_active)
        self.assertEqual(self.resident.discharge_reason, "Moved to family")
        self.assertGreater(self.resident.data_retention_until, timezone.now() + timedelta(days=365 * 6))

        response = client.post(url, {"status": "active"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.resident.refresh_from_db()
        self.assertTrue(self.resident.is_active)
        self.assertIsNone(self.resident.discharge_date)
        self.assertIsNone(self.resident.data_retention_until)

    def test_hospital_status_keeps_discharge_fields_empty(self):
        client = self.authenticate(self.manager)
        client.post(reverse("resident-status", args=[self.resident.id]), {"status": "hospital"}, format="json")
        self.resident.refresh_from_db()
        self.assertFalse(self.resident.is_active)
        self.assertIsNone(self.resident.discharge_date)

    def test_staff_cannot_change_status_or_delete(self):
        client = self.authenticate(self.staff)
        response = client.post(reverse("resident-status", args=[self.resident.id]), {"status": "deceased"},
                               format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = client.delete(reverse("resident-detail", args=[self.resident.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_manager_deletes_resident(self):
        client = self.authenticate(self.manager)
        response = client.delete(reverse("resident-detail", args=[self.resident.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Resident.objects.filter(id=self.resident.id).exists())
        self.assertTrue(ActivityLog.objects.filter(action="deleted", object_id=self.resident.id).exists())

    def test_overview_with_audit_log(self):
        client = self.authenticate(self.staff)
        client.patch(reverse("resident-detail", args=[self.resident.id]), {"allergies": "Penicillin"}, format="json")
        response = client.get(reverse("resident-overview", args=[self.resident.id]), {"includeAuditLog": "true"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["allergies"], "Penicillin")
        self.assertIn("lengthOfStay", data)
        self.assertEqual(data["auditLog"][0]["action"], "updated")

    def test_contacts_keep_a_single_primary(self):
        client = self.authenticate(self.staff)
        first = client.post(reverse("resident-contacts", args=[self.resident.id]),
                            {"name": "A", "phoneNumber": "1", "relationship": "Son", "isPrimary": True},
                            format="json").data["data"]
        second = client.post(reverse("resident-contacts", args=[self.resident.id]),
                             {"name": "B", "phoneNumber": "2", "relationship": "Niece", "isPrimary": True},
                             format="json").data["data"]
        self.assertFalse(EmergencyContact.objects.get(id=first["id"]).is_primary)
        self.assertTrue(EmergencyContact.objects.get(id=second["id"]).is_primary)

        response = client.delete(reverse("contact-detail", args=[first["id"]]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        outsider = self.authenticate(self.outsider)
        response = outsider.patch(reverse("contact-detail", args=[second["id"]]), {"name": "C"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_audit_checklist_upsert_and_overdue_count(self):
        client = self.authenticate(self.staff)
        url = reverse("resident-audit-items", args=[self.resident.id])
        yesterday = (timezone.localdate() - timedelta(days=1)).isoformat()
        client.post(url, {"itemName": "Care plan", "status": "pending", "dueDate": yesterday}, format="json")
        client.post(url, {"itemName": "Care plan", "status": "in-progress", "dueDate": yesterday}, format="json")
        client.post(url, {"itemName": "Consent", "status": "completed", "dueDate": yesterday}, format="json")

        items = client.get(url).data["data"]
        self.assertEqual([i["itemName"] for i in items], ["Care plan", "Consent"])
        self.assertEqual(items[0]["status"], "in-progress")
        response = client.get(reverse("resident-audit-items-overdue", args=[self.resident.id]))
        self.assertEqual(response.data["data"], {"count": 1})
