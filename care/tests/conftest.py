"""Shared pytest fixtures."""
from datetime import date

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from care.models import Organization, Resident, Team, TeamMember, User


@pytest.fixture(autouse=True)
def clear_cache():
    """Throttle counters and dashboard summaries live in the cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Sunrise Care Group")


@pytest.fixture
def team(organization):
    return Team.objects.create(organization=organization, name="Oak Wing")


@pytest.fixture
def other_team(organization):
    return Team.objects.create(organization=organization, name="Willow Wing")


def make_user(username, role, organization, team=None, member_role="member"):
    user = User.objects.create_user(
        username=username, password="P@ssw0rd1", role=role,
        organization=organization, active_team=team,
    )
    if team is not None and role in ("staff", "manager"):
        TeamMember.objects.create(team=team, user=user, role=member_role)
    return user


@pytest.fixture
def staff(organization, team):
    return make_user("staff1", "staff", organization, team)


@pytest.fixture
def manager(organization, team):
    return make_user("manager1", "manager", organization, team, member_role="lead")


@pytest.fixture
def admin_user(organization, team):
    return make_user("admin1", "admin", organization, team)


@pytest.fixture
def outsider(organization, other_team):
    return make_user("staff2", "staff", organization, other_team)


@pytest.fixture
def resident(team, manager):
    return Resident.objects.create(
        organization=team.organization, team=team,
        first_name="Margaret", last_name="Smith",
        date_of_birth=date(1938, 5, 17), admission_date=date(2021, 3, 1),
        room_number="12", nhs_number="485 777 3456",
        gp_name="Dr Patel", gp_phone="0161 496 0000",
        created_by=manager, updated_by=manager,
    )


def client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def staff_client(staff):
    return client_for(staff)


@pytest.fixture
def manager_client(manager):
    return client_for(manager)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def org_admin_client(admin_user):
    return client_for(admin_user)
