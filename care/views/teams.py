"""
Account and team endpoints: who am I, which teams can I see, and team
membership management for organization admins.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.auth_views import user_payload
from care.models import Organization, Team
from care.permissions import IsAdminRole
from care.serializers.auth import SwitchTeamSerializer, TeamCreateSerializer, TeamMemberSerializer
from care.services.activity import log_action
from care.services.scoping import (
    add_member, list_user_teams, remove_member, resolve_organization_id, switch_active_team,
)
from care.views.common import created, ok, service_errors


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    user = request.user
    return ok({**user_payload(user), 'teams': list_user_teams(user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def switch_team(request):
    s = SwitchTeamSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    team = switch_active_team(request.user, s.validated_data['teamId'])
    return ok({'teamId': team.id, 'teamName': team.name, 'organizationId': team.organization_id})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def teams(request):
    if request.method == 'GET':
        return ok(list_user_teams(request.user))
    if not IsAdminRole().has_permission(request, None):
        raise PermissionError('Only administrators can create teams')
    s = TeamCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    org_id = resolve_organization_id(request.user, s.validated_data.get('organizationId'))
    organization = Organization.objects.filter(id=org_id).first()
    if organization is None:
        raise LookupError('Organization not found')
    if Team.objects.filter(organization=organization, name=s.validated_data['name']).exists():
        raise ValueError('A team with this name already exists')
    team = Team.objects.create(organization=organization, name=s.validated_data['name'])
    log_action(user=request.user, action='team_create', object_type='team', object_id=team.id, request=request)
    return created({'id': team.id, 'name': team.name, 'organizationId': team.organization_id})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
@service_errors
def team_add_member(request, team_id: int):
    s = TeamMemberSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    member = add_member(request.user, team_id, s.validated_data['userId'], s.validated_data['role'])
    return ok({'teamId': member.team_id, 'userId': member.user_id, 'role': member.role})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
@service_errors
def team_remove_member(request, team_id: int, user_id: int):
    removed = remove_member(request.user, team_id, user_id)
    if not removed:
        raise LookupError('Member not found')
    return ok({'removed': removed})
