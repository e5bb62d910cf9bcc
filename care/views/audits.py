"""
Audit templates and audit responses.

The response endpoints drive the audit screen: fetch or create the draft
for a template, auto-save answers while the auditor works, then complete
the audit with any follow-up action plans.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.serializers.audits import (
    AuditResponseListQuerySerializer, AuditTemplateCreateSerializer, AuditTemplateSerializer,
    CompleteAuditSerializer, DraftRequestSerializer, SaveProgressSerializer, TemplateListQuerySerializer,
)
from care.serializers.common import TeamQuerySerializer
from care.services import audits as svc
from care.services.action_plans import format_plan
from care.services.scoping import resolve_team
from care.views.common import created, ok, service_errors


# ---------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def templates(request):
    if request.method == 'POST':
        s = AuditTemplateCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        team = resolve_team(request.user, s.validated_data.get('teamId'))
        template = svc.create_template(request.user, team, s.validated_data)
        return created(svc.format_template(template))

    q = TemplateListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    if vd.get('organizationId') and not vd.get('teamId'):
        return ok(svc.list_organization_templates(request.user, vd['organizationId'], category=vd.get('category')))
    team = resolve_team(request.user, vd.get('teamId'))
    return ok(svc.list_team_templates(request.user, team, category=vd.get('category'),
                                      include_archived=vd['includeArchived']))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def template_detail(request, template_id: int):
    if request.method == 'GET':
        return ok(svc.format_template(svc.get_template(request.user, template_id)))
    if request.method == 'DELETE':
        svc.delete_template(request.user, template_id)
        return ok({'deleted': template_id})
    s = AuditTemplateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    template = svc.update_template(request.user, template_id, s.validated_data)
    return ok(svc.format_template(template))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def template_archive(request, template_id: int):
    return ok(svc.format_template(svc.archive_template(request.user, template_id)))


# ---------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def draft(request):
    """Open the audit screen: existing draft or a fresh one."""
    s = DraftRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    team = resolve_team(request.user, s.validated_data.get('teamId'))
    response, was_created = svc.get_or_create_draft(request.user, s.validated_data['templateId'], team)
    return Response({'ok': True, 'created': was_created, 'data': svc.format_response(response)},
                    status=201 if was_created else 200)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def completed_responses(request):
    q = AuditResponseListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok(svc.list_completed(request.user, q.validated_data['templateId'], team))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def latest_response(request):
    q = AuditResponseListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok(svc.latest_completed(request.user, q.validated_data['templateId'], team))


def _team_from_query(request):
    q = TeamQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return resolve_team(request.user, q.validated_data.get('teamId'))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def open_drafts(request):
    return ok(svc.list_open_drafts(request.user, _team_from_query(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def overdue(request):
    team = _team_from_query(request)
    return ok([svc.format_response(r, with_answers=False) for r in svc.overdue_responses(team.id)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def upcoming(request):
    team = _team_from_query(request)
    return ok([svc.format_response(r, with_answers=False) for r in svc.upcoming_responses(team.id)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def latest_per_template(request):
    team = _team_from_query(request)
    return ok([svc.format_response(r, with_answers=False) for r in svc.latest_per_template(team.id)])


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def response_detail(request, response_id: int):
    if request.method == 'DELETE':
        svc.delete_response(request.user, response_id)
        return ok({'deleted': response_id})
    return ok(svc.format_response(svc.get_response(request.user, response_id)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def save(request, response_id: int):
    """Auto-save.  ``saved`` is false when nothing changed."""
    s = SaveProgressSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    response, saved = svc.save_progress(request.user, response_id, s.validated_data['responses'],
                                        s.validated_data['status'])
    return Response({'ok': True, 'saved': saved, 'data': svc.format_response(response, with_answers=False)})


save.cls.throttle_scope = 'autosave'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def complete(request, response_id: int):
    s = CompleteAuditSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    response, plans = svc.complete_audit(request.user, response_id, s.validated_data['responses'],
                                         s.validated_data['actionPlans'])
    data = svc.format_response(response)
    data['actionPlans'] = [format_plan(p) for p in plans]
    return ok(data)
