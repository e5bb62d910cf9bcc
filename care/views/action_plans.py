from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.audits import ActionPlanCreateSerializer, ActionPlanListQuerySerializer, ActionPlanUpdateSerializer
from care.serializers.common import TeamQuerySerializer
from care.services import action_plans as svc
from care.services.audits import get_response, get_template
from care.services.scoping import resolve_team
from care.views.common import created, ok, service_errors


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def action_plans(request):
    if request.method == 'POST':
        s = ActionPlanCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        response = template = None
        if vd.get('auditResponseId'):
            response = get_response(request.user, vd['auditResponseId'])
            team = response.team
            template = response.template
        elif vd.get('templateId'):
            template = get_template(request.user, vd['templateId'])
            team = resolve_team(request.user, vd.get('teamId') or template.team_id)
        else:
            team = resolve_team(request.user, vd['teamId'])
        plan = svc.create_plan(request.user, team, vd, audit_response=response, template=template)
        return created(svc.format_plan(plan))

    q = ActionPlanListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    team = resolve_team(request.user, vd['teamId']) if vd.get('teamId') else None
    return ok(svc.list_plans(
        request.user, team=team,
        audit_response_id=vd.get('auditResponseId'),
        template_id=vd.get('templateId'),
        assigned_to=vd.get('assignedTo'),
        status=vd.get('status'),
    ))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def overdue(request):
    q = TeamQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok([svc.format_plan(p) for p in svc.overdue_plans(team)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def stats(request):
    q = TeamQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok(svc.plan_stats(team))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def plan_detail(request, plan_id: int):
    if request.method == 'GET':
        return ok(svc.format_plan(svc.get_plan(request.user, plan_id)))
    if request.method == 'DELETE':
        svc.delete_plan(request.user, plan_id)
        return ok({'deleted': plan_id})
    s = ActionPlanUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    plan = svc.update_plan(request.user, plan_id, s.validated_data)
    return ok(svc.format_plan(plan))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def plan_complete(request, plan_id: int):
    return ok(svc.format_plan(svc.complete_plan(request.user, plan_id)))
