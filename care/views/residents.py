"""
Resident records, emergency contacts and the per-resident audit checklist.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import OrganizationQuerySerializer, TeamQuerySerializer
from care.serializers.residents import (
    ActivityQuerySerializer, EmergencyContactSerializer, ResidentAuditItemSerializer, ResidentCreateSerializer,
    ResidentListQuerySerializer, ResidentOverviewQuerySerializer, ResidentSerializer, ResidentStatusSerializer,
)
from care.services import residents as svc
from care.services.scoping import resolve_team
from care.views.common import created, ok, paginated, service_errors


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def residents(request):
    if request.method == 'POST':
        s = ResidentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)
        team = resolve_team(request.user, data.pop('teamId', None))
        contacts = data.pop('emergencyContacts', [])
        resident = svc.create_resident(request.user, team, data, contacts, request=request)
        return created(svc.format_resident(resident, detail=True))

    q = ResidentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    team = resolve_team(request.user, vd.get('teamId'))
    page, page_size = vd.get('page'), vd.get('pageSize')
    if page or page_size:
        page, page_size = page or 1, page_size or svc.DEFAULT_PAGE_SIZE
    items, total = svc.list_team_residents(
        request.user, team,
        active_only=vd['activeOnly'], q=vd.get('q'),
        page=page, page_size=page_size,
    )
    return paginated(items, total, page or 1, page_size or total)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def organization_residents(request):
    q = OrganizationQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.list_organization_residents(request.user, q.validated_data.get('organizationId')))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_detail(request, resident_id: int):
    if request.method == 'GET':
        return ok(svc.format_resident(svc.get_resident(request.user, resident_id), detail=True))
    if request.method == 'DELETE':
        svc.delete_resident(request.user, resident_id, request=request)
        return ok({'deleted': resident_id})
    s = ResidentSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    resident = svc.update_resident(request.user, resident_id, dict(s.validated_data), request=request)
    return ok(svc.format_resident(resident, detail=True))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_overview(request, resident_id: int):
    q = ResidentOverviewQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.resident_overview(request.user, resident_id, q.validated_data['includeAuditLog']))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_status(request, resident_id: int):
    s = ResidentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    resident = svc.update_status(request.user, resident_id, s.validated_data['status'],
                                 s.validated_data.get('reason', ''), request=request)
    return ok(svc.format_resident(resident, detail=True))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_activity(request, resident_id: int):
    q = ActivityQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(svc.resident_activity(request.user, resident_id, q.validated_data['limit']))


# ---------------------------------------------------------------------
# Emergency contacts
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def contact_create(request, resident_id: int):
    s = EmergencyContactSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    contact = svc.add_contact(request.user, resident_id, dict(s.validated_data))
    return created(svc.format_contact(contact))


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def contact_detail(request, contact_id: int):
    if request.method == 'DELETE':
        svc.delete_contact(request.user, contact_id)
        return ok({'deleted': contact_id})
    s = EmergencyContactSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    contact = svc.update_contact(request.user, contact_id, dict(s.validated_data))
    return ok(svc.format_contact(contact))


# ---------------------------------------------------------------------
# Audit checklist
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_audit_items(request, resident_id: int):
    if request.method == 'GET':
        return ok(svc.list_audit_items(request.user, resident_id))
    s = ResidentAuditItemSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    item = svc.upsert_audit_item(request.user, resident_id, dict(s.validated_data))
    return ok(svc.format_audit_item(item))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_overdue_audit_items(request, resident_id: int):
    return ok({'count': svc.overdue_audit_item_count(request.user, resident_id)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def team_audit_items(request):
    q = TeamQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok(svc.list_team_audit_items(request.user, team))
