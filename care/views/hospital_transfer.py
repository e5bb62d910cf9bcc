"""
Hospital passports and hospital transfer logs.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.hospital_transfer import (
    HospitalPassportSerializer, PassportStatusSerializer, TransferListQuerySerializer, TransferLogSerializer, TransferLogUpdateSerializer,
)
from care.services import hospital_transfer as svc
from care.services.scoping import resolve_team
from care.views.common import created, ok, service_errors


def _list_scope(request) -> dict:
    q = TransferListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    if vd.get('residentId'):
        return {'resident_id': vd['residentId']}
    if vd.get('organizationId') and not vd.get('teamId'):
        return {'organization_id': vd['organizationId']}
    return {'team': resolve_team(request.user, vd.get('teamId'))}


# ---------------------------------------------------------------------
# Hospital passports
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def passports(request):
    if request.method == 'GET':
        return ok(svc.list_passports(request.user, **_list_scope(request)))
    s = HospitalPassportSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    passport = svc.create_passport(request.user, data.pop('residentId'), data)
    return created(svc.format_passport(passport))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def passport_prefill(request, resident_id: int):
    return ok({'generalDetails': svc.prefill_general_details(request.user, resident_id)})


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def passport_detail(request, passport_id: int):
    if request.method == 'DELETE':
        svc.delete_passport(request.user, passport_id)
        return ok({'deleted': passport_id})
    return ok(svc.format_passport(svc.get_passport(request.user, passport_id)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def passport_status(request, passport_id: int):
    s = PassportStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.format_passport(svc.update_passport_status(request.user, passport_id, s.validated_data['status'])))


# ---------------------------------------------------------------------
# Transfer logs
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@service_errors
def transfer_logs(request):
    if request.method == 'GET':
        return ok(svc.list_transfer_logs(request.user, **_list_scope(request)))
    s = TransferLogSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    log = svc.create_transfer_log(request.user, data.pop('residentId'), data)
    return created(svc.format_transfer_log(log))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def transfer_log_detail(request, log_id: int):
    if request.method == 'GET':
        return ok(svc.format_transfer_log(svc.get_transfer_log(request.user, log_id)))
    if request.method == 'DELETE':
        svc.delete_transfer_log(request.user, log_id)
        return ok({'deleted': log_id})
    s = TransferLogUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.format_transfer_log(svc.replace_transfer_log(request.user, log_id, s.validated_data)))
