from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.moving_handling import MovingHandlingSerializer
from care.services import moving_handling as svc
from care.views.common import created, ok, service_errors


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@service_errors
def submit(request):
    s = MovingHandlingSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    assessment = svc.submit_assessment(request.user, data.pop('residentId'), data)
    return created(svc.format_assessment(assessment))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_assessments(request, resident_id: int):
    return ok(svc.list_assessments(request.user, resident_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def resident_has_assessment(request, resident_id: int):
    return ok({'exists': svc.has_assessment(request.user, resident_id)})


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
@service_errors
def assessment_detail(request, assessment_id: int):
    if request.method == 'GET':
        return ok(svc.format_assessment(svc.get_assessment(request.user, assessment_id)))
    if request.method == 'DELETE':
        svc.delete_assessment(request.user, assessment_id)
        return ok({'deleted': assessment_id})
    s = MovingHandlingSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    changes.pop('residentId', None)
    return ok(svc.format_assessment(svc.update_assessment(request.user, assessment_id, changes)))
