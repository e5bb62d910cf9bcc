from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import TeamQuerySerializer
from care.services.dashboard import cached_team_summary
from care.services.scoping import resolve_team
from care.views.common import ok, service_errors


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@service_errors
def dashboard(request):
    """Team home screen counters (cached)."""
    q = TeamQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    team = resolve_team(request.user, q.validated_data.get('teamId'))
    return ok(cached_team_summary(team))
