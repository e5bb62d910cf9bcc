from typing import Optional, Any, Dict

from django.contrib.auth import get_user_model

from care.models import ActivityLog

User = get_user_model()


def client_ip(request) -> Optional[str]:
    if request is None:
        return None
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip() or None
    return request.META.get('REMOTE_ADDR')


def log_action(*, user, action: str, object_type: Optional[str]=None, object_id: Optional[int]=None,
               detail: Optional[Dict[str, Any]]=None, resident=None, request=None) -> ActivityLog:
    return ActivityLog.objects.create(
        user=user if isinstance(user, User) and user.pk else None,
        action=action,
        object_type=object_type, object_id=object_id,
        resident=resident,
        detail=detail or {},
        ip_address=client_ip(request),
    )


def format_activity(entry: ActivityLog) -> dict:
    return {
        'id': entry.id,
        'action': entry.action,
        'objectType': entry.object_type,
        'objectId': entry.object_id,
        'residentId': entry.resident_id,
        'userId': entry.user_id,
        'userName': (entry.user.get_full_name() or entry.user.username) if entry.user else None,
        'detail': entry.detail,
        'createdAt': entry.created_at.isoformat(),
    }
