from typing import Optional, Iterable

import bleach
from django.db.models import QuerySet

from care.models import Notification


def notify(*, recipient, sender=None, type: str, title: str, message: str, link: str='',
           metadata: Optional[dict]=None, team=None) -> Notification:
    return Notification.objects.create(
        user=recipient,
        sender=sender if getattr(sender, 'pk', None) else None,
        type=type,
        title=bleach.clean(title, tags=[], strip=True),
        message=bleach.clean(message, tags=[], strip=True),
        link=link,
        metadata=metadata or {},
        organization_id=getattr(team, 'organization_id', None),
        team=team,
    )


def format_notification(n: Notification) -> dict:
    return {
        'id': n.id,
        'type': n.type,
        'title': n.title,
        'message': n.message,
        'link': n.link or None,
        'metadata': n.metadata,
        'isRead': n.is_read,
        'senderId': n.sender_id,
        'teamId': n.team_id,
        'createdAt': n.created_at.isoformat(),
    }


def _mine(user) -> QuerySet:
    return Notification.objects.filter(user=user)


def list_notifications(user, *, unread_only: bool=False, page: int=1, page_size: int=20):
    qs = _mine(user)
    if unread_only:
        qs = qs.filter(is_read=False)
    total = qs.count()
    start = (page - 1) * page_size
    items = qs.order_by('-created_at', '-id')[start:start + page_size]
    return [format_notification(n) for n in items], total


def unread_count(user) -> int:
    return _mine(user).filter(is_read=False).count()


def mark_read(user, ids: Optional[Iterable[int]]=None) -> int:
    qs = _mine(user).filter(is_read=False)
    if ids is not None:
        qs = qs.filter(id__in=list(ids))
    return qs.update(is_read=True)
