import logging
from typing import Any, Dict, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

UPDATES_GROUP = "updates"


def team_group(team_id: int) -> str:
    return f"team.{team_id}"


def _send(group: str, payload: Dict[str, Any]) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(group, payload)
    except Exception:
        # a broken channel layer must not fail the write that triggered it
        logger.warning("broadcast to %s failed", group, exc_info=True)


def publish_team_event(team_id: int, event: str, data: Optional[Dict[str, Any]]=None) -> None:
    """Tell clients subscribed to a team that something changed.

    Sent after the surrounding transaction commits so that a client
    re-querying on receipt sees the new state.
    """
    payload = {
        "type": "team.event",
        "event": event,
        "teamId": team_id,
        "ts": timezone.now().isoformat(),
        "data": data or {},
    }
    transaction.on_commit(lambda: _send(team_group(team_id), payload))


def broadcast_refresh(keys: list[str]) -> None:
    now = timezone.now()
    _send(UPDATES_GROUP, {"type": "broadcast.refresh", "version": int(now.timestamp()), "ts": now.isoformat(), "keys": keys[:50]})
