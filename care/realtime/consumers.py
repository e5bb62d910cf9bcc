import json

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from care.services.realtime import UPDATES_GROUP, team_group
from care.services.scoping import can_access_team


class UpdatesConsumer(AsyncWebsocketConsumer):
    GROUP = UPDATES_GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def broadcast_refresh(self, event):
        # event: {"type": "broadcast.refresh", "version": int, "ts": "...", "keys": [...]}
        await self.send(json.dumps(event))


class TeamEventsConsumer(AsyncWebsocketConsumer):
    """Per-team change feed.  Clients re-query when an event arrives."""

    async def connect(self):
        user = self.scope.get("user")
        self.team_id = int(self.scope["url_route"]["kwargs"]["team_id"])
        self.group = None
        if not user or not user.is_authenticated:
            await self.close(code=4401)
            return
        allowed = await database_sync_to_async(can_access_team)(user, self.team_id)
        if not allowed:
            await self.close(code=4403)
            return
        self.group = team_group(self.team_id)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        if self.group:
            await self.channel_layer.group_discard(self.group, self.channel_name)

    async def team_event(self, event):
        await self.send(json.dumps(event))
