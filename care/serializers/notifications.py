from rest_framework import serializers


class NotificationListQuerySerializer(serializers.Serializer):
    unreadOnly = serializers.BooleanField(required=False, default=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    pageSize = serializers.IntegerField(min_value=1, max_value=100, required=False, default=20)


class MarkReadSerializer(serializers.Serializer):
    """Omit ``ids`` to mark everything read."""
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, allow_empty=True)
