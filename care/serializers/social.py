from rest_framework import serializers

from care.models import SocialActivity, SocialConnection


def _choices(pairs):
    return [c[0] for c in pairs]


class SocialActivitySerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    residentId = serializers.IntegerField(min_value=1)
    activityDate = serializers.DateField(source='activity_date')
    activityTime = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', source='activity_time',
                                          required=False, allow_blank=True)
    activityType = serializers.ChoiceField(choices=_choices(SocialActivity.ACTIVITY_TYPE_CHOICES), source='activity_type')
    activityName = serializers.CharField(max_length=200, source='activity_name')
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    participants = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    duration = serializers.IntegerField(min_value=0, max_value=24 * 60, required=False, allow_null=True)
    engagementLevel = serializers.ChoiceField(choices=_choices(SocialActivity.ENGAGEMENT_CHOICES), source='engagement_level')
    moodBefore = serializers.ChoiceField(choices=_choices(SocialActivity.MOOD_CHOICES), source='mood_before', required=False)
    moodAfter = serializers.ChoiceField(choices=_choices(SocialActivity.MOOD_CHOICES), source='mood_after', required=False)
    socialInteraction = serializers.ChoiceField(choices=_choices(SocialActivity.INTERACTION_CHOICES),
                                                source='social_interaction', required=False)
    enjoyment = serializers.ChoiceField(choices=_choices(SocialActivity.ENJOYMENT_CHOICES), required=False)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    recordedBy = serializers.CharField(max_length=200, source='recorded_by')


class ActivityListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=100, required=False)


class RecentActivityQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=10)


class DateRangeQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField()
    endDate = serializers.DateField()

    def validate(self, attrs):
        if attrs['endDate'] < attrs['startDate']:
            raise serializers.ValidationError('endDate cannot be before startDate')
        return attrs


class SocialConnectionSerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    residentId = serializers.IntegerField(min_value=1)
    name = serializers.CharField(max_length=200)
    relationship = serializers.CharField(max_length=100)
    connectionType = serializers.ChoiceField(choices=_choices(SocialConnection.TYPE_CHOICES), source='connection_type')
    contactFrequency = serializers.CharField(max_length=100, source='contact_frequency', required=False, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class ConnectionListQuerySerializer(serializers.Serializer):
    connectionType = serializers.ChoiceField(choices=_choices(SocialConnection.TYPE_CHOICES), required=False)
