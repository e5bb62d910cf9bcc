from rest_framework import serializers

from care.serializers.common import MultiChoiceListField

# legacy categories stay readable but cannot be created
CARE_NOTE_CATEGORIES = ['shower_bath', 'toileting', 'mobility_positioning', 'communication', 'safety_alerts']
PRIORITIES = ['low', 'medium', 'high']


class QuickCareNoteSerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    residentId = serializers.IntegerField(min_value=1)
    category = serializers.ChoiceField(choices=CARE_NOTE_CATEGORIES)
    showerOrBath = serializers.ChoiceField(choices=['shower', 'bath'], source='shower_or_bath', required=False)
    preferredTime = serializers.ChoiceField(choices=['morning', 'afternoon', 'evening'], source='preferred_time', required=False)
    toiletType = serializers.ChoiceField(choices=['toilet', 'commode', 'pad'], source='toilet_type', required=False)
    assistanceLevel = serializers.ChoiceField(choices=['independent', '1_staff', '2_staff'], source='assistance_level', required=False)
    walkingAid = serializers.ChoiceField(choices=['frame', 'stick', 'wheelchair', 'none'], source='walking_aid', required=False)
    communicationNeeds = MultiChoiceListField(
        ['hearing_aid', 'glasses', 'non_verbal', 'memory_support'], source='communication_needs',
    )
    safetyAlerts = MultiChoiceListField(
        ['high_falls_risk', 'no_unattended_bathroom', 'chair_bed_alarm'], source='safety_alerts',
    )
    priority = serializers.ChoiceField(choices=PRIORITIES, required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)
