from rest_framework import serializers

from care.models import PersonalCareDaily, PersonalCareTaskEvent

SHIFTS = [c[0] for c in PersonalCareDaily.SHIFT_CHOICES]
TIME_PERIODS = ['morning', 'afternoon', 'evening', 'night']
TASK_TYPE = r'^[A-Za-z][A-Za-z0-9_]*$'
CLOCK = r'^([01]\d|2[0-3]):[0-5]\d$'


class DaySerializer(serializers.Serializer):
    residentId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    shift = serializers.ChoiceField(choices=SHIFTS, required=False)


class DayQuerySerializer(serializers.Serializer):
    date = serializers.DateField()


class DayStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in PersonalCareDaily.STATUS_CHOICES])


class TaskEventSerializer(DaySerializer):
    taskType = serializers.RegexField(TASK_TYPE, max_length=32, source='task_type')
    status = serializers.ChoiceField(choices=[c[0] for c in PersonalCareTaskEvent.STATUS_CHOICES])
    timePeriod = serializers.ChoiceField(choices=TIME_PERIODS, source='time_period', required=False)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    assistanceLevel = serializers.ChoiceField(choices=[c[0] for c in PersonalCareTaskEvent.ASSISTANCE_CHOICES],
                                              source='assistance_level', required=False)
    reasonCode = serializers.ChoiceField(choices=[c[0] for c in PersonalCareTaskEvent.REASON_CHOICES],
                                         source='reason_code', required=False)
    reasonNote = serializers.CharField(max_length=2000, source='reason_note', required=False, allow_blank=True)


class ActivitiesSerializer(DaySerializer):
    """Several care activities done together at one time."""
    activities = serializers.ListField(child=serializers.RegexField(TASK_TYPE, max_length=32), min_length=1)
    time = serializers.RegexField(CLOCK)
    staff = serializers.CharField(max_length=200)
    assistedStaff = serializers.CharField(max_length=200, source='assisted_staff', required=False, allow_blank=True)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class ActivityRecordSerializer(DaySerializer):
    time = serializers.RegexField(CLOCK)
    staff = serializers.CharField(max_length=200)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class DayNotesSerializer(DaySerializer):
    notes = serializers.CharField(max_length=2000)
