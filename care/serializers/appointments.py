from rest_framework import serializers

from care.models import Appointment, AppointmentNote
from care.serializers.common import MultiChoiceListField

APPOINTMENT_STATUSES = [c[0] for c in Appointment.STATUS_CHOICES]


class AppointmentSerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    residentId = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    startTime = serializers.DateTimeField(source='start_time')
    endTime = serializers.DateTimeField(source='end_time', required=False, allow_null=True)
    location = serializers.CharField(max_length=300)
    staff = serializers.CharField(max_length=200, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES, required=False)

    def validate(self, attrs):
        start, end = attrs.get('start_time'), attrs.get('end_time')
        if start and end and end < start:
            raise serializers.ValidationError({'endTime': 'End time cannot be before start time'})
        return attrs


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES)


class ResidentAppointmentsQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES, required=False)
    upcoming = serializers.BooleanField(required=False, default=False)
    limit = serializers.IntegerField(min_value=1, max_value=200, required=False)


class ScopeAppointmentsQuerySerializer(serializers.Serializer):
    teamId = serializers.IntegerField(min_value=1, required=False)
    organizationId = serializers.IntegerField(min_value=1, required=False)
    includeAll = serializers.BooleanField(required=False, default=False)
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES, required=False)


class AppointmentNoteSerializer(serializers.Serializer):
    residentId = serializers.IntegerField(min_value=1)
    category = serializers.ChoiceField(choices=[c[0] for c in AppointmentNote.CATEGORY_CHOICES])
    preparationTime = serializers.ChoiceField(choices=['30_minutes', '1_hour', '2_hours'], source='preparation_time', required=False)
    preparationNotes = serializers.CharField(max_length=2000, source='preparation_notes', required=False, allow_blank=True)
    preferredTime = serializers.ChoiceField(choices=['morning', 'afternoon', 'evening'], source='preferred_time', required=False)
    transportPreference = serializers.ChoiceField(
        choices=['wheelchair', 'walking_aid', 'independent', 'stretcher'], source='transport_preference', required=False,
    )
    instructions = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    transportationNeeds = MultiChoiceListField(
        ['wheelchair_accessible', 'oxygen_support', 'medical_equipment', 'assistance_required'], source='transportation_needs',
    )
    medicalNeeds = MultiChoiceListField(
        ['fasting_required', 'medication_adjustment', 'blood_work', 'vitals_check'], source='medical_needs',
    )
    priority = serializers.ChoiceField(choices=[c[0] for c in AppointmentNote.PRIORITY_CHOICES], required=False, default='medium')


class AppointmentNoteUpdateSerializer(serializers.Serializer):
    preparationNotes = serializers.CharField(max_length=2000, source='preparation_notes', required=False, allow_blank=True)
    instructions = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=[c[0] for c in AppointmentNote.PRIORITY_CHOICES], required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)


class NoteListQuerySerializer(serializers.Serializer):
    activeOnly = serializers.BooleanField(required=False, default=True)
    category = serializers.CharField(max_length=32, required=False)
