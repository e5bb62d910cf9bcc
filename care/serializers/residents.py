from django.utils import timezone
from rest_framework import serializers

from care.models import Resident, ResidentAuditItem

DEPENDENCY_LEVELS = ['Independent', 'Supervision Needed', 'Assistance Needed', 'Fully Dependent']
DEPENDENCY_AREAS = ('mobility', 'eating', 'dressing', 'toileting')
RISK_LEVELS = ('low', 'medium', 'high')


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    phoneNumber = serializers.CharField(max_length=30, source='phone')
    relationship = serializers.CharField(max_length=100)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    isPrimary = serializers.BooleanField(source='is_primary', required=False, default=False)


class ResidentSerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    firstName = serializers.CharField(max_length=100, source='first_name')
    lastName = serializers.CharField(max_length=100, source='last_name')
    dateOfBirth = serializers.DateField(source='date_of_birth')
    phoneNumber = serializers.CharField(max_length=30, source='phone', required=False, allow_blank=True)
    roomNumber = serializers.CharField(max_length=20, source='room_number', required=False, allow_blank=True)
    admissionDate = serializers.DateField(source='admission_date')
    nhsHealthNumber = serializers.CharField(max_length=20, source='nhs_number', required=False, allow_blank=True)
    gpName = serializers.CharField(max_length=200, source='gp_name', required=False, allow_blank=True)
    gpAddress = serializers.CharField(max_length=500, source='gp_address', required=False, allow_blank=True)
    gpPhone = serializers.CharField(max_length=30, source='gp_phone', required=False, allow_blank=True)
    careManagerName = serializers.CharField(max_length=200, source='care_manager_name', required=False, allow_blank=True)
    careManagerAddress = serializers.CharField(max_length=500, source='care_manager_address', required=False, allow_blank=True)
    careManagerPhone = serializers.CharField(max_length=30, source='care_manager_phone', required=False, allow_blank=True)
    healthConditions = serializers.JSONField(source='health_conditions', required=False)
    risks = serializers.JSONField(required=False)
    dependencies = serializers.JSONField(required=False)
    allergies = serializers.CharField(required=False, allow_blank=True)
    medications = serializers.CharField(required=False, allow_blank=True)
    medicalConditions = serializers.CharField(source='medical_conditions', required=False, allow_blank=True)

    def validate_dateOfBirth(self, v):
        if v > timezone.localdate():
            raise serializers.ValidationError('Date of birth cannot be in the future')
        return v

    def validate_healthConditions(self, v):
        if not isinstance(v, list):
            raise serializers.ValidationError('Expected a list')
        out = []
        for item in v:
            if isinstance(item, str) and item.strip():
                out.append({'condition': item.strip()})
            elif isinstance(item, dict) and isinstance(item.get('condition'), str) and item['condition'].strip():
                out.append({'condition': item['condition'].strip()})
            else:
                raise serializers.ValidationError('Each condition must be a string or {condition}')
        return out

    def validate_risks(self, v):
        if not isinstance(v, list):
            raise serializers.ValidationError('Expected a list')
        out = []
        for item in v:
            if isinstance(item, str) and item.strip():
                out.append({'risk': item.strip()})
            elif isinstance(item, dict) and isinstance(item.get('risk'), str) and item['risk'].strip():
                level = item.get('level')
                if level is not None and level not in RISK_LEVELS:
                    raise serializers.ValidationError(f'Invalid risk level: {level}')
                out.append({'risk': item['risk'].strip(), **({'level': level} if level else {})})
            else:
                raise serializers.ValidationError('Each risk must be a string or {risk, level}')
        return out

    def validate_dependencies(self, v):
        # legacy: a flat list of labels
        if isinstance(v, list):
            if not all(isinstance(x, str) for x in v):
                raise serializers.ValidationError('Legacy dependencies must be strings')
            return v
        if not isinstance(v, dict):
            raise serializers.ValidationError('Expected an object')
        missing = [k for k in DEPENDENCY_AREAS if k not in v]
        if missing:
            raise serializers.ValidationError(f'Missing: {", ".join(missing)}')
        extra = set(v) - set(DEPENDENCY_AREAS)
        if extra:
            raise serializers.ValidationError(f'Unknown: {", ".join(sorted(extra))}')
        for area in DEPENDENCY_AREAS:
            if v[area] not in DEPENDENCY_LEVELS:
                raise serializers.ValidationError(f'Invalid {area} level: {v[area]}')
        return v

    def validate(self, attrs):
        dob = attrs.get('date_of_birth')
        admitted = attrs.get('admission_date')
        if dob and admitted and admitted < dob:
            raise serializers.ValidationError({'admissionDate': 'Admission cannot precede date of birth'})
        return attrs


class ResidentCreateSerializer(ResidentSerializer):
    teamId = serializers.IntegerField(min_value=1, required=False)
    emergencyContacts = EmergencyContactSerializer(many=True, required=False)


class ResidentListQuerySerializer(serializers.Serializer):
    teamId = serializers.IntegerField(min_value=1, required=False)
    activeOnly = serializers.BooleanField(required=False, default=True)
    q = serializers.CharField(max_length=64, required=False)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False)


class ResidentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Resident.STATUS_CHOICES])
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ResidentOverviewQuerySerializer(serializers.Serializer):
    includeAuditLog = serializers.BooleanField(required=False, default=False)


class ActivityQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False, default=50)


class ResidentAuditItemSerializer(serializers.Serializer):
    itemName = serializers.CharField(max_length=200, source='item_name')
    status = serializers.ChoiceField(choices=[c[0] for c in ResidentAuditItem.STATUS_CHOICES])
    auditorName = serializers.CharField(max_length=200, source='auditor_name', required=False, allow_blank=True)
    lastAudited = serializers.DateField(source='last_audited', required=False, allow_null=True)
    dueDate = serializers.DateField(source='due_date', required=False, allow_null=True)
