from rest_framework import serializers

from care.models import MovingHandlingAssessment

RISK_STATES = ['ALWAYS', 'SOMETIMES', 'NEVER']
LIMBS = [c[0] for c in MovingHandlingAssessment.LIMB_CHOICES]


class MovingHandlingSerializer(serializers.Serializer):
    """Flat assessment form.

    Each risk factor arrives as ``<factor>State`` plus optional
    ``<factor>Comments`` and is folded into ``risk_factors``.  Use
    ``partial=True`` for draft updates.
    """
    residentId = serializers.IntegerField(min_value=1)
    savedAsDraft = serializers.BooleanField(source='saved_as_draft', required=False, default=False)

    residentName = serializers.CharField(max_length=200, source='resident_name')
    dateOfBirth = serializers.DateField(source='date_of_birth')
    bedroomNumber = serializers.CharField(max_length=20, source='bedroom_number')
    weight = serializers.FloatField(min_value=0)
    height = serializers.FloatField(min_value=0)
    historyOfFalls = serializers.BooleanField(source='history_of_falls')

    independentMobility = serializers.BooleanField(source='independent_mobility')
    canWeightBear = serializers.ChoiceField(choices=[c[0] for c in MovingHandlingAssessment.WEIGHT_BEARING_CHOICES],
                                            source='can_weight_bear')
    limbUpperRight = serializers.ChoiceField(choices=LIMBS, source='limb_upper_right')
    limbUpperLeft = serializers.ChoiceField(choices=LIMBS, source='limb_upper_left')
    limbLowerRight = serializers.ChoiceField(choices=LIMBS, source='limb_lower_right')
    limbLowerLeft = serializers.ChoiceField(choices=LIMBS, source='limb_lower_left')
    equipmentUsed = serializers.CharField(max_length=2000, source='equipment_used', required=False, allow_blank=True)
    needsRiskStaff = serializers.CharField(max_length=2000, source='needs_risk_staff', required=False, allow_blank=True)

    completedBy = serializers.CharField(max_length=200, source='completed_by')
    jobRole = serializers.CharField(max_length=200, source='job_role')
    signature = serializers.CharField(max_length=200)
    completionDate = serializers.DateField(source='completion_date')

    def get_fields(self):
        fields = super().get_fields()
        for factor in MovingHandlingAssessment.RISK_FACTORS:
            fields[f'{factor}State'] = serializers.ChoiceField(choices=RISK_STATES)
            fields[f'{factor}Comments'] = serializers.CharField(max_length=1000, required=False, allow_blank=True)
        return fields

    def validate(self, attrs):
        risk_factors = {}
        for factor in MovingHandlingAssessment.RISK_FACTORS:
            state = attrs.pop(f'{factor}State', None)
            comments = attrs.pop(f'{factor}Comments', None)
            if state is None and comments is None:
                continue
            entry = {'state': state}
            if comments:
                entry['comments'] = comments
            risk_factors[factor] = entry
        if risk_factors:
            attrs['risk_factors'] = risk_factors
        return attrs
