from rest_framework import serializers

from care.models import AuditTemplate, AuditResponse, ActionPlan

ANSWER_VALUES = AuditTemplate.ANSWER_VALUES


class AuditQuestionSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    text = serializers.CharField(max_length=1000)
    type = serializers.ChoiceField(choices=sorted(ANSWER_VALUES))


class AuditTemplateSerializer(serializers.Serializer):
    """Create/update payload.  Use ``partial=True`` for updates."""
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=[c[0] for c in AuditTemplate.CATEGORY_CHOICES])
    questions = AuditQuestionSerializer(many=True, allow_empty=False)
    frequency = serializers.ChoiceField(choices=[c[0] for c in AuditTemplate.FREQUENCY_CHOICES], required=False, allow_blank=True)

    def validate_questions(self, v):
        ids = [q['id'] for q in v]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError('Question ids must be unique')
        return v


class AuditTemplateCreateSerializer(AuditTemplateSerializer):
    teamId = serializers.IntegerField(min_value=1, required=False)


class TemplateListQuerySerializer(serializers.Serializer):
    teamId = serializers.IntegerField(min_value=1, required=False)
    organizationId = serializers.IntegerField(min_value=1, required=False)
    category = serializers.ChoiceField(choices=[c[0] for c in AuditTemplate.CATEGORY_CHOICES], required=False)
    includeArchived = serializers.BooleanField(required=False, default=False)


class AuditAnswerSerializer(serializers.Serializer):
    questionId = serializers.CharField(max_length=64)
    value = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class AuditEntrySerializer(serializers.Serializer):
    """Answers for one resident (or one audited item) within a response."""
    residentId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    residentName = serializers.CharField(max_length=200)
    roomNumber = serializers.CharField(max_length=20, required=False, allow_blank=True)
    answers = AuditAnswerSerializer(many=True)
    date = serializers.CharField(max_length=32, required=False, allow_blank=True)
    comment = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class DraftRequestSerializer(serializers.Serializer):
    templateId = serializers.IntegerField(min_value=1)
    teamId = serializers.IntegerField(min_value=1, required=False)


class SaveProgressSerializer(serializers.Serializer):
    responses = AuditEntrySerializer(many=True)
    status = serializers.ChoiceField(
        choices=[AuditResponse.STATUS_DRAFT, AuditResponse.STATUS_IN_PROGRESS],
        required=False, default=AuditResponse.STATUS_IN_PROGRESS,
    )


class ActionPlanInputSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=2000)
    assignedTo = serializers.IntegerField(min_value=1)
    priority = serializers.ChoiceField(choices=[c[0] for c in ActionPlan.PRIORITY_CHOICES])
    dueDate = serializers.DateTimeField(required=False, allow_null=True)


class CompleteAuditSerializer(serializers.Serializer):
    responses = AuditEntrySerializer(many=True)
    actionPlans = ActionPlanInputSerializer(many=True, required=False, default=list)


class AuditResponseListQuerySerializer(serializers.Serializer):
    templateId = serializers.IntegerField(min_value=1)
    teamId = serializers.IntegerField(min_value=1, required=False)


class ActionPlanCreateSerializer(ActionPlanInputSerializer):
    auditResponseId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    templateId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    teamId = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        if not attrs.get('auditResponseId') and not attrs.get('templateId') and not attrs.get('teamId'):
            raise serializers.ValidationError('auditResponseId, templateId or teamId is required')
        return attrs


class ActionPlanUpdateSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=2000, required=False)
    assignedTo = serializers.IntegerField(min_value=1, required=False)
    priority = serializers.ChoiceField(choices=[c[0] for c in ActionPlan.PRIORITY_CHOICES], required=False)
    dueDate = serializers.DateTimeField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=[c[0] for c in ActionPlan.STATUS_CHOICES], required=False)


class ActionPlanListQuerySerializer(serializers.Serializer):
    auditResponseId = serializers.IntegerField(min_value=1, required=False)
    templateId = serializers.IntegerField(min_value=1, required=False)
    assignedTo = serializers.IntegerField(min_value=1, required=False)
    teamId = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=[c[0] for c in ActionPlan.STATUS_CHOICES], required=False)
