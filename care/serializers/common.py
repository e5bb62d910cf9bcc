from rest_framework import serializers


class TeamQuerySerializer(serializers.Serializer):
    teamId = serializers.IntegerField(min_value=1, required=False)


class PagedTeamQuerySerializer(TeamQuerySerializer):
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=100, required=False)


class OrganizationQuerySerializer(serializers.Serializer):
    organizationId = serializers.IntegerField(min_value=1, required=False)


class MultiChoiceListField(serializers.ListField):
    """List of unique values drawn from ``choices``; order preserved."""

    def __init__(self, choices, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('default', list)
        super().__init__(child=serializers.ChoiceField(choices=choices), **kwargs)

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        return list(dict.fromkeys(values))
