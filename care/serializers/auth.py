from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class SwitchTeamSerializer(serializers.Serializer):
    teamId = serializers.IntegerField(min_value=1)


class TeamCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    organizationId = serializers.IntegerField(min_value=1, required=False)


class TeamMemberSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)
    role = serializers.ChoiceField(choices=['lead', 'member'], required=False, default='member')
