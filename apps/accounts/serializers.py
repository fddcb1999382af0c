from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Member profile returned by login and /api/auth/user/."""

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name', 'created_at', 'last_login']
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Credentials posted to /api/auth/login/."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False, style={'input_type': 'password'})
