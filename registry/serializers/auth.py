from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

User = get_user_model()


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


class SignUpSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(write_only=True)

    def validate_username(self, v):
        v = (v or '').strip()
        if User.objects.filter(username__iexact=v).exists():
            raise serializers.ValidationError('A user with that username already exists.')
        return v

    def validate(self, attrs):
        candidate = User(username=attrs['username'], email=attrs.get('email') or '')
        try:
            validate_password(attrs['password'], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': e.messages})
        return attrs
