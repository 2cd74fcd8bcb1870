"""
Serializers for authentication.

This module provides DRF serializers for:
- User model (read operations)
- Current user updates (username, email, password)
- Registration (create user)

Login and token refresh use simplejwt's own serializers.

Security:
    - Password fields are write-only
    - Email and username uniqueness is checked case-insensitively
"""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from authentication.models import (
    User,
    validate_username_format,
    validate_username_not_reserved,
)


def _validate_username(value, instance=None):
    """Run model validators and the case-insensitive uniqueness check."""
    try:
        validate_username_format(value)
        validate_username_not_reserved(value)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.messages)

    taken = User.objects.filter(username__iexact=value)
    if instance is not None:
        taken = taken.exclude(pk=instance.pk)
    if taken.exists():
        raise serializers.ValidationError("A user with this username already exists.")
    return value


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used by GET /api/v1/auth/user/ and as the registration response.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "date_joined",
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.ModelSerializer):
    """
    Serializer for editing the current user.

    All fields are optional. A new password is hashed before saving.
    """

    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=8,
        style={"input_type": "password"},
    )

    class Meta:
        model = User
        fields = ["email", "username", "password"]
        extra_kwargs = {
            "email": {"required": False},
            "username": {"required": False, "validators": []},
        }

    def validate_email(self, value):
        """Validate that email is not used by another user."""
        email = value.lower().strip()
        if User.objects.filter(email__iexact=email).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_username(self, value):
        if not value:
            return None
        return _validate_username(value, instance=self.instance)

    def validate_password(self, value):
        validate_password(value, user=self.instance)
        return value

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Used by POST /api/v1/auth/register/. The username is optional; it can
    be set later through the current-user endpoint.
    """

    email = serializers.EmailField(required=True)
    username = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=30,
        help_text="Unique username (3-30 chars, alphanumeric + _ + -)",
    )
    password1 = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Password must be at least 8 characters.",
    )
    password2 = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Confirm your password.",
    )

    def validate_email(self, value):
        """Validate that email is not already in use."""
        email = value.lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_username(self, value):
        if not value:
            return ""
        return _validate_username(value)

    def validate_password1(self, value):
        validate_password(value)
        return value

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs["password1"] != attrs["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match."})
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password1"],
            username=validated_data.get("username") or None,
        )
