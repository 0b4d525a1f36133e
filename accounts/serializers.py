from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

User = get_user_model()

PUBLIC_ROLES = (User.Roles.BUYER, User.Roles.SELLER)


def _validate_seller_fields(role, seller_type):
    """Sellers must say what kind of seller they are, buyers must not."""
    if role == User.Roles.SELLER and not seller_type:
        raise serializers.ValidationError({"seller_type": "Seller type is required for sellers."})
    if role != User.Roles.SELLER and seller_type:
        raise serializers.ValidationError({"seller_type": "Only sellers can have a seller type."})


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id", "first_name", "last_name",
            "email", "role", "seller_type", "company_name",
            "phone_number", "profile_image_url",
        ]
        read_only_fields = ["id"]


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=True)
    password_confirm = serializers.CharField(write_only=True, required=True, style={"input_type": "password"})
    role = serializers.ChoiceField(choices=PUBLIC_ROLES, default=User.Roles.BUYER)

    class Meta:
        model = User
        fields = [
            "id", "first_name", "last_name",
            "email", "password", "password_confirm",
            "role", "seller_type", "company_name", "phone_number",
        ]
        read_only_fields = ["id"]

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate(self, attrs):
        pw = attrs.get("password")
        pw2 = attrs.pop("password_confirm", None)
        if pw != pw2:
            raise serializers.ValidationError({"password_confirm": "The passwords do not match."})
        validate_password(pw)
        _validate_seller_fields(attrs.get("role", User.Roles.BUYER), attrs.get("seller_type", ""))
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    User profile update. Role changes go through support, not through the profile.
    """

    class Meta:
        model = User
        fields = [
            "first_name", "last_name",
            "phone_number", "profile_image_url",
            "email", "seller_type", "company_name",
        ]

    def validate_email(self, value):
        user = self.instance
        if user and user.email.lower() == value.lower():
            return value
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email is already taken.")
        return value

    def validate(self, attrs):
        if "seller_type" in attrs:
            _validate_seller_fields(self.instance.role, attrs["seller_type"])
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True, style={"input_type": "password"})
    new_password = serializers.CharField(write_only=True, style={"input_type": "password"})
    new_password_confirm = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs):
        user = self.context["request"].user
        if not user.check_password(attrs.get("old_password")):
            raise serializers.ValidationError({"old_password": "Incorrect current password."})
        new = attrs.get("new_password")
        new2 = attrs.pop("new_password_confirm", None)
        if new != new2:
            raise serializers.ValidationError({"new_password_confirm": "Confirmation does not match."})
        validate_password(new, user=user)
        return attrs

    def save(self, **kwargs):
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
