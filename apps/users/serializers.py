from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from rest_framework import serializers

from apps.common.fields import CommaSeparatedListField

from .models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "name",
            "phone",
            "role",
            "urn",
            "email_verified",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class SignupSerializer(serializers.ModelSerializer):
    # 회원가입으로는 student / instructor 만 선택 가능
    role = serializers.ChoiceField(
        choices=(User.Role.STUDENT, User.Role.INSTRUCTOR), default=User.Role.STUDENT, required=False
    )

    class Meta:
        model = User
        fields = ("email", "password", "name", "phone", "role")
        extra_kwargs = {
            "password": {"write_only": True},
            # 이메일 중복은 뷰에서 409 로 처리
            "email": {"validators": []},
        }

    def validate_email(self, email):
        return email.strip().lower()

    def validate_name(self, name):
        return name.strip()

    def validate_password(self, password):
        try:
            validate_password(password)  # 장고의 비밀번호 유효성 검사
        except ValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return password

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class EmailSerializer(serializers.Serializer):
    email = serializers.EmailField()


class VerifyTokenSerializer(serializers.Serializer):
    token = serializers.CharField()


class ProfileSerializer(serializers.ModelSerializer):
    skills = CommaSeparatedListField()

    class Meta:
        model = User
        fields = (
            "email",
            "name",
            "phone",
            "urn",
            "role",
            "full_name",
            "city",
            "branch",
            "graduation_year",
            "portfolio",
            "bio",
            "gender",
            "skills",
            "avatar_url",
            "updated_at",
        )
        read_only_fields = ("email", "urn", "role", "updated_at")
