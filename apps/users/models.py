from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.validators import RegexValidator
from django.db import models

from apps.common.models import BaseModel

# STD/2025/AB12C 형태, 재시도 실패 시 뒤에 타임스탬프 4자리가 붙을 수 있음
URN_REGEX = r"^(STD|INS)/\d{4}/[A-Z0-9]{5}(\d{4})?$"


class UserManager(BaseUserManager):
    def create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Email is required.")
        if not password:
            raise ValueError("Password is required.")
        email = self.normalize_email(email).strip().lower()
        extra_fields.setdefault("role", User.Role.STUDENT)
        if not extra_fields.get("urn"):
            from apps.users.utils import generate_registration_number

            extra_fields["urn"] = generate_registration_number(extra_fields["role"])

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("role", User.Role.ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("email_verified", True)
        return self.create_user(email, password, **extra_fields)


class User(BaseModel, AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        STUDENT = "student", "Student"
        INSTRUCTOR = "instructor", "Instructor"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=120)
    phone = models.CharField(max_length=40)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STUDENT, db_index=True)
    urn = models.CharField(max_length=20, unique=True, validators=[RegexValidator(URN_REGEX)])

    # 이메일 인증 - 원본 토큰은 메일로만 보내고 DB 에는 sha256 해시만 저장
    email_verified = models.BooleanField(default=False)
    email_verification_token_hash = models.CharField(max_length=64, blank=True, default="", db_index=True)
    email_verification_expires = models.DateTimeField(null=True, blank=True)

    meta = models.JSONField(default=dict, blank=True)

    # 프로필
    full_name = models.CharField(max_length=120, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    branch = models.CharField(max_length=120, blank=True, default="")
    graduation_year = models.CharField(max_length=10, blank=True, default="")
    portfolio = models.URLField(max_length=300, blank=True, default="")
    bio = models.TextField(blank=True, default="")
    gender = models.CharField(max_length=20, blank=True, default="")
    skills = models.JSONField(default=list, blank=True)
    avatar_url = models.TextField(blank=True, default="")

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # 로그인 시 username이 아니라 email로 로그인하게 됨(식별자가 email)
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name", "phone"]

    objects = UserManager()

    class Meta:
        db_table = "user"
        ordering = ("-created_at",)

    def __str__(self):
        return f"{self.email} ({self.urn})"
