"""
PATH: users/models/user.py

CUSTOM USER MODEL

- Login accepts EITHER username OR email (see users/auth_backends.py).
- Registration may supply both, or only one; the manager derives the other.
- role drives endpoint access (see permissions/roles.py):
    superadmin / admin -> may mutate stock-affecting data
    user               -> read-only
- The user id is the actor id stamped on created_by / updated_by everywhere.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def _unique_username(self, base: str) -> str:
        base = (base or "user").strip().lower()
        candidate = base
        i = 1
        while self.model.objects.filter(username__iexact=candidate).exists():
            i += 1
            candidate = f"{base}{i}"
        return candidate

    def create_user(self, email=None, password=None, **extra_fields):
        """
        Supports:
        - create_user(email="a@b.com", password="x", username="john")
        - create_user(username="clerk", password="x")
        - create_user(email="a@b.com", password="x")
        """
        username = (extra_fields.get("username") or "").strip()
        email = (email or extra_fields.get("email") or "").strip()

        if not email and not username:
            raise ValueError("Provide at least email or username")

        if not email and username:
            email = f"{username.lower()}@local.test"

        email = self.normalize_email(email)

        if not username:
            username = self._unique_username(email.split("@")[0])

        extra_fields["email"] = email
        extra_fields["username"] = username
        extra_fields.setdefault("is_active", True)

        user = self.model(**extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", User.ROLE_SUPERADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_SUPERADMIN = "superadmin"
    ROLE_ADMIN = "admin"
    ROLE_USER = "user"

    ROLE_CHOICES = [
        (ROLE_SUPERADMIN, "Super Admin"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True)

    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if self.username is not None:
            self.username = self.username.strip()

        if not self.email and not self.username:
            raise ValidationError("User must have at least email or username")

    def __str__(self):
        return f"{self.username or self.email} ({self.role})"
