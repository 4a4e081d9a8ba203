"""
PATH: users/auth_backends.py

AUTH BACKEND: username OR email login

- Identifier containing "@" is looked up as email, otherwise as username.
- Supplying both email= and username= explicitly fails authentication.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

User = get_user_model()


class EmailOrUsernameBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        email_kw = (kwargs.get("email") or "").strip()
        username_kw = (kwargs.get("username") or "").strip()

        if email_kw and username_kw:
            return None

        identifier = (username or email_kw or username_kw or "").strip()
        if not identifier or password is None:
            return None

        lookup = {"email__iexact": identifier} if "@" in identifier else {"username__iexact": identifier}

        try:
            user = User.objects.get(**lookup)
        except User.DoesNotExist:
            return None

        if not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
