"""
PATH: users/authentication.py

JWT AUTHENTICATION (header OR cookie)

SimpleJWT reads `Authorization: Bearer <token>`. Browser clients receive the
access token as an httpOnly cookie from the login endpoint instead, so when no
header is present we fall back to settings.JWT_COOKIE_NAME.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(settings.JWT_COOKIE_NAME)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
