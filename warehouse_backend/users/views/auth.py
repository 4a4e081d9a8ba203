"""
PATH: users/views/auth.py

AUTH ENDPOINTS

- register: superadmin-only user creation
- login:    username OR email + password -> JWT pair, access token also set as
            httpOnly cookie (settings.JWT_COOKIE_NAME)
- logout:   clears the cookie
"""

from django.conf import settings
from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from permissions.roles import CAP_USERS_MANAGE, HasCapability
from users.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
)


class RegisterView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_MANAGE
    serializer_class = RegisterSerializer

    @extend_schema(
        tags=["auth"],
        request=RegisterSerializer,
        responses={201: UserSerializer},
        description="Create a user account (superadmin only)",
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = LoginSerializer

    @extend_schema(
        tags=["auth"],
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
        description="Authenticate with username or email and password",
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request=request,
            username=serializer.validated_data["identifier"],
            password=serializer.validated_data["password"],
        )

        if not user:
            return Response(
                {"detail": "Invalid credentials"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        refresh = RefreshToken.for_user(user)
        access = str(refresh.access_token)

        response = Response(
            {
                "message": "Login successful",
                "access": access,
                "refresh": str(refresh),
                "user": UserSerializer(user).data,
            }
        )
        response.set_cookie(
            settings.JWT_COOKIE_NAME,
            access,
            max_age=int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds()),
            httponly=True,
            secure=settings.JWT_COOKIE_SECURE,
            samesite="Lax",
        )
        return response


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(tags=["auth"], request=None, responses={200: dict})
    def post(self, request):
        response = Response({"message": "Logged out"})
        response.delete_cookie(settings.JWT_COOKIE_NAME, samesite="Lax")
        return response
