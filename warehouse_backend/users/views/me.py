from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import UserSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        tags=["auth"],
        responses={200: UserSerializer},
        description="Get current authenticated user profile",
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)
