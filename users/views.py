# ==================== USERS/VIEWS.PY ====================
from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from .models import DriverVehicle
from .serializers import (UserRegistrationSerializer, UserLoginSerializer, UserProfileSerializer,
                          DriverVehicleSerializer)


def _token_payload(user, message):
    refresh = RefreshToken.for_user(user)
    return {
        'user': UserProfileSerializer(user).data,
        'refresh': str(refresh),
        'access': str(refresh.access_token),
        'message': message,
    }


class UserViewSet(viewsets.ViewSet):
    """User registration, login, and profile management"""
    permission_classes = [permissions.AllowAny]

    @action(detail=False, methods=['post'])
    def register(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(_token_payload(user, 'User registered successfully'), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def login(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        return Response(_token_payload(user, 'Login successful'))

    @action(detail=False, methods=['get', 'put'], permission_classes=[permissions.IsAuthenticated])
    def profile(self, request):
        """Get or update the caller's profile"""
        if request.method == 'GET':
            return Response(UserProfileSerializer(request.user).data)

        serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class DriverVehicleViewSet(viewsets.ModelViewSet):
    """Register and manage driver vehicles"""
    serializer_class = DriverVehicleSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return DriverVehicle.objects.filter(driver=self.request.user)

    def perform_create(self, serializer):
        serializer.save(driver=self.request.user)

    @action(detail=False, methods=['get'])
    def active_vehicles(self, request):
        vehicles = self.get_queryset().filter(is_active=True)
        serializer = self.get_serializer(vehicles, many=True)
        return Response(serializer.data)
