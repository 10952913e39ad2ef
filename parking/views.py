# ============================= PARKINGSPACE VIEWS =============================
import logging

from rest_framework import viewsets, status, permissions, filters, mixins
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from utils.permissions import IsOwnerOrReadOnly
from .filters import ParkingSpaceFilter
from .models import ParkingSpace, AvailabilityWindow
from .serializers import (
    ParkingSpaceListSerializer,
    ParkingSpaceDetailSerializer,
    AvailabilityWindowSerializer,
    PricingRecordSerializer,
)
from .services import AvailabilityService, PricingService

logger = logging.getLogger(__name__)


class ParkingSpaceViewSet(viewsets.ModelViewSet):
    """Parking space listing plus the owner-managed availability and pricing"""

    queryset = ParkingSpace.objects.select_related('owner')
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter
    ]
    filterset_class = ParkingSpaceFilter
    search_fields = ['title', 'address', 'city', 'description']
    ordering_fields = ['created_at', 'title']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return ParkingSpaceListSerializer
        return ParkingSpaceDetailSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        # Spaces with several matching windows would otherwise repeat.
        return queryset.distinct()

    def perform_create(self, serializer):
        space = serializer.save(owner=self.request.user)
        logger.info(f"Parking space {space.id} listed by {self.request.user.username}")

    def _require_owner(self, space):
        if self.request.user != space.owner:
            raise PermissionDenied("Only the space owner can manage this space")

    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated])
    def my_spaces(self, request):
        """Get all parking spaces owned by current user"""
        spaces = ParkingSpace.objects.filter(owner=request.user)
        serializer = ParkingSpaceListSerializer(spaces, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['get', 'post'])
    def availability(self, request, pk=None):
        """List the space's windows, or (owner) open a new one

        Body: { "available_start": ISO, "available_end": ISO, "reason": "" }
        """
        space = self.get_object()
        if request.method == 'GET':
            serializer = AvailabilityWindowSerializer(space.availability_windows.all(), many=True)
            return Response(serializer.data)

        self._require_owner(space)
        serializer = AvailabilityWindowSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        window = AvailabilityService.open_window(
            space,
            serializer.validated_data['available_start'],
            serializer.validated_data['available_end'],
            reason=serializer.validated_data.get('reason', ''),
        )
        return Response(AvailabilityWindowSerializer(window).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get', 'post'])
    def pricing(self, request, pk=None):
        """Current rate card, or (owner) publish a new version

        Body: { "hourly_rate": 5, "daily_rate": 30, "weekly_rate": 150, "monthly_rate": 400 }
        """
        space = self.get_object()
        if request.method == 'GET':
            record = PricingService.resolve_current_rate(space)
            if record is None:
                return Response({'error': 'Pricing not configured', 'code': 'not_found'},
                                status=status.HTTP_404_NOT_FOUND)
            return Response(PricingRecordSerializer(record).data)

        self._require_owner(space)
        serializer = PricingRecordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = PricingService.publish_rate_card(space, **serializer.validated_data)
        return Response(PricingRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'])
    def pricing_history(self, request, pk=None):
        space = self.get_object()
        serializer = PricingRecordSerializer(space.pricing_records.all(), many=True)
        return Response(serializer.data)


class AvailabilityWindowViewSet(mixins.ListModelMixin,
                                mixins.RetrieveModelMixin,
                                mixins.UpdateModelMixin,
                                viewsets.GenericViewSet):
    """Owner edits to existing windows, e.g. switching one off"""
    serializer_class = AvailabilityWindowSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return AvailabilityWindow.objects.filter(parking_space__owner=self.request.user)

    def perform_update(self, serializer):
        window = serializer.save()
        logger.info(
            f"Availability window {window.id} on space {window.parking_space_id} updated: "
            f"is_available={window.is_available}"
        )
