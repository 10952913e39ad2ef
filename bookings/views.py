# ============================= BOOKINGS VIEWS =============================
from django.db.models import Q
from rest_framework import viewsets, mixins, status, permissions, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from utils.permissions import IsOwnerOrDriver
from bookings.models import Booking
from bookings.serializers import (
    BookingCreateSerializer,
    BookingRequestSerializer,
    BookingTransitionSerializer,
    BookingListSerializer,
    BookingDetailSerializer,
)
from bookings.services import BookingService


class BookingViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """Booking admission and lifecycle

    POST   /bookings/          create a pending booking
    PATCH  /bookings/{id}/     change booking_status and/or payment_status
    GET    /bookings/host/     bookings on the caller's spaces
    POST   /bookings/quote/    price a request without booking it
    """

    permission_classes = [permissions.IsAuthenticated, IsOwnerOrDriver]
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter
    ]
    filterset_fields = ['booking_status', 'payment_status', 'duration_class', 'parking_space']
    search_fields = ['parking_space__title', 'parking_space__address', 'vehicle__vehicle_number']
    ordering_fields = ['created_at', 'start_time', 'total_amount']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return BookingListSerializer
        return BookingDetailSerializer

    def get_queryset(self):
        user = self.request.user
        bookings = Booking.objects.select_related('parking_space', 'vehicle', 'driver', 'payout')
        if self.action == 'list':
            # Drivers see their own bookings here; owners use /host/
            return bookings.filter(driver=user)
        return bookings.filter(Q(driver=user) | Q(parking_space__owner=user))

    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = BookingService.create_booking(
            renter=request.user,
            space_id=data['parking_space'],
            vehicle_id=data['vehicle_id'],
            start=data['start_time'],
            end=data['end_time'],
            duration_class=data['duration_class'],
        )
        return Response(BookingDetailSerializer(booking).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        """Status machine entry point

        Body: { "booking_status": "confirmed|rejected|cancelled|completed", "payment_status": "paid" }
        """
        serializer = BookingTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = BookingService.transition_booking(
            actor=request.user,
            booking_id=pk,
            new_status=serializer.validated_data.get('booking_status'),
            new_payment_status=serializer.validated_data.get('payment_status'),
        )
        return Response(BookingDetailSerializer(booking).data)

    @action(detail=False, methods=['get'])
    def host(self, request):
        """All bookings on parking spaces the caller owns"""
        bookings = self.filter_queryset(
            Booking.objects.select_related('parking_space', 'vehicle', 'driver').filter(
                parking_space__owner=request.user
            )
        ).order_by('-start_time')
        page = self.paginate_queryset(bookings)
        if page is not None:
            return self.get_paginated_response(BookingListSerializer(page, many=True).data)
        return Response(BookingListSerializer(bookings, many=True).data)

    @action(detail=False, methods=['post'])
    def quote(self, request):
        serializer = BookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        quote = BookingService.quote(
            space_id=data['parking_space'],
            start=data['start_time'],
            end=data['end_time'],
            duration_class=data['duration_class'],
        )
        return Response({key: str(value) for key, value in quote.as_dict().items()})
