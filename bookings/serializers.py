# ==================== BOOKINGS/SERIALIZERS.PY ====================
from rest_framework import serializers
from .models import Booking, BookingPayout
from users.serializers import DriverVehicleSerializer


class BookingRequestSerializer(serializers.Serializer):
    """Shape of a booking or quote request; business rules live in BookingService"""
    parking_space = serializers.IntegerField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    duration_class = serializers.CharField(max_length=10)

    def validate_duration_class(self, value):
        # Unknown classes are reported by the pricing rules with the full list.
        return value.strip().lower()


class BookingCreateSerializer(BookingRequestSerializer):
    vehicle_id = serializers.IntegerField()


class BookingTransitionSerializer(serializers.Serializer):
    booking_status = serializers.CharField(required=False, max_length=20)
    payment_status = serializers.CharField(required=False, max_length=20)

    def to_internal_value(self, data):
        # Accept "status" as a synonym for booking_status.
        if hasattr(data, 'get') and 'status' in data and 'booking_status' not in data:
            data = {**data, 'booking_status': data.get('status')}
        return super().to_internal_value(data)

    def validate(self, data):
        if not data.get('booking_status') and not data.get('payment_status'):
            raise serializers.ValidationError("Provide booking_status or payment_status")
        return data


class BookingPayoutSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingPayout
        fields = ['booking_amount', 'owner_payout_amount', 'payout_status', 'payout_method', 'settled_at']


class BookingListSerializer(serializers.ModelSerializer):
    parking_space_title = serializers.CharField(source='parking_space.title', read_only=True)
    vehicle_number = serializers.CharField(source='vehicle.vehicle_number', read_only=True, default=None)
    driver_name = serializers.CharField(source='driver.get_full_name', read_only=True)

    class Meta:
        model = Booking
        fields = ['id', 'parking_space', 'parking_space_title', 'vehicle_number', 'driver_name', 'duration_class',
                  'start_time', 'end_time', 'booking_status', 'payment_status', 'total_amount', 'created_at']


class BookingDetailSerializer(serializers.ModelSerializer):
    vehicle = DriverVehicleSerializer(read_only=True)
    payout = BookingPayoutSerializer(read_only=True)
    payment_breakdown = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = ['id', 'parking_space', 'availability', 'driver', 'vehicle', 'duration_class',
                  'start_time', 'end_time', 'booking_status', 'payment_status', 'cancellation_reason',
                  'subtotal', 'service_fee', 'total_amount', 'owner_payout', 'payment_breakdown', 'payout',
                  'created_at', 'updated_at']
        read_only_fields = fields

    def get_payment_breakdown(self, obj):
        return {key: str(value) for key, value in obj.get_payment_breakdown().items()}
