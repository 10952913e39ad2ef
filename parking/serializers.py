# ==================== PARKING/SERIALIZERS.PY ====================
from rest_framework import serializers
from .models import ParkingSpace, AvailabilityWindow, PricingRecord
from .services import PricingService


class PricingRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingRecord
        fields = ['id', 'hourly_rate', 'daily_rate', 'weekly_rate', 'monthly_rate', 'valid_from', 'created_at']
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {'valid_from': {'required': False}}


class AvailabilityWindowSerializer(serializers.ModelSerializer):
    class Meta:
        model = AvailabilityWindow
        fields = ['id', 'available_start', 'available_end', 'is_available', 'reason', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate(self, data):
        start = data.get('available_start', getattr(self.instance, 'available_start', None))
        end = data.get('available_end', getattr(self.instance, 'available_end', None))
        if start and end and start >= end:
            raise serializers.ValidationError("available_start must be before available_end")
        return data


class ParkingSpaceListSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source='owner.get_full_name', read_only=True)

    class Meta:
        model = ParkingSpace
        fields = ['id', 'title', 'address', 'city', 'space_type', 'is_active', 'owner', 'owner_name', 'created_at']
        read_only_fields = ['owner', 'created_at']


class ParkingSpaceDetailSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source='owner.get_full_name', read_only=True)
    current_pricing = serializers.SerializerMethodField()
    availability_windows = AvailabilityWindowSerializer(many=True, read_only=True)

    class Meta:
        model = ParkingSpace
        fields = ['id', 'owner', 'owner_name', 'title', 'description', 'address', 'city', 'space_type',
                  'has_cctv', 'has_ev_charging', 'is_covered', 'is_active', 'current_pricing',
                  'availability_windows', 'created_at', 'updated_at']
        read_only_fields = ['owner', 'created_at', 'updated_at']

    def get_current_pricing(self, obj):
        record = PricingService.resolve_current_rate(obj)
        return PricingRecordSerializer(record).data if record else None
