# ==================== BOOKINGS/ADMIN.PY ====================
from django.contrib import admin
from .models import Booking, BookingPayout


class BookingPayoutInline(admin.StackedInline):
    model = BookingPayout
    extra = 0
    readonly_fields = ['booking_amount', 'owner_payout_amount', 'created_at']


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'driver', 'parking_space', 'booking_status', 'payment_status', 'duration_class',
                    'start_time', 'end_time', 'total_amount', 'created_at']
    list_filter = ['booking_status', 'payment_status', 'duration_class', 'created_at']
    search_fields = ['driver__username', 'parking_space__title', 'vehicle__vehicle_number']
    # Amounts are fixed at admission; status changes go through BookingService.
    readonly_fields = ['subtotal', 'service_fee', 'total_amount', 'owner_payout', 'created_at', 'updated_at']
    inlines = [BookingPayoutInline]


@admin.register(BookingPayout)
class BookingPayoutAdmin(admin.ModelAdmin):
    list_display = ['booking', 'booking_amount', 'owner_payout_amount', 'payout_status', 'settled_at']
    list_filter = ['payout_status']
    search_fields = ['booking__id', 'booking__parking_space__title']
