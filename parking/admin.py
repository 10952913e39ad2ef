# ==================== PARKING/ADMIN.PY ====================
from django.contrib import admin
from .models import ParkingSpace, AvailabilityWindow, PricingRecord


class AvailabilityWindowInline(admin.TabularInline):
    model = AvailabilityWindow
    extra = 0
    fields = ['available_start', 'available_end', 'is_available', 'reason']


class PricingRecordInline(admin.TabularInline):
    model = PricingRecord
    extra = 0
    fields = ['valid_from', 'hourly_rate', 'daily_rate', 'weekly_rate', 'monthly_rate']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        # Rate cards are published through the API so versions stay append-only.
        return False


@admin.register(ParkingSpace)
class ParkingSpaceAdmin(admin.ModelAdmin):
    list_display = ['title', 'owner', 'city', 'space_type', 'is_active', 'created_at']
    list_filter = ['space_type', 'is_active', 'city', 'created_at']
    search_fields = ['title', 'address', 'owner__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [AvailabilityWindowInline, PricingRecordInline]
    fieldsets = (
        ('Basic Info', {'fields': ('owner', 'title', 'description', 'address', 'city')}),
        ('Space Details', {'fields': ('space_type', 'is_active')}),
        ('Amenities', {'fields': ('has_cctv', 'has_ev_charging', 'is_covered')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    list_display = ['parking_space', 'owner', 'available_start', 'available_end', 'is_available']
    list_filter = ['is_available']
    search_fields = ['parking_space__title', 'owner__username']
