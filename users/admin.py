from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser, DriverVehicle


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ['username', 'email', 'user_type', 'phone_number', 'is_verified', 'created_at']
    list_filter = ['user_type', 'is_verified']
    fieldsets = UserAdmin.fieldsets + (
        ('Marketplace', {'fields': ('user_type', 'phone_number', 'profile_picture', 'is_verified')}),
    )


@admin.register(DriverVehicle)
class DriverVehicleAdmin(admin.ModelAdmin):
    list_display = ['vehicle_number', 'driver', 'vehicle_type', 'is_active', 'created_at']
    list_filter = ['vehicle_type', 'is_active']
    search_fields = ['vehicle_number', 'driver__username']
