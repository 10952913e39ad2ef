"""Shared fixtures for booking tests."""
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from parking.models import AvailabilityWindow, ParkingSpace, PricingRecord
from users.models import CustomUser, DriverVehicle

PASSWORD = 'ParkPass12345'


def make_user(username, phone, user_type='driver'):
    return CustomUser.objects.create_user(
        username=username,
        password=PASSWORD,
        phone_number=phone,
        user_type=user_type,
    )


def make_vehicle(driver, number):
    return DriverVehicle.objects.create(driver=driver, vehicle_number=number, vehicle_type='Car')


def make_space(owner, title='Driveway on Elm St', is_active=True):
    return ParkingSpace.objects.create(
        owner=owner,
        title=title,
        address='12 Elm St',
        city='Springfield',
        is_active=is_active,
    )


def open_window(space, start, end, is_available=True):
    return AvailabilityWindow.objects.create(
        owner=space.owner,
        parking_space=space,
        available_start=start,
        available_end=end,
        is_available=is_available,
    )


def publish_rates(space, valid_from, hourly='5.00', daily='30.00', weekly='150.00', monthly='400.00'):
    return PricingRecord.objects.create(
        parking_space=space,
        hourly_rate=Decimal(hourly),
        daily_rate=Decimal(daily),
        weekly_rate=Decimal(weekly) if weekly is not None else None,
        monthly_rate=Decimal(monthly),
        valid_from=valid_from,
    )


def top_of_hour(days_ahead=1):
    """A whole-hour instant `days_ahead` days from now"""
    return timezone.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=days_ahead)


class MarketplaceFixture:
    """Owner with one priced, open space and a driver with one vehicle"""

    def setUp(self):
        super().setUp()
        self.now = timezone.now()
        self.owner = make_user('owner', '+12025550101', user_type='owner')
        self.driver = make_user('driver', '+12025550102')
        self.stranger = make_user('stranger', '+12025550103')
        self.vehicle = make_vehicle(self.driver, 'KA01AB1234')
        self.space = make_space(self.owner)
        self.window = open_window(self.space, self.now - timedelta(days=1), self.now + timedelta(days=120))
        self.rates = publish_rates(self.space, valid_from=self.now - timedelta(days=1))
        self.start = top_of_hour(days_ahead=2)
