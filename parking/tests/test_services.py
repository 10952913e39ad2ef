from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from utils.exceptions import BookingConflict, BookingValidationError
from parking.models import ParkingSpace, PricingRecord
from parking.services import AvailabilityService, PricingService
from users.models import CustomUser


class ParkingServiceTestCase(TestCase):

    def setUp(self):
        self.now = timezone.now()
        self.owner = CustomUser.objects.create_user(
            username='owner', password='ParkPass12345', phone_number='+12025550201', user_type='owner',
        )
        self.space = ParkingSpace.objects.create(owner=self.owner, title='Corner garage', address='1 Main St',
                                                 city='Springfield', space_type='garage')


class AvailabilityServiceTests(ParkingServiceTestCase):

    def test_window_must_contain_the_whole_request(self):
        window = AvailabilityService.open_window(self.space, self.now, self.now + timedelta(days=2))
        find = AvailabilityService.find_containing_window

        self.assertEqual(find(self.space, self.now, self.now + timedelta(days=2)), window)
        self.assertEqual(find(self.space, self.now + timedelta(hours=1), self.now + timedelta(hours=2)), window)
        self.assertIsNone(find(self.space, self.now - timedelta(hours=1), self.now + timedelta(hours=1)))
        self.assertIsNone(find(self.space, self.now + timedelta(days=1), self.now + timedelta(days=3)))

    def test_adjacent_windows_are_not_merged(self):
        AvailabilityService.open_window(self.space, self.now, self.now + timedelta(days=1))
        AvailabilityService.open_window(self.space, self.now + timedelta(days=1), self.now + timedelta(days=2))
        self.assertIsNone(AvailabilityService.find_containing_window(
            self.space, self.now + timedelta(hours=12), self.now + timedelta(hours=36),
        ))

    def test_closed_window_is_ignored(self):
        window = AvailabilityService.open_window(self.space, self.now, self.now + timedelta(days=2))
        window.is_available = False
        window.save()
        self.assertFalse(window.covers(self.now, self.now + timedelta(hours=1)))
        self.assertIsNone(AvailabilityService.find_containing_window(
            self.space, self.now, self.now + timedelta(hours=1),
        ))

    def test_empty_window_is_rejected(self):
        with self.assertRaises(BookingValidationError):
            AvailabilityService.open_window(self.space, self.now, self.now)


class PricingServiceTests(ParkingServiceTestCase):

    def publish(self, hourly, valid_from):
        return PricingService.publish_rate_card(self.space, hourly_rate=Decimal(hourly), daily_rate=Decimal('30'),
                                                monthly_rate=Decimal('400'), valid_from=valid_from)

    def test_no_rate_card(self):
        self.assertIsNone(PricingService.resolve_current_rate(self.space))

    def test_latest_version_in_force_wins(self):
        self.publish('4.00', self.now - timedelta(days=10))
        current = self.publish('5.00', self.now - timedelta(days=1))
        self.publish('9.00', self.now + timedelta(days=5))

        self.assertEqual(PricingService.resolve_current_rate(self.space, at=self.now), current)
        self.assertEqual(
            PricingService.resolve_current_rate(self.space, at=self.now + timedelta(days=6)).hourly_rate,
            Decimal('9.00'),
        )
        self.assertEqual(PricingRecord.objects.filter(parking_space=self.space).count(), 3)

    def test_publishing_defaults_to_now(self):
        record = PricingService.publish_rate_card(self.space, hourly_rate='5', daily_rate='30', monthly_rate='400')
        self.assertIsNone(record.weekly_rate)
        self.assertLessEqual(record.valid_from, timezone.now())
        self.assertEqual(PricingService.resolve_current_rate(self.space), record)

    def test_duplicate_version_conflicts(self):
        self.publish('5.00', self.now)
        with self.assertRaises(BookingConflict):
            self.publish('6.00', self.now)

    def test_rates_are_validated(self):
        with self.assertRaises(BookingValidationError):
            PricingService.publish_rate_card(self.space, hourly_rate=None, daily_rate='30', monthly_rate='400')
        with self.assertRaises(BookingValidationError):
            PricingService.publish_rate_card(self.space, hourly_rate='-1', daily_rate='30', monthly_rate='400')
