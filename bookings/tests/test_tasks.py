from datetime import timedelta

from django.test import TestCase, override_settings
from django.utils import timezone

from bookings.models import Booking, BookingStatus
from bookings.services import BookingService
from bookings.tasks import auto_complete_bookings, expire_stale_pending_bookings
from .helpers import MarketplaceFixture


class BookingTaskTests(MarketplaceFixture, TestCase):

    def setUp(self):
        super().setUp()
        self.booking = BookingService.create_booking(
            self.driver, self.space.pk, self.vehicle.pk, self.start, self.start + timedelta(hours=1), '1h',
        )

    def age(self, minutes):
        Booking.objects.filter(pk=self.booking.pk).update(created_at=timezone.now() - timedelta(minutes=minutes))

    def test_expiry_is_off_by_default(self):
        self.age(600)
        self.assertEqual(expire_stale_pending_bookings(), 0)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.booking_status, BookingStatus.PENDING)

    @override_settings(BOOKING_PENDING_HOLD_MINUTES=30)
    def test_stale_pending_booking_is_cancelled(self):
        self.age(45)
        self.assertEqual(expire_stale_pending_bookings(), 1)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.booking_status, BookingStatus.CANCELLED)
        self.assertEqual(self.booking.cancellation_reason, 'Expired: not confirmed in time')

    @override_settings(BOOKING_PENDING_HOLD_MINUTES=30)
    def test_fresh_pending_booking_is_kept(self):
        self.age(5)
        self.assertEqual(expire_stale_pending_bookings(), 0)

    def test_ended_confirmed_booking_is_completed(self):
        BookingService.transition_booking(self.owner, self.booking.pk, new_status='confirmed')
        past = timezone.now() - timedelta(hours=3)
        Booking.objects.filter(pk=self.booking.pk).update(start_time=past, end_time=past + timedelta(hours=1))

        self.assertEqual(auto_complete_bookings(), 1)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.booking_status, BookingStatus.COMPLETED)

    def test_pending_and_future_bookings_are_not_completed(self):
        self.assertEqual(auto_complete_bookings(), 0)
        BookingService.transition_booking(self.owner, self.booking.pk, new_status='confirmed')
        self.assertEqual(auto_complete_bookings(), 0)
