import logging

from django.utils import timezone

from parking.models import ParkingSpace
from parking.services import AvailabilityService, PricingService
from users.models import DriverVehicle
from utils.exceptions import (
    BookingConflict, BookingForbidden, BookingValidationError, ResourceNotFound,
)
from utils.transactions import run_serializable
from .models import Booking, BookingPayout, BookingStatus, RELEASED_STATUSES
from .pricing import build_quote, normalize_duration_class, plan_for, subtotal_for
from .state_machine import assert_transition, parse_payment_status, parse_status

logger = logging.getLogger(__name__)


def has_overlap(space, start, end, exclude_booking_id=None):
    """True if a booking still holding the space intersects [start, end)"""
    bookings = Booking.objects.filter(
        parking_space=space,
        start_time__lt=end,
        end_time__gt=start,
    )
    for released in RELEASED_STATUSES:
        bookings = bookings.exclude(booking_status__iexact=released)
    if exclude_booking_id is not None:
        bookings = bookings.exclude(pk=exclude_booking_id)
    return bookings.exists()


def _check_request_times(start, end, now):
    if start <= now:
        raise BookingValidationError('Start time must be in the future.')
    if end <= start:
        raise BookingValidationError('End time must be after start time.')


def _load_space(space_id, lock=False):
    spaces = ParkingSpace.objects.filter(pk=space_id)
    if lock:
        # Serializes admissions per space where the backend supports row locks.
        spaces = spaces.select_for_update()
    space = spaces.first()
    if space is None:
        raise ResourceNotFound('Parking space not found.')
    return space


def _open_window_or_none(space, start, end):
    """Window admitting [start, end) on an active space, or None"""
    if not space.is_active:
        return None
    return AvailabilityService.find_containing_window(space, start, end)


def _require_open_window(space, start, end):
    window = _open_window_or_none(space, start, end)
    if window is None:
        raise BookingValidationError('Space not available for these dates.')
    return window


def _lock_booking(booking_id):
    try:
        booking_id = int(booking_id)
    except (TypeError, ValueError):
        raise ResourceNotFound('Booking not found.')
    booking = Booking.objects.select_for_update().filter(pk=booking_id).first()
    if booking is None:
        raise ResourceNotFound('Booking not found.')
    return booking


def _authorize_change(actor, booking, target, payment_status):
    is_driver = booking.driver_id == actor.pk
    is_owner = booking.parking_space.owner_id == actor.pk

    if target == BookingStatus.CANCELLED:
        if not (is_driver or is_owner):
            raise BookingForbidden('Only the driver or parking space owner can cancel this booking.')
    elif target == BookingStatus.REJECTED:
        if not is_owner:
            raise BookingForbidden('Only the parking space owner can reject this booking.')
    elif target is not None and not is_owner:
        raise BookingForbidden('Only the parking space owner can confirm or complete this booking.')

    if payment_status is not None and not is_driver:
        raise BookingForbidden('Only the booking driver can update payment status.')


class BookingService:
    """Admission and lifecycle of bookings.

    Every write re-derives its preconditions inside one serializable
    transaction (see utils.transactions.run_serializable).
    """

    @staticmethod
    def quote(space_id, start, end, duration_class, now=None):
        """Price a request without reserving anything"""
        now = now or timezone.now()
        _check_request_times(start, end, now)
        plan = plan_for(duration_class, start, end)
        space = _load_space(space_id)
        return build_quote(subtotal_for(plan, PricingService.resolve_current_rate(space, at=now)))

    @staticmethod
    def create_booking(renter, space_id, vehicle_id, start, end, duration_class, now=None):
        now = now or timezone.now()
        _check_request_times(start, end, now)
        plan = plan_for(duration_class, start, end)
        duration_class = normalize_duration_class(duration_class)

        vehicle = DriverVehicle.objects.filter(pk=vehicle_id, driver=renter).first()
        if vehicle is None:
            raise ResourceNotFound('Vehicle not found or not registered to you.')

        def admit():
            space = _load_space(space_id, lock=True)
            window = _require_open_window(space, start, end)
            if space.owner_id == renter.pk:
                raise BookingValidationError('You cannot book your own parking space.')

            quote = build_quote(subtotal_for(plan, PricingService.resolve_current_rate(space, at=now)))

            if has_overlap(space, start, end):
                raise BookingConflict('Parking space already booked for selected dates.')

            booking = Booking.objects.create(
                driver=renter,
                parking_space=space,
                availability=window,
                vehicle=vehicle,
                duration_class=duration_class,
                start_time=start,
                end_time=end,
                booking_status=BookingStatus.PENDING,
                **quote.as_dict(),
            )
            BookingPayout.objects.create(
                booking=booking,
                booking_amount=quote.total_amount,
                owner_payout_amount=quote.owner_payout,
            )
            return booking

        booking = run_serializable(admit)
        logger.info(
            f"Booking {booking.id} created for space {booking.parking_space_id} by {renter.username}: "
            f"{start} - {end} ({duration_class}), total {booking.total_amount}"
        )
        return booking

    @staticmethod
    def transition_booking(actor, booking_id, new_status=None, new_payment_status=None, now=None):
        """Apply a status and/or payment status change requested by `actor`"""
        if new_status is None and new_payment_status is None:
            raise BookingValidationError('Provide booking_status or payment_status.')
        target = parse_status(new_status) if new_status is not None else None
        payment_status = parse_payment_status(new_payment_status) if new_payment_status is not None else None
        now = now or timezone.now()

        def change():
            booking = _lock_booking(booking_id)
            _authorize_change(actor, booking, target, payment_status)

            changed = []
            if target is not None and BookingService._apply_status(booking, target, now, actor=actor):
                changed += ['booking_status', 'cancellation_reason']
            if payment_status is not None and booking.payment_status != payment_status:
                booking.payment_status = payment_status
                changed.append('payment_status')
            if changed:
                booking.save(update_fields=changed + ['updated_at'])
            return booking

        booking = run_serializable(change)
        logger.info(
            f"Booking {booking.id} updated by {actor.username}: "
            f"status={booking.booking_status}, payment_status={booking.payment_status}"
        )
        return booking

    @staticmethod
    def system_transition(booking_id, new_status, reason='', now=None):
        """Status change made by the platform itself (scheduled jobs); no caller authorization"""
        target = parse_status(new_status)
        now = now or timezone.now()

        def change():
            booking = _lock_booking(booking_id)
            if BookingService._apply_status(booking, target, now, reason=reason):
                booking.save(update_fields=['booking_status', 'cancellation_reason', 'updated_at'])
            return booking

        return run_serializable(change)

    @staticmethod
    def _apply_status(booking, target, now, actor=None, reason=''):
        """Validate and apply one edge of the state machine; False for a no-op"""
        current = parse_status(booking.booking_status)
        assert_transition(current, target)
        if current == target:
            return False

        space = booking.parking_space
        if target == BookingStatus.CONFIRMED:
            if _open_window_or_none(space, booking.start_time, booking.end_time) is None:
                raise BookingConflict('The space is no longer available for this booking\'s dates.')
            if has_overlap(space, booking.start_time, booking.end_time, exclude_booking_id=booking.pk):
                raise BookingConflict('Another booking already holds these dates.')
        elif target == BookingStatus.COMPLETED:
            if now < booking.end_time:
                raise BookingValidationError('Cannot complete a booking that has not ended yet.')
        elif target == BookingStatus.CANCELLED:
            if not reason and actor is not None:
                reason = 'Cancelled by driver' if booking.driver_id == actor.pk else 'Cancelled by owner'
            booking.cancellation_reason = reason
        elif target == BookingStatus.REJECTED:
            booking.cancellation_reason = reason or 'Rejected by owner'

        booking.booking_status = target
        return True
