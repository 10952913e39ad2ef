# ==================== BOOKINGS/TASKS.PY (CELERY TASKS) ====================
from celery import shared_task
from django.conf import settings
from django.utils import timezone
from datetime import timedelta
import logging

from utils.exceptions import BookingError
from .models import Booking, BookingStatus
from .services import BookingService

logger = logging.getLogger(__name__)


def _move_all(bookings, target, reason, now):
    moved = 0
    for booking_id in bookings.values_list('id', flat=True):
        try:
            BookingService.system_transition(booking_id, target, reason=reason, now=now)
        except BookingError as e:
            # The booking changed since it was selected; the next run sees its new state.
            logger.warning(f"Could not move booking {booking_id} to {target}: {e.detail}")
        else:
            moved += 1
    return moved


@shared_task
def expire_stale_pending_bookings():
    """Cancel pending bookings left unanswered longer than BOOKING_PENDING_HOLD_MINUTES"""
    hold_minutes = settings.BOOKING_PENDING_HOLD_MINUTES
    if hold_minutes <= 0:
        return 0

    now = timezone.now()
    stale = Booking.objects.filter(
        booking_status=BookingStatus.PENDING,
        created_at__lte=now - timedelta(minutes=hold_minutes),
    )
    expired = _move_all(stale, BookingStatus.CANCELLED, 'Expired: not confirmed in time', now)
    logger.info(f"Expired {expired} stale pending bookings")
    return expired


@shared_task
def auto_complete_bookings():
    """Complete confirmed bookings whose end time has passed"""
    now = timezone.now()
    ended = Booking.objects.filter(
        booking_status=BookingStatus.CONFIRMED,
        end_time__lte=now,
    )
    completed = _move_all(ended, BookingStatus.COMPLETED, '', now)
    logger.info(f"Auto-completed {completed} bookings")
    return completed
