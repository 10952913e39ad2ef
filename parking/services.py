import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from utils.exceptions import BookingConflict, BookingValidationError
from .models import AvailabilityWindow, PricingRecord

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Read side of the owner-declared availability windows"""

    @staticmethod
    def find_containing_window(space, start, end):
        """Return an open window covering [start, end), or None"""
        return AvailabilityWindow.objects.filter(
            parking_space=space,
            is_available=True,
            available_start__lte=start,
            available_end__gte=end,
        ).order_by('available_start').first()

    @staticmethod
    def open_window(space, start, end, reason=''):
        if start >= end:
            raise BookingValidationError('available_start must be before available_end.')
        window = AvailabilityWindow.objects.create(
            owner=space.owner,
            parking_space=space,
            available_start=start,
            available_end=end,
            is_available=True,
            reason=reason,
        )
        logger.info(f"Availability window {window.id} opened for space {space.id}: {start} - {end}")
        return window


class PricingService:
    """Versioned rate cards; the newest version already in force wins"""

    @staticmethod
    def resolve_current_rate(space, at=None):
        at = at or timezone.now()
        return PricingRecord.objects.filter(
            parking_space=space,
            valid_from__lte=at,
        ).order_by('-valid_from', '-id').first()

    @staticmethod
    def publish_rate_card(space, hourly_rate, daily_rate, monthly_rate, weekly_rate=None, valid_from=None):
        """Append a new rate card version, in force from `valid_from` (default now)"""
        rates = {
            'hourly_rate': hourly_rate,
            'daily_rate': daily_rate,
            'monthly_rate': monthly_rate,
        }
        missing = [name for name, value in rates.items() if value is None]
        if missing:
            raise BookingValidationError(f"Missing required rates: {', '.join(missing)}")
        if any(Decimal(value) < 0 for value in rates.values()) or (weekly_rate is not None and Decimal(weekly_rate) < 0):
            raise BookingValidationError('Rates cannot be negative.')

        try:
            with transaction.atomic():
                record = PricingRecord.objects.create(
                    parking_space=space,
                    weekly_rate=weekly_rate,
                    valid_from=valid_from or timezone.now(),
                    **rates,
                )
        except IntegrityError:
            raise BookingConflict('A rate card with the same start time already exists for this space.')

        logger.info(f"Published rate card {record.id} for space {space.id} valid from {record.valid_from}")
        return record
