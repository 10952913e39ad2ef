"""Duration-class rules and price computation for booking requests.

Ceiling classes (30m, 1h) accept any length of at least one unit and charge
every started unit. Exact classes (1d, 1w) must last exactly one unit. The 1m
class must end on the same clock time one calendar month later, clamped to
the last day of that month. Custom requests are charged by the longest unit
they fully cover.
"""
import calendar
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

from utils.exceptions import BookingValidationError

CENT = Decimal('0.01')

HALF_HOUR = timedelta(minutes=30)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(days=7)
MONTH = timedelta(days=30)

DURATION_CLASSES = ('30m', '1h', '1d', '1w', '1m', 'custom')
DURATION_ALIASES = {'24h': '1d'}

CEILING_CLASSES = {
    '30m': (HALF_HOUR, 'hourly_rate', Decimal('0.5')),
    '1h': (HOUR, 'hourly_rate', Decimal('1')),
}
EXACT_CLASSES = {
    '1d': (DAY, 'daily_rate'),
    '1w': (WEEK, 'weekly_rate'),
}


class PricingNotConfigured(BookingValidationError):
    default_detail = 'Pricing not configured for this parking space.'


@dataclass(frozen=True)
class PricePlan:
    """Which rate to charge and how many times; fallback applies if that rate is unset"""
    rate_field: str
    units: int
    factor: Decimal = Decimal('1')
    fallback: 'PricePlan | None' = None


@dataclass(frozen=True)
class Quote:
    subtotal: Decimal
    service_fee: Decimal
    total_amount: Decimal
    owner_payout: Decimal

    def as_dict(self):
        return {
            'subtotal': self.subtotal,
            'service_fee': self.service_fee,
            'total_amount': self.total_amount,
            'owner_payout': self.owner_payout,
        }


def to_money(value):
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_duration_class(value):
    duration_class = (value or '').strip().lower()
    duration_class = DURATION_ALIASES.get(duration_class, duration_class)
    if duration_class not in DURATION_CLASSES:
        raise BookingValidationError(
            f"Unknown duration class '{value}'. Use one of: {', '.join(DURATION_CLASSES)}."
        )
    return duration_class


def add_one_month(moment):
    """Same clock time one calendar month later, day clamped to the month's end"""
    year = moment.year + (1 if moment.month == 12 else 0)
    month = 1 if moment.month == 12 else moment.month + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def ceil_units(duration, unit):
    return -(-duration // unit)


def _custom_plan(duration):
    if duration < HALF_HOUR:
        raise BookingValidationError('A custom booking must last at least 30 minutes.')
    if duration >= MONTH:
        return PricePlan('monthly_rate', ceil_units(duration, MONTH))
    if duration >= WEEK:
        return PricePlan('weekly_rate', ceil_units(duration, WEEK),
                         fallback=PricePlan('daily_rate', ceil_units(duration, DAY)))
    if duration >= DAY:
        return PricePlan('daily_rate', ceil_units(duration, DAY))
    return PricePlan('hourly_rate', ceil_units(duration, HOUR))


def plan_for(duration_class, start, end):
    """Validate [start, end) against the duration class and return its PricePlan"""
    duration_class = normalize_duration_class(duration_class)
    duration = end - start
    if duration <= timedelta(0):
        raise BookingValidationError('End time must be after start time.')

    if duration_class in CEILING_CLASSES:
        unit, rate_field, factor = CEILING_CLASSES[duration_class]
        if duration < unit:
            raise BookingValidationError(
                f"A {duration_class} booking must last at least {int(unit.total_seconds() // 60)} minutes."
            )
        return PricePlan(rate_field, ceil_units(duration, unit), factor)

    if duration_class in EXACT_CLASSES:
        unit, rate_field = EXACT_CLASSES[duration_class]
        if duration != unit:
            raise BookingValidationError(
                f"A {duration_class} booking must last exactly {int(unit.total_seconds() // 3600)} hours."
            )
        return PricePlan(rate_field, 1)

    if duration_class == '1m':
        expected_end = add_one_month(start)
        if end != expected_end:
            raise BookingValidationError(
                f"A 1m booking starting {start.isoformat()} must end at {expected_end.isoformat()}."
            )
        return PricePlan('monthly_rate', 1)

    return _custom_plan(duration)


def subtotal_for(plan, rate_card):
    if rate_card is None:
        raise PricingNotConfigured()
    rate = getattr(rate_card, plan.rate_field)
    if rate is None:
        if plan.fallback is not None:
            return subtotal_for(plan.fallback, rate_card)
        raise PricingNotConfigured(f"Pricing not configured: this space has no {plan.rate_field.replace('_', ' ')}.")
    return to_money(Decimal(rate) * plan.factor * plan.units)


def build_quote(subtotal):
    """Renter pays subtotal plus the service fee; the owner receives subtotal minus commission"""
    subtotal = to_money(subtotal)
    service_fee = to_money(subtotal * settings.BOOKING_SERVICE_FEE_RATE)
    owner_payout = to_money(subtotal * (Decimal('1') - settings.BOOKING_OWNER_COMMISSION_RATE))
    return Quote(
        subtotal=subtotal,
        service_fee=service_fee,
        total_amount=to_money(subtotal + service_fee),
        owner_payout=owner_payout,
    )


def quote_for(rate_card, duration_class, start, end):
    return build_quote(subtotal_for(plan_for(duration_class, start, end), rate_card))
