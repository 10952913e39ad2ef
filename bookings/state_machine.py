"""Booking lifecycle as an explicit transition table.

    pending   -> confirmed | rejected | cancelled
    confirmed -> completed | cancelled
    completed, rejected, cancelled are terminal

Moving a booking to the status it already has is always allowed and changes
nothing.
"""
from utils.exceptions import BookingValidationError, InvalidTransition
from .models import BookingStatus, PaymentStatus

TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def parse_status(value):
    """Case-insensitive BookingStatus lookup"""
    try:
        return BookingStatus((value or '').strip().lower())
    except ValueError:
        raise BookingValidationError(
            f"Invalid status '{value}'. Must be one of: {', '.join(BookingStatus.values)}."
        )


def parse_payment_status(value):
    try:
        return PaymentStatus((value or '').strip().lower())
    except ValueError:
        raise BookingValidationError(
            f"Invalid payment status '{value}'. Must be one of: {', '.join(PaymentStatus.values)}."
        )


def can_transition(current, target):
    current, target = parse_status(current), parse_status(target)
    return current == target or target in TRANSITIONS[current]


def assert_transition(current, target):
    if not can_transition(current, target):
        raise InvalidTransition(f"Cannot move a booking from {parse_status(current).value} to {parse_status(target).value}.")
