from django.test import SimpleTestCase

from utils.exceptions import BookingValidationError, InvalidTransition
from bookings.models import BookingStatus
from bookings.state_machine import (
    TERMINAL_STATUSES, assert_transition, can_transition, parse_payment_status, parse_status,
)


class StateMachineTests(SimpleTestCase):

    def test_allowed_edges(self):
        self.assertTrue(can_transition('pending', 'confirmed'))
        self.assertTrue(can_transition('pending', 'rejected'))
        self.assertTrue(can_transition('pending', 'cancelled'))
        self.assertTrue(can_transition('confirmed', 'completed'))
        self.assertTrue(can_transition('confirmed', 'cancelled'))

    def test_forbidden_edges(self):
        self.assertFalse(can_transition('pending', 'completed'))
        self.assertFalse(can_transition('confirmed', 'rejected'))
        self.assertFalse(can_transition('confirmed', 'pending'))

    def test_terminal_statuses_cannot_move(self):
        self.assertEqual(TERMINAL_STATUSES, {BookingStatus.COMPLETED, BookingStatus.REJECTED,
                                             BookingStatus.CANCELLED})
        for status in TERMINAL_STATUSES:
            for target in ('pending', 'confirmed'):
                with self.assertRaises(InvalidTransition):
                    assert_transition(status, target)

    def test_same_status_is_a_noop_transition(self):
        self.assertTrue(can_transition('cancelled', 'cancelled'))
        assert_transition('confirmed', 'confirmed')

    def test_status_parsing_is_case_insensitive(self):
        self.assertEqual(parse_status(' Confirmed '), BookingStatus.CONFIRMED)
        self.assertEqual(parse_payment_status('PAID'), 'paid')

    def test_unknown_status_is_a_validation_error(self):
        with self.assertRaises(BookingValidationError):
            parse_status('archived')
        with self.assertRaises(BookingValidationError):
            parse_payment_status(None)
