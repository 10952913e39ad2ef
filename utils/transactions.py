"""Serializable unit-of-work helper for booking writes.

Every mutating booking operation re-checks its preconditions and writes inside
one transaction. On PostgreSQL the transaction is switched to SERIALIZABLE, so
two requests that both read "no overlap" cannot both commit; the loser gets a
serialization failure and the whole operation is run again from scratch.
"""
import logging

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, OperationalError, connections, transaction

from .exceptions import BookingConflict

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = {'40001', '40P01'}


def is_serialization_failure(exc):
    cause = exc.__cause__
    sqlstate = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if sqlstate in RETRYABLE_SQLSTATES:
        return True
    return 'database is locked' in str(exc)


def _begin_serializable(connection):
    # Only legal as the first statement of the outermost transaction.
    if connection.vendor == 'postgresql':
        with connection.cursor() as cursor:
            cursor.execute('SET TRANSACTION ISOLATION LEVEL SERIALIZABLE')


def run_serializable(operation, *args, attempts=None, using=DEFAULT_DB_ALIAS, **kwargs):
    """Run `operation` in a serializable transaction, retrying storage races.

    Business failures raised by `operation` propagate untouched. Storage-level
    serialization failures are retried up to `attempts` times and then turned
    into BookingConflict.
    """
    attempts = attempts or settings.BOOKING_TRANSACTION_ATTEMPTS
    connection = connections[using]
    nested = connection.in_atomic_block

    for attempt in range(1, attempts + 1):
        try:
            with transaction.atomic(using=using):
                if not nested:
                    _begin_serializable(connection)
                return operation(*args, **kwargs)
        except OperationalError as exc:
            if not is_serialization_failure(exc):
                raise
            logger.warning(
                f"Serialization failure in {getattr(operation, '__name__', operation)} "
                f"(attempt {attempt}/{attempts}): {exc}"
            )
            # An outer transaction is already doomed; retrying inside it cannot help.
            if nested:
                break

    raise BookingConflict('The booking could not be saved because of a concurrent change. Please retry.')
