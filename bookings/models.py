from django.db import models
from django.db.models import F, Q
from users.models import CustomUser, DriverVehicle
from parking.models import ParkingSpace, AvailabilityWindow


class BookingStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    COMPLETED = 'completed', 'Completed'
    REJECTED = 'rejected', 'Rejected'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    FAILED = 'failed', 'Failed'
    REFUNDED = 'refunded', 'Refunded'


# Bookings in these states no longer hold the space.
RELEASED_STATUSES = (BookingStatus.CANCELLED, BookingStatus.REJECTED)


class Booking(models.Model):
    DURATION_CLASS_CHOICES = (
        ('30m', '30 Minutes'),
        ('1h', 'Hourly'),
        ('1d', 'Daily'),
        ('1w', 'Weekly'),
        ('1m', 'Monthly'),
        ('custom', 'Custom'),
    )

    # Relations
    driver = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='driver_bookings')
    parking_space = models.ForeignKey(ParkingSpace, on_delete=models.CASCADE, related_name='bookings')
    availability = models.ForeignKey(AvailabilityWindow, on_delete=models.SET_NULL, null=True, blank=True,
                                     related_name='bookings')
    vehicle = models.ForeignKey(DriverVehicle, on_delete=models.SET_NULL, null=True)

    # Booking details
    duration_class = models.CharField(max_length=10, choices=DURATION_CLASS_CHOICES)
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()
    booking_status = models.CharField(max_length=20, choices=BookingStatus.choices,
                                      default=BookingStatus.PENDING, db_index=True)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    cancellation_reason = models.CharField(max_length=255, blank=True)

    # Pricing
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    service_fee = models.DecimalField(max_digits=10, decimal_places=2)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    owner_payout = models.DecimalField(max_digits=10, decimal_places=2)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['driver', 'booking_status'], name='booking_driver_status_idx'),
            models.Index(fields=['parking_space', 'booking_status'], name='booking_space_status_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(start_time__lt=F('end_time')), name='booking_start_before_end'),
        ]

    def __str__(self):
        return f"Booking {self.id} - {self.driver.username} at {self.parking_space.title}"

    @property
    def holds_space(self):
        return self.booking_status.lower() not in RELEASED_STATUSES

    def get_payment_breakdown(self):
        return {
            'subtotal': self.subtotal,
            'service_fee': self.service_fee,
            'total_amount': self.total_amount,
            'owner_payout': self.owner_payout,
            'platform_margin': self.total_amount - self.owner_payout,
        }


class BookingPayout(models.Model):
    """Settlement placeholder created with every booking"""
    booking = models.OneToOneField(
        Booking,
        on_delete=models.CASCADE,
        related_name='payout'
    )

    booking_amount = models.DecimalField(max_digits=15, decimal_places=2)
    owner_payout_amount = models.DecimalField(max_digits=15, decimal_places=2)

    payout_status = models.CharField(
        max_length=20,
        default='pending',
        choices=[
            ('pending', 'Pending'),
            ('settled', 'Settled'),
            ('failed', 'Failed'),
        ]
    )
    payout_method = models.CharField(max_length=20, default='pending')

    created_at = models.DateTimeField(auto_now_add=True)
    settled_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"Payout for Booking {self.booking_id} - {self.owner_payout_amount}"
