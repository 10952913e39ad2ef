# parking/models.py

from django.db import models
from django.db.models import F, Q
from django.core.validators import MinValueValidator
from users.models import CustomUser


class ParkingSpace(models.Model):
    SPACE_TYPE_CHOICES = (
        ('garage', 'Garage'),
        ('driveway', 'Private Driveway'),
        ('open', 'Open Space'),
        ('covered', 'Covered Space'),
    )

    owner = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='owned_parking_spaces')

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=500)
    city = models.CharField(max_length=100, db_index=True)
    space_type = models.CharField(max_length=20, choices=SPACE_TYPE_CHOICES, default='driveway')

    has_cctv = models.BooleanField(default=False)
    has_ev_charging = models.BooleanField(default=False)
    is_covered = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} - {self.address}"


class AvailabilityWindow(models.Model):
    """Owner-declared period during which a space may be booked"""
    owner = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='availability_windows')
    parking_space = models.ForeignKey(ParkingSpace, on_delete=models.CASCADE, related_name='availability_windows')

    available_start = models.DateTimeField()
    available_end = models.DateTimeField()
    is_available = models.BooleanField(default=True)
    reason = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['available_start']
        indexes = [
            models.Index(fields=['parking_space', 'is_available'], name='availability_space_open_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(available_start__lt=F('available_end')),
                name='availability_window_start_before_end',
            ),
        ]

    def __str__(self):
        state = "open" if self.is_available else "closed"
        return f"{self.parking_space_id}: {self.available_start} - {self.available_end} ({state})"

    def covers(self, start, end):
        return self.is_available and self.available_start <= start and self.available_end >= end


class PricingRecord(models.Model):
    """One version of a space's rate card.

    Records are never updated in place. Publishing new rates appends a record
    with a later valid_from; the rate card in force at time T is the one with
    the greatest valid_from <= T.
    """
    parking_space = models.ForeignKey(ParkingSpace, on_delete=models.CASCADE, related_name='pricing_records')

    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    weekly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True,
                                      validators=[MinValueValidator(0)])
    monthly_rate = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])

    valid_from = models.DateTimeField(db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-valid_from']
        constraints = [
            models.UniqueConstraint(fields=['parking_space', 'valid_from'], name='unique_pricing_version'),
        ]

    def __str__(self):
        return f"Pricing for space {self.parking_space_id} from {self.valid_from}"
