from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from parking.models import ParkingSpace
from parking.services import AvailabilityService
from users.models import CustomUser


class Command(BaseCommand):
    help = "Open an availability window for the owner's spaces that have none"

    def add_arguments(self, parser):
        parser.add_argument('--owner', type=int, required=True, help='Owner user id')
        parser.add_argument('--days', type=int, default=365, help='Window length in days (default 365)')

    def handle(self, *args, **options):
        try:
            owner = CustomUser.objects.get(pk=options['owner'])
        except CustomUser.DoesNotExist:
            raise CommandError(f"User {options['owner']} does not exist")

        if options['days'] <= 0:
            raise CommandError('--days must be positive')

        spaces = ParkingSpace.objects.filter(owner=owner, availability_windows__isnull=True)
        self.stdout.write(f"{spaces.count()} space(s) need availability records")

        start = timezone.now()
        end = start + timedelta(days=options['days'])
        created = 0
        for space in spaces:
            AvailabilityService.open_window(space, start, end, reason='Backfilled from existing listing')
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Created {created} availability window(s)"))
