# ============================= PARKING/FILTERS.PY =============================
import django_filters
from .models import ParkingSpace


class ParkingSpaceFilter(django_filters.FilterSet):
    """Filtering for parking space listings"""

    has_cctv = django_filters.BooleanFilter(field_name='has_cctv', label='Has CCTV')
    has_ev = django_filters.BooleanFilter(field_name='has_ev_charging', label='Has EV Charging')
    is_covered = django_filters.BooleanFilter(field_name='is_covered', label='Is Covered')

    available_from = django_filters.IsoDateTimeFilter(
        field_name='availability_windows__available_start',
        lookup_expr='lte',
        label='Open at or before',
    )
    available_until = django_filters.IsoDateTimeFilter(
        field_name='availability_windows__available_end',
        lookup_expr='gte',
        label='Open until at least',
    )

    class Meta:
        model = ParkingSpace
        fields = {
            'city': ['exact', 'icontains'],
            'space_type': ['exact'],
            'is_active': ['exact'],
        }
