"""
Filters for the public trip listing.
"""
import django_filters

from apps.trips.models import Trip


class TripFilter(django_filters.FilterSet):
    """
    GET /api/v1/trips/?destination=<text>&startDate=<date>&endDate=<date>

    ``startDate`` is a lower bound on the trip start, ``endDate`` an upper
    bound on the trip end.
    """
    destination = django_filters.CharFilter(field_name='destination', lookup_expr='icontains')
    startDate = django_filters.DateFilter(field_name='start_date', lookup_expr='gte')
    endDate = django_filters.DateFilter(field_name='end_date', lookup_expr='lte')

    class Meta:
        model = Trip
        fields = ['destination', 'startDate', 'endDate']
