import logging

from django.db import DatabaseError

from algorithms.exceptions import DonorLookupError
from algorithms.matching import DonorRepository
from donors.models import Donor

logger = logging.getLogger(__name__)


class DjangoDonorRepository(DonorRepository):
    """Donor candidates straight from the database"""

    def __init__(self, queryset=None):
        self.queryset = queryset if queryset is not None else Donor.objects.all()

    def find_candidates(self, blood_groups=None):
        queryset = self.queryset.filter(availability=True)
        if blood_groups is not None:
            queryset = queryset.filter(blood_group__in=sorted(blood_groups))

        try:
            # Evaluate here so a database failure surfaces as a lookup error
            return list(queryset)
        except DatabaseError as e:
            logger.error(f"Donor lookup failed: {e}")
            raise DonorLookupError("Donor lookup failed, try again later") from e
