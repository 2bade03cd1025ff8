"""
Donor Matching - find compatible, available donors near a blood request

The matcher never talks to the database directly; it is handed a donor
repository so the same algorithm runs against the ORM or a plain list.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from algorithms.blood_compatibility import compatible_donor_groups, normalize_blood_group
from algorithms.exceptions import InvalidCoordinates, MatchingError
from algorithms.haversine import GeoPoint, distance_km

# Default search radii (km). Browsing is wider than broadcasting on purpose,
# keep these separate.
NEARBY_DONOR_RADIUS_KM = 10
BROADCAST_RADIUS_KM = 10
NEARBY_REQUEST_RADIUS_KM = 50

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    donor: Any
    distance_km: float
    compatible: bool = True


@dataclass
class DonorRecord:
    """Plain donor used by the in-memory repository and in tests"""
    id: Any
    blood_group: str
    geo_point: Optional[GeoPoint]
    availability: bool = True
    full_name: str = ''
    phone: str = ''
    email: str = ''
    last_donation_date: Any = None
    donation_count: int = 0
    medical_history: List[str] = field(default_factory=list)


class DonorRepository:
    """Source of donor candidates for the matcher"""

    def find_candidates(self, blood_groups=None) -> Iterable:
        """
        Return available donors whose blood group is in blood_groups.
        blood_groups=None means any group.
        """
        raise NotImplementedError


class InMemoryDonorRepository(DonorRepository):

    def __init__(self, donors=()):
        self.donors = list(donors)

    def add(self, donor):
        self.donors.append(donor)
        return donor

    def find_candidates(self, blood_groups=None):
        return [
            donor for donor in self.donors
            if donor.availability and (blood_groups is None or donor.blood_group in blood_groups)
        ]


def validate_radius(radius_km):
    if isinstance(radius_km, bool):
        raise MatchingError("radius must be a number")
    try:
        radius = float(radius_km)
    except (TypeError, ValueError):
        raise MatchingError("radius must be a number") from None
    if not math.isfinite(radius) or radius < 0:
        raise MatchingError("radius must be a non-negative number of kilometers")
    return radius


class DonorMatcher:

    def __init__(self, repository: DonorRepository):
        self.repository = repository

    def find_matches(self, blood_request, radius_km=BROADCAST_RADIUS_KM) -> List[MatchResult]:
        """
        Match donors to a blood request.

        Steps:
        1. Work out which donor groups can give to the requested group
        2. Fetch available donors in those groups from the repository
        3. Measure each donor's distance to the request location
        4. Drop donors outside the radius
        5. Sort nearest first, ties broken by donor id

        An empty list is a valid result.
        """
        origin = blood_request.geo_point
        if origin is None:
            raise InvalidCoordinates("Blood request has no location")
        radius = validate_radius(radius_km)

        target_groups = compatible_donor_groups(blood_request.blood_group)
        matches = self._rank(origin, self.repository.find_candidates(target_groups), radius)

        logger.info(
            f"{len(matches)} donors matched for {blood_request.blood_group} request "
            f"{getattr(blood_request, 'id', None)} within {radius} km"
        )
        return matches

    def find_nearby(self, origin: GeoPoint, radius_km=NEARBY_DONOR_RADIUS_KM,
                    blood_group=None, compatible=False) -> List[MatchResult]:
        """
        Browse available donors around a point.

        blood_group filters by exact group unless compatible=True, in which
        case every group that can give to blood_group is included.
        """
        radius = validate_radius(radius_km)

        blood_groups = None
        if blood_group:
            blood_group = normalize_blood_group(blood_group)
            if compatible:
                blood_groups = compatible_donor_groups(blood_group)
            else:
                blood_groups = frozenset([blood_group])

        return self._rank(origin, self.repository.find_candidates(blood_groups), radius,
                          recipient_group=blood_group)

    def _rank(self, origin, candidates, radius, recipient_group=None):
        results = []
        for donor in candidates:
            if donor.geo_point is None:
                raise InvalidCoordinates(f"Donor {donor.id} has no location")
            distance = distance_km(origin, donor.geo_point)
            if distance > radius:
                continue
            compatible = True
            if recipient_group is not None:
                compatible = donor.blood_group in compatible_donor_groups(recipient_group)
            results.append(MatchResult(donor=donor, distance_km=distance, compatible=compatible))

        results.sort(key=lambda match: (match.distance_km, match.donor.id))
        return results
