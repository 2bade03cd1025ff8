import itertools
import math

from algorithms.haversine import GeoPoint
from bloodrequests.models import BloodRequest
from donors.models import Donor

DELHI = GeoPoint(28.6139, 77.2090)
KM_PER_DEGREE = 6371 * math.pi / 180

_counter = itertools.count(1)


def north_of(origin, km):
    return GeoPoint(origin.latitude + km / KM_PER_DEGREE, origin.longitude)


def make_donor(blood_group='O+', point=DELHI, **kwargs):
    number = next(_counter)
    kwargs.setdefault('full_name', f'Donor {number}')
    kwargs.setdefault('email', f'donor{number}@example.com')
    kwargs.setdefault('phone', f'98{number:08d}')
    return Donor.objects.create(blood_group=blood_group, location=point.to_geojson(), **kwargs)


def make_blood_request(blood_group='O+', point=DELHI, **kwargs):
    kwargs.setdefault('requester_name', 'Asha Verma')
    kwargs.setdefault('requester_phone', '9876543210')
    kwargs.setdefault('units_required', 1)
    kwargs.setdefault('hospital_name', 'AIIMS')
    kwargs.setdefault('hospital_address', 'Ansari Nagar, New Delhi')
    return BloodRequest.objects.create(blood_group=blood_group, location=point.to_geojson(), **kwargs)
