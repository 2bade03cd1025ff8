from datetime import date, timedelta

from django.test import TestCase

from algorithms.haversine import GeoPoint
from .utils import DELHI, make_donor


class DonorModelTests(TestCase):

    def test_location_is_stored_longitude_first(self):
        donor = make_donor(point=DELHI)
        donor.refresh_from_db()

        self.assertEqual(donor.location['coordinates'], [DELHI.longitude, DELHI.latitude])
        self.assertEqual(donor.geo_point, DELHI)
        self.assertEqual(donor.latitude, DELHI.latitude)
        self.assertEqual(donor.longitude, DELHI.longitude)

    def test_set_location(self):
        donor = make_donor()
        donor.set_location(19.0760, 72.8777)

        self.assertEqual(donor.location, {'type': 'Point', 'coordinates': [72.8777, 19.0760]})
        self.assertEqual(donor.geo_point, GeoPoint(19.0760, 72.8777))

    def test_can_donate_after_cooldown(self):
        self.assertTrue(make_donor().can_donate)
        self.assertFalse(make_donor(last_donation_date=date.today() - timedelta(days=30)).can_donate)
        self.assertTrue(make_donor(last_donation_date=date.today() - timedelta(days=90)).can_donate)

    def test_str(self):
        self.assertEqual(str(make_donor('AB-', full_name='Ravi')), 'Ravi (AB-)')
