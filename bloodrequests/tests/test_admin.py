import json

from django.contrib.admin.sites import AdminSite
from django.contrib.auth.models import User
from django.test import RequestFactory, TestCase

from bloodrequests.admin import BloodRequestAdmin
from bloodrequests.models import BloodRequest
from donors.tests.utils import DELHI, make_blood_request


class BloodRequestAdminFormTests(TestCase):

    def setUp(self):
        self.admin = BloodRequestAdmin(BloodRequest, AdminSite())
        self.request = RequestFactory().get('/admin/')
        self.request.user = User(username='operator', is_staff=True, is_superuser=True, is_active=True)

    def form_data(self, **overrides):
        data = {
            'requester_name': 'Asha Verma',
            'requester_phone': '9876543210',
            'requester': '',
            'blood_group': 'O+',
            'units_required': '2',
            'urgency': 'High',
            'hospital_name': 'AIIMS',
            'hospital_address': 'Ansari Nagar, New Delhi',
            'location': json.dumps(DELHI.to_geojson()),
        }
        data.update(overrides)
        return data

    def bind(self, blood_request, **overrides):
        form_class = self.admin.get_form(self.request, blood_request, change=True)
        return form_class(data=self.form_data(**overrides), instance=blood_request)

    def test_status_is_not_editable(self):
        blood_request = make_blood_request(status=BloodRequest.STATUS_COMPLETED)

        form = self.bind(blood_request, status=BloodRequest.STATUS_PENDING)

        self.assertNotIn('status', form.fields)
        self.assertTrue(form.is_valid(), form.errors)
        form.save()
        blood_request.refresh_from_db()
        self.assertEqual(blood_request.status, BloodRequest.STATUS_COMPLETED)
        self.assertEqual(blood_request.urgency, 'High')

    def test_bad_location_is_rejected(self):
        blood_request = make_blood_request()
        cases = [
            {'type': 'Point', 'coordinates': [200, 28.6]},
            {'type': 'Point', 'coordinates': [77.2]},
            {'coordinates': 'here'},
        ]
        for location in cases:
            with self.subTest(location=location):
                form = self.bind(blood_request, location=json.dumps(location))
                self.assertFalse(form.is_valid())
                self.assertIn('location', form.errors)

    def test_mark_completed_action(self):
        pending = make_blood_request()
        matched = make_blood_request(status=BloodRequest.STATUS_MATCHED)

        self.admin.message_user = lambda *args, **kwargs: None
        self.admin.mark_completed(self.request, BloodRequest.objects.all())

        for blood_request in (pending, matched):
            blood_request.refresh_from_db()
            self.assertEqual(blood_request.status, BloodRequest.STATUS_COMPLETED)
