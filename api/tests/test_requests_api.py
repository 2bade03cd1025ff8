from datetime import timedelta
from unittest import mock

from rest_framework import status
from rest_framework.test import APITestCase

from bloodrequests.models import BloodRequest
from donors.tests.utils import DELHI, make_blood_request, make_donor, north_of


def request_payload(**overrides):
    payload = {
        'requesterName': 'Asha Verma',
        'requesterPhone': '9876543210',
        'bloodGroup': 'O-',
        'unitsRequired': 2,
        'hospitalName': 'AIIMS',
        'hospitalAddress': 'Ansari Nagar, New Delhi',
        'latitude': 28.6139,
        'longitude': 77.2090,
        'urgency': 'Critical',
    }
    payload.update(overrides)
    return payload


@mock.patch('bloodrequests.signals.broadcast_blood_request')
class CreateBloodRequestTests(APITestCase):

    def test_created_pending_and_broadcast_queued(self, task):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/requests/', request_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['urgency'], 'Critical')
        task.delay.assert_called_once_with(response.data['id'])

    def test_location_stored_longitude_first_and_returned_as_object(self, task):
        response = self.client.post('/api/requests/', request_payload(), format='json')

        stored = BloodRequest.objects.get(pk=response.data['id'])
        self.assertEqual(stored.location, {'type': 'Point', 'coordinates': [77.2090, 28.6139]})
        self.assertEqual(response.data['location'], {'latitude': 28.6139, 'longitude': 77.2090})
        self.assertNotIn('latitude', response.data)

    def test_missing_coordinates(self, task):
        payload = request_payload()
        del payload['latitude']
        del payload['longitude']

        response = self.client.post('/api/requests/', payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('location', response.data)
        self.assertFalse(BloodRequest.objects.exists())
        task.delay.assert_not_called()

    def test_only_one_coordinate(self, task):
        payload = request_payload()
        del payload['longitude']

        response = self.client.post('/api/requests/', payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_input_is_rejected(self, task):
        cases = [
            {'latitude': 95},
            {'longitude': 'east'},
            {'bloodGroup': 'C+'},
            {'unitsRequired': 0},
            {'urgency': 'Whenever'},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                response = self.client.post('/api/requests/', request_payload(**overrides), format='json')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(BloodRequest.objects.exists())

    def test_new_requests_always_start_pending(self, task):
        response = self.client.post('/api/requests/', request_payload(status='completed'), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')

    def test_blood_group_is_normalized(self, task):
        response = self.client.post('/api/requests/', request_payload(bloodGroup='ab +'), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['bloodGroup'], 'AB+')

    def test_requester_link(self, task):
        donor = make_donor()
        response = self.client.post('/api/requests/', request_payload(requesterId=donor.id), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['requesterId'], donor.id)


class BloodRequestReadTests(APITestCase):

    def test_list_newest_first(self):
        first = make_blood_request()
        second = make_blood_request()
        BloodRequest.objects.filter(pk=first.pk).update(created_at=second.created_at - timedelta(hours=1))

        response = self.client.get('/api/requests/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], [second.id, first.id])

    def test_list_status_filter(self):
        make_blood_request()
        matched = make_blood_request(status=BloodRequest.STATUS_MATCHED)

        response = self.client.get('/api/requests/', {'status': 'matched'})

        self.assertEqual([item['id'] for item in response.data], [matched.id])

    def test_unknown_status_filter(self):
        response = self.client.get('/api/requests/', {'status': 'bogus'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_all_status_filter(self):
        make_blood_request()
        make_blood_request(status=BloodRequest.STATUS_COMPLETED)

        response = self.client.get('/api/requests/', {'status': 'all'})

        self.assertEqual(len(response.data), 2)

    def test_retrieve(self):
        blood_request = make_blood_request('B-')

        response = self.client.get(f'/api/requests/{blood_request.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['bloodGroup'], 'B-')

    def test_missing_request_is_404(self):
        self.assertEqual(self.client.get('/api/requests/999999/').status_code, status.HTTP_404_NOT_FOUND)


class BloodRequestStatusApiTests(APITestCase):

    def test_advance_status(self):
        blood_request = make_blood_request()

        response = self.client.patch(f'/api/requests/{blood_request.id}/', {'status': 'matched'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'matched')

    def test_backward_transition_is_rejected(self):
        blood_request = make_blood_request(status=BloodRequest.STATUS_COMPLETED)

        response = self.client.patch(f'/api/requests/{blood_request.id}/', {'status': 'pending'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_status_transition')
        blood_request.refresh_from_db()
        self.assertEqual(blood_request.status, BloodRequest.STATUS_COMPLETED)

    def test_unknown_status(self):
        blood_request = make_blood_request()
        response = self.client.patch(f'/api/requests/{blood_request.id}/', {'status': 'lost'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_request_is_404(self):
        response = self.client.patch('/api/requests/999999/', {'status': 'matched'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class NearbyBloodRequestTests(APITestCase):

    def test_open_requests_within_default_radius(self):
        near = make_blood_request(point=north_of(DELHI, 3.2))
        matched = make_blood_request(point=north_of(DELHI, 40), status=BloodRequest.STATUS_MATCHED)
        make_blood_request(point=north_of(DELHI, 60))
        make_blood_request(point=north_of(DELHI, 1), status=BloodRequest.STATUS_COMPLETED)

        response = self.client.get('/api/requests/nearby/', {'lat': DELHI.latitude, 'lng': DELHI.longitude})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], [near.id, matched.id])
        self.assertEqual([item['distance'] for item in response.data], ['3.2 km', '40.0 km'])

    def test_custom_radius(self):
        make_blood_request(point=north_of(DELHI, 3.2))
        make_blood_request(point=north_of(DELHI, 40))

        response = self.client.get('/api/requests/nearby/', {'lat': DELHI.latitude, 'lng': DELHI.longitude, 'radius': 5})

        self.assertEqual(len(response.data), 1)

    def test_coordinates_required(self):
        for params in ({}, {'lat': 28.6}, {'lat': '', 'lng': ''}, {'lat': 100, 'lng': 0}):
            with self.subTest(params=params):
                response = self.client.get('/api/requests/nearby/', params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class NotifyDonorsApiTests(APITestCase):

    def test_notify_alerts_compatible_donors(self):
        make_donor('O-', north_of(DELHI, 2))
        make_donor('O-', north_of(DELHI, 4))
        make_donor('A+', north_of(DELHI, 1))
        blood_request = make_blood_request('O-')

        with mock.patch('donors.notifications.LogGateway.send') as send:
            response = self.client.post(f'/api/requests/{blood_request.id}/notify/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['notifiedCount'], 2)
        self.assertEqual(response.data['totalMatched'], 2)
        self.assertEqual(response.data['status'], 'matched')
        self.assertEqual(send.call_count, 2)

    def test_notify_completed_request_is_refused(self):
        make_donor('O-', north_of(DELHI, 2))
        blood_request = make_blood_request('O-', status=BloodRequest.STATUS_COMPLETED)

        with mock.patch('donors.notifications.LogGateway.send') as send:
            response = self.client.post(f'/api/requests/{blood_request.id}/notify/')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_status_transition')
        send.assert_not_called()

    def test_notify_missing_request(self):
        self.assertEqual(self.client.post('/api/requests/999999/notify/').status_code, status.HTTP_404_NOT_FOUND)
