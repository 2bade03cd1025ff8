# donors/tasks.py
"""
Celery tasks for automatic donor alerts
"""
import logging

from celery import shared_task

from algorithms.exceptions import InvalidStatusTransition
from algorithms.matching import DonorMatcher
from bloodrequests.models import BloodRequest
from donors.notifications import NotificationDispatcher
from donors.repositories import DjangoDonorRepository
from rakhtsetu.conf import radius_km

logger = logging.getLogger(__name__)


def broadcast(blood_request, radius=None, dispatcher=None):
    """
    Alert every compatible, available donor near the request.
    A pending request becomes matched once at least one alert went out;
    completed requests are refused with InvalidStatusTransition.

    Returns:
        (alerts sent, donors matched)
    """
    if blood_request.status == BloodRequest.STATUS_COMPLETED:
        raise InvalidStatusTransition(f"Request {blood_request.pk} is completed, no donors to alert")

    if radius is None:
        radius = radius_km('BROADCAST_RADIUS_KM')
    if dispatcher is None:
        dispatcher = NotificationDispatcher()

    matches = DonorMatcher(DjangoDonorRepository()).find_matches(blood_request, radius)
    sent = dispatcher.dispatch(blood_request, matches)

    if sent:
        blood_request.mark_matched()

    return sent, len(matches)


@shared_task
def broadcast_blood_request(blood_request_id):
    """
    Notify nearby compatible donors about a newly created blood request.
    Queued by bloodrequests.signals after the request is committed.
    """
    try:
        blood_request = BloodRequest.objects.get(id=blood_request_id)
    except BloodRequest.DoesNotExist:
        logger.warning(f"Blood request {blood_request_id} not found, nothing to broadcast")
        return 0

    if blood_request.status == BloodRequest.STATUS_COMPLETED:
        logger.info(f"Blood request {blood_request_id} already completed, skipping broadcast")
        return 0

    sent, matched = broadcast(blood_request)
    logger.info(f"Broadcast for request {blood_request_id}: {sent} alerts, {matched} donors matched")
    return sent
