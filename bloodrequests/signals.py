# bloodrequests/signals.py
"""
Signals to automatically notify donors when a blood request is created
"""
import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver
from kombu.exceptions import OperationalError

from bloodrequests.models import BloodRequest
from donors.tasks import broadcast_blood_request

logger = logging.getLogger(__name__)


def queue_broadcast(blood_request_id):
    try:
        broadcast_blood_request.delay(blood_request_id)
    except OperationalError:
        # The request is already saved; losing the alert must not fail it
        logger.exception(f"Could not queue donor broadcast for blood request #{blood_request_id}")
    else:
        logger.info(f"Donor broadcast queued for blood request #{blood_request_id}")


@receiver(post_save, sender=BloodRequest)
def auto_broadcast_new_request(sender, instance, created, **kwargs):
    """
    Queue the donor broadcast for a new pending request once it is committed
    """
    if created and instance.status == BloodRequest.STATUS_PENDING:
        request_id = instance.pk
        transaction.on_commit(lambda: queue_broadcast(request_id))
