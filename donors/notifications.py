# donors/notifications.py
"""
Turn donor matches into outbound alerts.

Delivery is fire-and-forget: one send per match, no retries. A failed send
is logged and the remaining donors are still alerted.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class AlertDeliveryError(Exception):
    pass


class LogGateway:
    """Writes the alert to the log instead of sending an SMS"""

    def send(self, donor, message):
        logger.info(f"SMS to {donor.full_name} ({donor.phone}): {message}")


class EmailGateway:
    """Emails the alert to the donor"""

    def send(self, donor, message):
        if not getattr(donor, 'email', None):
            raise AlertDeliveryError(f"No email found for donor {donor.full_name}")

        send_mail(
            subject=message.splitlines()[0],
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[donor.email],
            fail_silently=False,
        )


def get_gateway():
    return import_string(settings.RAKHTSETU_ALERT_GATEWAY)()


def format_alert(blood_request, match):
    return "\n".join([
        f"URGENT: {blood_request.blood_group} blood needed!",
        f"Patient: {blood_request.requester_name}",
        f"Hospital: {blood_request.hospital_name}",
        f"Units: {blood_request.units_required}",
        f"Distance: ~{match.distance_km:.1f} km away.",
        "Please accept in app if available.",
    ])


class NotificationDispatcher:

    def __init__(self, gateway=None):
        self.gateway = gateway if gateway is not None else get_gateway()

    def dispatch(self, blood_request, matches):
        """
        Send one alert per match.

        Returns:
            Number of alerts delivered
        """
        sent = 0
        for match in matches:
            donor = match.donor
            try:
                self.gateway.send(donor, format_alert(blood_request, match))
            except Exception:
                logger.exception(f"Alert to donor {donor.id} for request {blood_request.id} failed")
                continue
            sent += 1

        logger.info(f"Sent {sent} of {len(matches)} alerts for request {blood_request.id}")
        return sent
