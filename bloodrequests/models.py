# bloodrequests/models.py
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from algorithms.exceptions import InvalidStatusTransition
from donors.models import GeoLocatedModel, validate_geojson_point


class BloodRequest(GeoLocatedModel):
    URGENCY_CHOICES = [
        ('Critical', 'Critical'),
        ('High', 'High'),
        ('Medium', 'Medium'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_MATCHED = 'matched'
    STATUS_COMPLETED = 'completed'

    # Listed in lifecycle order; a request only ever moves forward
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_MATCHED, 'Matched'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    requester_name = models.CharField(max_length=200)
    requester_phone = models.CharField(max_length=20)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units_required = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    hospital_name = models.CharField(max_length=200)
    hospital_address = models.TextField()
    location = models.JSONField(validators=[validate_geojson_point])
    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='Medium')

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    requester = models.ForeignKey(
        'donors.Donor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='blood_requests'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.hospital_name} - {self.blood_group} ({self.urgency})"

    @classmethod
    def status_rank(cls, status):
        order = [value for value, _ in cls.STATUS_CHOICES]
        if status not in order:
            raise InvalidStatusTransition(f"Unknown status: {status!r}")
        return order.index(status)

    def can_transition_to(self, status):
        return self.status_rank(status) >= self.status_rank(self.status)

    def advance_status(self, status):
        """
        Move the request forward (pending -> matched -> completed).
        Setting the current status again is a no-op.

        The row is only updated while its stored status is still at or
        before the target; a concurrent change that went further wins.
        """
        if not self.can_transition_to(status):
            raise InvalidStatusTransition(
                f"Cannot move request {self.pk} from '{self.status}' back to '{status}'"
            )
        if status == self.status:
            return self

        rank = self.status_rank(status)
        updated = BloodRequest.objects.filter(
            pk=self.pk,
            status__in=[value for value, _ in self.STATUS_CHOICES[:rank + 1]],
        ).update(status=status, updated_at=timezone.now())
        self.refresh_from_db(fields=['status', 'updated_at'])
        if not updated:
            raise InvalidStatusTransition(
                f"Cannot move request {self.pk} from '{self.status}' back to '{status}'"
            )
        return self

    def mark_matched(self):
        """
        pending -> matched, only if the stored row is still pending.
        Returns True when this call changed it.
        """
        updated = BloodRequest.objects.filter(
            pk=self.pk, status=self.STATUS_PENDING
        ).update(status=self.STATUS_MATCHED, updated_at=timezone.now())
        self.refresh_from_db(fields=['status', 'updated_at'])
        return bool(updated)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Blood Request'
        verbose_name_plural = 'Blood Requests'
