# campaigns/models.py
from datetime import timedelta

from django.db import models
from django.utils import timezone

from donors.models import GeoLocatedModel

DEFAULT_POSTER_URL = 'https://images.unsplash.com/photo-1615461066841-6116e61058f4?auto=format&fit=crop&w=800&q=80'


def default_blood_groups():
    return ['All Groups']


def status_for_date(campaign_date, today=None):
    """Completed before today, Ongoing today, Upcoming after"""
    today = today or timezone.localdate()
    if campaign_date < today:
        return Campaign.STATUS_COMPLETED
    if campaign_date == today:
        return Campaign.STATUS_ONGOING
    return Campaign.STATUS_UPCOMING


class CampaignQuerySet(models.QuerySet):

    def refresh_statuses(self, today=None):
        """
        Mark past campaigns Completed and today's campaigns Ongoing.
        Returns the number of rows changed.
        """
        today = today or timezone.localdate()
        completed = self.filter(date__lt=today).exclude(
            status=Campaign.STATUS_COMPLETED
        ).update(status=Campaign.STATUS_COMPLETED)
        ongoing = self.filter(date__gte=today, date__lt=today + timedelta(days=1)).exclude(
            status=Campaign.STATUS_ONGOING
        ).update(status=Campaign.STATUS_ONGOING)
        return completed + ongoing


class Campaign(GeoLocatedModel):
    TYPE_CHOICES = [
        ('Blood Drive', 'Blood Drive'),
        ('Emergency Camp', 'Emergency Camp'),
        ('Awareness', 'Awareness'),
    ]

    STATUS_UPCOMING = 'Upcoming'
    STATUS_ONGOING = 'Ongoing'
    STATUS_COMPLETED = 'Completed'

    STATUS_CHOICES = [
        (STATUS_UPCOMING, 'Upcoming'),
        (STATUS_ONGOING, 'Ongoing'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    title = models.CharField(max_length=200)
    description = models.TextField()
    city = models.CharField(max_length=100, db_index=True)
    address = models.TextField()

    date = models.DateField()
    time = models.CharField(max_length=50, help_text='e.g. "09:00 AM - 05:00 PM"')
    organizer = models.CharField(max_length=200)
    blood_groups_needed = models.JSONField(default=default_blood_groups, blank=True)
    poster_image_url = models.URLField(max_length=500, default=DEFAULT_POSTER_URL, blank=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_UPCOMING)

    created_by = models.ForeignKey(
        'donors.Donor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='campaigns'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CampaignQuerySet.as_manager()

    def __str__(self):
        return f"{self.title} ({self.city}, {self.date})"

    class Meta:
        ordering = ['date']
