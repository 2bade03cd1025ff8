from datetime import date

from django.core.exceptions import ValidationError
from django.db import models

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from algorithms.exceptions import InvalidCoordinates
from algorithms.haversine import GeoPoint

DONATION_COOLDOWN_DAYS = 90


def validate_geojson_point(value):
    """Rejects anything GeoPoint.from_geojson can't read back"""
    try:
        GeoPoint.from_geojson(value)
    except InvalidCoordinates as e:
        raise ValidationError(str(e), code='invalid_location')


class GeoLocatedModel(models.Model):
    """
    Stores a GeoJSON point: {"type": "Point", "coordinates": [lng, lat]}.
    Everything outside the model talks latitude/longitude.
    """
    location = models.JSONField(null=True, blank=True, validators=[validate_geojson_point])

    class Meta:
        abstract = True

    @property
    def geo_point(self):
        if not self.location:
            return None
        return GeoPoint.from_geojson(self.location)

    @property
    def latitude(self):
        point = self.geo_point
        return point.latitude if point else None

    @property
    def longitude(self):
        point = self.geo_point
        return point.longitude if point else None

    def set_location(self, latitude, longitude):
        self.location = GeoPoint(latitude=latitude, longitude=longitude).to_geojson()


# ---------------------------
# Donor
# ---------------------------
class Donor(GeoLocatedModel):
    full_name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, db_index=True)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES, db_index=True)
    location = models.JSONField(validators=[validate_geojson_point])

    # Donation tracking
    last_donation_date = models.DateField(null=True, blank=True)
    donation_count = models.PositiveIntegerField(default=0)
    medical_history = models.JSONField(default=list, blank=True)
    availability = models.BooleanField(default=True, db_index=True)

    is_admin = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def can_donate(self) -> bool:
        """Donors can donate every 90 days"""
        if not self.last_donation_date:
            return True
        return (date.today() - self.last_donation_date).days >= DONATION_COOLDOWN_DAYS

    def __str__(self):
        return f"{self.full_name} ({self.blood_group})"

    class Meta:
        verbose_name = "Donor"
        verbose_name_plural = "Donors"
        ordering = ['-created_at']
