# api/fields.py
"""
Shared serializer fields.
Requests carry latitude/longitude; models store a GeoJSON point (lng first).
"""
from rest_framework import serializers

from algorithms.blood_compatibility import BLOOD_GROUPS, normalize_blood_group
from algorithms.exceptions import InvalidBloodGroup, InvalidCoordinates
from algorithms.haversine import GeoPoint


class LatitudeField(serializers.FloatField):

    def __init__(self, **kwargs):
        kwargs.setdefault('min_value', -90)
        kwargs.setdefault('max_value', 90)
        super().__init__(**kwargs)


class LongitudeField(serializers.FloatField):

    def __init__(self, **kwargs):
        kwargs.setdefault('min_value', -180)
        kwargs.setdefault('max_value', 180)
        super().__init__(**kwargs)


class BloodGroupField(serializers.ChoiceField):
    """Accepts 'ab+' or 'AB +' as well as 'AB+'"""

    def __init__(self, **kwargs):
        super().__init__(choices=BLOOD_GROUPS, **kwargs)

    def to_internal_value(self, data):
        try:
            return normalize_blood_group(data)
        except InvalidBloodGroup:
            self.fail('invalid_choice', input=data)


class LocationSerializerMixin(serializers.Serializer):
    """
    Adds write-only latitude/longitude and a read-only
    {"latitude", "longitude"} location to a model serializer.
    """
    latitude = LatitudeField(write_only=True, required=False)
    longitude = LongitudeField(write_only=True, required=False)
    location = serializers.SerializerMethodField()

    location_required = True

    def get_location(self, obj):
        point = obj.geo_point
        return point.as_dict() if point else None

    def validate(self, attrs):
        attrs = super().validate(attrs)
        latitude = attrs.pop('latitude', None)
        longitude = attrs.pop('longitude', None)

        if latitude is None and longitude is None:
            if self.instance is None and self.location_required:
                raise serializers.ValidationError(
                    {'location': 'Location (latitude and longitude) is required'}
                )
            return attrs

        if latitude is None or longitude is None:
            raise serializers.ValidationError(
                {'location': 'Latitude and longitude must be given together'}
            )

        try:
            attrs['location'] = GeoPoint(latitude=latitude, longitude=longitude).to_geojson()
        except InvalidCoordinates as e:
            raise serializers.ValidationError({'location': str(e)})
        return attrs
