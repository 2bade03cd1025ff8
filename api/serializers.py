# api/serializers.py
"""
Query-string serializers for the list and search endpoints
"""
from rest_framework import serializers

from bloodrequests.models import BloodRequest
from campaigns.models import Campaign
from .fields import BloodGroupField, LatitudeField, LongitudeField


def blood_group_or_all(value):
    """'All' (any case) means no blood group filter"""
    if value.lower() == 'all':
        return None
    return BloodGroupField().to_internal_value(value)


class QuerySerializer(serializers.Serializer):

    def to_internal_value(self, data):
        # '?lat=&lng=' means missing, not zero
        data = {key: value for key, value in data.items() if value != ''}
        return super().to_internal_value(data)


class NearbyQuerySerializer(QuerySerializer):
    lat = LatitudeField()
    lng = LongitudeField()
    radius = serializers.FloatField(min_value=0, required=False)


class NearbyDonorQuerySerializer(NearbyQuerySerializer):
    MATCH_EXACT = 'exact'
    MATCH_COMPATIBLE = 'compatible'

    bloodGroup = serializers.CharField(required=False)
    match = serializers.ChoiceField(choices=[MATCH_EXACT, MATCH_COMPATIBLE], default=MATCH_EXACT)

    def validate_bloodGroup(self, value):
        return blood_group_or_all(value)


class DonorFilterSerializer(QuerySerializer):
    bloodGroup = serializers.CharField(required=False)
    available = serializers.BooleanField(allow_null=True, default=None)

    def validate_bloodGroup(self, value):
        return blood_group_or_all(value)


class BloodRequestFilterSerializer(QuerySerializer):
    status = serializers.CharField(required=False)

    def validate_status(self, value):
        statuses = [choice for choice, _ in BloodRequest.STATUS_CHOICES]
        if value != 'all' and value not in statuses:
            raise serializers.ValidationError(f"Unknown status '{value}'")
        return value


class CampaignFilterSerializer(QuerySerializer):
    city = serializers.CharField(required=False)
    type = serializers.CharField(required=False)
    status = serializers.CharField(required=False)
    date = serializers.DateField(required=False)

    def validate_status(self, value):
        statuses = [choice for choice, _ in Campaign.STATUS_CHOICES]
        if value != 'All' and value not in statuses:
            raise serializers.ValidationError(f"Unknown status '{value}'")
        return value
