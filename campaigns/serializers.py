# campaigns/serializers.py
from rest_framework import serializers

from api.fields import LocationSerializerMixin
from donors.models import Donor
from .models import Campaign, status_for_date


class CampaignSerializer(LocationSerializerMixin, serializers.ModelSerializer):
    image = serializers.URLField(source='poster_image_url', max_length=500, required=False)
    bloodGroups = serializers.ListField(
        source='blood_groups_needed', child=serializers.CharField(), required=False
    )
    createdBy = serializers.PrimaryKeyRelatedField(
        source='created_by', queryset=Donor.objects.all(), required=False, allow_null=True
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Campaign
        fields = [
            'id', 'title', 'description', 'organizer', 'type', 'date', 'time',
            'city', 'address', 'latitude', 'longitude', 'location',
            'image', 'status', 'bloodGroups', 'createdBy', 'createdAt',
        ]
        extra_kwargs = {
            'status': {'required': False},
        }

    def create(self, validated_data):
        # Initial status follows the campaign date
        validated_data.setdefault('status', status_for_date(validated_data['date']))
        return super().create(validated_data)
