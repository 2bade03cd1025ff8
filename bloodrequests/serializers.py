# bloodrequests/serializers.py
from rest_framework import serializers

from api.fields import BloodGroupField, LocationSerializerMixin
from donors.models import Donor
from .models import BloodRequest


class BloodRequestSerializer(LocationSerializerMixin, serializers.ModelSerializer):
    requesterName = serializers.CharField(source='requester_name', max_length=200)
    requesterPhone = serializers.CharField(source='requester_phone', max_length=20)
    bloodGroup = BloodGroupField(source='blood_group')
    unitsRequired = serializers.IntegerField(source='units_required', min_value=1)
    hospitalName = serializers.CharField(source='hospital_name', max_length=200)
    hospitalAddress = serializers.CharField(source='hospital_address')
    urgency = serializers.ChoiceField(choices=BloodRequest.URGENCY_CHOICES, required=False)
    status = serializers.CharField(read_only=True)
    requesterId = serializers.PrimaryKeyRelatedField(
        source='requester', queryset=Donor.objects.all(), required=False, allow_null=True
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = BloodRequest
        fields = [
            'id', 'requesterName', 'requesterPhone', 'bloodGroup', 'unitsRequired',
            'hospitalName', 'hospitalAddress', 'latitude', 'longitude', 'location',
            'urgency', 'status', 'requesterId', 'createdAt', 'updatedAt',
        ]


class BloodRequestStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BloodRequest.STATUS_CHOICES)


class NearbyBloodRequestSerializer(BloodRequestSerializer):
    """Adds the distance from the searcher, e.g. "3.2 km" """
    distance = serializers.SerializerMethodField()

    class Meta(BloodRequestSerializer.Meta):
        fields = BloodRequestSerializer.Meta.fields + ['distance']

    def get_distance(self, obj):
        distances = self.context.get('distances', {})
        return f"{distances[obj.pk]:.1f} km"
