# donors/serializers.py
from rest_framework import serializers

from api.fields import BloodGroupField, LatitudeField, LocationSerializerMixin, LongitudeField
from .models import Donor


class DonorSerializer(LocationSerializerMixin, serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name', max_length=200)
    bloodGroup = BloodGroupField(source='blood_group')
    lastDonation = serializers.DateField(source='last_donation_date', required=False, allow_null=True)
    donationCount = serializers.IntegerField(source='donation_count', min_value=0, required=False)
    medicalHistory = serializers.ListField(
        source='medical_history', child=serializers.CharField(), required=False
    )
    canDonate = serializers.BooleanField(source='can_donate', read_only=True)
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    isAdmin = serializers.BooleanField(source='is_admin', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Donor
        fields = [
            'id', 'fullName', 'email', 'phone', 'bloodGroup',
            'latitude', 'longitude', 'location',
            'lastDonation', 'donationCount', 'medicalHistory', 'availability',
            'canDonate', 'isVerified', 'isAdmin', 'createdAt', 'updatedAt',
        ]


class DonorLocationSerializer(serializers.Serializer):
    latitude = LatitudeField()
    longitude = LongitudeField()


class NearbyDonorSerializer(serializers.Serializer):
    """Renders a MatchResult from the nearby-donor search"""
    id = serializers.IntegerField(source='donor.id')
    name = serializers.CharField(source='donor.full_name')
    bloodGroup = serializers.CharField(source='donor.blood_group')
    phone = serializers.CharField(source='donor.phone')
    location = serializers.SerializerMethodField()
    distanceKm = serializers.SerializerMethodField()
    availability = serializers.BooleanField(source='donor.availability')
    lastDonation = serializers.DateField(source='donor.last_donation_date')
    donations = serializers.IntegerField(source='donor.donation_count')

    def get_location(self, match):
        return match.donor.geo_point.as_dict()

    def get_distanceKm(self, match):
        return round(match.distance_km, 2)
