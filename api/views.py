# api/views.py
import os
import time

from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.response import Response

from algorithms.haversine import GeoPoint, find_nearby
from algorithms.matching import DonorMatcher
from bloodrequests.models import BloodRequest
from bloodrequests.serializers import (
    BloodRequestSerializer,
    BloodRequestStatusSerializer,
    NearbyBloodRequestSerializer,
)
from campaigns.models import Campaign
from campaigns.serializers import CampaignSerializer
from donors.models import Donor
from donors.repositories import DjangoDonorRepository
from donors.serializers import DonorLocationSerializer, DonorSerializer, NearbyDonorSerializer
from donors.tasks import broadcast
from rakhtsetu.conf import radius_km
from .serializers import (
    BloodRequestFilterSerializer,
    CampaignFilterSerializer,
    DonorFilterSerializer,
    NearbyDonorQuerySerializer,
    NearbyQuerySerializer,
)

STARTED_AT = time.monotonic()


def parse_query(serializer_class, request):
    serializer = serializer_class(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class DonorViewSet(viewsets.ModelViewSet):
    """API endpoint for donors"""
    queryset = Donor.objects.all().order_by('-created_at')
    serializer_class = DonorSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filters = parse_query(DonorFilterSerializer, self.request)
        # Browsing is an exact blood group match
        if filters.get('bloodGroup'):
            queryset = queryset.filter(blood_group=filters['bloodGroup'])
        if filters.get('available') is not None:
            queryset = queryset.filter(availability=filters['available'])
        return queryset

    def destroy(self, request, *args, **kwargs):
        donor = self.get_object()
        donor.delete()
        return Response({'message': 'Donor removed'}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'])
    def nearby(self, request):
        """Available donors around lat/lng, nearest first"""
        query = parse_query(NearbyDonorQuerySerializer, request)
        origin = GeoPoint(latitude=query['lat'], longitude=query['lng'])
        radius = query.get('radius', radius_km('NEARBY_DONOR_RADIUS_KM'))

        matches = DonorMatcher(DjangoDonorRepository()).find_nearby(
            origin,
            radius,
            blood_group=query.get('bloodGroup'),
            compatible=query['match'] == NearbyDonorQuerySerializer.MATCH_COMPATIBLE,
        )
        return Response(NearbyDonorSerializer(matches, many=True).data)

    @action(detail=True, methods=['patch'], url_path='location')
    def update_location(self, request, pk=None):
        donor = self.get_object()
        serializer = DonorLocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        donor.set_location(**serializer.validated_data)
        donor.save(update_fields=['location', 'updated_at'])
        return Response(DonorSerializer(donor).data)

    @action(detail=True, methods=['put'])
    def verify(self, request, pk=None):
        donor = self.get_object()
        donor.is_verified = True
        donor.save(update_fields=['is_verified', 'updated_at'])
        return Response(DonorSerializer(donor).data)


class BloodRequestViewSet(mixins.CreateModelMixin,
                          mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """API endpoint for blood requests"""
    queryset = BloodRequest.objects.all().order_by('-created_at')
    serializer_class = BloodRequestSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        status_filter = parse_query(BloodRequestFilterSerializer, self.request).get('status')
        if status_filter and status_filter != 'all':
            queryset = queryset.filter(status=status_filter)
        return queryset

    def partial_update(self, request, *args, **kwargs):
        """Status changes only; requests never move backwards"""
        blood_request = self.get_object()
        serializer = BloodRequestStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        blood_request.advance_status(serializer.validated_data['status'])
        return Response(BloodRequestSerializer(blood_request).data)

    @action(detail=False, methods=['get'])
    def nearby(self, request):
        """Pending and matched requests around lat/lng, nearest first"""
        query = parse_query(NearbyQuerySerializer, request)
        origin = GeoPoint(latitude=query['lat'], longitude=query['lng'])
        radius = query.get('radius', radius_km('NEARBY_REQUEST_RADIUS_KM'))

        open_requests = BloodRequest.objects.exclude(status=BloodRequest.STATUS_COMPLETED)
        nearby = find_nearby(origin, open_requests, radius)

        serializer = NearbyBloodRequestSerializer(
            [blood_request for blood_request, _ in nearby],
            many=True,
            context={'distances': {blood_request.pk: distance for blood_request, distance in nearby}},
        )
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def notify(self, request, pk=None):
        """Alert compatible donors near this request again"""
        blood_request = self.get_object()
        sent, matched = broadcast(blood_request)

        return Response({
            'message': f'Successfully notified {sent} out of {matched} donors',
            'notifiedCount': sent,
            'totalMatched': matched,
            'status': blood_request.status,
        }, status=status.HTTP_200_OK)


class CampaignViewSet(viewsets.ModelViewSet):
    """API endpoint for donation campaigns"""
    queryset = Campaign.objects.all().order_by('date')
    serializer_class = CampaignSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filters = parse_query(CampaignFilterSerializer, self.request)
        if filters.get('city'):
            queryset = queryset.filter(city__icontains=filters['city'])
        if filters.get('type') and filters['type'] != 'All':
            queryset = queryset.filter(type=filters['type'])
        if filters.get('status') and filters['status'] != 'All':
            queryset = queryset.filter(status=filters['status'])
        if filters.get('date'):
            queryset = queryset.filter(date=filters['date'])
        return queryset

    def list(self, request, *args, **kwargs):
        # Keep statuses in step with the calendar before anyone sees them
        Campaign.objects.refresh_statuses()
        return super().list(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({'message': 'Campaign removed'}, status=status.HTTP_200_OK)


@api_view(['GET'])
def health(request):
    return Response({
        'status': 'ok',
        'timestamp': timezone.now().isoformat(),
        'uptime': round(time.monotonic() - STARTED_AT, 3),
        'environment': os.environ.get('DJANGO_ENV', 'development'),
    })


@api_view(['GET'])
def dashboard_stats(request):
    """Get dashboard statistics"""
    return Response({
        'total_donors': Donor.objects.count(),
        'available_donors': Donor.objects.filter(availability=True).count(),
        'verified_donors': Donor.objects.filter(is_verified=True).count(),
        'active_requests': BloodRequest.objects.filter(
            status__in=[BloodRequest.STATUS_PENDING, BloodRequest.STATUS_MATCHED]
        ).count(),
        'completed_requests': BloodRequest.objects.filter(
            status=BloodRequest.STATUS_COMPLETED
        ).count(),
        'upcoming_campaigns': Campaign.objects.filter(status=Campaign.STATUS_UPCOMING).count(),
    })
