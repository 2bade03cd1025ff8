# api/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'donors', views.DonorViewSet, basename='donor')
router.register(r'requests', views.BloodRequestViewSet, basename='blood-request')
router.register(r'campaigns', views.CampaignViewSet, basename='campaign')

app_name = 'api'

urlpatterns = [
    path('', include(router.urls)),

    path('health/', views.health, name='health'),
    path('stats/', views.dashboard_stats, name='dashboard-stats'),
]

# Available endpoints:
# GET    /api/health/                          - Service health
# GET    /api/stats/                           - Dashboard statistics
#
# GET    /api/donors/?bloodGroup=&available=   - Browse donors (exact blood group)
# POST   /api/donors/                          - Register a donor
# GET    /api/donors/nearby/?lat=&lng=&radius=&bloodGroup=&match=
#                                              - distanceKm is a number rounded to 2 decimals
# GET    /api/donors/{id}/                     - Donor profile
# PATCH  /api/donors/{id}/                     - Update profile
# DELETE /api/donors/{id}/                     - Remove donor
# PATCH  /api/donors/{id}/location/            - Update location
# PUT    /api/donors/{id}/verify/              - Verify donor
#
# GET    /api/requests/?status=                - List blood requests
# POST   /api/requests/                        - Create request, alerts donors
# GET    /api/requests/nearby/?lat=&lng=&radius=
#                                              - distance is a string with 1 decimal, e.g. "3.2 km"
# GET    /api/requests/{id}/                   - Get request
# PATCH  /api/requests/{id}/                   - Advance status
# POST   /api/requests/{id}/notify/            - Alert donors again (400 once completed)
#
# GET    /api/campaigns/?city=&type=&status=&date=
# POST   /api/campaigns/                       - Create campaign
# GET/PUT/PATCH/DELETE /api/campaigns/{id}/
