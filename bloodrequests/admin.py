# bloodrequests/admin.py
from django.contrib import admin

from algorithms.exceptions import MatchingError
from donors.tasks import broadcast
from .models import BloodRequest


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'hospital_name',
        'requester_name',
        'blood_group',
        'units_required',
        'urgency',
        'status',
        'created_at',
    ]
    list_filter = ['status', 'urgency', 'blood_group', 'created_at']
    search_fields = ['requester_name', 'hospital_name', 'hospital_address']
    readonly_fields = ['status', 'created_at', 'updated_at']

    fieldsets = (
        ('Request Information', {
            'fields': ('requester_name', 'requester_phone', 'requester', 'blood_group',
                       'units_required', 'urgency', 'status')
        }),
        ('Hospital', {
            'fields': ('hospital_name', 'hospital_address', 'location'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['notify_donors', 'mark_completed']

    @admin.action(description='Alert compatible donors nearby')
    def notify_donors(self, request, queryset):
        total = 0
        for blood_request in queryset.exclude(status=BloodRequest.STATUS_COMPLETED):
            try:
                sent, _ = broadcast(blood_request)
            except MatchingError as e:
                self.message_user(request, f'Request #{blood_request.id}: {e}', level='error')
                continue
            total += sent
        self.message_user(request, f'{total} alert(s) sent.')

    @admin.action(description='Mark selected requests as completed')
    def mark_completed(self, request, queryset):
        updated = queryset.exclude(status=BloodRequest.STATUS_COMPLETED).update(
            status=BloodRequest.STATUS_COMPLETED
        )
        self.message_user(request, f'{updated} request(s) completed.')
