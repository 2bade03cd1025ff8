from django.contrib import admin

from .models import Donor


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display   = ['full_name', 'blood_group', 'phone', 'donation_count', 'availability', 'is_verified', 'can_donate_display']
    list_filter    = ['blood_group', 'availability', 'is_verified']
    search_fields  = ['full_name', 'email', 'phone']
    ordering       = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Personal Info', {
            'fields': ('full_name', 'email', 'phone', 'blood_group')
        }),
        ('Location', {
            'fields': ('location',),
            'description': 'GeoJSON point, coordinates are [longitude, latitude]',
        }),
        ('Donation Stats', {
            'fields': ('donation_count', 'last_donation_date', 'availability')
        }),
        ('Health', {
            'fields': ('medical_history',),
            'classes': ('collapse',),
        }),
        ('Account', {
            'fields': ('is_verified', 'is_admin'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(boolean=True, description='Can Donate Now')
    def can_donate_display(self, obj):
        return obj.can_donate

    actions = ['verify_donors']

    @admin.action(description='Mark selected donors as verified')
    def verify_donors(self, request, queryset):
        updated = queryset.filter(is_verified=False).update(is_verified=True)
        self.message_user(request, f'{updated} donor(s) verified.')
