from django.contrib import admin

from .models import Campaign


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display  = ['title', 'city', 'date', 'type', 'status', 'organizer']
    list_filter   = ['type', 'status', 'city']
    search_fields = ['title', 'organizer', 'city']
    ordering      = ['date']
    readonly_fields = ['created_at', 'updated_at']

    actions = ['refresh_statuses']

    @admin.action(description='Refresh statuses from campaign dates')
    def refresh_statuses(self, request, queryset):
        updated = queryset.refresh_statuses()
        self.message_user(request, f'{updated} campaign(s) updated.')
