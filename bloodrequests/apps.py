from django.apps import AppConfig


class BloodRequestsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bloodrequests'
    verbose_name = 'Blood Requests'

    def ready(self):
        # Register the post_save hook that broadcasts new requests
        from . import signals  # noqa: F401
