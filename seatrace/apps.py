"""
Django SeaTrace app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SeaTraceConfig(AppConfig):
    """SeaTrace application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "seatrace"
    verbose_name = _("Traceability")

    def ready(self):
        """Import signal handlers when app is ready."""
        # Import handlers to register them
        from seatrace.signals import handlers  # noqa: F401
