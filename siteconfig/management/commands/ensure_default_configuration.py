"""
Django management command to create the default unit configuration.

Runs automatically after every ``migrate``; this command exists for
deployments that want to run the step explicitly.

Usage:
    python manage.py ensure_default_configuration
"""

from django.core.management.base import BaseCommand

from siteconfig.services import ConfigurationService


class Command(BaseCommand):
    help = "Create the default unit configuration if none exists (safe to run repeatedly)"

    def handle(self, *args, **options):
        service = ConfigurationService()
        already_configured = service.is_configured()
        config = service.ensure_default_configuration()

        if already_configured:
            self.stdout.write(f"Unit configuration already present: {config.unit_name}")
        else:
            self.stdout.write(
                self.style.SUCCESS(f"Created default unit configuration: {config.unit_name}")
            )
