import logging

from django.db import transaction

from utils.results import Ok, service_boundary

from .models import DEFAULT_CONFIGURATION, UnitConfiguration

logger = logging.getLogger(__name__)

# Fields copied from an edited configuration onto the stored singleton.
EDITABLE_FIELDS = tuple(DEFAULT_CONFIGURATION)


class ConfigurationNotInitialized(Exception):
    """The singleton UnitConfiguration row is missing (startup did not run)."""


class ConfigurationService:
    """
    Read and write the single UnitConfiguration row.

    Nothing is cached between calls; every read goes to the database so a
    save from one session is visible to the next request of any other.
    """

    def get_configuration(self):
        config = UnitConfiguration.objects.order_by("pk").first()
        if config is None:
            raise ConfigurationNotInitialized(
                "Unit configuration has not been initialised. "
                "Run 'manage.py migrate' or 'manage.py ensure_default_configuration'."
            )
        return config

    def is_configured(self):
        return UnitConfiguration.objects.exists()

    @service_boundary("Update configuration")
    def update_configuration(self, configuration):
        """Overwrite the stored singleton with ``configuration`` (last write wins)."""
        with transaction.atomic():
            existing = UnitConfiguration.objects.order_by("pk").first()
            if existing is None:
                configuration.pk = None
                configuration.save()
                logger.info("Created unit configuration '%s'", configuration.unit_name)
                return Ok(configuration)

            for field_name in EDITABLE_FIELDS:
                setattr(existing, field_name, getattr(configuration, field_name))
            existing.save()
        logger.info("Updated unit configuration '%s'", existing.unit_name)
        return Ok(existing)

    def ensure_default_configuration(self):
        """
        Insert the default configuration row if none exists.

        Idempotent: when a row is already present it is returned untouched.
        """
        with transaction.atomic():
            existing = UnitConfiguration.objects.order_by("pk").first()
            if existing is not None:
                return existing
            config = UnitConfiguration(**DEFAULT_CONFIGURATION)
            config.save()
        logger.info("Created default unit configuration '%s'", config.unit_name)
        return config
