import logging

from django.db import connections

logger = logging.getLogger(__name__)


def ensure_default_unit_configuration(sender, using="default", **kwargs):
    """post_migrate receiver: create the default UnitConfiguration if missing."""
    from .models import UnitConfiguration
    from .services import ConfigurationService

    table = UnitConfiguration._meta.db_table
    if table not in connections[using].introspection.table_names():
        logger.debug("Skipping default configuration, %s does not exist", table)
        return

    ConfigurationService().ensure_default_configuration()
