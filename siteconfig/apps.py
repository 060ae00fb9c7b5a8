from django.apps import AppConfig
from django.db.models.signals import post_migrate

#########################
# SiteconfigConfig Class

# Application configuration for the "siteconfig" app.

# ready() hooks ensure_default_unit_configuration() to post_migrate so the
# singleton UnitConfiguration row exists as soon as the schema does, before
# the application serves a request.


class SiteconfigConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "siteconfig"
    verbose_name = "Unit Configuration"

    def ready(self):
        from .signals import ensure_default_unit_configuration

        post_migrate.connect(
            ensure_default_unit_configuration,
            sender=self,
            dispatch_uid="siteconfig_ensure_default_configuration",
        )
