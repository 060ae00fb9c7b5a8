import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from members.decorators import staff_required
from utils.results import Ok, unexpected_error_message

from .forms import UnitConfigurationForm
from .services import ConfigurationNotInitialized, ConfigurationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitSettingsState:
    """Everything the unit settings template needs for one request."""

    form: Optional[UnitConfigurationForm] = None
    error_message: str = ""

    @property
    def is_loaded(self):
        return self.form is not None


#########################
# unit_settings() View

# GET renders the singleton UnitConfiguration for editing.
# POST validates the form and hands the edited copy to
# ConfigurationService.update_configuration(); on success the page
# redirects back to itself with a flash message, otherwise it re-renders
# with the error.


@staff_required
@require_http_methods(["GET", "POST"])
def unit_settings(request):
    service = ConfigurationService()
    show_detail = settings.GUMS_SHOW_ERROR_DETAIL

    try:
        config = service.get_configuration()
    except ConfigurationNotInitialized as exc:
        logger.error("Unit settings requested before initialisation: %s", exc)
        state = UnitSettingsState(error_message=f"Error loading configuration: {exc}")
        return render(request, "siteconfig/unit_settings.html", {"state": state})

    if request.method != "POST":
        state = UnitSettingsState(form=UnitConfigurationForm(instance=config))
        return render(request, "siteconfig/unit_settings.html", {"state": state})

    form = UnitConfigurationForm(request.POST, instance=config)
    if not form.is_valid():
        state = UnitSettingsState(form=form)
        return render(request, "siteconfig/unit_settings.html", {"state": state})

    try:
        result = service.update_configuration(form.save(commit=False))
    except Exception as exc:
        logger.exception("Saving unit settings failed")
        state = UnitSettingsState(
            form=form, error_message=unexpected_error_message(exc, show_detail)
        )
        return render(request, "siteconfig/unit_settings.html", {"state": state})

    if isinstance(result, Ok):
        messages.success(request, "Settings saved successfully!")
        return redirect("siteconfig:unit_settings")

    state = UnitSettingsState(form=form, error_message=result.user_message(show_detail))
    return render(request, "siteconfig/unit_settings.html", {"state": state})
