import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from members.constants.membership import STATUS_ALIASES, PersonType, Section
from siteconfig.services import ConfigurationNotInitialized, ConfigurationService
from terms.services import TermService
from utils.results import Ok, unexpected_error_message

from .decorators import staff_required
from .forms import EmergencyContactForm
from .services import MembershipSummary, PersonService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    summary: MembershipSummary = MembershipSummary()
    current_term_name: Optional[str] = None
    unit_name: str = ""
    error_message: str = ""


#########################
# home() View

# Dashboard for the unit: headline membership counts for the active
# register and the name of the term running today. Both are recomputed on
# every request. A failure in either query is reported on the page rather
# than raised.


@login_required
def home(request):
    try:
        service = PersonService()
        summary = service.summarize(service.get_active())
        current_term = TermService().get_current_term(timezone.localdate())
    except Exception as exc:
        logger.exception("Loading dashboard failed")
        state = DashboardState(
            error_message=unexpected_error_message(exc, settings.GUMS_SHOW_ERROR_DETAIL)
        )
        return render(request, "home.html", {"state": state})

    try:
        unit_name = ConfigurationService().get_configuration().unit_name
    except ConfigurationNotInitialized:
        unit_name = ""

    state = DashboardState(
        summary=summary,
        current_term_name=current_term.name if current_term else None,
        unit_name=unit_name,
    )
    return render(request, "home.html", {"state": state})


#########################
# member_list() View

# The register. Filters come from the query string:
# - status: "active" (default), "inactive" or "all"
# - type:   leader / girl
# - section: rainbow / brownie / guide / ranger
# - q:      name or membership number fragment
# The summary counts the people currently listed.


@login_required
def member_list(request):
    service = PersonService()
    status = request.GET.get("status", "active")
    query = request.GET.get("q", "").strip()
    person_type = request.GET.get("type", "")
    section = request.GET.get("section", "")

    if query:
        people = service.search(query, active_only=status == "active")
    elif status == "all":
        people = service.get_all()
    elif status == "inactive":
        people = service.get_inactive()
    else:
        people = service.get_active()

    if status in STATUS_ALIASES:
        people = [p for p in people if p.is_active == STATUS_ALIASES[status]]
    if person_type in PersonType.values:
        people = [p for p in people if p.person_type == person_type]
    if section in Section.values:
        people = [p for p in people if p.section == section]

    return render(
        request,
        "members/member_list.html",
        {
            "people": people,
            "summary": service.summarize(people),
            "status": status,
            "query": query,
            "selected_type": person_type,
            "selected_section": section,
            "person_types": PersonType.choices,
            "sections": Section.choices,
        },
    )


#########################
# member_view() View

# Detail page for one person with their emergency contacts in sort_order.
# Staff also get the add-contact form and a remove button per contact,
# which post to contact_add / contact_remove below.


@login_required
def member_view(request, person_id, contact_form=None):
    result = PersonService().get_by_id(person_id)
    if not isinstance(result, Ok):
        raise Http404(result.message)

    person = result.value
    can_edit = request.user.is_staff or request.user.is_superuser
    if can_edit and contact_form is None:
        contact_form = EmergencyContactForm()

    context = {
        "person": person,
        "contacts": list(person.emergency_contacts.all()),
        "can_edit": can_edit,
        "contact_form": contact_form if can_edit else None,
    }
    return render(request, "members/member_view.html", context)


@staff_required
@require_POST
def contact_add(request, person_id):
    service = PersonService()
    result = service.get_by_id(person_id)
    if not isinstance(result, Ok):
        raise Http404(result.message)
    person = result.value

    form = EmergencyContactForm(request.POST)
    if not form.is_valid():
        return member_view(request, person_id, contact_form=form)

    added = service.add_emergency_contact(person, **form.cleaned_data)
    if isinstance(added, Ok):
        messages.success(request, f"Emergency contact '{added.value.contact_name}' added.")
    else:
        messages.error(request, added.user_message(settings.GUMS_SHOW_ERROR_DETAIL))
    return redirect("members:member_view", person_id=person.pk)


@staff_required
@require_POST
def contact_remove(request, person_id, contact_id):
    service = PersonService()
    result = service.get_by_id(person_id)
    if not isinstance(result, Ok):
        raise Http404(result.message)
    person = result.value

    removed = service.remove_emergency_contact(person, contact_id)
    if isinstance(removed, Ok):
        messages.success(
            request, f"Emergency contact '{removed.value.contact_name}' removed."
        )
    else:
        messages.error(request, removed.user_message(settings.GUMS_SHOW_ERROR_DETAIL))
    return redirect("members:member_view", person_id=person.pk)
