import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from members.decorators import staff_required
from utils.results import Ok, unexpected_error_message

from .forms import TermForm
from .models import Term
from .services import TermService

logger = logging.getLogger(__name__)

TEMPLATE = "terms/term_management.html"


@dataclass(frozen=True)
class TermPageState:
    """
    Everything the term management template renders for one request.

    Built fresh by each view and never mutated; variations are derived
    with dataclasses.replace().
    """

    today: object = None
    current_term: Optional[Term] = None
    future_terms: Tuple[Term, ...] = ()
    past_terms: Tuple[Term, ...] = ()
    all_terms: Tuple[Term, ...] = ()
    form: Optional[TermForm] = None
    editing_term_id: Optional[int] = None
    term_to_delete: Optional[Term] = None
    error_message: str = ""

    @property
    def show_form(self):
        return self.form is not None

    @property
    def show_delete_confirm(self):
        return self.term_to_delete is not None

    @property
    def is_editing(self):
        return self.editing_term_id is not None


def _load_state(service, today):
    """Query every term bucket afresh; a failure becomes an error message."""
    try:
        return TermPageState(
            today=today,
            current_term=service.get_current_term(today),
            future_terms=tuple(service.get_future_terms(today)),
            past_terms=tuple(service.get_past_terms(today)),
            all_terms=tuple(service.get_all()),
        )
    except Exception as exc:
        logger.exception("Loading terms failed")
        return TermPageState(
            today=today,
            error_message=f"Error loading terms: "
            f"{unexpected_error_message(exc, settings.GUMS_SHOW_ERROR_DETAIL)}",
        )


def _render(request, state):
    return render(request, TEMPLATE, {"state": state})


#########################
# term_management() View

# Lists the current, future and past terms.
# Query parameters open the optional panels:
# - ?add=1          empty form pre-filled with TermService.new_term_defaults()
# - ?edit=<id>      form bound to a copy of the term
# - ?delete=<id>    delete confirmation for the term
# A stale id (term deleted elsewhere) shows "Term not found." instead.


@staff_required
@require_GET
def term_management(request):
    service = TermService()
    today = timezone.localdate()
    state = _load_state(service, today)

    if request.GET.get("add"):
        form = TermForm(initial=service.new_term_defaults(today))
        return _render(request, dataclasses.replace(state, form=form))

    edit_id = request.GET.get("edit")
    if edit_id:
        term = service.get_by_id(edit_id) if edit_id.isdigit() else None
        if term is None:
            return _render(request, dataclasses.replace(state, error_message="Term not found."))
        return _render(
            request,
            dataclasses.replace(state, form=TermForm(instance=term), editing_term_id=term.pk),
        )

    delete_id = request.GET.get("delete")
    if delete_id:
        term = service.get_by_id(delete_id) if delete_id.isdigit() else None
        if term is None:
            return _render(request, dataclasses.replace(state, error_message="Term not found."))
        return _render(request, dataclasses.replace(state, term_to_delete=term))

    return _render(request, state)


#########################
# term_save() View

# POST target for both the add form (no term_id) and the edit form.
# The form only binds and type-checks input; the business rules (dates,
# amount, overlap, existence) are enforced by TermService, whose Err
# message is shown verbatim above the re-rendered form.


@staff_required
@require_POST
def term_save(request, term_id=None):
    service = TermService()
    today = timezone.localdate()
    form = TermForm(request.POST)

    if not form.is_valid():
        state = dataclasses.replace(
            _load_state(service, today), form=form, editing_term_id=term_id
        )
        return _render(request, state)

    term = form.save(commit=False)
    try:
        if term_id is None:
            result = service.create(term)
        else:
            term.pk = term_id
            result = service.update(term)
    except Exception as exc:
        logger.exception("Saving term failed")
        error = unexpected_error_message(exc, settings.GUMS_SHOW_ERROR_DETAIL)
    else:
        if isinstance(result, Ok):
            verb = "added" if term_id is None else "updated"
            messages.success(
                request, f"Term '{result.value.name}' has been {verb} successfully!"
            )
            return redirect("terms:term_management")
        error = result.user_message(settings.GUMS_SHOW_ERROR_DETAIL)

    state = dataclasses.replace(
        _load_state(service, today),
        form=form,
        editing_term_id=term_id,
        error_message=error,
    )
    return _render(request, state)


@staff_required
@require_POST
def term_delete(request, term_id):
    try:
        result = TermService().delete(term_id)
    except Exception as exc:
        logger.exception("Deleting term %s failed", term_id)
        messages.error(
            request, unexpected_error_message(exc, settings.GUMS_SHOW_ERROR_DETAIL)
        )
        return redirect("terms:term_management")

    if isinstance(result, Ok):
        messages.success(
            request, f"Term '{result.value.name}' has been deleted successfully."
        )
    else:
        messages.error(request, result.user_message(settings.GUMS_SHOW_ERROR_DETAIL))
    return redirect("terms:term_management")
