import logging
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.db.models import ProtectedError, Q
from django.utils import timezone

from utils.results import Err, ErrorKind, Ok, service_boundary

from .models import Term

logger = logging.getLogger(__name__)

DEFAULT_SUBS_AMOUNT = Decimal("20.00")
DEFAULT_TERM_LENGTH = relativedelta(months=3)

TERM_NOT_FOUND = "Term not found."
TERM_OVERLAPS = (
    "This term overlaps with an existing term. Please choose different dates."
)


def _today(today=None):
    return today or timezone.localdate()


class TermService:
    """
    Create, update, delete and classify terms.

    Classification is never cached: every query compares the stored date
    ranges against ``today`` at call time. ``today`` may be passed in
    explicitly and otherwise defaults to the local date.
    """

    # Queries -----------------------------------------------------------

    def get_all(self):
        return list(Term.objects.order_by("-start_date", "-id"))

    def get_by_id(self, term_id):
        return Term.objects.filter(pk=term_id).first()

    def get_current_term(self, today=None):
        """
        Return the term whose inclusive date range contains ``today``.

        Overlapping terms should not exist, but when several match the one
        that started most recently wins (highest id on a tie) and the
        overlap is logged.
        """
        today = _today(today)
        matches = list(
            Term.objects.filter(start_date__lte=today, end_date__gte=today).order_by(
                "-start_date", "-id"
            )
        )
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "%d terms overlap %s (%s); using '%s'",
                len(matches),
                today.isoformat(),
                ", ".join(str(term.pk) for term in matches),
                matches[0].name,
            )
        return matches[0]

    def get_future_terms(self, today=None):
        today = _today(today)
        return list(Term.objects.filter(start_date__gt=today).order_by("start_date", "id"))

    def get_past_terms(self, today=None):
        today = _today(today)
        return list(Term.objects.filter(end_date__lt=today).order_by("-end_date", "-id"))

    def classify(self, term, today=None):
        return term.status_on(_today(today))

    def validate_no_overlap(self, term, exclude_id=None):
        """Return True when ``term`` does not overlap any other stored term."""
        others = Term.objects.filter(
            Q(start_date__lte=term.end_date) & Q(end_date__gte=term.start_date)
        )
        if exclude_id is not None:
            others = others.exclude(pk=exclude_id)
        return not others.exists()

    def new_term_defaults(self, today=None):
        """Initial values for the add-term form."""
        from siteconfig.services import ConfigurationNotInitialized, ConfigurationService

        today = _today(today)
        try:
            subs_amount = ConfigurationService().get_configuration().default_subs_amount
        except ConfigurationNotInitialized:
            subs_amount = DEFAULT_SUBS_AMOUNT
        return {
            "name": "",
            "start_date": today,
            "end_date": today + DEFAULT_TERM_LENGTH,
            "subs_amount": subs_amount,
        }

    # Mutations ---------------------------------------------------------

    def _check(self, term, exclude_id=None):
        term.name = (term.name or "").strip()
        errors = term.validation_errors()
        if errors:
            return Err(ErrorKind.VALIDATION, " ".join(errors))
        if not self.validate_no_overlap(term, exclude_id=exclude_id):
            return Err(ErrorKind.VALIDATION, TERM_OVERLAPS)
        return None

    @service_boundary("Create term")
    def create(self, term):
        term.pk = None
        problem = self._check(term)
        if problem:
            logger.info("Create term '%s' rejected: %s", term.name, problem.message)
            return problem

        with transaction.atomic():
            term.save()
        logger.info("Created term %s '%s'", term.pk, term.name)
        return Ok(term)

    @service_boundary("Update term")
    def update(self, term):
        existing = self.get_by_id(term.pk) if term.pk else None
        if existing is None:
            return Err(ErrorKind.NOT_FOUND, TERM_NOT_FOUND)

        problem = self._check(term, exclude_id=existing.pk)
        if problem:
            logger.info("Update term %s rejected: %s", existing.pk, problem.message)
            return problem

        existing.name = term.name
        existing.start_date = term.start_date
        existing.end_date = term.end_date
        existing.subs_amount = term.subs_amount
        with transaction.atomic():
            existing.save()
        logger.info("Updated term %s '%s'", existing.pk, existing.name)
        return Ok(existing)

    @service_boundary("Delete term")
    def delete(self, term_id):
        term = self.get_by_id(term_id)
        if term is None:
            return Err(ErrorKind.NOT_FOUND, TERM_NOT_FOUND)

        try:
            with transaction.atomic():
                term.delete()
        except ProtectedError:
            return Err(
                ErrorKind.VALIDATION,
                f"Cannot delete term '{term.name}' because other records are linked to it.",
            )
        logger.info("Deleted term %s '%s'", term_id, term.name)
        return Ok(term)
