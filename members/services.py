import json
import logging
from collections import Counter
from dataclasses import dataclass

from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from members.constants.membership import PersonType, PhotoPermission, Section
from members.models import DataRemovalLog, EmergencyContact, Person
from members.utils.contacts import add_contact, remove_contact, renumber
from utils.results import Err, ErrorKind, Ok, service_boundary

logger = logging.getLogger(__name__)

PERSON_NOT_FOUND = "Person not found."
CONTACT_NOT_FOUND = "Emergency contact not found."
DUPLICATE_MEMBERSHIP_NUMBER = "Membership number '{}' is already in use."
DATA_ALREADY_REMOVED = "Personal data for this person has already been removed."

# Fields copied onto the stored row by PersonService.update().
EDITABLE_FIELDS = (
    "membership_number",
    "full_name",
    "date_of_birth",
    "person_type",
    "section",
    "email",
    "phone",
    "date_joined",
    "date_left",
    "is_active",
    "is_data_removed",
    "allergies",
    "disabilities",
    "notes",
    "photo_permission",
)


@dataclass(frozen=True)
class MembershipSummary:
    total: int = 0
    leaders: int = 0
    rainbow: int = 0
    brownie: int = 0
    guide: int = 0
    ranger: int = 0

    @property
    def girls(self):
        return self.total - self.leaders

    def section_counts(self):
        """(label, count) pairs in section order, for templates."""
        return [(label, getattr(self, value)) for value, label in Section.choices]


class PersonService:
    """Queries and register operations over Person and their contacts."""

    def _base(self):
        return Person.objects.prefetch_related("emergency_contacts")

    # Queries -----------------------------------------------------------

    def get_all(self):
        return list(self._base().all())

    def get_active(self):
        return list(self._base().filter(is_active=True, is_data_removed=False))

    def get_inactive(self):
        return list(self._base().filter(is_active=False))

    def get_by_type(self, person_type):
        return list(self._base().filter(person_type=person_type, is_active=True))

    def get_by_section(self, section):
        return list(
            self._base().filter(
                person_type=PersonType.GIRL, section=section, is_active=True
            )
        )

    def get_by_id(self, person_id):
        person = self._base().filter(pk=person_id).first()
        if person is None:
            return Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)
        return Ok(person)

    def get_by_membership_number(self, membership_number):
        return self._base().filter(membership_number=membership_number).first()

    def search(self, term, active_only=True):
        people = self._base().all()
        if active_only:
            people = people.filter(is_active=True)
        term = (term or "").strip()
        if term:
            people = people.filter(
                Q(full_name__icontains=term) | Q(membership_number__icontains=term)
            )
        return list(people)

    def is_membership_number_unique(self, membership_number, exclude_id=None):
        others = Person.objects.filter(membership_number=membership_number)
        if exclude_id is not None:
            others = others.exclude(pk=exclude_id)
        return not others.exists()

    def summarize(self, people):
        """
        Count leaders and girls per section in a single pass over ``people``.
        """
        tally = Counter((person.person_type, person.section) for person in people)
        sections = {value: 0 for value in Section.values}
        leaders = 0
        for (person_type, section), count in tally.items():
            if person_type == PersonType.LEADER:
                leaders += count
            elif section in sections:
                sections[section] += count
        return MembershipSummary(total=sum(tally.values()), leaders=leaders, **sections)

    # Mutations ---------------------------------------------------------

    @service_boundary("Add person")
    def add(self, person):
        person.pk = None
        if not self.is_membership_number_unique(person.membership_number):
            return Err(
                ErrorKind.VALIDATION,
                DUPLICATE_MEMBERSHIP_NUMBER.format(person.membership_number),
            )
        person.is_active = True
        person.date_left = None
        if person.date_joined is None:
            person.date_joined = timezone.localdate()

        person.full_clean()
        with transaction.atomic():
            person.save()
        logger.info("Added person %s (%s)", person.pk, person.membership_number)
        return Ok(person)

    @service_boundary("Update person")
    def update(self, person):
        existing = Person.objects.filter(pk=person.pk).first() if person.pk else None
        if existing is None:
            return Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)
        if not self.is_membership_number_unique(
            person.membership_number, exclude_id=existing.pk
        ):
            return Err(
                ErrorKind.VALIDATION,
                DUPLICATE_MEMBERSHIP_NUMBER.format(person.membership_number),
            )

        for field in EDITABLE_FIELDS:
            setattr(existing, field, getattr(person, field))
        existing.full_clean()
        with transaction.atomic():
            existing.save()
        logger.info("Updated person %s", existing.pk)
        return Ok(existing)

    @service_boundary("Deactivate person")
    def deactivate(self, person_id, today=None):
        person = Person.objects.filter(pk=person_id).first()
        if person is None:
            return Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)

        person.is_active = False
        person.date_left = today or timezone.localdate()
        with transaction.atomic():
            person.save(update_fields=["is_active", "date_left", "updated_at"])
        logger.info("Deactivated person %s on %s", person.pk, person.date_left)
        return Ok(person)

    # Data protection ---------------------------------------------------

    @service_boundary("Export member data")
    def export_member_data(self, person_id):
        """Everything held about one person, as indented JSON."""
        person = self._base().filter(pk=person_id).first()
        if person is None:
            return Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)

        export = {
            "membership_number": person.membership_number,
            "full_name": person.full_name,
            "date_of_birth": person.date_of_birth,
            "person_type": person.get_person_type_display(),
            "section": person.get_section_display() if person.section else None,
            "email": person.email,
            "phone": person.phone,
            "date_joined": person.date_joined,
            "date_left": person.date_left,
            "allergies": person.allergies,
            "disabilities": person.disabilities,
            "notes": person.notes,
            "photo_permission": person.get_photo_permission_display(),
            "emergency_contacts": [
                {
                    "contact_name": contact.contact_name,
                    "relationship": contact.relationship,
                    "primary_phone": contact.primary_phone,
                    "secondary_phone": contact.secondary_phone,
                    "email": contact.email,
                    "notes": contact.notes,
                }
                for contact in person.emergency_contacts.all()
            ],
            "export_date": timezone.now(),
        }
        logger.info("Exported personal data for person %s", person.pk)
        return Ok(json.dumps(export, cls=DjangoJSONEncoder, indent=2))

    @service_boundary("Remove member data")
    def remove_member_data(self, person_id, removed_by, data_exported=False, today=None):
        """
        Erase a person's personal data, keeping the membership record.

        The person becomes inactive and data-removed, their emergency
        contacts are deleted, and a DataRemovalLog row records the removal.
        """
        person = Person.objects.filter(pk=person_id).first()
        if person is None:
            return Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)
        if person.is_data_removed:
            return Err(ErrorKind.VALIDATION, DATA_ALREADY_REMOVED)

        with transaction.atomic():
            log = DataRemovalLog.objects.create(
                membership_number=person.membership_number,
                person_name=person.full_name or "Unknown",
                removed_by=removed_by,
                data_exported=data_exported,
                notes=f"Person type: {person.get_person_type_display()}, "
                f"Section: {person.get_section_display() if person.section else '-'}",
            )

            person.full_name = ""
            person.date_of_birth = None
            person.email = ""
            person.phone = ""
            person.allergies = ""
            person.disabilities = ""
            person.notes = ""
            person.photo_permission = PhotoPermission.NONE
            person.is_data_removed = True
            person.is_active = False
            if person.date_left is None:
                person.date_left = today or timezone.localdate()
            person.save()
            person.emergency_contacts.all().delete()

        logger.info("Removed personal data for person %s (log %s)", person.pk, log.pk)
        return Ok(person)

    # Emergency contacts ------------------------------------------------

    @service_boundary("Save emergency contacts")
    def save_emergency_contacts(self, person, contacts):
        """
        Make ``contacts`` the person's complete contact list, in list order.

        Stored contacts missing from the list are deleted.
        """
        renumber(contacts)
        for contact in contacts:
            contact.person = person
            contact.full_clean()

        kept_ids = [contact.pk for contact in contacts if contact.pk]
        with transaction.atomic():
            person.emergency_contacts.exclude(pk__in=kept_ids).delete()
            for contact in contacts:
                contact.save()
        logger.info("Saved %d emergency contacts for person %s", len(contacts), person.pk)
        return Ok(contacts)

    @service_boundary("Add emergency contact")
    def add_emergency_contact(self, person, **fields):
        contacts = list(person.emergency_contacts.all())
        contact = add_contact(contacts, person=person, **fields)
        contact.full_clean()
        with transaction.atomic():
            contact.save()
        logger.info("Added emergency contact %s for person %s", contact.pk, person.pk)
        return Ok(contact)

    @service_boundary("Remove emergency contact")
    def remove_emergency_contact(self, person, contact_id):
        contacts = list(person.emergency_contacts.all())
        contact = next((c for c in contacts if c.pk == contact_id), None)
        if contact is None:
            return Err(ErrorKind.NOT_FOUND, CONTACT_NOT_FOUND)

        remove_contact(contacts, contact)
        with transaction.atomic():
            contact.delete()
            EmergencyContact.objects.bulk_update(contacts, ["sort_order"])
        logger.info("Removed emergency contact %s for person %s", contact_id, person.pk)
        return Ok(contact)

    def renumber_emergency_contacts(self, person):
        """Close any gaps left in stored sort_order values."""
        contacts = renumber(list(person.emergency_contacts.all()))
        EmergencyContact.objects.bulk_update(contacts, ["sort_order"])
        return contacts
