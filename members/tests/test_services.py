import json
from datetime import date

import pytest

from members.constants.membership import PersonType, PhotoPermission, Section
from members.models import DataRemovalLog, EmergencyContact, Person
from members.services import (
    CONTACT_NOT_FOUND,
    DATA_ALREADY_REMOVED,
    PERSON_NOT_FOUND,
    MembershipSummary,
    PersonService,
)
from utils.results import Err, ErrorKind, Ok


@pytest.fixture
def service():
    return PersonService()


# Summary


@pytest.mark.django_db
def test_summary_counts_leaders_and_sections(service, unit):
    summary = service.summarize(service.get_active())

    assert summary == MembershipSummary(total=6, leaders=3, rainbow=2, brownie=1)
    assert summary.guide == 0
    assert summary.ranger == 0
    assert summary.girls == 3


def test_summary_of_nobody_is_all_zero(service):
    assert service.summarize([]) == MembershipSummary()


def test_summary_consumes_people_once(service):
    people = [
        Person(person_type=PersonType.LEADER),
        Person(person_type=PersonType.GIRL, section=Section.GUIDE),
        Person(person_type=PersonType.GIRL, section=Section.RANGER),
    ]
    summary = service.summarize(p for p in people)
    assert summary.total == 3
    assert summary.leaders == 1
    assert summary.guide == 1
    assert summary.ranger == 1


def test_summary_total_matches_input_length(service):
    people = [Person(person_type=PersonType.GIRL, section="")]
    summary = service.summarize(people)
    assert summary.total == len(people)
    assert summary.section_counts() == [
        ("Rainbow", 0),
        ("Brownie", 0),
        ("Guide", 0),
        ("Ranger", 0),
    ]


# Queries


@pytest.mark.django_db
def test_get_active_skips_leavers_and_removed_data(service, make_person):
    stays = make_person(full_name="Stays")
    make_person(full_name="Left", is_active=False)
    make_person(full_name="Removed", is_data_removed=True)

    assert service.get_active() == [stays]
    assert [p.full_name for p in service.get_inactive()] == ["Left"]


@pytest.mark.django_db
def test_get_by_type_and_section(service, unit):
    assert len(service.get_by_type(PersonType.LEADER)) == 3
    assert [p.full_name for p in service.get_by_section(Section.RAINBOW)] == [
        "Daisy Rainbow",
        "Ella Rainbow",
    ]


@pytest.mark.django_db
def test_get_by_id(service, unit):
    assert service.get_by_id(unit[0].pk) == Ok(unit[0])
    assert service.get_by_id(99999) == Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)


@pytest.mark.django_db
def test_get_by_membership_number(service, make_person):
    person = make_person(membership_number="GG12345")
    assert service.get_by_membership_number("GG12345") == person
    assert service.get_by_membership_number("nope") is None


@pytest.mark.django_db
def test_search_by_name_or_number(service, make_person):
    daisy = make_person(full_name="Daisy Rainbow", membership_number="GG777")
    make_person(full_name="Old Daisy", is_active=False)

    assert service.search("daisy") == [daisy]
    assert service.search("777") == [daisy]
    assert len(service.search("daisy", active_only=False)) == 2


@pytest.mark.django_db
def test_membership_number_uniqueness(service, make_person):
    person = make_person(membership_number="GG00042")
    assert not service.is_membership_number_unique("GG00042")
    assert service.is_membership_number_unique("GG00042", exclude_id=person.pk)
    assert service.is_membership_number_unique("GG00043")


# Mutations


@pytest.mark.django_db
def test_add_person(service):
    person = Person(
        membership_number="GG10001",
        full_name="Holly Guide",
        person_type=PersonType.GIRL,
        section=Section.GUIDE,
        is_active=False,
    )

    result = service.add(person)

    assert isinstance(result, Ok)
    stored = Person.objects.get(membership_number="GG10001")
    assert stored.is_active
    assert stored.date_joined is not None


@pytest.mark.django_db
def test_add_rejects_duplicate_number(service, make_person):
    make_person(membership_number="GG10002")
    result = service.add(Person(membership_number="GG10002", person_type=PersonType.LEADER))

    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION
    assert "GG10002" in result.message


@pytest.mark.django_db
def test_add_rejects_girl_without_section(service):
    result = service.add(Person(membership_number="GG10003", person_type=PersonType.GIRL))

    assert isinstance(result, Err)
    assert "Girls must be assigned to a section." in result.message
    assert not Person.objects.exists()


@pytest.mark.django_db
def test_update_person(service, make_person):
    person = make_person(full_name="Ivy")
    edited = Person.objects.get(pk=person.pk)
    edited.full_name = "Ivy Brownie"
    edited.allergies = "Peanuts"

    result = service.update(edited)

    assert isinstance(result, Ok)
    person.refresh_from_db()
    assert person.full_name == "Ivy Brownie"
    assert person.allergies == "Peanuts"


@pytest.mark.django_db
def test_update_missing_person(service):
    ghost = Person(pk=4242, membership_number="X", person_type=PersonType.LEADER)
    assert service.update(ghost) == Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)


@pytest.mark.django_db
def test_update_to_taken_number(service, make_person):
    make_person(membership_number="GG20001")
    other = make_person(membership_number="GG20002")
    other.membership_number = "GG20001"

    result = service.update(other)

    assert result.kind is ErrorKind.VALIDATION


@pytest.mark.django_db
def test_deactivate_is_a_soft_delete(service, make_person):
    person = make_person()

    result = service.deactivate(person.pk, today=date(2025, 7, 18))

    assert isinstance(result, Ok)
    person.refresh_from_db()
    assert not person.is_active
    assert person.date_left == date(2025, 7, 18)
    assert service.deactivate(99999) == Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)


# Emergency contacts


def stored_contacts(person):
    return [(c.contact_name, c.sort_order) for c in person.emergency_contacts.all()]


@pytest.mark.django_db
def test_save_emergency_contacts_renumbers_and_drops_missing(service, girl_with_contacts):
    mum, dad, gran = list(girl_with_contacts.emergency_contacts.all())
    neighbour = EmergencyContact(
        contact_name="Neighbour", relationship="Friend", primary_phone="01234 000000"
    )

    result = service.save_emergency_contacts(girl_with_contacts, [gran, mum, neighbour])

    assert isinstance(result, Ok)
    assert stored_contacts(girl_with_contacts) == [
        ("Gran", 0),
        ("Mum", 1),
        ("Neighbour", 2),
    ]
    assert not EmergencyContact.objects.filter(pk=dad.pk).exists()


@pytest.mark.django_db
def test_save_emergency_contacts_validates(service, girl_with_contacts):
    incomplete = EmergencyContact(contact_name="No Phone", relationship="Aunt")

    result = service.save_emergency_contacts(girl_with_contacts, [incomplete])

    assert result.kind is ErrorKind.VALIDATION
    assert len(stored_contacts(girl_with_contacts)) == 3


@pytest.mark.django_db
def test_add_emergency_contact_appends(service, girl_with_contacts):
    result = service.add_emergency_contact(
        girl_with_contacts,
        contact_name="Aunt Jo",
        relationship="Aunt",
        primary_phone="07700 900111",
    )

    assert isinstance(result, Ok)
    assert stored_contacts(girl_with_contacts)[-1] == ("Aunt Jo", 3)


@pytest.mark.django_db
def test_remove_emergency_contact_closes_gap(service, girl_with_contacts):
    dad = girl_with_contacts.emergency_contacts.get(contact_name="Dad")

    result = service.remove_emergency_contact(girl_with_contacts, dad.pk)

    assert isinstance(result, Ok)
    assert stored_contacts(girl_with_contacts) == [("Mum", 0), ("Gran", 1)]


@pytest.mark.django_db
def test_remove_unknown_emergency_contact(service, girl_with_contacts):
    result = service.remove_emergency_contact(girl_with_contacts, 99999)
    assert result == Err(ErrorKind.NOT_FOUND, CONTACT_NOT_FOUND)


@pytest.mark.django_db
def test_renumber_emergency_contacts(service, girl_with_contacts):
    girl_with_contacts.emergency_contacts.filter(contact_name="Mum").delete()

    service.renumber_emergency_contacts(girl_with_contacts)

    assert stored_contacts(girl_with_contacts) == [("Dad", 0), ("Gran", 1)]


# Data protection


@pytest.mark.django_db
def test_export_member_data_includes_contacts(service, girl_with_contacts):
    girl_with_contacts.allergies = "Peanuts"
    girl_with_contacts.date_of_birth = date(2015, 6, 1)
    girl_with_contacts.save()

    result = service.export_member_data(girl_with_contacts.pk)

    assert isinstance(result, Ok)
    export = json.loads(result.value)
    assert export["full_name"] == "Grace Brownie"
    assert export["date_of_birth"] == "2015-06-01"
    assert export["person_type"] == "Girl"
    assert export["section"] == "Brownie"
    assert export["allergies"] == "Peanuts"
    assert [c["contact_name"] for c in export["emergency_contacts"]] == ["Mum", "Dad", "Gran"]
    assert "export_date" in export


@pytest.mark.django_db
def test_export_leader_has_no_section(service, make_person):
    leader = make_person(PersonType.LEADER, full_name="Alice Leader")
    export = json.loads(service.export_member_data(leader.pk).value)
    assert export["section"] is None
    assert export["emergency_contacts"] == []


@pytest.mark.django_db
def test_export_missing_person(service):
    assert service.export_member_data(99999) == Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)


@pytest.mark.django_db
def test_remove_member_data_erases_and_logs(service, girl_with_contacts):
    girl_with_contacts.email = "grace@example.org"
    girl_with_contacts.allergies = "Peanuts"
    girl_with_contacts.photo_permission = PhotoPermission.FULL
    girl_with_contacts.save()

    result = service.remove_member_data(
        girl_with_contacts.pk, removed_by="leader1", data_exported=True, today=date(2025, 7, 18)
    )

    assert isinstance(result, Ok)
    person = Person.objects.get(pk=girl_with_contacts.pk)
    assert person.membership_number == girl_with_contacts.membership_number
    assert person.full_name == ""
    assert person.email == ""
    assert person.allergies == ""
    assert person.photo_permission == PhotoPermission.NONE
    assert person.is_data_removed
    assert not person.is_active
    assert person.date_left == date(2025, 7, 18)
    assert not person.emergency_contacts.exists()

    log = DataRemovalLog.objects.get()
    assert log.membership_number == person.membership_number
    assert log.person_name == "Grace Brownie"
    assert log.removed_by == "leader1"
    assert log.data_exported
    assert log.notes == "Person type: Girl, Section: Brownie"


@pytest.mark.django_db
def test_remove_member_data_keeps_existing_leaving_date(service, make_person):
    person = make_person(is_active=False, date_left=date(2025, 3, 31))

    service.remove_member_data(person.pk, removed_by="leader1", today=date(2025, 7, 18))

    person.refresh_from_db()
    assert person.date_left == date(2025, 3, 31)


@pytest.mark.django_db
def test_remove_member_data_twice_is_rejected(service, make_person):
    person = make_person()
    service.remove_member_data(person.pk, removed_by="leader1")

    result = service.remove_member_data(person.pk, removed_by="leader1")

    assert result == Err(ErrorKind.VALIDATION, DATA_ALREADY_REMOVED)
    assert DataRemovalLog.objects.count() == 1


@pytest.mark.django_db
def test_remove_member_data_missing_person(service):
    result = service.remove_member_data(99999, removed_by="leader1")
    assert result == Err(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)
    assert not DataRemovalLog.objects.exists()
