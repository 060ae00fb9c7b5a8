from datetime import date

import pytest

from members.constants.membership import PersonType, Section
from members.models import EmergencyContact, Person


@pytest.fixture
def make_person(db):
    counter = iter(range(1, 1000))

    def _make(person_type=PersonType.GIRL, section=Section.BROWNIE, **kwargs):
        if person_type == PersonType.LEADER:
            section = ""
        number = next(counter)
        kwargs.setdefault("membership_number", f"GG{number:05d}")
        kwargs.setdefault("full_name", f"Person {number}")
        kwargs.setdefault("date_joined", date(2024, 9, 1))
        return Person.objects.create(person_type=person_type, section=section, **kwargs)

    return _make


@pytest.fixture
def unit(make_person):
    """Three leaders, two Rainbows and one Brownie, all active."""
    return [
        make_person(PersonType.LEADER, full_name="Alice Leader"),
        make_person(PersonType.LEADER, full_name="Beth Leader"),
        make_person(PersonType.LEADER, full_name="Cara Leader"),
        make_person(section=Section.RAINBOW, full_name="Daisy Rainbow"),
        make_person(section=Section.RAINBOW, full_name="Ella Rainbow"),
        make_person(section=Section.BROWNIE, full_name="Fern Brownie"),
    ]


@pytest.fixture
def girl_with_contacts(make_person):
    girl = make_person(full_name="Grace Brownie")
    for order, name in enumerate(["Mum", "Dad", "Gran"]):
        EmergencyContact.objects.create(
            person=girl,
            contact_name=name,
            relationship=name,
            primary_phone=f"07700 90000{order}",
            sort_order=order,
        )
    return girl
