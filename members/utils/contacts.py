"""
In-memory editing of a person's emergency contact list.

The list is the working copy a form or service holds before persisting.
After every operation here the contacts' ``sort_order`` values are a dense
zero-based sequence matching their list position, except for ``add_contact``
on a list loaded with gaps, which appends after the highest value.
"""

from members.models import EmergencyContact


def next_sort_order(contacts):
    return max((contact.sort_order for contact in contacts), default=-1) + 1


def add_contact(contacts, **fields):
    """Append a new unsaved contact and return it."""
    contact = EmergencyContact(sort_order=next_sort_order(contacts), **fields)
    contacts.append(contact)
    return contact


def remove_contact(contacts, contact):
    """
    Remove ``contact`` from the list and close the gap it leaves.

    Raises ValueError if the contact is not in the list.
    """
    contacts.remove(contact)
    renumber(contacts)


def renumber(contacts):
    for position, contact in enumerate(contacts):
        contact.sort_order = position
    return contacts
