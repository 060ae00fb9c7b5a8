from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.contrib.messages import get_messages
from django.urls import reverse
from django.utils import timezone

from terms.models import Term
from terms.services import TERM_OVERLAPS

URL = reverse("terms:term_management")


@pytest.fixture
def february_2025():
    with patch.object(timezone, "localdate", return_value=date(2025, 2, 1)):
        yield


def flashed(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


# Access


@pytest.mark.django_db
def test_anonymous_user_is_sent_to_login(client):
    response = client.get(URL)
    assert response.status_code == 302
    assert response.url.startswith(reverse("login"))


@pytest.mark.django_db
def test_non_staff_user_is_forbidden(member_client):
    response = member_client.get(URL)
    assert response.status_code == 403


# Listing


@pytest.mark.django_db
def test_page_lists_terms_by_status(
    staff_client, february_2025, autumn_term, spring_term, summer_term
):
    response = staff_client.get(URL)

    assert response.status_code == 200
    state = response.context["state"]
    assert state.current_term == spring_term
    assert state.future_terms == (summer_term,)
    assert state.past_terms == (autumn_term,)
    assert state.all_terms == (summer_term, spring_term, autumn_term)
    assert not state.show_form
    assert b"Spring 2025" in response.content


@pytest.mark.django_db
def test_add_panel_prefills_defaults(staff_client, february_2025):
    response = staff_client.get(URL, {"add": "1"})

    state = response.context["state"]
    assert state.show_form
    assert not state.is_editing
    assert state.form.initial["start_date"] == date(2025, 2, 1)
    assert state.form.initial["end_date"] == date(2025, 5, 1)
    assert state.form.initial["subs_amount"] == Decimal("20.00")


@pytest.mark.django_db
def test_edit_panel_for_missing_term(staff_client):
    response = staff_client.get(URL, {"edit": "4242"})
    assert response.context["state"].error_message == "Term not found."


@pytest.mark.django_db
def test_delete_panel_asks_for_confirmation(staff_client, spring_term):
    response = staff_client.get(URL, {"delete": spring_term.pk})
    state = response.context["state"]
    assert state.show_delete_confirm
    assert state.term_to_delete == spring_term


# Saving


@pytest.mark.django_db
def test_create_term(staff_client):
    response = staff_client.post(
        reverse("terms:term_create"),
        {
            "name": "Spring 2025",
            "start_date": "2025-01-06",
            "end_date": "2025-03-31",
            "subs_amount": "20.00",
        },
    )

    assert response.status_code == 302
    assert Term.objects.filter(name="Spring 2025").exists()
    assert "Term 'Spring 2025' has been added successfully!" in flashed(response)


@pytest.mark.django_db
def test_overlapping_term_is_shown_as_error(staff_client, spring_term):
    response = staff_client.post(
        reverse("terms:term_create"),
        {
            "name": "Clash",
            "start_date": "2025-03-01",
            "end_date": "2025-05-01",
            "subs_amount": "20.00",
        },
    )

    assert response.status_code == 200
    state = response.context["state"]
    assert state.error_message == TERM_OVERLAPS
    assert state.show_form
    assert Term.objects.count() == 1


@pytest.mark.django_db
def test_reversed_dates_fail_form_validation(staff_client):
    response = staff_client.post(
        reverse("terms:term_create"),
        {
            "name": "Backwards",
            "start_date": "2025-03-31",
            "end_date": "2025-01-06",
            "subs_amount": "20.00",
        },
    )

    assert response.status_code == 200
    assert "end_date" in response.context["state"].form.errors
    assert not Term.objects.exists()


@pytest.mark.django_db
def test_update_term(staff_client, spring_term):
    response = staff_client.post(
        reverse("terms:term_update", args=[spring_term.pk]),
        {
            "name": "Spring 2025",
            "start_date": "2025-01-06",
            "end_date": "2025-03-31",
            "subs_amount": "21.00",
        },
    )

    assert response.status_code == 302
    spring_term.refresh_from_db()
    assert spring_term.subs_amount == Decimal("21.00")
    assert "Term 'Spring 2025' has been updated successfully!" in flashed(response)


@pytest.mark.django_db
def test_update_of_deleted_term_shows_not_found(staff_client):
    response = staff_client.post(
        reverse("terms:term_update", args=[999]),
        {
            "name": "Ghost",
            "start_date": "2025-01-06",
            "end_date": "2025-03-31",
            "subs_amount": "20.00",
        },
    )
    assert response.context["state"].error_message == "Term not found."


# Deleting


@pytest.mark.django_db
def test_delete_term(staff_client, spring_term):
    response = staff_client.post(reverse("terms:term_delete", args=[spring_term.pk]))

    assert response.status_code == 302
    assert not Term.objects.exists()
    assert "Term 'Spring 2025' has been deleted successfully." in flashed(response)


@pytest.mark.django_db
def test_delete_missing_term(staff_client):
    response = staff_client.post(reverse("terms:term_delete", args=[999]))

    assert response.status_code == 302
    assert "Term not found." in flashed(response)


@pytest.mark.django_db
def test_delete_requires_post(staff_client, spring_term):
    response = staff_client.get(reverse("terms:term_delete", args=[spring_term.pk]))
    assert response.status_code == 405
    assert Term.objects.exists()
