from datetime import date
from decimal import Decimal

import pytest

from terms.models import Term


@pytest.fixture
def spring_term(db):
    return Term.objects.create(
        name="Spring 2025",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 3, 31),
        subs_amount=Decimal("20.00"),
    )


@pytest.fixture
def summer_term(db):
    return Term.objects.create(
        name="Summer 2025",
        start_date=date(2025, 4, 22),
        end_date=date(2025, 7, 18),
        subs_amount=Decimal("25.00"),
    )


@pytest.fixture
def autumn_term(db):
    return Term.objects.create(
        name="Autumn 2024",
        start_date=date(2024, 9, 2),
        end_date=date(2024, 12, 13),
        subs_amount=Decimal("18.50"),
    )
