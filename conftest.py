import pytest
from django.contrib.auth import get_user_model

User = get_user_model()

TEST_PASSWORD = "testpass123"


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="leader_admin",
        password=TEST_PASSWORD,
        is_staff=True,
    )


@pytest.fixture
def member_user(db):
    return User.objects.create_user(username="helper", password=TEST_PASSWORD)


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def member_client(client, member_user):
    client.force_login(member_user)
    return client
