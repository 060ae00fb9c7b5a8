from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory, TestCase

from members.decorators import staff_required

User = get_user_model()


@staff_required
def protected(request):
    return HttpResponse("ok")


class StaffRequiredTests(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def _get(self, user):
        request = self.factory.get("/protected/")
        request.user = user
        return protected(request)

    def test_anonymous_redirected_to_login(self):
        response = self._get(AnonymousUser())
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, "/login/")

    def test_regular_user_forbidden(self):
        user = User.objects.create_user(username="helper", password="x")
        self.assertEqual(self._get(user).status_code, 403)

    def test_staff_allowed(self):
        user = User.objects.create_user(username="leader", password="x", is_staff=True)
        self.assertEqual(self._get(user).content, b"ok")

    def test_superuser_allowed(self):
        user = User.objects.create_superuser(username="root", password="x")
        self.assertEqual(self._get(user).status_code, 200)
