from django.urls import path

from . import views

app_name = "members"

urlpatterns = [
    path("", views.member_list, name="member_list"),
    path("<int:person_id>/", views.member_view, name="member_view"),
    path("<int:person_id>/contacts/add/", views.contact_add, name="contact_add"),
    path(
        "<int:person_id>/contacts/<int:contact_id>/remove/",
        views.contact_remove,
        name="contact_remove",
    ),
]
