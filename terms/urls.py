from django.urls import path

from . import views

app_name = "terms"

urlpatterns = [
    path("", views.term_management, name="term_management"),
    path("save/", views.term_save, name="term_create"),
    path("<int:term_id>/save/", views.term_save, name="term_update"),
    path("<int:term_id>/delete/", views.term_delete, name="term_delete"),
]
