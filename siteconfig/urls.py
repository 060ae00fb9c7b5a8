from django.urls import path

from . import views

app_name = "siteconfig"

urlpatterns = [
    path("unit/", views.unit_settings, name="unit_settings"),
]
