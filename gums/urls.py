###################################################################################
# URL configuration for GUMS.
#
#   /              dashboard (members.views.home)
#   /members/      register list and detail pages
#   /terms/        term management (staff)
#   /config/       unit settings (staff)
#   /admin/        Django admin, including register import/export
###################################################################################


from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from members import views as members_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("login/", auth_views.LoginView.as_view(), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("members/", include("members.urls")),
    path("terms/", include("terms.urls")),
    path("config/", include("siteconfig.urls")),
    path("tinymce/", include("tinymce.urls")),
    path("", members_views.home, name="home"),
]
