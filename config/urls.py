"""URL routing for the staff portal.

Staff login/registration pages live under /staff/; the JSON API and its
schema are mounted at the root by `api.urls`.
"""
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView


urlpatterns = [
    path("", RedirectView.as_view(pattern_name="accounts:staff-login", permanent=False), name="index"),
    path("admin/", admin.site.urls),
    path("staff/", include("accounts.urls")),
    path("", include("api.urls")),
]
