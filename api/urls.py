"""API routes: staff portal endpoints plus the OpenAPI schema."""
from django.urls import path
from drf_spectacular.views import SpectacularAPIView

from .views import staff_login, staff_register, staff_session

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/v1/staff/login", staff_login, name="api-staff-login"),
    path("api/v1/staff/register", staff_register, name="api-staff-register"),
    path("api/v1/staff/session", staff_session, name="api-staff-session"),
]
