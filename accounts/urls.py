from django.urls import path

from .views import staff_back, staff_login, staff_logout, staff_register

app_name = "accounts"

urlpatterns = [
    path("login/", staff_login, name="staff-login"),
    path("register/", staff_register, name="staff-register"),
    path("back/", staff_back, name="staff-back"),
    path("logout/", staff_logout, name="staff-logout"),
]
