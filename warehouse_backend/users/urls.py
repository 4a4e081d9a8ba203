# users/urls.py

from django.urls import path

from .views import LoginView, LogoutView, MeView, RegisterView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    # ---------------- AUTHENTICATED ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("me/", MeView.as_view(), name="me"),
]
