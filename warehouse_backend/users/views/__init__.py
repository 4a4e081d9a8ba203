from .auth import LoginView, LogoutView, RegisterView
from .me import MeView

__all__ = [
    "RegisterView",
    "LoginView",
    "LogoutView",
    "MeView",
]
