"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/        - Create a user (POST)
    /api/v1/auth/login/           - Obtain JWT access/refresh pair (POST)
    /api/v1/auth/token/refresh/   - Refresh an access token (POST)
    /api/v1/auth/user/            - Current user (GET/PUT/PATCH/DELETE)
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from authentication.views import CurrentUserView, RegisterView

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", TokenObtainPairView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("user/", CurrentUserView.as_view(), name="user"),
]
