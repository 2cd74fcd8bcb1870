"""
Tests for authentication API views.

This module tests the authentication endpoints:
- RegisterView: Email/password registration
- TokenObtainPairView / TokenRefreshView: JWT login and refresh
- CurrentUserView: GET/PUT/PATCH/DELETE of the authenticated user

Testing Philosophy:
    Tests focus on observable HTTP behavior, not implementation details:
    - Response status codes
    - Response body structure and content
    - Database state changes
    - Authentication/permission enforcement
"""

from rest_framework import status

from authentication.models import User
from authentication.tests.factories import DEFAULT_PASSWORD, UserFactory


# =============================================================================
# URL Constants
# =============================================================================


REGISTER_URL = "/api/v1/auth/register/"
LOGIN_URL = "/api/v1/auth/login/"
REFRESH_URL = "/api/v1/auth/token/refresh/"
USER_URL = "/api/v1/auth/user/"


# =============================================================================
# TestRegisterView
# =============================================================================


class TestRegisterView:
    """
    Tests for RegisterView.

    POST /api/v1/auth/register/
    """

    def test_register_creates_user(self, api_client, db, valid_registration_data):
        """Should create the user and return 201 with its data."""
        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["email"] == "newuser@example.com"
        assert response.data["username"] == "newuser"
        assert "password1" not in response.data
        assert User.objects.get(email="newuser@example.com").check_password("SecurePass123!")

    def test_username_is_optional(self, api_client, db, valid_registration_data):
        """Registration succeeds without a username."""
        valid_registration_data.pop("username")

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["username"] is None

    def test_duplicate_email_is_rejected(self, api_client, user, valid_registration_data):
        """An email already in use, in any case, returns 400."""
        valid_registration_data["email"] = user.email.upper()

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.data

    def test_duplicate_username_is_rejected(
        self, api_client, user_with_username, valid_registration_data
    ):
        """A username already in use returns 400."""
        valid_registration_data["username"] = "TestUser"

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "username" in response.data

    def test_reserved_usernames_are_rejected(
        self, api_client, db, valid_registration_data, reserved_usernames
    ):
        """Reserved usernames return 400."""
        for username in reserved_usernames:
            valid_registration_data["username"] = username

            response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

            assert response.status_code == status.HTTP_400_BAD_REQUEST, username
            assert "username" in response.data

    def test_malformed_usernames_are_rejected(
        self, api_client, db, valid_registration_data, invalid_usernames
    ):
        """Usernames with the wrong length or characters return 400."""
        for username in invalid_usernames:
            valid_registration_data["username"] = username

            response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

            assert response.status_code == status.HTTP_400_BAD_REQUEST, username

    def test_password_mismatch_is_rejected(self, api_client, db, valid_registration_data):
        """Different password1 and password2 return 400."""
        valid_registration_data["password2"] = "Different123!"

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password2" in response.data
        assert not User.objects.filter(email="newuser@example.com").exists()


# =============================================================================
# TestLogin
# =============================================================================


class TestLogin:
    """
    Tests for JWT login and refresh.

    POST /api/v1/auth/login/
    POST /api/v1/auth/token/refresh/
    """

    def test_login_returns_token_pair(self, api_client, user):
        """Valid credentials return an access and a refresh token."""
        response = api_client.post(
            LOGIN_URL, {"email": user.email, "password": DEFAULT_PASSWORD}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data
        assert "refresh" in response.data

    def test_wrong_password_is_401(self, api_client, user):
        """A wrong password returns 401."""
        response = api_client.post(
            LOGIN_URL, {"email": user.email, "password": "wrong-password"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_deactivated_user_cannot_log_in(self, api_client, deactivated_user):
        """An inactive user cannot obtain tokens."""
        response = api_client.post(
            LOGIN_URL,
            {"email": deactivated_user.email, "password": DEFAULT_PASSWORD},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_returns_new_access_token(self, api_client, user):
        """A refresh token can be exchanged for a new access token."""
        login = api_client.post(
            LOGIN_URL, {"email": user.email, "password": DEFAULT_PASSWORD}, format="json"
        )

        response = api_client.post(
            REFRESH_URL, {"refresh": login.data["refresh"]}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data


# =============================================================================
# TestCurrentUserView
# =============================================================================


class TestCurrentUserView:
    """
    Tests for CurrentUserView.

    GET/PUT/PATCH/DELETE /api/v1/auth/user/
    """

    def test_get_requires_authentication(self, api_client, db):
        """Anonymous requests return 401."""
        response = api_client.get(USER_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_returns_current_user(self, authenticated_client, user):
        """GET returns the authenticated user."""
        response = authenticated_client.get(USER_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.data["email"] == user.email

    def test_patch_sets_username(self, authenticated_client, user):
        """PATCH stores a new username."""
        response = authenticated_client.patch(USER_URL, {"username": "budi"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.username == "budi"

    def test_patch_rejects_taken_username(
        self, authenticated_client, user_with_username
    ):
        """A username held by someone else returns 400."""
        response = authenticated_client.patch(
            USER_URL, {"username": "testuser"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "username" in response.data

    def test_patch_rejects_taken_email(self, authenticated_client, user):
        """An email held by someone else returns 400."""
        other = UserFactory()

        response = authenticated_client.patch(USER_URL, {"email": other.email}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.data

    def test_put_changes_password(self, authenticated_client, user):
        """PUT with a password sets a new hashed password."""
        response = authenticated_client.put(
            USER_URL, {"password": "BrandNewPass456!"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password("BrandNewPass456!")

    def test_weak_password_is_rejected(self, authenticated_client, user):
        """A password failing the validators returns 400."""
        response = authenticated_client.patch(USER_URL, {"password": "12345678"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password" in response.data

    def test_delete_removes_user(self, authenticated_client, user):
        """DELETE removes the user and returns 204."""
        response = authenticated_client.delete(USER_URL)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not User.objects.filter(id=user.id).exists()
