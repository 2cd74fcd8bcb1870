"""
Authentication views.

This module provides API views for:
- Registration
- Current user read/update/delete

Related files:
    - serializers.py: Request/response serialization
    - urls.py: URL routing

Note:
    Login and token refresh are simplejwt views wired in urls.py:
    - Login: /api/v1/auth/login/
    - Refresh: /api/v1/auth/token/refresh/
"""

import logging

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bookkeeping.services import RecordService

from authentication.serializers import (
    RegisterSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    API view for email/password registration.

    POST: Create a user

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register",
        description="Create a user account. Log in afterwards to obtain tokens.",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: UserSerializer},
    )
    def post(self, request):
        """
        Register a new user.

        Request body:
            {
                "email": "user@example.com",
                "username": "budi",          // Optional
                "password1": "...",
                "password2": "..."
            }
        """
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered user {user.pk}")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class CurrentUserView(APIView):
    """
    API view for the authenticated user.

    GET: Retrieve current user
    PUT/PATCH: Update username, email or password
    DELETE: Delete the user and all of their bookkeeping data

    URL: /api/v1/auth/user/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current user",
        tags=["Auth"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        summary="Update current user",
        tags=["Auth"],
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
    )
    def put(self, request):
        return self._update(request)

    @extend_schema(
        summary="Partially update current user",
        tags=["Auth"],
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
    )
    def patch(self, request):
        return self._update(request)

    def _update(self, request):
        # Every field is optional, so PUT behaves like PATCH
        serializer = UserUpdateSerializer(
            request.user,
            data=request.data,
            partial=True,
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    @extend_schema(
        summary="Delete current user",
        description="Permanently delete the account with its members, accounts and history.",
        tags=["Auth"],
        responses={204: None},
    )
    def delete(self, request):
        user_id = request.user.pk
        with transaction.atomic():
            RecordService.purge_user_data(request.user)
            request.user.delete()

        logger.info(f"Deleted user {user_id}")
        return Response(status=status.HTTP_204_NO_CONTENT)
