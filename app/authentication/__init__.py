"""
Authentication application.

This app provides the email-based user model, registration and the
current-user endpoint. JWTs are issued by djangorestframework-simplejwt.

Key components:
    - User model: Custom email-based user authentication
    - RegisterView / CurrentUserView: Account endpoints

Usage:
    from authentication.models import User
"""
