"""
Bearer token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication``
that reads ``Authorization: Bearer <access token>``.  By keeping this
logic separate from any view definitions we avoid circular import
issues when the REST framework imports authentication classes during
initialization.
"""
from __future__ import annotations

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

from .exceptions import AuthenticationError


class BearerAuthentication(JWTAuthentication):
    """JWT bearer authentication.

    Deactivated (soft-deleted) accounts get the same message the login
    endpoint uses instead of simplejwt's generic one.
    """

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except AuthenticationFailed as exc:
            if exc.get_codes() == 'user_inactive':
                raise AuthenticationError('Account has been deactivated') from exc
            raise
