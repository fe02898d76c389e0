# app/errors.py
"""Typed authentication failures raised by credential verifiers.

Every failure in the family carries a ``type`` discriminator so callers can
pick a message without matching on class names.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for expected sign-in rejections."""

    type = "AuthError"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.type)


class CredentialsSignin(AuthError):
    """The submitted credentials did not match an account."""

    type = "CredentialsSignin"


class CallbackRouteError(AuthError):
    """The provider answered, but not with a session or a credentials rejection."""

    type = "CallbackRouteError"


class InvalidProvider(AuthError):
    """The requested sign-in strategy is not configured."""

    type = "InvalidProvider"


__all__ = ["AuthError", "CredentialsSignin", "CallbackRouteError", "InvalidProvider"]
