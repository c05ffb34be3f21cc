# ABOUTME: Public API for novelnoted authentication.
# ABOUTME: Exports the provider protocol, local provider, session, and auth errors.

from novelnoted.auth.local import LocalAuthProvider
from novelnoted.auth.provider import (
    AuthError,
    AuthProvider,
    AuthUser,
    FederatedIdentity,
    NotAuthenticatedError,
)
from novelnoted.auth.session import Session

__all__ = [
    "AuthError",
    "AuthProvider",
    "AuthUser",
    "FederatedIdentity",
    "LocalAuthProvider",
    "NotAuthenticatedError",
    "Session",
]
