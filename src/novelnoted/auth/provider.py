# ABOUTME: AuthProvider protocol and the signed-in identity type.
# ABOUTME: Any identity backend (local database, hosted service) implements this.

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class AuthError(Exception):
    """Raised when a sign-in, sign-up, or account operation fails."""


class NotAuthenticatedError(AuthError):
    """Raised when a per-user operation runs without a signed-in identity."""

    def __init__(self, message: str = "Not authenticated. Sign in first.") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class AuthUser:
    """The signed-in identity."""

    uid: str
    email: str | None
    display_name: str | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class FederatedIdentity:
    """An identity already verified by an external sign-in flow (e.g. Google)."""

    provider: str
    email: str
    display_name: str | None = None
    photo_url: str | None = None


AuthStateCallback = Callable[[AuthUser | None], None]


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for identity backends."""

    def sign_in(self, email: str, password: str) -> AuthUser: ...

    def sign_up(self, email: str, password: str, display_name: str) -> AuthUser: ...

    def sign_in_with_google(self, identity: FederatedIdentity) -> AuthUser: ...

    def sign_out(self) -> None: ...

    def reset_password(self, email: str) -> str: ...

    def current_user(self) -> AuthUser | None: ...

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Callable[[], None]: ...
