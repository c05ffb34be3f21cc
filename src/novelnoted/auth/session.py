# ABOUTME: Session wraps an AuthProvider and answers "who is signed in" for the store adapter.
# ABOUTME: Injected into RecordStore so tests can supply a fake provider.

from novelnoted.auth.provider import AuthProvider, AuthUser, NotAuthenticatedError


class Session:
    """The current-identity accessor handed to per-user components."""

    def __init__(self, provider: AuthProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> AuthProvider:
        return self._provider

    @property
    def user(self) -> AuthUser | None:
        return self._provider.current_user()

    def require_user(self) -> AuthUser:
        """Return the signed-in user.

        Raises:
            NotAuthenticatedError: If nobody is signed in.
        """
        user = self.user
        if user is None:
            raise NotAuthenticatedError()
        return user
