# ABOUTME: Local identity provider backed by the novelnoted SQLite database.
# ABOUTME: Email/password accounts, Google sign-in linking, reset tokens, and persisted sign-in.

import logging
import re
import secrets
import sqlite3
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from werkzeug.security import check_password_hash, generate_password_hash

from novelnoted.auth.provider import AuthError, AuthStateCallback, AuthUser, FederatedIdentity

logger = logging.getLogger(__name__)

_MIN_PASSWORD_LENGTH = 6
_RESET_TOKEN_TTL = timedelta(hours=1)
_CURRENT_UID_KEY = "current_uid"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _row_to_user(row: sqlite3.Row) -> AuthUser:
    return AuthUser(
        uid=row["uid"],
        email=row["email"],
        display_name=row["display_name"],
        photo_url=row["photo_url"],
    )


class LocalAuthProvider:
    """AuthProvider that keeps accounts in the `users` table.

    The signed-in uid is persisted in `auth_state`, so separate CLI
    invocations against the same database share one session.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._listeners: list[AuthStateCallback] = []

    def sign_in(self, email: str, password: str) -> AuthUser:
        """Sign in with email and password.

        Raises:
            AuthError: If the account does not exist or the password is wrong.
        """
        row = self._conn.execute(
            "SELECT * FROM users WHERE email = ?", (email.strip(),)
        ).fetchone()
        if row is None or not row["password_hash"]:
            raise AuthError("Invalid email or password.")
        if not check_password_hash(row["password_hash"], password):
            raise AuthError("Invalid email or password.")

        user = _row_to_user(row)
        self._set_current(user)
        return user

    def sign_up(self, email: str, password: str, display_name: str) -> AuthUser:
        """Create an email/password account and sign it in.

        Raises:
            AuthError: On a malformed email, short password, or existing account.
        """
        email = email.strip()
        if not _EMAIL_RE.match(email):
            raise AuthError("Invalid email address.")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {_MIN_PASSWORD_LENGTH} characters.")

        uid = secrets.token_hex(14)
        try:
            self._conn.execute(
                "INSERT INTO users (uid, email, display_name, password_hash) VALUES (?, ?, ?, ?)",
                (uid, email, display_name or None, generate_password_hash(password)),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            raise AuthError("An account with this email already exists.") from exc

        user = AuthUser(uid=uid, email=email, display_name=display_name or None)
        self._set_current(user)
        return user

    def sign_in_with_google(self, identity: FederatedIdentity) -> AuthUser:
        """Sign in with an identity verified by an external Google flow.

        Links to an existing account with the same email, or creates one.
        """
        email = identity.email.strip()
        if not _EMAIL_RE.match(email):
            raise AuthError("Invalid email address.")

        row = self._conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if row is None:
            uid = secrets.token_hex(14)
            self._conn.execute(
                "INSERT INTO users (uid, email, display_name, photo_url, provider) "
                "VALUES (?, ?, ?, ?, ?)",
                (uid, email, identity.display_name, identity.photo_url, identity.provider),
            )
            self._conn.commit()
            user = AuthUser(
                uid=uid,
                email=email,
                display_name=identity.display_name,
                photo_url=identity.photo_url,
            )
        else:
            user = _row_to_user(row)
            if user.photo_url is None and identity.photo_url:
                self._conn.execute(
                    "UPDATE users SET photo_url = ? WHERE uid = ?", (identity.photo_url, user.uid)
                )
                self._conn.commit()
                user = AuthUser(user.uid, user.email, user.display_name, identity.photo_url)

        self._set_current(user)
        return user

    def sign_out(self) -> None:
        self._conn.execute("DELETE FROM auth_state WHERE key = ?", (_CURRENT_UID_KEY,))
        self._conn.commit()
        self._emit(None)

    def reset_password(self, email: str) -> str:
        """Issue a password-reset token for an account.

        Delivering the token (email) is left to the caller.

        Raises:
            AuthError: If no account uses this email.
        """
        row = self._conn.execute(
            "SELECT uid FROM users WHERE email = ?", (email.strip(),)
        ).fetchone()
        if row is None:
            raise AuthError("No account found with this email.")

        token = secrets.token_urlsafe(24)
        expires_at = (datetime.now(UTC) + _RESET_TOKEN_TTL).isoformat()
        self._conn.execute(
            "INSERT INTO password_resets (token, uid, expires_at) VALUES (?, ?, ?)",
            (token, row["uid"], expires_at),
        )
        self._conn.commit()
        logger.info("Issued password reset token for uid %s", row["uid"])
        return token

    def confirm_password_reset(self, token: str, new_password: str) -> None:
        """Set a new password using a token from reset_password().

        Raises:
            AuthError: If the token is unknown or expired, or the password is too short.
        """
        if len(new_password) < _MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {_MIN_PASSWORD_LENGTH} characters.")

        row = self._conn.execute(
            "SELECT uid, expires_at FROM password_resets WHERE token = ?", (token,)
        ).fetchone()
        if row is None:
            raise AuthError("Invalid or expired reset token.")

        self._conn.execute("DELETE FROM password_resets WHERE token = ?", (token,))
        if datetime.fromisoformat(row["expires_at"]) < datetime.now(UTC):
            self._conn.commit()
            raise AuthError("Invalid or expired reset token.")

        self._conn.execute(
            "UPDATE users SET password_hash = ? WHERE uid = ?",
            (generate_password_hash(new_password), row["uid"]),
        )
        self._conn.commit()

    def current_user(self) -> AuthUser | None:
        row = self._conn.execute(
            "SELECT u.* FROM users u JOIN auth_state s ON s.value = u.uid WHERE s.key = ?",
            (_CURRENT_UID_KEY,),
        ).fetchone()
        return _row_to_user(row) if row else None

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Callable[[], None]:
        """Register a listener. It is called now with the current user and on every change."""
        self._listeners.append(callback)
        callback(self.current_user())

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_current(self, user: AuthUser) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO auth_state (key, value) VALUES (?, ?)",
            (_CURRENT_UID_KEY, user.uid),
        )
        self._conn.commit()
        self._emit(user)

    def _emit(self, user: AuthUser | None) -> None:
        for listener in list(self._listeners):
            listener(user)
