# ABOUTME: Account commands: signup, login, google-login, logout, whoami, and reset-password.
# ABOUTME: Backed by the local identity provider; the signed-in uid persists in the database.

from pathlib import Path

import click

from novelnoted.auth.provider import FederatedIdentity
from novelnoted.cli.app import get_console, open_app
from novelnoted.cli.options import db_option


@click.command("signup")
@click.option("--email", prompt=True, help="Account email address.")
@click.option("--name", "display_name", prompt="Display name", help="Name shown in the app.")
@click.password_option("--password", help="Account password (prompted if omitted).")
@db_option
def signup(email: str, display_name: str, password: str, db_path: Path | None) -> None:
    """Create an account and sign in."""
    console = get_console()
    with open_app(db_path) as app:
        user = app.auth.sign_up(email, password, display_name)
    console.print(f"Welcome, [bold]{user.display_name or user.email}[/bold]! You are signed in.")


@click.command("login")
@click.option("--email", prompt=True, help="Account email address.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
@db_option
def login(email: str, password: str, db_path: Path | None) -> None:
    """Sign in with email and password."""
    console = get_console()
    with open_app(db_path) as app:
        user = app.auth.sign_in(email, password)
    console.print(f"Signed in as [bold]{user.email}[/bold].")


@click.command("google-login")
@click.option("--email", required=True, help="Email of the verified Google account.")
@click.option("--name", "display_name", default=None, help="Google display name.")
@click.option("--photo-url", default=None, help="Google avatar URL.")
@db_option
def google_login(
    email: str, display_name: str | None, photo_url: str | None, db_path: Path | None
) -> None:
    """Sign in with an identity verified by Google sign-in."""
    console = get_console()
    identity = FederatedIdentity(
        provider="google.com", email=email, display_name=display_name, photo_url=photo_url
    )
    with open_app(db_path) as app:
        user = app.auth.sign_in_with_google(identity)
    console.print(f"Signed in as [bold]{user.email}[/bold] via Google.")


@click.command("logout")
@db_option
def logout(db_path: Path | None) -> None:
    """Sign out."""
    with open_app(db_path) as app:
        app.auth.sign_out()
    get_console().print("Signed out.")


@click.command("whoami")
@db_option
def whoami(db_path: Path | None) -> None:
    """Show the signed-in account."""
    console = get_console()
    with open_app(db_path) as app:
        user = app.session.require_user()
    console.print(f"[bold]{user.display_name or '(no name)'}[/bold] <{user.email}>")
    console.print(f"[dim]uid {user.uid}[/dim]")


@click.command("reset-password")
@click.option("--email", prompt=True, help="Account email address.")
@click.option("--token", default=None, help="Reset token, to set a new password.")
@click.option("--new-password", default=None, help="New password, used with --token.")
@db_option
def reset_password(
    email: str, token: str | None, new_password: str | None, db_path: Path | None
) -> None:
    """Request a password-reset token, or use one to set a new password."""
    console = get_console()
    with open_app(db_path) as app:
        if token:
            if not new_password:
                new_password = click.prompt(
                    "New password", hide_input=True, confirmation_prompt=True
                )
            app.auth.confirm_password_reset(token, new_password)
            console.print("Password updated. You can now sign in.")
            return

        issued = app.auth.reset_password(email)
    console.print(f"Password reset token for [bold]{email}[/bold]:")
    console.print(issued)
    console.print("[dim]Run again with --token and --new-password to finish.[/dim]")
