# ABOUTME: Wiring shared by CLI commands: database, identity, record store, and search client.
# ABOUTME: Turns auth, config, and store errors into red messages and exit code 1.

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from novelnoted.auth.local import LocalAuthProvider
from novelnoted.auth.provider import AuthError, NotAuthenticatedError
from novelnoted.auth.session import Session
from novelnoted.config import ConfigError, Settings, load_settings
from novelnoted.metadata.googlebooks import GoogleBooksClient
from novelnoted.metadata.http import NovelNotedHttpClient
from novelnoted.store.adapter import RecordStore
from novelnoted.store.connection import open_database
from novelnoted.store.document import StoreError
from novelnoted.store.sqlite import SqliteDocumentStore

logger = logging.getLogger(__name__)


def get_console() -> Console:
    """A fresh Console per command so output width follows the caller's environment."""
    return Console()


def fail(message: str) -> NoReturn:
    get_console().print(f"[red]{message}[/red]")
    raise SystemExit(1)


def format_date(value: datetime | None) -> str:
    return value.strftime("%b %d, %Y") if value else ""


@dataclass
class App:
    """Everything a command needs, bound to one database."""

    settings: Settings
    store: SqliteDocumentStore
    auth: LocalAuthProvider
    session: Session
    records: RecordStore
    http_clients: list[NovelNotedHttpClient] = field(default_factory=list, repr=False)

    def search_client(self) -> GoogleBooksClient:
        http_client = NovelNotedHttpClient(timeout=self.settings.http_timeout)
        self.http_clients.append(http_client)
        return GoogleBooksClient(
            http_client,
            api_key=self.settings.google_books_api_key,
            base_url=self.settings.google_books_url,
        )


@contextmanager
def open_app(db_path: Path | None) -> Iterator[App]:
    """Open the database and build the App; always closes the connection."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        fail(str(exc))

    conn = open_database(db_path or settings.db_path)
    store = SqliteDocumentStore(conn)
    auth = LocalAuthProvider(conn)
    session = Session(auth)
    app = App(
        settings=settings,
        store=store,
        auth=auth,
        session=session,
        records=RecordStore(store, session),
    )
    try:
        yield app
    except NotAuthenticatedError:
        fail("Not signed in. Run `novelnoted login` or `novelnoted signup` first.")
    except AuthError as exc:
        fail(str(exc))
    except StoreError as exc:
        logger.debug("Store failure", exc_info=True)
        fail(f"Could not save changes: {exc}")
    finally:
        for http_client in app.http_clients:
            http_client.close()
        store.close()
