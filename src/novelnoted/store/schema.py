# ABOUTME: SQL DDL statements for the novelnoted SQLite database.
# ABOUTME: Defines the document table, the local identity tables, and schema migrations.

SCHEMA_V1 = """
-- JSON documents grouped into logical collections
CREATE TABLE documents (
    collection  TEXT NOT NULL,
    id          TEXT NOT NULL,
    data        TEXT NOT NULL,
    create_time TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    update_time TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    PRIMARY KEY (collection, id)
);

CREATE INDEX idx_documents_user
    ON documents(collection, json_extract(data, '$.userId'));

-- Local identity provider
CREATE TABLE users (
    uid           TEXT PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE COLLATE NOCASE,
    display_name  TEXT,
    photo_url     TEXT,
    password_hash TEXT,
    provider      TEXT NOT NULL DEFAULT 'password',
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Key/value state such as the signed-in uid
CREATE TABLE auth_state (
    key   TEXT PRIMARY KEY,
    value TEXT
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

MIGRATION_V2 = """
-- Password-reset tokens issued by the local identity provider
CREATE TABLE IF NOT EXISTS password_resets (
    token      TEXT PRIMARY KEY,
    uid        TEXT NOT NULL REFERENCES users(uid) ON DELETE CASCADE,
    expires_at TEXT NOT NULL
);

INSERT INTO schema_version (version) VALUES (2);
"""

# Ordered list of (version, sql) migrations applied after SCHEMA_V1.
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]
