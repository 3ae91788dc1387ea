"""Prepare the configured database for the mint service.

Postgres targets are created on demand through the maintenance database;
SQLite files are created by the first connection. Either way the mint
tables are created afterwards unless ``--skip-tables`` is given.
"""
from __future__ import annotations

import argparse
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql
from sqlalchemy import create_engine

from cool_mint.core.settings import settings
from cool_mint.db.session import Base


def to_psycopg_url(db_url: str) -> str:
    """Return ``db_url`` with any SQLAlchemy driver suffix removed."""
    parts = urlsplit(db_url.strip().strip("'\""))
    scheme = parts.scheme.split("+", 1)[0]
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def ensure_postgres_database(db_url: str) -> None:
    """Create the target Postgres database if it is missing."""
    parts = urlsplit(to_psycopg_url(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            print(f"[ensure_db] created database {target_db}")
        else:
            print(f"[ensure_db] database {target_db} already exists")


def create_mint_tables(db_url: str) -> None:
    """Create every mint table that does not exist yet."""
    engine = create_engine(db_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    print(f"[ensure_db] mint tables ready ({len(Base.metadata.sorted_tables)} tables)")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Ensure the configured database exists")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    parser.add_argument(
        "--skip-tables",
        action="store_true",
        help="Only ensure the database exists; leave table creation to Alembic.",
    )
    args = parser.parse_args(argv)

    db_url = args.url or settings.database_url_sync
    try:
        if db_url.startswith("postgresql"):
            ensure_postgres_database(db_url)
        if not args.skip_tables:
            create_mint_tables(db_url)
    except (psycopg.Error, ValueError) as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
