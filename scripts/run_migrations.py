#!/usr/bin/env python3
"""
Quiz Funnel Migration Runner
============================
Applies pending SQL files from migrations/ in filename order.

Usage:
    python scripts/run_migrations.py
"""

import hashlib
import logging
import re
import sys
from pathlib import Path

import psycopg2

sys.path.insert(0, str(Path(__file__).parent.parent))

from quizfunnel.store import QuizDataError, get_db  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"


def ensure_migrations_table(conn):
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id SERIAL PRIMARY KEY,
                filename VARCHAR(255) UNIQUE NOT NULL,
                executed_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
                checksum VARCHAR(64)
            )
        """)
    conn.commit()


def pending_migrations(conn, migrations_dir: Path):
    with conn.cursor() as cur:
        cur.execute("SELECT filename FROM _migrations")
        done = {row["filename"] for row in cur.fetchall()}
    files = [
        f for f in migrations_dir.glob("*.sql")
        if re.match(r"^\d+_", f.name) and f.name not in done
    ]
    return sorted(files, key=lambda f: f.name)


def apply_migration(conn, migration_file: Path) -> None:
    content = migration_file.read_text()
    checksum = hashlib.sha256(content.encode()).hexdigest()
    with conn.cursor() as cur:
        cur.execute(content)
        cur.execute("""
            INSERT INTO _migrations (filename, checksum)
            VALUES (%s, %s)
        """, (migration_file.name, checksum))
    conn.commit()


def run_pending_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> int:
    """Apply all pending migrations; returns how many ran. Stops at the first failure."""
    conn = get_db()
    applied = 0
    try:
        ensure_migrations_table(conn)
        for migration_file in pending_migrations(conn, migrations_dir):
            logger.info(f"Running migration: {migration_file.name}")
            try:
                apply_migration(conn, migration_file)
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Migration {migration_file.name} failed: {e}")
                raise
            applied += 1
        logger.info(f"Migrations applied: {applied}")
        return applied
    finally:
        conn.close()


if __name__ == "__main__":
    try:
        run_pending_migrations()
    except (QuizDataError, psycopg2.Error):
        sys.exit(1)
