from __future__ import annotations

"""Alembic environment for the referral store.

Usage:
    # Generate new migration after editing models
    alembic revision --autogenerate -m "<message>"

    # Apply all pending migrations
    alembic upgrade head

Alembic reads its config from `alembic.ini` (script_location = migrations).
"""

import os, sys, re
from logging.config import fileConfig

from sqlalchemy import pool, create_engine
from alembic import context

# ---------------------------------------------------------------------------
#  Make sure `import referral_api` works when env.py is executed from the project root
# ---------------------------------------------------------------------------
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from dotenv import load_dotenv  # noqa: E402

from referral_api.models import Base  # noqa: E402

load_dotenv()

# ---------------------------------------------------------------------------
#  Alembic Config object & logging
# ---------------------------------------------------------------------------
config = context.config

DATABASE_URL = os.getenv("DATABASE_URL", "")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable must be set to run migrations")

# Migrations run synchronously: strip any async driver from the URL
SYNC_DSN = re.sub(r"\+(asyncpg|aiosqlite)", "", DATABASE_URL, count=1)
SYNC_DSN = re.sub(r"^postgres://", "postgresql://", SYNC_DSN, count=1)
config.set_main_option("sqlalchemy.url", SYNC_DSN)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata  # models metadata for `--autogenerate`


# ---------------------------------------------------------------------------
#  Helper: offline migration (generate SQL scripts only)
# ---------------------------------------------------------------------------

def run_migrations_offline():
    """Run migrations without DB connection (generates raw SQL)."""
    context.configure(
        url=SYNC_DSN,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------------------------
#  Helper: online migration (apply directly to DB)
# ---------------------------------------------------------------------------

def run_migrations_online() -> None:
    """Run migrations inside a synchronous transaction (avoids greenlet errors)."""

    connectable = create_engine(SYNC_DSN, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


def run():
    if context.is_offline_mode():
        run_migrations_offline()
    else:
        run_migrations_online()


run()
