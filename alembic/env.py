# alembic/env.py
"""
Migration environment for the Sankofa backend.

The database URL is resolved exactly as the application resolves it
(DATABASE_URL, then the DB_* SQL Server variables, then local SQLite), so
`alembic upgrade head` always targets the database the API will open.
alembic.ini prepends the project root to sys.path.
"""
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

from config import Settings
from models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    # -x url=... overrides the environment for one-off runs
    return context.get_x_argument(as_dictionary=True).get("url") or Settings.from_env().database_url


def _options(dialect_name: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        # SQLite cannot ALTER constraints in place
        "render_as_batch": dialect_name == "sqlite",
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of running it."""
    url = _database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(url.split(":", 1)[0].split("+", 1)[0]),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_options(connection.dialect.name))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
