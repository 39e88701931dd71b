import os
import sys
from logging.config import fileConfig

# Run from the repo root: `alembic upgrade head`
sys.path.append(os.getcwd())

from alembic import context
from sqlalchemy import create_engine, pool

from tradebook.config import config as app_config
from tradebook.db.database import Base, sync_database_url
import tradebook.models  # noqa: F401  registers users, trades, trading_diary, goals

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=sync_database_url(app_config.DATABASE_URL),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(sync_database_url(app_config.DATABASE_URL), poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite needs batch mode for ALTER TABLE
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
