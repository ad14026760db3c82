import sys
from os.path import abspath, dirname
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# 1. Backend root on sys.path so 'debag' imports without an install
sys.path.insert(0, abspath(dirname(dirname(__file__))))

# 2. DeBag components
from debag.core.config import settings
from debag.core.database import Base
# Importing the models populates Base.metadata
from debag.shared.models import Person, Observation  # noqa: F401

# Alembic configuration object
config = context.config

# 3. Sync URL injected at runtime
# Alembic needs postgresql:// (psycopg2), not postgresql+asyncpg://
sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
config.set_main_option("sqlalchemy.url", sync_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# 4. Metadata target
target_metadata = Base.metadata

def run_migrations_offline() -> None:
    """Offline mode: emits SQL scripts without a live connection."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Online mode: runs the migrations against the database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
