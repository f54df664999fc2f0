# cartografia/alembic/env.py
import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from cartografia.core.database import Base
from cartografia.core.config import settings
# Importar TODOS os modelos para o autogenerate funcionar
from cartografia.models.user import User  # noqa: F401
from cartografia.models.territory import Area, Household  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Tabelas do NOSSO sistema (White List). alembic_version é a tabela interna do alembic.
# Protege as tabelas do PostGIS (spatial_ref_sys) e do Tiger Geocoder.
OWNED_TABLES = ["users", "areas", "households", "alembic_version"]

def include_object(object, name, type_, reflected, compare_to):
    if type_ == "table" and name not in OWNED_TABLES:
        return False
    return True

def run_migrations_offline() -> None:
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()

def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, include_object=include_object)

    with context.begin_transaction():
        context.run_migrations()

async def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = settings.DATABASE_URL

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()

if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
