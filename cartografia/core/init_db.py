# cartografia/core/init_db.py
import logging
from cartografia.core.database import engine, Base
# Importar os modelos aqui para que o SQLAlchemy saiba que eles existem
from cartografia.models.territory import Area, Household  # noqa: F401
from cartografia.models.user import User  # noqa: F401

logger = logging.getLogger(__name__)

async def init_tables():
    """Cria as tabelas no banco de dados ao iniciar."""
    logger.info("⏳ Inicializando tabelas no PostGIS...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Tabelas verificadas/criadas com sucesso!")
