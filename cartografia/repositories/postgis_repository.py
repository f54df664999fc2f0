# cartografia/repositories/postgis_repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
from typing import List, Optional
import logging

from cartografia.core.exceptions import RepositoryError, AreaNotFoundError
from cartografia.models.territory import Area, Household
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import AreaRecord, HouseholdRecord
from cartografia.services.geo import wkt as wkt_codec

logger = logging.getLogger(__name__)

def _spatial_polygon(wkt: str) -> Optional[str]:
    # GeoAlchemy2 aceita EWKT direto na string; anel malformado fica sem geom
    if wkt_codec.is_well_formed(wkt_codec.decode(wkt)):
        return f"SRID=4326;{wkt}"
    return None

def _spatial_point(latitude: Optional[float], longitude: Optional[float]) -> Optional[str]:
    if latitude is None or longitude is None:
        return None
    return f"SRID=4326;POINT({longitude} {latitude})"

class PostgisTerritoryRepository(TerritoryRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, action: str):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Erro ao salvar no banco ({action}): {e}")
            await self.db.rollback()
            raise RepositoryError(f"Falha ao {action}") from e

    # --- ÁREAS ---

    async def list_areas(self) -> List[AreaRecord]:
        try:
            result = await self.db.execute(select(Area).order_by(Area.community_name, Area.display_name))
        except SQLAlchemyError as e:
            logger.error(f"Erro ao listar áreas: {e}")
            raise RepositoryError("Falha ao listar áreas") from e
        return [AreaRecord.model_validate(a) for a in result.scalars().all()]

    async def _find_area(self, area_id: str) -> Area:
        try:
            area = await self.db.get(Area, area_id)
        except SQLAlchemyError as e:
            logger.error(f"Erro ao buscar área {area_id}: {e}")
            raise RepositoryError("Falha ao buscar área") from e
        if area is None:
            raise AreaNotFoundError(area_id)
        return area

    async def get_area(self, area_id: str) -> AreaRecord:
        return AreaRecord.model_validate(await self._find_area(area_id))

    async def save_area(self, record: AreaRecord) -> AreaRecord:
        logger.info(f"💾 Persistindo área {record.display_name} ({record.community_name})...")
        area = Area(
            id=record.id,
            community_name=record.community_name,
            area_type=record.area_type,
            display_name=record.display_name,
            geometry=record.geometry,
            geom=_spatial_polygon(record.geometry),
            last_update=record.last_update,
            editor_username=record.editor_username,
            state=record.state,
            municipality=record.municipality,
            parish=record.parish,
        )
        self.db.add(area)
        await self._commit("criar área")
        return record

    async def update_area(self, record: AreaRecord) -> AreaRecord:
        area = await self._find_area(record.id)

        # Update completo: todos os campos são sobrescritos
        area.community_name = record.community_name
        area.area_type = record.area_type
        area.display_name = record.display_name
        area.geometry = record.geometry
        area.geom = _spatial_polygon(record.geometry)
        area.last_update = record.last_update
        area.editor_username = record.editor_username
        area.state = record.state
        area.municipality = record.municipality
        area.parish = record.parish

        await self._commit("atualizar área")
        return record

    # --- HOGARES ---

    async def list_households(self) -> List[HouseholdRecord]:
        try:
            result = await self.db.execute(select(Household))
        except SQLAlchemyError as e:
            logger.error(f"Erro ao listar hogares: {e}")
            raise RepositoryError("Falha ao listar hogares") from e
        return [HouseholdRecord.model_validate(h) for h in result.scalars().all()]

    async def save_household(self, record: HouseholdRecord) -> HouseholdRecord:
        self.db.add(Household(
            id=record.id,
            community_name=record.community_name,
            member_count=record.member_count,
            latitude=record.latitude,
            longitude=record.longitude,
            geom=_spatial_point(record.latitude, record.longitude),
            head_name=record.head_name,
            wall_material=record.wall_material,
            landslide_risk=record.landslide_risk,
            state=record.state,
            municipality=record.municipality,
            parish=record.parish,
        ))
        await self._commit("registrar hogar")
        return record
