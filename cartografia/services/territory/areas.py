# cartografia/services/territory/areas.py
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from cartografia.core.exceptions import InvalidGeometryError
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import AreaCreate, AreaDetail, AreaPayload, AreaRecord, AreaType, AreaUpdate
from cartografia.services.geo import wkt as wkt_codec

logger = logging.getLogger(__name__)

def resolve_geometry(payload) -> str:
    """
    Pontos desenhados têm prioridade sobre WKT pronto. Menos de 3 pontos
    (encode devolve "") ou WKT que não decodifica num anel válido é recusado.
    """
    if payload.points is not None:
        wkt = wkt_codec.encode(payload.points)
        if not wkt:
            raise InvalidGeometryError("O polígono precisa de pelo menos 3 pontos.")
        return wkt

    if payload.geometry:
        if not wkt_codec.is_well_formed(wkt_codec.decode(payload.geometry)):
            raise InvalidGeometryError("WKT inválido. Esperado POLYGON((lng lat, ...)).")
        # Mantém a string original: compatibilidade com o que já está gravado
        return payload.geometry

    raise InvalidGeometryError("Informe 'points' ou 'geometry'.")

class AreaService:
    def __init__(self, repo: TerritoryRepository):
        self.repo = repo

    async def list_areas(self, community: Optional[str] = None) -> List[AreaRecord]:
        areas = await self.repo.list_areas()
        if community and community.strip():
            wanted = community.strip()
            areas = [a for a in areas if a.community_name.strip() == wanted]
        return areas

    async def get_area_detail(self, area_id: str) -> AreaDetail:
        area = await self.repo.get_area(area_id)
        points = wkt_codec.decode(area.geometry)
        return AreaDetail(
            **area.model_dump(),
            points=points,
            centroid=wkt_codec.centroid(points),
            type_recognized=AreaType.recognise(area.area_type) is not None,
        )

    def _build_record(self, area_id: str, payload: AreaPayload, editor: Optional[str]) -> AreaRecord:
        return AreaRecord(
            id=area_id,
            community_name=payload.community_name.strip(),
            area_type=payload.area_type,
            display_name=payload.display_name.strip(),
            geometry=resolve_geometry(payload),
            last_update=datetime.now(timezone.utc),
            editor_username=editor,
            state=payload.state,
            municipality=payload.municipality,
            parish=payload.parish,
        )

    async def create_area(self, payload: AreaCreate, editor: Optional[str] = None) -> AreaRecord:
        record = self._build_record(payload.id or str(uuid.uuid4()), payload, editor)
        if AreaType.recognise(record.area_type) is None:
            logger.warning(f"Tipo de área não reconhecido: {record.area_type!r} (gravando mesmo assim)")
        return await self.repo.save_area(record)

    async def update_area(self, area_id: str, payload: AreaUpdate, editor: Optional[str] = None) -> AreaRecord:
        record = self._build_record(area_id, payload, editor)
        logger.info(f"✏️ Atualizando área {area_id} por {record.editor_username}")
        return await self.repo.update_area(record)
