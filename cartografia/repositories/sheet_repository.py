# cartografia/repositories/sheet_repository.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from cartografia.core.exceptions import AreaNotFoundError
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import AreaRecord, HouseholdRecord
from cartografia.services.community.aggregator import parse_member_count
from cartografia.services.sheets.client import AppsScriptClient

logger = logging.getLogger(__name__)

def _cell(row: Dict[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None or value == "":
        return None
    return str(value)

def _float_cell(row: Dict[str, Any], key: str) -> Optional[float]:
    try:
        return float(row.get(key))
    except (TypeError, ValueError):
        return None

def _parse_timestamp(value: Any) -> Optional[datetime]:
    # Apps Script devolve ISO 8601 com "Z"; formato desconhecido vira None
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None

def _timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""

def area_from_row(row: Dict[str, Any]) -> AreaRecord:
    return AreaRecord(
        id=str(row.get("ID_AREA", "")),
        community_name=str(row.get("COMUNIDAD_ASOCIADA") or ""),
        area_type=str(row.get("TIPO_AREA") or ""),
        display_name=str(row.get("NOMBRE_AREA") or ""),
        geometry=str(row.get("GEOMETRIA_WKT") or ""),
        last_update=_parse_timestamp(row.get("FECHA_ACTUALIZACION")),
        editor_username=_cell(row, "USUARIO_WKT"),
        state=_cell(row, "ESTADO"),
        municipality=_cell(row, "MUNICIPIO"),
        parish=_cell(row, "PARROQUIA"),
    )

def area_to_row(record: AreaRecord) -> Dict[str, Any]:
    return {
        "ID_AREA": record.id,
        "COMUNIDAD_ASOCIADA": record.community_name,
        "TIPO_AREA": record.area_type,
        "NOMBRE_AREA": record.display_name,
        "GEOMETRIA_WKT": record.geometry,
        "FECHA_ACTUALIZACION": _timestamp(record.last_update),
        "USUARIO_WKT": record.editor_username or "",
        "ESTADO": record.state or "",
        "MUNICIPIO": record.municipality or "",
        "PARROQUIA": record.parish or "",
    }

def household_from_row(row: Dict[str, Any]) -> HouseholdRecord:
    risk = row.get("RIESGO_DESLIZAMIENTO")
    if isinstance(risk, str):
        risk = risk.strip().lower() in ("true", "si", "sí", "1", "x")
    return HouseholdRecord(
        id=str(row.get("ID_HOGAR", "")),
        community_name=str(row.get("COMUNIDAD_ASOCIADA") or "").strip(),
        member_count=parse_member_count(row.get("NUM_MIEMBROS")),
        latitude=_float_cell(row, "COORDENADA_LAT"),
        longitude=_float_cell(row, "COORDENADA_LONG"),
        head_name=_cell(row, "NOMBRE_JEFE"),
        wall_material=_cell(row, "MATERIAL_PAREDES"),
        landslide_risk=bool(risk),
        state=_cell(row, "ESTADO"),
        municipality=_cell(row, "MUNICIPIO"),
        parish=_cell(row, "PARROQUIA"),
    )

def household_to_row(record: HouseholdRecord) -> Dict[str, Any]:
    return {
        "ID_HOGAR": record.id,
        "COMUNIDAD_ASOCIADA": record.community_name,
        "NUM_MIEMBROS": record.member_count,
        "COORDENADA_LAT": record.latitude if record.latitude is not None else "",
        "COORDENADA_LONG": record.longitude if record.longitude is not None else "",
        "NOMBRE_JEFE": record.head_name or "",
        "MATERIAL_PAREDES": record.wall_material or "",
        "RIESGO_DESLIZAMIENTO": record.landslide_risk,
        "ESTADO": record.state or "",
        "MUNICIPIO": record.municipality or "",
        "PARROQUIA": record.parish or "",
    }

class SheetTerritoryRepository(TerritoryRepository):
    """Backend legado: planilha POLIGONOS + CENSO_HOGARES via Apps Script."""

    def __init__(self, client: AppsScriptClient):
        self.client = client

    async def _rows(self, action: str) -> List[Dict[str, Any]]:
        data = await self.client.call(action)
        if not isinstance(data, list):
            logger.warning(f"Script não retornou lista para {action}: {type(data).__name__}")
            return []
        return [row for row in data if isinstance(row, dict)]

    async def list_areas(self) -> List[AreaRecord]:
        return [area_from_row(row) for row in await self._rows("listar")]

    async def get_area(self, area_id: str) -> AreaRecord:
        for area in await self.list_areas():
            if area.id == area_id:
                return area
        raise AreaNotFoundError(area_id)

    async def save_area(self, record: AreaRecord) -> AreaRecord:
        logger.info(f"💾 Enviando área {record.display_name} para a planilha...")
        await self.client.call("crear", area_to_row(record), method="POST")
        return record

    async def update_area(self, record: AreaRecord) -> AreaRecord:
        await self.client.call("actualizar", area_to_row(record), method="POST")
        return record

    async def list_households(self) -> List[HouseholdRecord]:
        return [household_from_row(row) for row in await self._rows("listar_hogares")]

    async def save_household(self, record: HouseholdRecord) -> HouseholdRecord:
        await self.client.call("registrar_hogar", household_to_row(record), method="POST")
        return record
