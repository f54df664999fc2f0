# cartografia/schemas/territory.py
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from cartografia.schemas.geo import GeoPoint

class AreaType(str, Enum):
    """Rótulos gravados pelo cliente web original (não traduzir: compatibilidade)."""
    BOUNDARY = "Límite Comunal"
    AGRICULTURAL = "Zona Agrícola"
    RISK_ZONE = "Zona de Riesgo"
    INFRASTRUCTURE = "Equipamiento"
    OTHER = "Otros"

    @classmethod
    def recognise(cls, label: Optional[str]) -> Optional["AreaType"]:
        try:
            return cls(label)
        except ValueError:
            return None

# --- ÁREAS (POLÍGONOS) ---

class AreaRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    community_name: str
    area_type: str = AreaType.BOUNDARY.value
    display_name: str = ""
    geometry: str = ""  # WKT: única representação persistida
    last_update: Optional[datetime] = None
    editor_username: Optional[str] = None
    state: Optional[str] = None
    municipality: Optional[str] = None
    parish: Optional[str] = None

# Nome sem espaços nas pontas; só espaços não conta como nome (some das estatísticas)
RequiredName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class AreaPayload(BaseModel):
    """
    Registro completo enviado pelo formulário. Update também é completo:
    não existe patch parcial. O editor é sempre o usuário autenticado.
    """
    community_name: RequiredName
    display_name: RequiredName
    # Qualquer string é aceita; só os rótulos de AreaType são reconhecidos
    area_type: str = AreaType.BOUNDARY.value
    geometry: Optional[str] = None
    points: Optional[List[GeoPoint]] = None
    state: Optional[str] = None
    municipality: Optional[str] = None
    parish: Optional[str] = None

class AreaCreate(AreaPayload):
    id: Optional[str] = None

class AreaUpdate(AreaPayload):
    pass

class AreaDetail(AreaRecord):
    points: List[GeoPoint] = Field(default_factory=list)
    centroid: Optional[GeoPoint] = None
    type_recognized: bool = False

# --- HOGARES (CENSO) ---

class HouseholdRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    community_name: str = ""
    member_count: int = 0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    head_name: Optional[str] = None
    wall_material: Optional[str] = None
    landslide_risk: bool = False

    # Geografia política: tem precedência sobre a das áreas no resumo comunal
    state: Optional[str] = None
    municipality: Optional[str] = None
    parish: Optional[str] = None

class HouseholdCreate(BaseModel):
    id: Optional[str] = None
    community_name: RequiredName
    member_count: int = Field(0, ge=0)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    head_name: Optional[str] = None
    wall_material: Optional[str] = None
    landslide_risk: bool = False
    state: Optional[str] = None
    municipality: Optional[str] = None
    parish: Optional[str] = None
