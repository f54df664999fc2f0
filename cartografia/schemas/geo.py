# cartografia/schemas/geo.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Any, Optional

class GeoPoint(BaseModel):
    """Ponto WGS84. Imutável: criado por clique no mapa ou lido do armazenamento."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float

class FeatureProperties(BaseModel):
    """
    Define QUAIS dados de cada área vão para o mapa do Frontend.
    Se o campo não estiver aqui, o FastAPI remove ele do JSON.
    """
    id: str
    community_name: str
    display_name: str
    area_type: str
    editor_username: Optional[str] = None
    last_update: Optional[str] = None

class Feature(BaseModel):
    type: str = "Feature"
    geometry: Dict[str, Any]
    properties: FeatureProperties

class FeatureCollection(BaseModel):
    type: str = "FeatureCollection"
    features: List[Feature]

class TerritoryAnalysisRequest(BaseModel):
    # Aceita o polígono desenhado (pontos) ou já serializado (WKT)
    points: Optional[List[GeoPoint]] = None
    geometry: Optional[str] = None

class TerritoryAnalysisResult(BaseModel):
    households: int = 0
    population: int = 0
    communities: List[str] = Field(default_factory=list)
