# cartografia/schemas/stats.py
from typing import List, Optional
from pydantic import BaseModel, Field
from cartografia.schemas.geo import GeoPoint
from cartografia.schemas.territory import AreaRecord

class CommunityStats(BaseModel):
    """Agregado recalculado a cada leitura. Nunca persistido."""
    name: str
    state: str = ""
    municipality: str = ""
    parish: str = ""
    families: int = 0
    population: int = 0
    areas: int = 0

class CommunityArea(BaseModel):
    area: AreaRecord
    centroid: Optional[GeoPoint] = None

class CommunityDetail(BaseModel):
    stats: CommunityStats
    areas: List[CommunityArea] = Field(default_factory=list)
