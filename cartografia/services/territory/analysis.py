# cartografia/services/territory/analysis.py
import logging
from typing import List, Sequence

from shapely.geometry import Point, Polygon
from shapely.prepared import prep

from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.geo import GeoPoint, TerritoryAnalysisRequest, TerritoryAnalysisResult
from cartografia.schemas.territory import HouseholdRecord
from cartografia.services.community.aggregator import parse_member_count
from cartografia.services.geo import wkt as wkt_codec
from cartografia.services.territory.areas import resolve_geometry

logger = logging.getLogger(__name__)

class TerritoryAnalysisService:
    """Quantas viviendas (e quantas pessoas) caem DENTRO de um polígono."""

    def __init__(self, repo: TerritoryRepository):
        self.repo = repo

    @staticmethod
    def summarize(points: Sequence[GeoPoint], households: List[HouseholdRecord]) -> TerritoryAnalysisResult:
        # Shapely trabalha em (x, y) = (lng, lat)
        polygon = prep(Polygon([(p.lng, p.lat) for p in points]).buffer(0))

        result = TerritoryAnalysisResult()
        communities = []
        for h in households:
            if h.latitude is None or h.longitude is None:
                continue
            if not polygon.contains(Point(h.longitude, h.latitude)):
                continue
            result.households += 1
            result.population += parse_member_count(h.member_count)
            if h.community_name and h.community_name not in communities:
                communities.append(h.community_name)

        result.communities = communities
        return result

    async def analyze(self, request: TerritoryAnalysisRequest) -> TerritoryAnalysisResult:
        # Mesmas regras do formulário: InvalidGeometryError se não formar polígono
        points = wkt_codec.decode(resolve_geometry(request))
        households = await self.repo.list_households()
        result = self.summarize(points, households)
        logger.info(f"🔎 Análise territorial: {result.households} viviendas, {result.population} pessoas")
        return result
