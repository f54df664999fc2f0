# cartografia/services/community/stats.py
import logging
from typing import List, Optional

from cartografia.core.exceptions import RepositoryError
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.stats import CommunityArea, CommunityDetail, CommunityStats
from cartografia.services.community.aggregator import aggregate
from cartografia.services.geo import wkt as wkt_codec

logger = logging.getLogger(__name__)

class CommunityStatsService:
    # Dashboard nunca mostra estado de erro: sem backend, mostra isto
    DEMO_STATS = [
        CommunityStats(name="Casco Central (Demo)", families=45, population=150),
        CommunityStats(name="Sector Norte (Demo)", families=32, population=110),
        CommunityStats(name="Sector Sur (Demo)", families=28, population=95),
    ]

    def __init__(self, repo: TerritoryRepository, demo_fallback: bool = True):
        self.repo = repo
        self.demo_fallback = demo_fallback

    def _fallback(self) -> List[CommunityStats]:
        if self.demo_fallback:
            return [s.model_copy() for s in self.DEMO_STATS]
        return []

    async def get_stats(self) -> List[CommunityStats]:
        """Recalcula o resumo comunal a partir do censo e dos polígonos."""
        try:
            households = await self.repo.list_households()
            areas = await self.repo.list_areas()
        except RepositoryError as e:
            logger.warning(f"⚠️ Backend indisponível para estatísticas, usando fallback: {e}")
            return self._fallback()

        stats = aggregate(areas, households)
        logger.info(f"📊 Resumo comunal: {len(stats)} comunidades ({len(households)} hogares, {len(areas)} áreas)")
        return list(stats.values())

    async def get_community(self, name: str) -> Optional[CommunityDetail]:
        """Estatística + áreas de uma comunidade. None se o nome não aparece em nenhuma tabela."""
        wanted = name.strip()
        households = await self.repo.list_households()
        areas = await self.repo.list_areas()

        stats = aggregate(areas, households).get(wanted)
        if stats is None:
            return None

        community_areas = []
        for area in areas:
            if (area.community_name or "").strip() != wanted:
                continue
            community_areas.append(CommunityArea(
                area=area,
                centroid=wkt_codec.centroid(wkt_codec.decode(area.geometry)),
            ))
        return CommunityDetail(stats=stats, areas=community_areas)
