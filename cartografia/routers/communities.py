# cartografia/routers/communities.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from cartografia.api.deps import get_repository
from cartografia.core.config import settings
from cartografia.core.exceptions import RepositoryError
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.stats import CommunityDetail, CommunityStats
from cartografia.services.community.stats import CommunityStatsService

router = APIRouter(tags=["communities"])

@router.get("/stats", response_model=List[CommunityStats])
@router.get("/communities/summary", response_model=List[CommunityStats])
async def community_summary(repo: TerritoryRepository = Depends(get_repository)):
    """Resumo comunal do dashboard. Nunca devolve erro ao usuário."""
    service = CommunityStatsService(repo, demo_fallback=settings.STATS_DEMO_FALLBACK)
    return await service.get_stats()

@router.get("/communities/{name}", response_model=CommunityDetail)
async def community_detail(name: str, repo: TerritoryRepository = Depends(get_repository)):
    service = CommunityStatsService(repo, demo_fallback=settings.STATS_DEMO_FALLBACK)
    try:
        detail = await service.get_community(name)
    except RepositoryError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Comunidade '{name.strip()}' não encontrada")
    return detail
