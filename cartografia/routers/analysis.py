# cartografia/routers/analysis.py
from fastapi import APIRouter, Depends, HTTPException
from cartografia.api.deps import get_current_user, get_repository
from cartografia.core.exceptions import InvalidGeometryError, RepositoryError
from cartografia.models.user import User
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.geo import FeatureCollection, TerritoryAnalysisRequest, TerritoryAnalysisResult
from cartografia.services.geo.features import EMPTY_COLLECTION, build_feature_collection
from cartografia.services.territory.analysis import TerritoryAnalysisService

router = APIRouter(tags=["map"])

@router.get("/map", response_model=FeatureCollection)
async def get_map_data(repo: TerritoryRepository = Depends(get_repository)):
    """Todas as áreas como GeoJSON para a camada do mapa."""
    try:
        areas = await repo.list_areas()
    except RepositoryError:
        return dict(EMPTY_COLLECTION, features=[])
    return build_feature_collection(areas)

@router.post("/analysis/territory", response_model=TerritoryAnalysisResult)
async def analyze_territory(
    request: TerritoryAnalysisRequest,
    repo: TerritoryRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user)
):
    """Conta viviendas e população dentro do polígono enviado."""
    try:
        return await TerritoryAnalysisService(repo).analyze(request)
    except InvalidGeometryError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RepositoryError as e:
        raise HTTPException(status_code=502, detail=str(e))
