# cartografia/routers/areas.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from cartografia.api.deps import get_current_user, get_repository
from cartografia.core.exceptions import AreaNotFoundError, InvalidGeometryError, RepositoryError
from cartografia.models.user import User
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import AreaCreate, AreaDetail, AreaRecord, AreaUpdate
from cartografia.services.territory.areas import AreaService

router = APIRouter(prefix="/areas", tags=["areas"])

@router.get("", response_model=List[AreaRecord])
async def list_areas(
    community: Optional[str] = Query(None),
    repo: TerritoryRepository = Depends(get_repository)
):
    """Lista os polígonos. Se o backend cair, o mapa abre vazio."""
    try:
        return await AreaService(repo).list_areas(community)
    except RepositoryError:
        return []

@router.get("/{area_id}", response_model=AreaDetail)
async def get_area(area_id: str, repo: TerritoryRepository = Depends(get_repository)):
    """Área + pontos decodificados para o editor do mapa."""
    try:
        return await AreaService(repo).get_area_detail(area_id)
    except AreaNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RepositoryError as e:
        raise HTTPException(status_code=502, detail=str(e))

@router.post("", response_model=AreaRecord, status_code=201)
async def create_area(
    payload: AreaCreate,
    repo: TerritoryRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user)
):
    try:
        return await AreaService(repo).create_area(payload, editor=current_user.username)
    except InvalidGeometryError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RepositoryError as e:
        # Falha de escrita nunca é silenciosa: a UI precisa avisar o usuário
        raise HTTPException(status_code=502, detail=str(e))

@router.put("/{area_id}", response_model=AreaRecord)
async def update_area(
    area_id: str,
    payload: AreaUpdate,
    repo: TerritoryRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user)
):
    try:
        return await AreaService(repo).update_area(area_id, payload, editor=current_user.username)
    except InvalidGeometryError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AreaNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RepositoryError as e:
        raise HTTPException(status_code=502, detail=str(e))
