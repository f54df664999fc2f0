# cartografia/routers/households.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from cartografia.api.deps import get_current_user, get_repository
from cartografia.core.exceptions import RepositoryError
from cartografia.models.user import User
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import HouseholdCreate, HouseholdRecord
from cartografia.services.territory.households import HouseholdService

router = APIRouter(prefix="/households", tags=["households"])

@router.get("", response_model=List[HouseholdRecord])
async def list_households(repo: TerritoryRepository = Depends(get_repository)):
    return await HouseholdService(repo).list_households()

@router.post("", response_model=HouseholdRecord, status_code=201)
async def register_household(
    payload: HouseholdCreate,
    repo: TerritoryRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user)
):
    try:
        return await HouseholdService(repo).register_household(payload)
    except RepositoryError as e:
        raise HTTPException(status_code=502, detail=str(e))
