# cartografia/services/territory/households.py
import logging
import uuid
from typing import List

from cartografia.core.exceptions import RepositoryError
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import HouseholdCreate, HouseholdRecord

logger = logging.getLogger(__name__)

class HouseholdService:
    def __init__(self, repo: TerritoryRepository):
        self.repo = repo

    async def list_households(self) -> List[HouseholdRecord]:
        """Leitura degrada para lista vazia se o backend cair."""
        try:
            return await self.repo.list_households()
        except RepositoryError as e:
            logger.warning(f"⚠️ Hogares indisponíveis, devolvendo lista vazia: {e}")
            return []

    async def register_household(self, payload: HouseholdCreate) -> HouseholdRecord:
        record = HouseholdRecord(
            **payload.model_dump(exclude={"id", "community_name"}),
            id=payload.id or str(uuid.uuid4()),
            community_name=payload.community_name.strip(),
        )
        return await self.repo.save_household(record)
