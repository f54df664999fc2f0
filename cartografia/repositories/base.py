# cartografia/repositories/base.py
from abc import ABC, abstractmethod
from typing import List
from cartografia.schemas.territory import AreaRecord, HouseholdRecord

class TerritoryRepository(ABC):
    """
    Interface estreita entre a lógica (codec, agregador, serviços) e o
    armazenamento. Trocar PostGIS por planilha não toca no resto do código.
    Falhas do backend sobem como RepositoryError.
    """

    @abstractmethod
    async def list_areas(self) -> List[AreaRecord]: ...

    @abstractmethod
    async def get_area(self, area_id: str) -> AreaRecord:
        """Lança AreaNotFoundError se o id não existir."""

    @abstractmethod
    async def save_area(self, record: AreaRecord) -> AreaRecord: ...

    @abstractmethod
    async def update_area(self, record: AreaRecord) -> AreaRecord:
        """Substitui o registro inteiro. Lança AreaNotFoundError se o id não existir."""

    @abstractmethod
    async def list_households(self) -> List[HouseholdRecord]: ...

    @abstractmethod
    async def save_household(self, record: HouseholdRecord) -> HouseholdRecord: ...
