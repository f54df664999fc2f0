"""Fixtures compartilhadas: repositório em memória e cliente HTTP com overrides."""

from typing import List

import pytest
from fastapi.testclient import TestClient

from cartografia.api.deps import get_current_user, get_repository
from cartografia.core.database import get_db
from cartografia.core.exceptions import AreaNotFoundError, RepositoryError
from cartografia.main import app
from cartografia.models.user import User
from cartografia.repositories.base import TerritoryRepository
from cartografia.schemas.territory import AreaRecord, HouseholdRecord


class InMemoryRepository(TerritoryRepository):
    """Backend falso, com chaves para simular queda de leitura ou de escrita."""

    def __init__(self, areas=None, households=None, fail_reads=False, fail_writes=False):
        self.areas: List[AreaRecord] = list(areas or [])
        self.households: List[HouseholdRecord] = list(households or [])
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def _check(self, failing):
        if failing:
            raise RepositoryError("backend offline")

    async def list_areas(self):
        self._check(self.fail_reads)
        return list(self.areas)

    async def get_area(self, area_id):
        self._check(self.fail_reads)
        for area in self.areas:
            if area.id == area_id:
                return area
        raise AreaNotFoundError(area_id)

    async def save_area(self, record):
        self._check(self.fail_writes)
        self.areas.append(record)
        return record

    async def update_area(self, record):
        self._check(self.fail_writes)
        for i, area in enumerate(self.areas):
            if area.id == record.id:
                self.areas[i] = record
                return record
        raise AreaNotFoundError(record.id)

    async def list_households(self):
        self._check(self.fail_reads)
        return list(self.households)

    async def save_household(self, record):
        self._check(self.fail_writes)
        self.households.append(record)
        return record


SQUARE_WKT = "POLYGON((-66.9 10.4, -66.8 10.4, -66.8 10.5, -66.9 10.5, -66.9 10.4))"


@pytest.fixture
def sample_areas():
    return [
        AreaRecord(
            id="area-1",
            community_name="Casco Central",
            area_type="Límite Comunal",
            display_name="Límite norte",
            geometry=SQUARE_WKT,
            editor_username="maria",
            state="Miranda",
            municipality="Sucre",
            parish="Petare",
        ),
        AreaRecord(
            id="area-2",
            community_name="La Vega",
            area_type="Zona de Riesgo",
            display_name="Ladera",
            geometry="POLYGON((-66.95 10.45, -66.94 10.46, -66.93 10.45, -66.95 10.45))",
        ),
    ]


@pytest.fixture
def sample_households():
    return [
        HouseholdRecord(id="h1", community_name="Casco Central", member_count=4, latitude=10.45, longitude=-66.85),
        HouseholdRecord(id="h2", community_name="Casco Central", member_count=2, latitude=10.41, longitude=-66.81),
        HouseholdRecord(id="h3", community_name="Sector Norte", member_count=3, latitude=11.0, longitude=-67.0),
    ]


@pytest.fixture
def repo(sample_areas, sample_households):
    return InMemoryRepository(areas=sample_areas, households=sample_households)


async def _fake_db():
    yield None


@pytest.fixture
def client(repo):
    """Cliente autenticado como editor, com o repositório em memória."""
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_current_user] = lambda: User(id=1, username="editor", is_active=True)
    app.dependency_overrides[get_db] = _fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_db] = _fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()
