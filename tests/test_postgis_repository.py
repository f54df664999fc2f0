"""Repositório PostGIS com AsyncSession simulada (sem banco real)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from cartografia.core.exceptions import AreaNotFoundError, RepositoryError
from cartografia.models.territory import Area, Household
from cartografia.repositories.postgis_repository import PostgisTerritoryRepository
from cartografia.schemas.territory import AreaRecord, HouseholdRecord
from conftest import SQUARE_WKT


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def session():
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    db.get = AsyncMock()
    return db


def _area(**kwargs):
    defaults = dict(id="a1", community_name="X", display_name="Y", geometry=SQUARE_WKT)
    defaults.update(kwargs)
    return AreaRecord(**defaults)


def test_save_area_derives_spatial_column(session):
    run(PostgisTerritoryRepository(session).save_area(_area()))

    added = session.add.call_args.args[0]
    assert isinstance(added, Area)
    assert added.geometry == SQUARE_WKT
    assert added.geom == f"SRID=4326;{SQUARE_WKT}"
    session.commit.assert_awaited_once()


def test_save_area_with_malformed_wkt_has_no_geom(session):
    run(PostgisTerritoryRepository(session).save_area(_area(geometry="POLYGON((a b))")))
    assert session.add.call_args.args[0].geom is None


def test_commit_failure_rolls_back(session):
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))

    with pytest.raises(RepositoryError):
        run(PostgisTerritoryRepository(session).save_area(_area()))
    session.rollback.assert_awaited_once()


def test_update_area_overwrites_fields(session):
    existing = Area(id="a1", community_name="Old", display_name="Old", geometry="", state="Miranda")
    session.get.return_value = existing

    run(PostgisTerritoryRepository(session).update_area(_area(display_name="Nuevo")))

    assert existing.community_name == "X"
    assert existing.display_name == "Nuevo"
    assert existing.state is None
    assert existing.geom == f"SRID=4326;{SQUARE_WKT}"


def test_update_unknown_area(session):
    session.get.return_value = None
    with pytest.raises(AreaNotFoundError):
        run(PostgisTerritoryRepository(session).update_area(_area()))


def test_list_failure_raises_repository_error(session):
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    with pytest.raises(RepositoryError):
        run(PostgisTerritoryRepository(session).list_households())


def test_save_household_point(session):
    record = HouseholdRecord(id="h1", community_name="X", member_count=3, latitude=10.5, longitude=-66.9, state="Miranda")
    run(PostgisTerritoryRepository(session).save_household(record))

    added = session.add.call_args.args[0]
    assert isinstance(added, Household)
    assert added.geom == "SRID=4326;POINT(-66.9 10.5)"
    assert added.state == "Miranda"
