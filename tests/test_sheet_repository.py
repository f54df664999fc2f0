"""Backend de planilha: Apps Script simulado com httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from cartografia.core.exceptions import AreaNotFoundError, RepositoryError
from cartografia.repositories.sheet_repository import SheetTerritoryRepository, area_from_row, household_from_row
from cartografia.schemas.territory import AreaRecord, HouseholdRecord
from cartografia.services.sheets.client import AppsScriptClient

SCRIPT_URL = "https://script.google.com/macros/s/fake/exec"

AREA_ROW = {
    "ID_AREA": "a1",
    "COMUNIDAD_ASOCIADA": "Casco Central",
    "TIPO_AREA": "Límite Comunal",
    "NOMBRE_AREA": "Límite",
    "GEOMETRIA_WKT": "POLYGON((-66.9 10.4, -66.8 10.5, -66.7 10.4, -66.9 10.4))",
    "FECHA_ACTUALIZACION": "2024-05-01T12:00:00.000Z",
    "USUARIO_WKT": "maria",
    "ESTADO": "Miranda",
    "MUNICIPIO": "",
    "PARROQUIA": "",
}

HOUSEHOLD_ROW = {
    "ID_HOGAR": "h1",
    "COMUNIDAD_ASOCIADA": "Casco Central ",
    "NUM_MIEMBROS": "5",
    "COORDENADA_LAT": 10.45,
    "COORDENADA_LONG": "-66.85",
    "RIESGO_DESLIZAMIENTO": "SI",
}


def run(coro):
    return asyncio.run(coro)


def make_repo(handler, url=SCRIPT_URL):
    return SheetTerritoryRepository(AppsScriptClient(url, transport=httpx.MockTransport(handler)))


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def script(requests_seen):
    def handler(request: httpx.Request):
        if request.method == "GET":
            action = request.url.params["action"]
            requests_seen.append((action, None))
            if action == "listar":
                return httpx.Response(200, json=[AREA_ROW])
            if action == "listar_hogares":
                return httpx.Response(200, json=[HOUSEHOLD_ROW, "lixo"])
            return httpx.Response(200, json={})

        body = json.loads(request.content)
        requests_seen.append((body["action"], body))
        if body["action"] == "actualizar" and body["ID_AREA"] != "a1":
            return httpx.Response(200, json={"error": "Error: ID de área no encontrado"})
        return httpx.Response(200, json={"success": True})

    return handler


def test_list_areas_maps_sheet_columns(script):
    areas = run(make_repo(script).list_areas())

    assert len(areas) == 1
    area = areas[0]
    assert area.id == "a1"
    assert area.community_name == "Casco Central"
    assert area.geometry == AREA_ROW["GEOMETRIA_WKT"]
    assert area.editor_username == "maria"
    assert area.state == "Miranda"
    assert area.municipality is None
    assert area.last_update.year == 2024


def test_get_area(script):
    repo = make_repo(script)
    assert run(repo.get_area("a1")).display_name == "Límite"
    with pytest.raises(AreaNotFoundError):
        run(repo.get_area("nope"))


def test_list_households_skips_non_dict_rows(script):
    households = run(make_repo(script).list_households())

    assert households == [
        HouseholdRecord(
            id="h1",
            community_name="Casco Central",
            member_count=5,
            latitude=10.45,
            longitude=-66.85,
            landslide_risk=True,
        )
    ]


def test_save_area_posts_crear_action(script, requests_seen):
    record = area_from_row(AREA_ROW)
    run(make_repo(script).save_area(record))

    action, body = requests_seen[-1]
    assert action == "crear"
    assert body["GEOMETRIA_WKT"] == AREA_ROW["GEOMETRIA_WKT"]
    assert body["MUNICIPIO"] == ""


def test_update_unknown_area_raises_not_found(script):
    record = AreaRecord(id="zzz", community_name="X", display_name="Y")
    with pytest.raises(AreaNotFoundError):
        run(make_repo(script).update_area(record))


def test_save_household_posts_registrar_hogar(script, requests_seen):
    run(make_repo(script).save_household(household_from_row(HOUSEHOLD_ROW)))

    action, body = requests_seen[-1]
    assert action == "registrar_hogar"
    assert body["NUM_MIEMBROS"] == 5


def test_household_geography_columns(script, requests_seen):
    record = household_from_row(dict(HOUSEHOLD_ROW, ESTADO="Miranda", MUNICIPIO="Sucre", PARROQUIA=""))
    assert (record.state, record.municipality, record.parish) == ("Miranda", "Sucre", None)

    run(make_repo(script).save_household(record))

    _, body = requests_seen[-1]
    assert (body["ESTADO"], body["MUNICIPIO"], body["PARROQUIA"]) == ("Miranda", "Sucre", "")


def test_missing_script_url():
    repo = make_repo(lambda request: httpx.Response(200, json=[]), url="")
    with pytest.raises(RepositoryError, match="APPS_SCRIPT_URL"):
        run(repo.list_areas())


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>login</html>"),
        httpx.Response(200, json={"error": "Exception: sheet locked"}),
    ],
)
def test_script_failures_raise_repository_error(response):
    repo = make_repo(lambda request: response)
    with pytest.raises(RepositoryError):
        run(repo.list_areas())


def test_connection_error_raises_repository_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(RepositoryError):
        run(make_repo(handler).list_households())


def test_non_list_payload_is_empty():
    repo = make_repo(lambda request: httpx.Response(200, json={"ok": True}))
    assert run(repo.list_areas()) == []
