from cartografia.schemas.territory import AreaRecord
from cartografia.services.geo.features import build_feature_collection


def test_feature_collection_from_areas(sample_areas):
    collection = build_feature_collection(sample_areas)

    assert collection["type"] == "FeatureCollection"
    assert len(collection["features"]) == 2
    first = collection["features"][0]
    assert first["geometry"]["type"] == "Polygon"
    assert first["properties"]["community_name"] == "Casco Central"
    assert first["properties"]["editor_username"] == "maria"


def test_invalid_geometry_is_skipped(sample_areas):
    broken = AreaRecord(id="bad", community_name="X", geometry="POLYGON((a b, c d))")
    empty = AreaRecord(id="empty", community_name="X", geometry="")

    collection = build_feature_collection([broken, empty] + sample_areas)
    assert [f["properties"]["id"] for f in collection["features"]] == ["area-1", "area-2"]


def test_no_areas():
    assert build_feature_collection([]) == {"type": "FeatureCollection", "features": []}
