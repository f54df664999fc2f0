# cartografia/services/geo/features.py
import json
import logging
from typing import Any, Dict, Sequence

import geopandas as gpd
from shapely.geometry import Polygon

from cartografia.schemas.territory import AreaRecord
from cartografia.services.geo import wkt as wkt_codec

logger = logging.getLogger(__name__)

EMPTY_COLLECTION = {"type": "FeatureCollection", "features": []}

def build_feature_collection(areas: Sequence[AreaRecord]) -> Dict[str, Any]:
    """
    Monta o GeoJSON de todas as áreas para a camada do mapa.
    Áreas com WKT ilegível ficam de fora (com aviso no log).
    """
    rows = []
    for area in areas:
        points = wkt_codec.decode(area.geometry)
        if not wkt_codec.is_well_formed(points):
            logger.warning(f"Área {area.id} ignorada no mapa: geometria inválida")
            continue

        rows.append({
            "id": area.id,
            "community_name": area.community_name,
            "display_name": area.display_name,
            "area_type": area.area_type,
            "editor_username": area.editor_username,
            "last_update": area.last_update.isoformat() if area.last_update else None,
            "geometry": Polygon([(p.lng, p.lat) for p in points]),
        })

    if not rows:
        return dict(EMPTY_COLLECTION, features=[])

    gdf = gpd.GeoDataFrame(rows, geometry="geometry", crs="EPSG:4326")

    # Correção Topológica (polígonos desenhados à mão se cruzam às vezes)
    gdf["geometry"] = gdf["geometry"].buffer(0)
    # Pontos colineares somem no buffer(0)
    gdf = gdf[~gdf.geometry.is_empty]
    if gdf.empty:
        return dict(EMPTY_COLLECTION, features=[])

    return json.loads(gdf.to_json())
