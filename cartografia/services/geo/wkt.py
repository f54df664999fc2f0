# cartografia/services/geo/wkt.py
"""
Codec de polígonos WKT usado pelo mapa e pelos dois backends.

Formato: POLYGON((lng lat, lng lat, ..., lng1 lat1))
Longitude vem antes da latitude (convenção WKT) e o anel é fechado
repetindo o primeiro par no final.
"""
import math
from decimal import Decimal
import logging
from typing import List, Optional, Sequence
from cartografia.schemas.geo import GeoPoint

logger = logging.getLogger(__name__)

PREFIX = "POLYGON(("
SUFFIX = "))"
MIN_POINTS = 3

def _format_coord(value: float) -> str:
    """
    Mesmo texto que o cliente web (Number.prototype.toString) gravava:
    10.0 -> "10", 1e-07 -> "1e-7", 1e-05 -> "0.00001", nan -> "NaN".
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() já dá os dígitos mínimos que fazem round-trip; só muda a notação
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k  # posição do ponto decimal

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text

def _to_float(token: Optional[str]) -> float:
    try:
        return float(token)
    except (TypeError, ValueError):
        return math.nan

def encode(points: Sequence[GeoPoint]) -> str:
    """Retorna "" quando não há pontos suficientes: quem chama deve checar antes de salvar."""
    if len(points) < MIN_POINTS:
        return ""

    coords = [f"{_format_coord(p.lng)} {_format_coord(p.lat)}" for p in points]
    first = points[0]
    coords.append(f"{_format_coord(first.lng)} {_format_coord(first.lat)}")  # Fecha o anel

    return f"POLYGON(({', '.join(coords)}))"

def decode(wkt: Optional[str]) -> List[GeoPoint]:
    """
    Converte WKT em pontos. Nunca lança exceção: entrada vazia ou sem o
    prefixo POLYGON vira lista vazia, token não numérico vira NaN.
    O ponto de fechamento é mantido.
    """
    if not wkt or not isinstance(wkt, str) or not wkt.startswith("POLYGON"):
        return []

    content = wkt.replace(PREFIX, "", 1).replace(SUFFIX, "", 1)

    points = []
    for pair in content.split(","):
        tokens = pair.split()
        lng = _to_float(tokens[0] if len(tokens) > 0 else None)
        lat = _to_float(tokens[1] if len(tokens) > 1 else None)
        points.append(GeoPoint(lat=lat, lng=lng))
    return points

def centroid(points: Sequence[GeoPoint]) -> Optional[GeoPoint]:
    """Média simples (planar). Boa aproximação na escala de bairro, não perto dos polos."""
    if not points:
        return None

    lat_sum = sum(p.lat for p in points)
    lng_sum = sum(p.lng for p in points)
    return GeoPoint(lat=lat_sum / len(points), lng=lng_sum / len(points))

def is_well_formed(points: Sequence[GeoPoint]) -> bool:
    """Anel decodificado com 3 vértices + fechamento e nenhuma coordenada NaN."""
    if len(points) < MIN_POINTS + 1:
        return False
    return not any(math.isnan(p.lat) or math.isnan(p.lng) for p in points)
