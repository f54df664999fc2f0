# cartografia/services/community/aggregator.py
"""
Consolida linhas de áreas (polígonos) e de hogares (censo) em estatísticas
por comunidade. Chave = nome da comunidade sem espaços nas pontas.
Comparação exata: "Casco Central" e "casco central" são comunidades diferentes.
"""
import math
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional
from cartografia.schemas.stats import CommunityStats

# Aceita o formato canônico, o da planilha e o das tabelas antigas do Supabase
COMMUNITY_KEYS = ("community_name", "community", "COMUNIDAD_ASOCIADA", "comunidad_asociada")
MEMBER_KEYS = ("member_count", "members", "NUM_MIEMBROS", "num_miembros")
STATE_KEYS = ("state", "estado", "ESTADO")
MUNICIPALITY_KEYS = ("municipality", "municipio", "MUNICIPIO")
PARISH_KEYS = ("parish", "parroquia", "PARROQUIA")

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")

def _field(row: Any, keys) -> Any:
    for key in keys:
        if isinstance(row, Mapping):
            value = row.get(key)
        else:
            value = getattr(row, key, None)
        if value is not None:
            return value
    return None

def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()

def parse_member_count(value: Any) -> int:
    """Inteiro tolerante (como parseInt): "4 personas" -> 4, 3.8 -> 3, lixo -> 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0

def _community_of(row: Any) -> Optional[str]:
    name = _text(_field(row, COMMUNITY_KEYS))
    return name or None

def _new_entry(name: str, row: Any) -> CommunityStats:
    return CommunityStats(
        name=name,
        state=_text(_field(row, STATE_KEYS)),
        municipality=_text(_field(row, MUNICIPALITY_KEYS)),
        parish=_text(_field(row, PARISH_KEYS)),
    )

def aggregate(
    area_rows: Optional[Iterable[Any]] = None,
    household_rows: Optional[Iterable[Any]] = None,
) -> Dict[str, CommunityStats]:
    """
    Hogares primeiro: cada linha é uma família e soma seus membros.
    Depois áreas: incrementa o contador e só define a geografia se a
    comunidade ainda não existia (dados do censo têm precedência).
    A ordem de inserção do dicionário segue essa travessia.
    """
    stats: Dict[str, CommunityStats] = {}

    for row in household_rows or []:
        name = _community_of(row)
        if not name:
            continue
        entry = stats.get(name)
        if entry is None:
            entry = stats[name] = _new_entry(name, row)
        entry.families += 1
        entry.population += parse_member_count(_field(row, MEMBER_KEYS))

    for row in area_rows or []:
        name = _community_of(row)
        if not name:
            continue
        entry = stats.get(name)
        if entry is None:
            entry = stats[name] = _new_entry(name, row)
        entry.areas += 1

    return stats
