# ============================================================
# 📦 src/customer_map/domain/grid_clustering.py
# ============================================================

import math
import numpy as np
from loguru import logger
from typing import Iterable, List, Mapping

from customer_map.domain.entities import CustomerPoint, Cluster
from customer_map.domain.haversine_utils import haversine


# ------------------------------------------------------------
# 🧹 Filtro de coordenadas
# ------------------------------------------------------------
def _parse_coord(value):
    """Float finito e diferente de zero, ou None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        coord = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(coord) or math.isinf(coord) or coord == 0:
        return None
    return coord


def _get(record, key, default=None):
    if isinstance(record, Mapping):
        return record.get(key, default)
    return getattr(record, key, default)


def select_mappable_points(records: Iterable) -> List[CustomerPoint]:
    """
    Converte registros de clientes (dicts da API ou objetos) em CustomerPoint,
    descartando os que não têm latitude/longitude utilizáveis.
    Registros descartados não são erro: apenas ficam fora do mapa.
    """
    points = []
    for record in records or []:
        if isinstance(record, CustomerPoint):
            lat, lon = _parse_coord(record.lat), _parse_coord(record.lon)
            if lat is not None and lon is not None:
                points.append(record)
            else:
                logger.debug(f"⚠️ Cliente sem localização ignorado: {record.id}")
            continue

        lat = _parse_coord(_get(record, "latitude", _get(record, "lat")))
        lon = _parse_coord(_get(record, "longitude", _get(record, "lon")))
        if lat is None or lon is None:
            logger.debug(f"⚠️ Cliente sem localização ignorado: {_get(record, 'id')}")
            continue

        children = _get(record, "children_count") or 0
        try:
            children = int(children)
        except (TypeError, ValueError):
            children = 0

        points.append(
            CustomerPoint(
                id=str(_get(record, "id", "")),
                name=str(_get(record, "name") or ""),
                status=_get(record, "status"),
                lat=lat,
                lon=lon,
                billing_email=_get(record, "billing_email") or None,
                location_address=_get(record, "location_address") or None,
                children_count=children,
            )
        )
    return points


# ------------------------------------------------------------
# 🧩 Agrupamento por grade (vizinhança 3x3)
# ------------------------------------------------------------
def cluster_points(points: List[CustomerPoint], distance_km: float) -> List[Cluster]:
    """
    Agrupa clientes próximos usando uma grade espacial.

    - Célula da grade = 2 × distance_km, aplicada direto sobre os graus.
    - Cada ponto ainda não visitado abre um cluster (semente) e absorve os
      pontos não visitados da própria célula e das 8 vizinhas que estejam a
      até distance_km da semente.
    - Não há encadeamento transitivo: A~B e B~C não garante A e C juntos;
      o resultado depende da ordem de varredura.
    - Clusters ordenados por tamanho decrescente (ordenação estável).
    """
    if distance_km <= 0:
        raise ValueError(f"distance_km deve ser positivo (recebido {distance_km})")
    if not points:
        return []

    cell_size = distance_km * 2
    coords = np.array([[p.lat, p.lon] for p in points], dtype=float)
    cell_keys = np.floor(coords / cell_size).astype(np.int64)

    grid = {}
    for idx, (cell_lat, cell_lon) in enumerate(cell_keys):
        grid.setdefault((int(cell_lat), int(cell_lon)), []).append(idx)

    visited = set()
    clusters = []

    for cell_indices in grid.values():
        for seed_idx in cell_indices:
            if seed_idx in visited:
                continue

            seed = points[seed_idx]
            members = [seed]
            visited.add(seed_idx)

            seed_lat_key, seed_lon_key = (int(k) for k in cell_keys[seed_idx])
            for lat_offset in (-1, 0, 1):
                for lon_offset in (-1, 0, 1):
                    neighbours = grid.get((seed_lat_key + lat_offset, seed_lon_key + lon_offset), [])
                    for other_idx in neighbours:
                        if other_idx in visited:
                            continue
                        other = points[other_idx]
                        if haversine((seed.lat, seed.lon), (other.lat, other.lon)) <= distance_km:
                            members.append(other)
                            visited.add(other_idx)

            clusters.append(Cluster(members=members))

    clusters.sort(key=lambda c: c.size, reverse=True)

    logger.debug(
        f"🧩 {len(points)} clientes → {len(clusters)} clusters | distância={distance_km:.4f} km"
    )
    return clusters
