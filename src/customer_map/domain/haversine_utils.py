# ============================================================
# 📦 src/customer_map/domain/haversine_utils.py
# ============================================================

import math

# raio médio da Terra usado por todo o mapa de clientes
EARTH_RADIUS_KM = 6371.0


def haversine(origin, target) -> float:
    """
    Distância de grande círculo, em km, entre dois pares (lat, lon) em graus.
    Pontos quase antípodas podem levar o termo intermediário um pouco acima
    de 1 por arredondamento; ele é limitado a [0, 1] antes do arco-seno.
    """
    lat_a, lon_a = map(math.radians, origin)
    lat_b, lon_b = map(math.radians, target)

    half_chord = (
        math.sin((lat_b - lat_a) / 2) ** 2
        + math.cos(lat_a) * math.cos(lat_b) * math.sin((lon_b - lon_a) / 2) ** 2
    )
    half_chord = min(1.0, max(0.0, half_chord))

    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(half_chord))
