# ============================================================
# 📦 src/customer_map/domain/radius_estimator.py
# ============================================================

from typing import Optional
from loguru import logger

from customer_map.config.settings import MapSettings, load_settings
from customer_map.domain.entities import Viewport
from customer_map.domain.haversine_utils import haversine


# Margem contra sobreposição visual dos ícones
OVERLAP_MARGIN = 1.5


# ------------------------------------------------------------
# 📐 Dimensões reais do viewport
# ------------------------------------------------------------
def viewport_size_km(viewport: Viewport) -> float:
    """Menor dimensão (largura/altura) do viewport em km."""
    ne_lat, ne_lon = viewport.ne
    sw_lat, sw_lon = viewport.sw

    width = haversine((ne_lat, ne_lon), (ne_lat, sw_lon))
    height = haversine((ne_lat, ne_lon), (sw_lat, ne_lon))
    return min(width, height)


# ------------------------------------------------------------
# 🎯 Distância adaptativa de clusterização
# ------------------------------------------------------------
def estimate_clustering_distance(
    viewport: Optional[Viewport],
    settings: Optional[MapSettings] = None,
) -> float:
    """
    Converte o viewport atual + tamanho do ícone (px) em um raio real (km)
    dentro do qual clientes são agrupados.

    Fatores combinados:
    - zoom: decaimento exponencial (metade a cada nível acima de base_zoom)
    - viewport: tamanho normalizado (teto 1)
    - densidade: device pixel ratio normalizado (teto 1)

    Resultado sempre em [min_distance_km, max_distance_km].
    """
    settings = settings or load_settings()

    if viewport is None:
        return settings.fallback_distance_km

    size_km = viewport_size_km(viewport)
    container_px = min(viewport.width_px, viewport.height_px)

    if size_km <= 0 or container_px <= 0:
        logger.debug(
            f"⚠️ Viewport degenerado (size={size_km:.4f} km, container={container_px}px) — usando fallback"
        )
        return settings.fallback_distance_km

    pixels_per_km = container_px / size_km
    icon_size_km = settings.icon_size_px / pixels_per_km
    min_distance_km = icon_size_km * OVERLAP_MARGIN

    zoom_factor = 0.5 ** (viewport.zoom - settings.base_zoom)
    viewport_factor = min(size_km / 10, 1)
    density_factor = min((viewport.device_pixel_ratio or 1) / 2, 1)

    overlap_km = max(min_distance_km, settings.min_distance_km)
    distance = overlap_km * (1 + zoom_factor * viewport_factor * density_factor)

    distance = max(distance, settings.min_distance_km)
    distance = min(distance, settings.max_distance_km)

    logger.debug(
        f"📏 zoom={viewport.zoom:.2f} | viewport={size_km:.2f} km | "
        f"ícone={icon_size_km:.4f} km | distância={distance:.4f} km"
    )
    return distance
