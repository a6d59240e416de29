# =========================================================
# 📦 src/customer_map/visualization/marker_rendering.py
# =========================================================

from typing import Callable, List, Optional

from loguru import logger

from customer_map.domain.entities import Cluster, CustomerPoint
from customer_map.visualization.map_surface import MapSurface, MarkerLayer
from customer_map.visualization.marker_visuals import (
    build_marker_visual,
    build_popup_content,
)


def _select_callback(on_select, point: CustomerPoint):
    if on_select is None:
        return None

    def _handler():
        on_select(point)

    return _handler


def render_clusters(
    clusters: List[Cluster],
    surface: MapSurface,
    layer: MarkerLayer,
    on_select: Optional[Callable[[CustomerPoint], None]] = None,
) -> MarkerLayer:
    """
    Remove os marcadores do passe anterior e desenha um marcador por cluster
    na posição do cliente primário. Superfície não carregada → nada é feito.
    """
    if not surface.is_loaded():
        logger.debug("⏳ Mapa ainda não carregado — renderização ignorada.")
        return layer

    removed = layer.clear(surface)

    for cluster in clusters:
        primary = cluster.primary
        handle = surface.add_marker(
            build_marker_visual(cluster),
            primary.lat,
            primary.lon,
            popup=build_popup_content(cluster),
            on_click=_select_callback(on_select, primary),
            key=primary.id,
        )
        layer.handles.append(handle)

    logger.debug(f"🖍️ Marcadores: {removed} removidos | {len(layer)} desenhados")
    return layer
