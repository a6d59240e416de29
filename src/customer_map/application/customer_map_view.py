# ============================================================
# 📦 src/customer_map/application/customer_map_view.py
# ============================================================

from typing import Callable, Iterable, Optional

from loguru import logger

from customer_map.application.cluster_use_case import ClusteringResult, compute_clusters
from customer_map.config.settings import MapSettings, load_settings
from customer_map.domain.entities import CustomerPoint
from customer_map.visualization.map_surface import MapSurface, MarkerLayer
from customer_map.visualization.marker_rendering import render_clusters


RENDER_TRIGGERS = ("load", "moveend", "zoomend", "rotateend", "pitchend")


class CustomerMapView:
    """
    Liga a lista de clientes a uma superfície de mapa.
    Cada gatilho (carga, fim de zoom/pan/rotação/inclinação ou troca de dados)
    executa um passe completo: limpa marcadores, reagrupa e redesenha.
    """

    def __init__(
        self,
        surface: MapSurface,
        customers: Optional[Iterable] = None,
        on_select: Optional[Callable[[CustomerPoint], None]] = None,
        settings: Optional[MapSettings] = None,
    ):
        self.surface = surface
        self.on_select = on_select
        self.settings = settings or load_settings()
        self.layer = MarkerLayer()
        self.last_result: Optional[ClusteringResult] = None
        self._customers = list(customers or [])

        for event in RENDER_TRIGGERS:
            surface.on(event, self.render)

        if surface.is_loaded():
            self.render()

    @property
    def customers(self):
        return list(self._customers)

    def set_customers(self, customers: Optional[Iterable]):
        self._customers = list(customers or [])
        self.render()

    def render(self) -> Optional[ClusteringResult]:
        if not self.surface.is_loaded():
            logger.debug("⏳ Mapa ainda não carregado — aguardando evento 'load'.")
            return None

        result = compute_clusters(self._customers, self.surface.get_viewport(), self.settings)
        render_clusters(result.clusters, self.surface, self.layer, self.on_select)

        self.last_result = result
        logger.info(
            f"🗺️ {result.mappable_customers}/{result.total_customers} clientes no mapa | "
            f"{len(result.clusters)} marcadores | distância={result.distance_km:.3f} km"
        )
        return result
