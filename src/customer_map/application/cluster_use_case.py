# ============================================================
# 📦 src/customer_map/application/cluster_use_case.py
# ============================================================

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from loguru import logger

from customer_map.config.settings import MapSettings, load_settings
from customer_map.domain.entities import Cluster, Viewport
from customer_map.domain.grid_clustering import cluster_points, select_mappable_points
from customer_map.domain.radius_estimator import estimate_clustering_distance


@dataclass
class ClusteringResult:
    distance_km: float
    total_customers: int
    clusters: List[Cluster] = field(default_factory=list)

    @property
    def mappable_customers(self) -> int:
        return sum(c.size for c in self.clusters)


def compute_clusters(
    records: Iterable,
    viewport: Optional[Viewport],
    settings: Optional[MapSettings] = None,
) -> ClusteringResult:
    """
    Um passe completo de clusterização: filtra coordenadas, calcula a
    distância adaptativa para o viewport atual e agrupa.
    Nada é reaproveitado entre passes.
    """
    records = list(records or [])
    points = select_mappable_points(records)
    distance_km = estimate_clustering_distance(viewport, settings or load_settings())
    clusters = cluster_points(points, distance_km)

    if records and not points:
        logger.warning(f"⚠️ Nenhum dos {len(records)} clientes possui localização válida.")

    return ClusteringResult(
        distance_km=distance_km,
        total_customers=len(records),
        clusters=clusters,
    )
