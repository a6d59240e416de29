# ==========================================================
# 📦 src/customer_map/domain/entities.py
# ==========================================================

from dataclasses import dataclass, field
from typing import Optional, List, Tuple

from customer_map.domain.exceptions import InvalidViewportError


@dataclass(frozen=True)
class CustomerPoint:
    """
    Cliente mapeável. lat/lon já convertidos e validados
    (ver grid_clustering.select_mappable_points).
    """
    id: str
    name: str
    status: Optional[str]
    lat: float
    lon: float

    # 🔹 Campos opcionais exibidos no popup
    billing_email: Optional[str] = None
    location_address: Optional[str] = None
    children_count: int = 0


@dataclass(frozen=True)
class Viewport:
    """Estado atual do mapa: zoom, bounds (NE/SW), container em px e DPR."""
    zoom: float
    ne: Tuple[float, float]   # (lat, lon)
    sw: Tuple[float, float]   # (lat, lon)
    width_px: float
    height_px: float
    device_pixel_ratio: float = 1.0

    def __post_init__(self):
        if self.width_px < 0 or self.height_px < 0:
            raise InvalidViewportError(
                f"❌ Container com dimensões inválidas: {self.width_px}x{self.height_px}"
            )


@dataclass
class Cluster:
    """Grupo de clientes desenhado como um único marcador."""
    members: List[CustomerPoint] = field(default_factory=list)

    @property
    def primary(self) -> CustomerPoint:
        return self.members[0]

    @property
    def size(self) -> int:
        return len(self.members)

    def __len__(self):
        return len(self.members)
